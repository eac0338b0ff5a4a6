"""
End-to-end wave tracking over a video file.

The pipeline reads frames, builds a foreground mask with the background model,
extracts candidates, and advances the tracking engine one frame at a time.
Recognized waves are collected as they die; every wave still alive on the last
frame is force-killed so the run always ends with an empty tracked set.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

from .background_models import BackgroundModel
from .detection import CandidateExtractor
from .recognition import RecognitionPolicy
from .tracking import TrackingEngine

logger = logging.getLogger(__name__)

ROI_COLOR = (128, 128, 128)
WAVE_COLOR = (0, 0, 255)
RECOGNIZED_COLOR = (0, 255, 0)


@dataclass
class PipelineSummary:
    """Outcome of a pipeline run."""

    frames_processed: int
    elapsed_seconds: float
    recognized_waves: List[object] = field(default_factory=list)

    @property
    def fps(self):
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.frames_processed / self.elapsed_seconds


class WaveTrackingPipeline:
    """
    Couples background modeling, candidate detection and tracking.

    ``process_frame`` can be fed binary masks directly, which is how the
    tracker is exercised without video input; ``run`` drives it from a file.
    """

    def __init__(self, params: dict, recognition_policy: Optional[RecognitionPolicy] = None):
        """
        Initialize the pipeline.

        Args:
            params (dict): Tracking parameters
            recognition_policy (callable, optional): Recognition predicate
                passed through to the tracking engine
        """
        self.params = params
        self.background = BackgroundModel(params)
        self.detector = CandidateExtractor(params)
        self.engine = TrackingEngine(params, recognition_policy)
        self.tracked_waves = []
        self.recognized_waves = []
        self.last_frame_number = 0

    def process_frame(self, mask, frame_number, total_frames):
        """
        Advance tracking by one frame of binary mask.

        Args:
            mask (np.ndarray): Binary mask at analysis resolution
            frame_number (int): Current 1-indexed frame
            total_frames (int): Number of frames in the sequence

        Returns:
            list: Waves still tracked after this frame
        """
        candidates = self.detector.detect(self.engine.validate_mask(mask), frame_number)
        self.tracked_waves = self.engine.step(
            self.tracked_waves,
            self.recognized_waves,
            mask,
            candidates,
            frame_number,
            total_frames,
        )
        self.last_frame_number = frame_number
        return self.tracked_waves

    def finalize(self):
        """Kill any waves still alive at the last processed frame and reap them."""
        for wave in self.tracked_waves:
            if wave.is_alive:
                wave.death_frame = self.last_frame_number
        self.tracked_waves = self.engine.reap(self.tracked_waves, self.recognized_waves)
        return self.recognized_waves

    def _status_update(self, frame_number, total_frames, start_time):
        if frame_number == 1:
            logger.info(f"Starting analysis of {total_frames} frames.")
        elif frame_number % self.params["STATUS_INTERVAL"] == 0:
            elapsed = time.perf_counter() - start_time
            rate = frame_number / elapsed if elapsed > 0 else 0.0
            logger.info(
                f"{frame_number} frames complete. ({rate:.3g} frames/sec; "
                f"{len(self.tracked_waves)} tracked, {len(self.recognized_waves)} recognized)"
            )
        elif frame_number == total_frames:
            logger.info("End of video reached successfully.")

    def draw_overlay(self, mask):
        """Render tracked waves over the mask for the annotated output video."""
        canvas = cv2.cvtColor(mask, cv2.COLOR_GRAY2BGR)
        for wave in self.tracked_waves:
            cv2.polylines(canvas, [wave.search_roi], True, ROI_COLOR, 1)
            if wave.bounding_polygon is None:
                continue
            color = RECOGNIZED_COLOR if wave.recognized else WAVE_COLOR
            box = np.intp(np.round(wave.bounding_polygon))
            cv2.drawContours(canvas, [box], 0, color, 1)
            x, y = box.min(axis=0)
            cv2.putText(canvas, str(wave.id), (int(x), max(int(y) - 2, 8)),
                        cv2.FONT_HERSHEY_SIMPLEX, 0.3, color, 1)
        return canvas

    def run(self, video_path, output_path=None):
        """
        Track waves through an entire video.

        Args:
            video_path (str or Path): Input video file
            output_path (str or Path, optional): Annotated output video

        Returns:
            PipelineSummary: Frames processed, timing and recognized waves

        Raises:
            FileNotFoundError: If ``video_path`` does not exist
            RuntimeError: If the video or output writer cannot be opened
        """
        video_path = Path(video_path)
        if not video_path.exists():
            raise FileNotFoundError(f"Video not found: {video_path}")

        cap = cv2.VideoCapture(str(video_path))
        if not cap.isOpened():
            raise RuntimeError(f"Error opening video stream or file: {video_path}")

        writer = None
        try:
            total_frames = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
            if total_frames <= 0:
                raise RuntimeError(f"Video reports no frames: {video_path}")

            if output_path is not None:
                fps = cap.get(cv2.CAP_PROP_FPS) or 30.0
                size = (self.params["ANALYSIS_WIDTH"], self.params["ANALYSIS_HEIGHT"])
                writer = cv2.VideoWriter(str(output_path), cv2.VideoWriter_fourcc(*"mp4v"), fps, size, True)
                if not writer.isOpened():
                    raise RuntimeError(f"Could not open the output video file for write: {output_path}")

            start = time.perf_counter()
            frame_number = 0
            while frame_number < total_frames:
                ret, frame = cap.read()
                if not ret:
                    break
                frame_number += 1
                self._status_update(frame_number, total_frames, start)

                mask = self.background.preprocess(frame)
                self.process_frame(mask, frame_number, total_frames)

                if writer is not None:
                    writer.write(self.draw_overlay(mask))

            if frame_number < total_frames:
                logger.warning(
                    f"Stream ended after {frame_number} of {total_frames} reported frames"
                )
            self.finalize()
            elapsed = time.perf_counter() - start
        finally:
            cap.release()
            if writer is not None:
                writer.release()

        summary = PipelineSummary(frame_number, elapsed, list(self.recognized_waves))
        logger.info(f"{len(summary.recognized_waves)} wave(s) found in {frame_number} frames.")
        return summary
