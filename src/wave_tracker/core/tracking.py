"""
Multi-wave tracking engine.

The engine owns the lifecycle of the tracked wave population: it updates every
live wave against the current mask, retires dead waves (archiving recognized
ones), collapses duplicate waves onto the oldest one, and admits new candidates
that no existing wave already covers.

Per-frame order is ``track_all`` -> ``reap`` -> ``deduplicate`` -> ``admit``,
with admission skipped on the final frame. ``step`` runs that sequence.
"""

import itertools
import logging
from typing import Optional

import numpy as np

from ..config import ConfigurationError, validate_params
from ..utils.geometry import integer_centroid, left_edge_projection, roi_covers_left_y
from .recognition import RecognitionPolicy, ThresholdRecognitionPolicy
from .wave import Wave

logger = logging.getLogger(__name__)


def _age_key(wave):
    return (wave.birth_frame, wave.id)


class TrackingEngine:
    """
    Drives wave updates and population-level consolidation.

    Waves are passed in and returned as plain lists so the caller owns the
    population between frames. ``reap``, ``deduplicate`` and ``admit`` never
    mutate the list they are given; they return a new one.
    """

    def __init__(self, params: dict, recognition_policy: Optional[RecognitionPolicy] = None):
        """
        Initialize tracking engine.

        Args:
            params (dict): Tracking parameters
            recognition_policy (callable, optional): Predicate applied to waves
                to decide recognition

        Raises:
            ConfigurationError: If ``params`` fails validation
        """
        self.params = validate_params(params)
        self.recognition_policy = recognition_policy or ThresholdRecognitionPolicy.from_params(params)
        self._ids = itertools.count(1)

    def next_id(self):
        return next(self._ids)

    def validate_mask(self, mask):
        """Check a mask against the analysis resolution and coerce it to uint8."""
        mask = np.asarray(mask)
        expected = (self.params["ANALYSIS_HEIGHT"], self.params["ANALYSIS_WIDTH"])
        if mask.ndim != 2:
            raise ConfigurationError(f"Mask must be single-channel 2D, got shape {mask.shape}")
        if mask.shape != expected:
            raise ConfigurationError(
                f"Mask shape {mask.shape} does not match analysis resolution {expected}"
            )
        if mask.dtype != np.uint8:
            mask = np.where(mask != 0, 255, 0).astype(np.uint8)
        return mask

    @staticmethod
    def _validate_frame(frame_number, total_frames):
        if frame_number < 1:
            raise ValueError(f"frame_number must be >= 1, got {frame_number}")
        if total_frames < frame_number:
            raise ValueError(f"frame_number {frame_number} exceeds total_frames {total_frames}")

    def track_all(self, waves, mask, frame_number, total_frames):
        """
        Run the update cycle of every wave against ``mask``.

        Args:
            waves (list): Live waves
            mask (np.ndarray): Binary mask at analysis resolution
            frame_number (int): Current 1-indexed frame
            total_frames (int): Number of frames in the sequence
        """
        self._validate_frame(frame_number, total_frames)
        mask = self.validate_mask(mask)
        for wave in waves:
            wave.update(mask, frame_number, total_frames)

    def reap(self, waves, archive):
        """
        Remove dead waves, archiving the recognized ones.

        Args:
            waves (list): Tracked waves
            archive (list): Receives recognized dead waves in removal order

        Returns:
            list: Waves still alive
        """
        alive = []
        for wave in waves:
            if wave.is_alive:
                alive.append(wave)
            elif wave.recognized:
                archive.append(wave)
                logger.info(
                    f"Wave {wave.id} recognized (frames {wave.birth_frame}-{wave.death_frame}, "
                    f"max mass {wave.max_mass}, max displacement {wave.max_displacement:.1f})"
                )
            else:
                logger.debug(f"Discarding unrecognized wave {wave.id} (death frame {wave.death_frame})")
        return alive

    def deduplicate(self, waves):
        """
        Drop waves that sit inside the search region of an older wave.

        Waves are visited youngest first, ties broken by higher id first; a
        wave is a duplicate when its left-edge projection falls within the
        ROI span of any wave after it in that order.

        Returns:
            list: Surviving waves ordered oldest first
        """
        ordered = sorted(waves, key=_age_key, reverse=True)
        removed = set()

        for i, wave in enumerate(ordered):
            left_y = left_edge_projection(wave.centroid, wave.axis_angle)
            for j in range(i + 1, len(ordered)):
                if roi_covers_left_y(ordered[j].search_roi, left_y):
                    removed.add(i)
                    logger.debug(f"Wave {wave.id} duplicates older wave {ordered[j].id}")
                    break

        survivors = [w for k, w in enumerate(ordered) if k not in removed]
        return sorted(survivors, key=_age_key)

    def covers(self, candidate, waves):
        """True if ``candidate`` projects into the search region of any wave."""
        centroid = integer_centroid(candidate.contour)
        left_y = left_edge_projection(centroid, self.params["AXIS_ANGLE"])
        return any(roi_covers_left_y(w.search_roi, left_y) for w in waves)

    def admit(self, candidates, waves):
        """
        Promote candidates not covered by a tracked wave to new waves.

        Candidates are checked in order against all tracked waves, including
        those admitted earlier in the same call.

        Returns:
            list: Tracked waves followed by the newly admitted ones
        """
        tracked = list(waves)
        for candidate in candidates:
            if self.covers(candidate, tracked):
                continue
            wave = Wave(candidate, self.next_id(), self.params, self.recognition_policy)
            tracked.append(wave)
            logger.debug(f"Frame {candidate.frame_number}: admitted {wave!r}")
        return tracked

    def step(self, waves, archive, mask, candidates, frame_number, total_frames):
        """
        Process one frame for the whole population.

        Args:
            waves (list): Live waves from the previous frame
            archive (list): Recognized dead waves, appended to in place
            mask (np.ndarray): Binary mask at analysis resolution
            candidates (list): Candidates detected in this frame
            frame_number (int): Current 1-indexed frame
            total_frames (int): Number of frames in the sequence

        Returns:
            list: Live waves for the next frame
        """
        self.track_all(waves, mask, frame_number, total_frames)
        waves = self.reap(waves, archive)
        waves = self.deduplicate(waves)
        if frame_number < total_frames:
            waves = self.admit(candidates, waves)
        return waves
