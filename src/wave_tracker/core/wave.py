"""
Tracked wave state and its per-frame update rules.

A Wave is seeded from a candidate contour and then re-discovered every frame
inside a trapezoidal search region laid along the configured wave axis. From
the pixels found there it maintains center of mass, mass, and displacement
from the axis it was born on, and latches ``recognized`` once its dynamics
satisfy the recognition policy.
"""

import logging
from collections import deque
from typing import Optional

import cv2
import numpy as np

from ..utils.geometry import (
    axis_through_point,
    integer_centroid,
    point_line_distance,
    search_roi,
)
from .recognition import RecognitionPolicy, ThresholdRecognitionPolicy

logger = logging.getLogger(__name__)

NO_CENTROID = (-1, -1)


class Wave:
    """
    A single tracked wave.

    Attributes:
        id (int): Unique id assigned by the tracking engine
        birth_frame (int): Frame at which the wave was admitted
        axis_angle (float): Expected orientation of wave motion in degrees
        original_axis (tuple): (A, B, C) line through the birth centroid
        centroid (tuple): Current (x, y), or (-1, -1) with no representation
        centroid_history (deque): Recent centroids, most recent last
        search_roi (np.ndarray): (4, 2) polygon searched in the next frame
        points (np.ndarray): (N, 2) mask pixels attributed to the wave
        bounding_polygon (np.ndarray): (4, 2) display rectangle, or None
        displacement (float): Distance from centroid to ``original_axis``
        max_displacement (float): Largest displacement seen
        displacement_history (deque): Recent displacements, most recent last
        mass (int): Number of points
        max_mass (int): Largest mass seen
        recognized (bool): Latched once the recognition policy accepts the wave
        death_frame (int): -1 while alive, otherwise the frame of death
    """

    def __init__(
        self,
        candidate,
        wave_id: int,
        params: dict,
        recognition_policy: Optional[RecognitionPolicy] = None,
    ):
        """
        Create a wave from a candidate contour.

        Args:
            candidate (Candidate): Seed contour and the frame it was seen in
            wave_id (int): Id handed out by the tracking engine
            params (dict): Tracking parameters
            recognition_policy (callable, optional): Predicate deciding
                recognition; defaults to the mass/displacement thresholds
        """
        self.params = params
        self.recognition_policy = recognition_policy or ThresholdRecognitionPolicy.from_params(params)
        self.frame_width = params["ANALYSIS_WIDTH"]
        self.frame_height = params["ANALYSIS_HEIGHT"]

        history = params["TRACKING_HISTORY"]

        self.id = wave_id
        self.birth_frame = candidate.frame_number
        self.axis_angle = params["AXIS_ANGLE"]
        self.points = np.asarray(candidate.contour, dtype=np.int32).reshape(-1, 2)
        self.centroid = NO_CENTROID
        self.centroid_history = deque(maxlen=history)
        self.original_axis = None
        self.search_roi = None
        self.bounding_polygon = None
        self.displacement = 0.0
        self.max_displacement = 0.0
        self.displacement_history = deque(maxlen=history)
        self.mass = 0
        self.max_mass = 0
        self.recognized = False
        self.death_frame = -1

        self.update_centroid()
        self._set_original_axis()
        self.update_search_roi()
        self.update_bounding_polygon()
        self.update_mass()

    def __repr__(self):
        return (
            f"Wave(id={self.id}, birth={self.birth_frame}, centroid={self.centroid}, "
            f"mass={self.mass}, max_disp={self.max_displacement:.2f}, "
            f"recognized={self.recognized}, death={self.death_frame})"
        )

    @property
    def is_alive(self):
        return self.death_frame == -1

    def _set_original_axis(self):
        # The birth axis uses the negated angle; in image coordinates (y down)
        # this is the same line the search ROI is laid along.
        self.original_axis = axis_through_point(self.centroid, -self.axis_angle)

    def update(self, mask, frame_number, total_frames):
        """
        Run the full per-frame update cycle against a binary mask.

        Args:
            mask (np.ndarray): uint8 binary mask at analysis resolution
            frame_number (int): Current 1-indexed frame
            total_frames (int): Number of frames in the sequence
        """
        self.update_search_roi()
        self.update_points(mask)
        self.update_death(frame_number)
        if frame_number == total_frames and self.death_frame == -1:
            self.death_frame = frame_number
        self.update_centroid()
        self.update_bounding_polygon()
        self.update_displacement()
        self.update_mass()
        self.update_recognized()

    def update_search_roi(self):
        """Lay the search trapezoid along ``axis_angle`` through the centroid."""
        self.search_roi = search_roi(
            self.centroid,
            self.axis_angle,
            self.frame_width,
            self.params["SEARCH_REGION_BUFFER"],
        )

    def update_points(self, mask):
        """Collect the nonzero mask pixels inside the search ROI."""
        roi_mask = np.zeros((self.frame_height, self.frame_width), dtype=np.uint8)
        cv2.fillPoly(roi_mask, [self.search_roi], 255)
        found = cv2.findNonZero(cv2.bitwise_and(mask, roi_mask))
        if found is None:
            self.points = np.empty((0, 2), dtype=np.int32)
        else:
            self.points = found.reshape(-1, 2).astype(np.int32)

    def update_death(self, frame_number):
        """Mark the wave dead if it has no representation. Never revived."""
        if self.death_frame == -1 and len(self.points) == 0:
            self.death_frame = frame_number

    def update_centroid(self):
        self.centroid = integer_centroid(self.points)
        self.centroid_history.append(self.centroid)

    def update_bounding_polygon(self):
        """
        Fit a minimum-area rectangle to the points for display.

        Points further than three standard deviations from the mean in x or y
        are ignored. Leaves the previous polygon in place when there is
        nothing to fit.
        """
        if len(self.points) == 0:
            return

        pts = self.points.astype(np.float64)
        # Whole-pixel mean; the spread is measured about it.
        mean = self.points.astype(np.int64).sum(axis=0) // len(self.points)
        std = np.sqrt(((pts - mean) ** 2).mean(axis=0))
        keep = np.all(np.abs(pts - mean) <= 3 * std, axis=1)
        inliers = self.points[keep]
        if len(inliers) == 0:
            return

        rect = cv2.minAreaRect(inliers.astype(np.float32))
        self.bounding_polygon = cv2.boxPoints(rect)

    def update_displacement(self):
        """Measure the centroid's distance from the birth axis."""
        if self.centroid[0] > -1 and self.centroid[1] > -1:
            self.displacement = point_line_distance(self.centroid, self.original_axis)

        self.max_displacement = max(self.max_displacement, self.displacement)
        self.displacement_history.append(self.displacement)

    def update_mass(self):
        self.mass = int(len(self.points))
        self.max_mass = max(self.max_mass, self.mass)

    def update_recognized(self):
        if not self.recognized and self.recognition_policy(self):
            self.recognized = True
            logger.debug(f"Wave {self.id} recognized: {self!r}")

    def to_record(self):
        """
        Summary of the wave for reporting.

        Returns:
            dict: id, birth_frame, death_frame, max_mass, max_displacement,
            centroid_history and displacement_history
        """
        return {
            "id": self.id,
            "birth_frame": self.birth_frame,
            "death_frame": self.death_frame,
            "max_mass": self.max_mass,
            "max_displacement": float(self.max_displacement),
            "centroid_history": [tuple(c) for c in self.centroid_history],
            "displacement_history": [float(d) for d in self.displacement_history],
        }
