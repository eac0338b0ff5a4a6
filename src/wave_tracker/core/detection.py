"""
Candidate detection from foreground masks.

This module turns raw per-frame contours into candidate waves by filtering on
contour area and on the inertia ratio of the contour's second-order moments.
Waves show up as long, narrow shapes, so only strongly elongated contours pass.
"""

import logging
import math
from dataclasses import dataclass

import cv2
import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A contour that passed filtering, tagged with the frame it came from."""

    contour: np.ndarray
    frame_number: int


def find_contours(foreground_mask):
    """
    Trace every contour in a binary mask.

    Args:
        foreground_mask (np.ndarray): Single-channel binary mask

    Returns:
        list: Contours as (N, 2) int32 arrays of (x, y) points
    """
    contours, _ = cv2.findContours(foreground_mask, cv2.RETR_LIST, cv2.CHAIN_APPROX_NONE)
    return [c.reshape(-1, 2) for c in contours]


def inertia_ratio(moments, eps=1e-2):
    """
    Ratio of minimum to maximum principal moment of inertia.

    Args:
        moments (dict): Moments as returned by ``cv2.moments``
        eps (float): Denominator below which the shape counts as symmetric

    Returns:
        float: Ratio in [0, 1]; 1 for degenerate (near-symmetric) shapes
    """
    mu11, mu20, mu02 = moments["mu11"], moments["mu20"], moments["mu02"]
    denom = math.sqrt((2 * mu11) ** 2 + (mu20 - mu02) ** 2)
    if denom <= eps:
        return 1.0

    cosmin = (mu20 - mu02) / denom
    sinmin = 2 * mu11 / denom
    cosmax = -cosmin
    sinmax = -sinmin

    half_sum = 0.5 * (mu20 + mu02)
    half_diff = 0.5 * (mu20 - mu02)
    imin = half_sum - half_diff * cosmin - mu11 * sinmin
    imax = half_sum - half_diff * cosmax - mu11 * sinmax
    if imax == 0:
        return 1.0
    return imin / imax


class CandidateExtractor:
    """
    Filters raw contours into geometrically valid wave candidates.

    A contour is kept when its area reaches MIN_AREA and its inertia ratio
    lies in [MIN_INERTIA_RATIO, MAX_INERTIA_RATIO).
    """

    def __init__(self, params):
        """
        Initialize candidate extractor.

        Args:
            params (dict): Detection parameters
        """
        self.params = params

    def keep_contour(self, contour):
        """Return True if ``contour`` passes the area and inertia tests."""
        moms = cv2.moments(np.asarray(contour, dtype=np.int32).reshape(-1, 1, 2))

        if moms["m00"] < self.params["MIN_AREA"]:
            return False

        ratio = inertia_ratio(moms, self.params.get("INERTIA_EPS", 1e-2))
        return self.params["MIN_INERTIA_RATIO"] <= ratio < self.params["MAX_INERTIA_RATIO"]

    def filter(self, raw_contours, frame_number):
        """
        Filter raw contours into candidates, keeping encounter order.

        Args:
            raw_contours (sequence): Point sequences of (x, y) integer coordinates
            frame_number (int): 1-indexed frame the contours were traced from

        Returns:
            list: Candidate objects for accepted contours
        """
        if frame_number < 1:
            raise ValueError(f"frame_number must be >= 1, got {frame_number}")

        candidates = []
        for raw in raw_contours:
            contour = np.array(raw, dtype=np.int32).reshape(-1, 2)
            if len(contour) == 0:
                continue
            if self.keep_contour(contour):
                candidates.append(Candidate(contour=contour, frame_number=frame_number))

        logger.debug(
            f"Frame {frame_number}: {len(raw_contours)} raw contours -> {len(candidates)} candidates"
        )
        return candidates

    def detect(self, foreground_mask, frame_number):
        """Trace contours in ``foreground_mask`` and filter them into candidates."""
        return self.filter(find_contours(foreground_mask), frame_number)
