"""
Utility functions for geometry operations in wave tracking.

Lines are kept in standard form ``(A, B, C)`` and evaluated as
``A*x + B*y + C``. All angles are in degrees. Search regions and left-edge
projections treat a positive angle as tilting upward to the right in image
coordinates (y down); ``axis_through_point`` takes a plain slope angle, so the
same line is built there from the negated angle.
"""

import math

import numpy as np

# Vertex indices of a search ROI polygon.
UPPER_LEFT, UPPER_RIGHT, LOWER_RIGHT, LOWER_LEFT = range(4)


def tan_degs(deg: float) -> float:
    """Tangent of an angle given in degrees."""
    return math.tan(np.deg2rad(deg))


def axis_through_point(point, angle_deg: float) -> tuple:
    """
    Build the standard-form line through ``point`` with slope ``tan(angle_deg)``.

    Args:
        point (tuple): (x, y) the line passes through
        angle_deg (float): Slope angle in degrees

    Returns:
        tuple: (A, B, C) with B fixed at -1
    """
    x, y = point
    slope = tan_degs(angle_deg)
    return (slope, -1.0, y - slope * x)


def point_line_distance(point, line) -> float:
    """
    Perpendicular distance from a point to a standard-form line.

    Args:
        point (tuple): (x, y)
        line (tuple): (A, B, C)

    Returns:
        float: Non-negative distance in pixels
    """
    a, b, c = line
    x, y = point
    norm = math.hypot(a, b)
    if norm == 0:
        return 0.0
    return abs(a * x + b * y + c) / norm


def left_edge_projection(point, angle_deg: float) -> int:
    """
    Project a point along ``angle_deg`` onto the left frame edge (x = 0).

    Intermediate offsets are truncated to whole pixels the same way the search
    ROI vertices are, so projections and ROI spans compare consistently.
    """
    x, y = point
    delta_y_left = int(x * tan_degs(angle_deg))
    return int(y + delta_y_left)


def search_roi(point, angle_deg: float, frame_width: int, buffer: int) -> np.ndarray:
    """
    Trapezoidal search region spanning the full frame width.

    The region is centered on the line through ``point`` and padded by
    ``buffer`` pixels above and below it.

    Args:
        point (tuple): (x, y) the center line passes through
        angle_deg (float): Angle of the center line in degrees
        frame_width (int): Width of the analysis frame
        buffer (int): Half-height of the region in pixels

    Returns:
        np.ndarray: (4, 2) int32 vertices ordered upper-left, upper-right,
        lower-right, lower-left
    """
    x, y = point
    slope = tan_degs(angle_deg)
    delta_y_left = int(x * slope)
    delta_y_right = int((frame_width - x) * slope)

    return np.array(
        [
            [0, int(y + delta_y_left - buffer)],
            [frame_width, int(y - delta_y_right - buffer)],
            [frame_width, int(y - delta_y_right + buffer)],
            [0, int(y + delta_y_left + buffer)],
        ],
        dtype=np.int32,
    )


def roi_covers_left_y(roi: np.ndarray, left_y: int) -> bool:
    """True if ``left_y`` lies within the ROI's vertical span at the left edge."""
    return int(roi[UPPER_LEFT][1]) <= left_y <= int(roi[LOWER_LEFT][1])


def integer_centroid(points: np.ndarray) -> tuple:
    """
    Arithmetic mean of (x, y) points truncated to whole pixels.

    Returns:
        tuple: (x, y) ints, or (-1, -1) if ``points`` is empty
    """
    if points is None or len(points) == 0:
        return (-1, -1)
    sums = np.asarray(points, dtype=np.int64).reshape(-1, 2).sum(axis=0)
    n = len(points)
    return (int(sums[0] / n), int(sums[1] / n))
