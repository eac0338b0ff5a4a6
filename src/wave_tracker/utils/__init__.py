"""
Utility modules for the Wave Tracker.
"""

from .geometry import (
    axis_through_point,
    left_edge_projection,
    point_line_distance,
    search_roi,
)

__all__ = [
    "axis_through_point",
    "left_edge_projection",
    "point_line_distance",
    "search_roi",
]
