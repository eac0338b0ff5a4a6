from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from wave_tracker.config import get_default_params
from wave_tracker.core.detection import Candidate, find_contours

Bar = Tuple[int, int, int, int]  # (x0, y0, width, height)


def default_params(**overrides) -> dict:
    params = get_default_params()
    params.update(overrides)
    return params


def make_mask(bars: Iterable[Bar], params: dict | None = None) -> np.ndarray:
    """Binary mask at analysis resolution with each bar filled in white."""
    params = params or get_default_params()
    mask = np.zeros((params["ANALYSIS_HEIGHT"], params["ANALYSIS_WIDTH"]), dtype=np.uint8)
    for x0, y0, w, h in bars:
        mask[y0:y0 + h, x0:x0 + w] = 255
    return mask


def bar_corners(x0: int, y0: int, w: int, h: int) -> np.ndarray:
    """Rectangle polygon with corners on the outermost pixels of a bar."""
    return np.array(
        [[x0, y0], [x0 + w - 1, y0], [x0 + w - 1, y0 + h - 1], [x0, y0 + h - 1]],
        dtype=np.int32,
    )


def bar_candidate(bar: Bar, frame_number: int, params: dict | None = None) -> Candidate:
    """Candidate built from the traced contour of a single bar."""
    (contour,) = find_contours(make_mask([bar], params))
    return Candidate(contour=contour, frame_number=frame_number)
