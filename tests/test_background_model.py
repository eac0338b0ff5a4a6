from __future__ import annotations

import numpy as np

from wave_tracker.core.background_models import BackgroundModel


def _frame(bar: bool = False) -> np.ndarray:
    frame = np.zeros((360, 640, 3), dtype=np.uint8)
    if bar:
        frame[160:200, 200:440] = 255
    return frame


def test_resize_frame_to_analysis_resolution(params) -> None:
    model = BackgroundModel(params)

    small = model.resize_frame(_frame())
    assert small.shape == (180, 320, 3)

    already = np.zeros((180, 320), dtype=np.uint8)
    assert model.resize_frame(already) is already


def test_preprocess_returns_binary_mask_at_analysis_resolution(params) -> None:
    model = BackgroundModel(params)

    mask = model.preprocess(_frame())

    assert mask.shape == (180, 320)
    assert mask.dtype == np.uint8
    assert set(np.unique(mask)) <= {0, 255}
    assert mask.flags["C_CONTIGUOUS"]


def test_moving_object_becomes_foreground(params) -> None:
    model = BackgroundModel(params)
    for _ in range(10):
        mask = model.preprocess(_frame())
    assert mask.max() == 0

    mask = model.preprocess(_frame(bar=True))

    assert mask.max() == 255
    assert mask[90, 160] == 255
    assert mask[20, 20] == 0
    assert mask[150, 300] == 0


def test_opening_removes_speckle(params) -> None:
    model = BackgroundModel(params)
    mask = np.zeros((180, 320), dtype=np.uint8)
    mask[50:52, 50:52] = 255
    mask[100:120, 100:200] = 255

    opened = model.apply_morphological_operations(mask)

    assert opened[50:52, 50:52].max() == 0
    assert opened[110, 150] == 255


def test_grayscale_frames_are_accepted(params) -> None:
    model = BackgroundModel(params)
    mask = model.preprocess(np.zeros((360, 640), dtype=np.uint8))
    assert mask.shape == (180, 320)


def test_reset_discards_learned_background(params) -> None:
    model = BackgroundModel(params)
    model.preprocess(_frame())
    assert model.subtractor is not None

    model.reset()

    assert model.subtractor is None


def test_color_frames_are_modeled_in_color(params) -> None:
    model = BackgroundModel(params)
    green = np.zeros((360, 640, 3), dtype=np.uint8)
    green[:, :] = (0, 128, 0)
    for _ in range(10):
        model.preprocess(green)

    # A red bar with the same gray level as the green background.
    frame = green.copy()
    frame[160:200, 200:440] = (0, 0, 251)
    mask = model.preprocess(frame)

    assert mask[90, 160] == 255
    assert mask[20, 20] == 0
