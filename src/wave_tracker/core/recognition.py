"""
Recognition policies deciding when a tracked wave counts as a real wave.

A policy is any callable taking a Wave and returning a bool. The tracker only
ever latches recognition from False to True, so policies need not be monotonic.
"""

from typing import Callable

RecognitionPolicy = Callable[[object], bool]


class ThresholdRecognitionPolicy:
    """Recognize a wave once both its peak mass and peak drift reach thresholds."""

    def __init__(self, mass_threshold, displacement_threshold):
        self.mass_threshold = mass_threshold
        self.displacement_threshold = displacement_threshold

    @classmethod
    def from_params(cls, params):
        return cls(params["MASS_THRESHOLD"], params["DISPLACEMENT_THRESHOLD"])

    def __call__(self, wave) -> bool:
        return (
            wave.max_mass >= self.mass_threshold
            and wave.max_displacement >= self.displacement_threshold
        )

    def __repr__(self):
        return (
            f"ThresholdRecognitionPolicy(mass_threshold={self.mass_threshold}, "
            f"displacement_threshold={self.displacement_threshold})"
        )
