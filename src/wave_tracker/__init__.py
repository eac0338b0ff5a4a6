"""
Wave Tracker Package

Tracks transient, elongated foreground regions ("waves") through a video and
recognizes genuine waves from their motion dynamics alone.

Key Features:
- Mixture-of-Gaussians background subtraction at a fixed analysis resolution
- Candidate filtering by contour area and inertia ratio
- Search-region tracking along a configured wave axis
- Duplicate resolution that keeps the oldest wave
- Recognition from peak mass and drift away from the birth axis
- CSV report of recognized waves
"""

__version__ = "1.0.0"

from .config import ConfigurationError, get_default_params, load_config, save_config

__all__ = [
    "__version__",
    "ConfigurationError",
    "get_default_params",
    "load_config",
    "save_config",
]
