"""
Tracking parameters for the wave tracker.

All behavior of the detection and tracking core is driven by a flat dictionary
of uppercase keys. This module holds the defaults, validates user-provided
values, and persists parameter sets as JSON.
"""

import json
import logging
import math
from pathlib import Path

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised when parameters or inputs violate the configured contract."""


DEFAULT_PARAMS = {
    # Candidate filtering
    "MIN_AREA": 100,
    "MIN_INERTIA_RATIO": 0.0,
    "MAX_INERTIA_RATIO": 0.1,
    "INERTIA_EPS": 1e-2,
    # Recognition
    "MASS_THRESHOLD": 1000,
    "DISPLACEMENT_THRESHOLD": 10,
    # Tracking
    "SEARCH_REGION_BUFFER": 15,
    "TRACKING_HISTORY": 20,
    "AXIS_ANGLE": 5.0,
    # Analysis resolution
    "ANALYSIS_WIDTH": 320,
    "ANALYSIS_HEIGHT": 180,
    # Background model
    "MOG_HISTORY": 300,
    "MOG_VAR_THRESHOLD": 16.0,
    "MORPH_KERNEL_SIZE": 5,
    # Reporting
    "STATUS_INTERVAL": 100,
}

_INT_KEYS = {
    "MIN_AREA",
    "SEARCH_REGION_BUFFER",
    "TRACKING_HISTORY",
    "ANALYSIS_WIDTH",
    "ANALYSIS_HEIGHT",
    "MOG_HISTORY",
    "MORPH_KERNEL_SIZE",
    "STATUS_INTERVAL",
}


def get_default_params():
    """Return a fresh copy of the default parameter dictionary."""
    return dict(DEFAULT_PARAMS)


def validate_params(params):
    """
    Check a parameter dictionary for unknown keys, wrong types and bad ranges.

    Args:
        params (dict): Parameter dictionary to check

    Returns:
        dict: The same dictionary, for chaining

    Raises:
        ConfigurationError: If any value is invalid
    """
    unknown = set(params) - set(DEFAULT_PARAMS)
    if unknown:
        raise ConfigurationError(f"Unknown parameter(s): {', '.join(sorted(unknown))}")

    for key, value in params.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigurationError(f"{key} must be numeric, got {value!r}")
        if not math.isfinite(value):
            raise ConfigurationError(f"{key} must be finite, got {value!r}")
        if key in _INT_KEYS and int(value) != value:
            raise ConfigurationError(f"{key} must be an integer, got {value!r}")

    p = {**DEFAULT_PARAMS, **params}

    for key in ("ANALYSIS_WIDTH", "ANALYSIS_HEIGHT", "TRACKING_HISTORY",
                "MOG_HISTORY", "MORPH_KERNEL_SIZE", "STATUS_INTERVAL"):
        if p[key] < 1:
            raise ConfigurationError(f"{key} must be >= 1, got {p[key]}")

    for key in ("MIN_AREA", "MASS_THRESHOLD", "DISPLACEMENT_THRESHOLD",
                "SEARCH_REGION_BUFFER", "INERTIA_EPS", "MOG_VAR_THRESHOLD",
                "MIN_INERTIA_RATIO"):
        if p[key] < 0:
            raise ConfigurationError(f"{key} must be non-negative, got {p[key]}")

    if p["MIN_INERTIA_RATIO"] >= p["MAX_INERTIA_RATIO"]:
        raise ConfigurationError(
            "MIN_INERTIA_RATIO must be below MAX_INERTIA_RATIO "
            f"({p['MIN_INERTIA_RATIO']} >= {p['MAX_INERTIA_RATIO']})"
        )

    # Vertical axis has no finite slope.
    if abs(p["AXIS_ANGLE"]) >= 90:
        raise ConfigurationError(f"AXIS_ANGLE must be within (-90, 90), got {p['AXIS_ANGLE']}")

    return params


def load_config(path):
    """
    Load parameters from a JSON file and merge them over the defaults.

    Args:
        path (str or Path): JSON file containing a flat object of parameters

    Returns:
        dict: Complete, validated parameter dictionary
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            cfg = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(cfg, dict):
        raise ConfigurationError(f"Config root must be an object, got {type(cfg).__name__}")

    validate_params(cfg)
    params = get_default_params()
    params.update(cfg)
    logger.info(f"Loaded {len(cfg)} parameter(s) from {path}")
    return params


def save_config(params, path):
    """Write a validated parameter dictionary to ``path`` as JSON."""
    validate_params(params)
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(params, f, indent=2, sort_keys=True)
    logger.info(f"Saved parameters to {path}")
