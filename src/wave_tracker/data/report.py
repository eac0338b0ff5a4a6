"""
Reporting utilities for recognized waves.
"""

import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

REPORT_COLUMNS = [
    "WaveID",
    "BirthFrame",
    "DeathFrame",
    "MaxMass",
    "MaxDisplacement",
    "CentroidHistory",
    "DisplacementHistory",
]


def _join_centroids(centroids):
    return ";".join(f"{x},{y}" for x, y in centroids)


def _join_values(values):
    return ";".join(f"{v:.2f}" for v in values)


def waves_to_dataframe(waves):
    """
    Tabulate archived waves, one row per wave.

    Args:
        waves (list): Wave objects or records as returned by ``Wave.to_record``

    Returns:
        pd.DataFrame: Columns as in REPORT_COLUMNS
    """
    rows = []
    for wave in waves:
        rec = wave if isinstance(wave, dict) else wave.to_record()
        rows.append({
            "WaveID": rec["id"],
            "BirthFrame": rec["birth_frame"],
            "DeathFrame": rec["death_frame"],
            "MaxMass": rec["max_mass"],
            "MaxDisplacement": round(rec["max_displacement"], 2),
            "CentroidHistory": _join_centroids(rec["centroid_history"]),
            "DisplacementHistory": _join_values(rec["displacement_history"]),
        })
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def write_wave_report(waves, path):
    """Write the recognized-wave table to ``path`` as CSV."""
    df = waves_to_dataframe(waves)
    path = Path(path)
    df.to_csv(path, index=False)
    logger.info(f"Wrote {len(df)} wave(s) to {path}")
    return df


def summarize_run(summary):
    """Human-readable summary of a pipeline run."""
    lines = [
        "------------",
        "Program complete.",
        f"Program took {summary.elapsed_seconds * 1000:.0f} milliseconds.",
        f"Program speed: {summary.fps:.2f} frames per second.",
        f"{len(summary.recognized_waves)} wave(s) found.",
        "------------",
    ]
    return "\n".join(lines)
