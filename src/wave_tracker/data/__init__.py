"""Report writing utilities."""

from .report import summarize_run, waves_to_dataframe, write_wave_report

__all__ = ["summarize_run", "waves_to_dataframe", "write_wave_report"]
