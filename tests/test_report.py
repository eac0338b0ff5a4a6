"""
Tests for the recognized-wave report.

Tests cover:
- Tabulating Wave objects and plain records
- CSV round trip through pandas
- Run summary text
"""

import pandas as pd
import pytest

from tests.helpers.synthetic import bar_candidate, default_params, make_mask
from wave_tracker.core.pipeline import PipelineSummary
from wave_tracker.core.wave import Wave
from wave_tracker.data.report import (
    REPORT_COLUMNS,
    summarize_run,
    waves_to_dataframe,
    write_wave_report,
)


def _record(**overrides):
    rec = {
        "id": 4,
        "birth_frame": 12,
        "death_frame": 40,
        "max_mass": 1350,
        "max_displacement": 14.1234,
        "centroid_history": [(160, 90), (160, 95)],
        "displacement_history": [0.0, 4.98],
    }
    rec.update(overrides)
    return rec


class TestWavesToDataFrame:
    """Test suite for waves_to_dataframe."""

    def test_columns_and_formatting(self):
        """Records are flattened into one row with joined histories."""
        df = waves_to_dataframe([_record()])

        assert list(df.columns) == REPORT_COLUMNS
        row = df.iloc[0]
        assert row["WaveID"] == 4
        assert row["BirthFrame"] == 12
        assert row["DeathFrame"] == 40
        assert row["MaxMass"] == 1350
        assert row["MaxDisplacement"] == pytest.approx(14.12)
        assert row["CentroidHistory"] == "160,90;160,95"
        assert row["DisplacementHistory"] == "0.00;4.98"

    def test_empty_input_keeps_header(self):
        """No waves still yields the full set of columns."""
        df = waves_to_dataframe([])
        assert df.empty
        assert list(df.columns) == REPORT_COLUMNS

    def test_accepts_wave_objects(self):
        """Wave instances are converted through to_record."""
        params = default_params()
        bar = (110, 88, 100, 4)
        wave = Wave(bar_candidate(bar, 2, params), 9, params)
        wave.update(make_mask([bar], params), 3, 3)

        df = waves_to_dataframe([wave])

        row = df.iloc[0]
        assert row["WaveID"] == 9
        assert row["BirthFrame"] == 2
        assert row["DeathFrame"] == 3
        assert row["MaxMass"] == 400
        assert row["CentroidHistory"] == "159,89;159,89"

    def test_row_order_follows_input(self):
        """Rows appear in archive order."""
        df = waves_to_dataframe([_record(id=2), _record(id=1)])
        assert df["WaveID"].tolist() == [2, 1]


class TestWriteWaveReport:
    """Test suite for write_wave_report."""

    def test_csv_round_trip(self, tmp_path):
        """Written file reads back with the same table."""
        path = tmp_path / "waves.csv"
        written = write_wave_report([_record(), _record(id=5, birth_frame=30)], path)

        loaded = pd.read_csv(path)

        assert list(loaded.columns) == REPORT_COLUMNS
        assert loaded["WaveID"].tolist() == [4, 5]
        assert loaded["BirthFrame"].tolist() == [12, 30]
        assert loaded["CentroidHistory"].tolist() == written["CentroidHistory"].tolist()

    def test_no_index_column(self, tmp_path):
        """The DataFrame index is not written."""
        path = tmp_path / "waves.csv"
        write_wave_report([_record()], path)

        header = path.read_text().splitlines()[0]
        assert header == ",".join(REPORT_COLUMNS)


class TestSummarizeRun:
    """Test suite for summarize_run."""

    def test_summary_lines(self):
        """Summary reports timing, speed and wave count."""
        summary = PipelineSummary(frames_processed=200, elapsed_seconds=4.0,
                                  recognized_waves=[object(), object()])

        lines = summarize_run(summary).splitlines()

        assert lines[0] == lines[-1] == "------------"
        assert "Program complete." in lines
        assert "Program took 4000 milliseconds." in lines
        assert "Program speed: 50.00 frames per second." in lines
        assert "2 wave(s) found." in lines

    def test_zero_elapsed_time(self):
        """A zero-duration run reports zero speed instead of failing."""
        summary = PipelineSummary(frames_processed=0, elapsed_seconds=0.0)
        assert "Program speed: 0.00 frames per second." in summarize_run(summary)
