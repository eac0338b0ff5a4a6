"""
Tests for parameter defaults, validation and JSON persistence.
"""

import json

import pytest

from wave_tracker.config import (
    DEFAULT_PARAMS,
    ConfigurationError,
    get_default_params,
    load_config,
    save_config,
    validate_params,
)


class TestDefaults:
    """Test suite for default parameters."""

    def test_core_defaults(self):
        """Defaults match the documented tracking constants."""
        p = get_default_params()
        assert p["MIN_AREA"] == 100
        assert p["MIN_INERTIA_RATIO"] == 0.0
        assert p["MAX_INERTIA_RATIO"] == 0.1
        assert p["MASS_THRESHOLD"] == 1000
        assert p["DISPLACEMENT_THRESHOLD"] == 10
        assert p["SEARCH_REGION_BUFFER"] == 15
        assert p["TRACKING_HISTORY"] == 20
        assert p["AXIS_ANGLE"] == 5.0
        assert (p["ANALYSIS_WIDTH"], p["ANALYSIS_HEIGHT"]) == (320, 180)

    def test_defaults_are_copied(self):
        """Mutating a returned dict does not touch the module defaults."""
        p = get_default_params()
        p["MIN_AREA"] = 1
        assert DEFAULT_PARAMS["MIN_AREA"] == 100

    def test_defaults_validate(self):
        """The defaults pass validation."""
        validate_params(get_default_params())


class TestValidation:
    """Test suite for parameter validation."""

    def test_unknown_key(self):
        with pytest.raises(ConfigurationError, match="Unknown"):
            validate_params({"NOT_A_PARAM": 1})

    def test_non_numeric(self):
        with pytest.raises(ConfigurationError):
            validate_params({"MIN_AREA": "100"})

    def test_bool_rejected(self):
        with pytest.raises(ConfigurationError):
            validate_params({"MASS_THRESHOLD": True})

    def test_integer_key_rejects_fraction(self):
        with pytest.raises(ConfigurationError):
            validate_params({"TRACKING_HISTORY": 2.5})

    def test_inverted_inertia_range(self):
        with pytest.raises(ConfigurationError, match="MIN_INERTIA_RATIO"):
            validate_params({"MIN_INERTIA_RATIO": 0.5, "MAX_INERTIA_RATIO": 0.1})

    def test_vertical_axis_rejected(self):
        with pytest.raises(ConfigurationError, match="AXIS_ANGLE"):
            validate_params({"AXIS_ANGLE": 90.0})

    def test_non_positive_history(self):
        with pytest.raises(ConfigurationError):
            validate_params({"TRACKING_HISTORY": 0})

    def test_negative_buffer(self):
        with pytest.raises(ConfigurationError):
            validate_params({"SEARCH_REGION_BUFFER": -1})

    def test_infinite_value(self):
        with pytest.raises(ConfigurationError):
            validate_params({"MASS_THRESHOLD": float("inf")})


class TestPersistence:
    """Test suite for JSON load/save."""

    def test_load_merges_over_defaults(self, tmp_path):
        path = tmp_path / "params.json"
        path.write_text(json.dumps({"MASS_THRESHOLD": 500, "AXIS_ANGLE": 0.0}), encoding="utf-8")

        params = load_config(path)
        assert params["MASS_THRESHOLD"] == 500
        assert params["AXIS_ANGLE"] == 0.0
        assert params["MIN_AREA"] == DEFAULT_PARAMS["MIN_AREA"]

    def test_save_load_roundtrip(self, tmp_path):
        path = tmp_path / "params.json"
        params = get_default_params()
        params["SEARCH_REGION_BUFFER"] = 20

        save_config(params, path)
        assert load_config(path) == params

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_config(path)

    def test_non_object_root(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_save_rejects_invalid(self, tmp_path):
        with pytest.raises(ConfigurationError):
            save_config({"BOGUS": 1}, tmp_path / "out.json")
