"""
Tests for the configuration layer.
"""

from datetime import date

import pytest

from gull.config import (
    GullConfig,
    get_config,
    load_config,
    set_model_path,
    validate_config,
)


def write_yaml(tmp_path, text):
    path = tmp_path / "gull.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:

    def test_default_is_valid(self):
        assert validate_config(GullConfig()) == []

    def test_default_values(self):
        config = GullConfig()
        assert config.model.date == date(2020, 3, 23)
        assert config.location.altitude == 1090.0
        assert config.logging.level == "INFO"

    def test_instances_are_independent(self):
        a, b = GullConfig(), GullConfig()
        a.location.latitude = 10.0
        assert b.location.latitude != 10.0

    def test_set_model_path(self, monkeypatch):
        config = get_config()
        monkeypatch.setattr(config.model, "path", config.model.path)
        set_model_path("data/WMM2015.COF")
        assert get_config().model.path == "data/WMM2015.COF"


class TestValidation:

    def test_latitude_range(self):
        config = GullConfig()
        config.location.latitude = 91.0
        assert validate_config(config) == ["Latitude must be between -90 and 90 degrees"]

    def test_non_numeric_location(self):
        config = GullConfig()
        config.location.altitude = "high"
        assert validate_config(config) == ["Location altitude must be a number"]

    @pytest.mark.parametrize("name", ["latitude", "longitude", "altitude"])
    def test_nan_location(self, name):
        config = GullConfig()
        setattr(config.location, name, float("nan"))
        assert len(validate_config(config)) == 1

    def test_boolean_location(self):
        config = GullConfig()
        config.location.latitude = True
        assert validate_config(config) == ["Location latitude must be a number"]

    def test_logging_level(self):
        config = GullConfig()
        config.logging.level = "VERBOSE"
        assert len(validate_config(config)) == 1

    def test_empty_path(self):
        config = GullConfig()
        config.model.path = ""
        assert validate_config(config) == ["Model path cannot be empty"]


class TestLoad:

    def test_load(self, tmp_path):
        path = write_yaml(tmp_path, """
model:
  path: share/data/WMM2015.COF
  date: 2017-06-01
location:
  latitude: -12.5
  longitude: 130.8
  altitude: 25
logging:
  level: DEBUG
  log_file: gull.log
""")
        config = load_config(path)
        assert config.model.path == "share/data/WMM2015.COF"
        assert config.model.date == date(2017, 6, 1)
        assert config.location.latitude == -12.5
        assert config.location.altitude == 25
        assert config.logging.level == "DEBUG"
        assert config.logging.log_file == "gull.log"

    def test_partial(self, tmp_path):
        config = load_config(write_yaml(tmp_path, "location:\n  latitude: 10.0\n"))
        assert config.location.latitude == 10.0
        assert config.model == GullConfig().model

    def test_empty(self, tmp_path):
        assert load_config(write_yaml(tmp_path, "")) == GullConfig()

    def test_string_date(self, tmp_path):
        config = load_config(write_yaml(tmp_path, "model:\n  date: '2019-12-31'\n"))
        assert config.model.date == date(2019, 12, 31)

    def test_invalid_date(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid model date"):
            load_config(write_yaml(tmp_path, "model:\n  date: yesterday\n"))

    def test_unknown_key(self, tmp_path):
        with pytest.raises(ValueError, match="location.height"):
            load_config(write_yaml(tmp_path, "location:\n  height: 10.0\n"))

    def test_unknown_section(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown section `orbit`"):
            load_config(write_yaml(tmp_path, "orbit:\n  eccentricity: 0.0\n"))

    def test_invalid_values(self, tmp_path):
        with pytest.raises(ValueError, match="Latitude"):
            load_config(write_yaml(tmp_path, "location:\n  latitude: 120.0\n"))

    def test_nan_altitude(self, tmp_path):
        with pytest.raises(ValueError, match="Altitude must be finite"):
            load_config(write_yaml(tmp_path, "location:\n  altitude: .nan\n"))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_config(tmp_path / "missing.yaml")
