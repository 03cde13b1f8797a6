"""
Tests for settings loading.
"""

from pathlib import Path

import pytest

from zonekit import config as config_module
from zonekit.config import BusinessDefaults, ZoneKitSettings, get_default_config_path
from zonekit.domain.models import TimeRange


class TestBusinessDefaults:
    """Tests for BusinessDefaults validation."""

    def test_defaults(self):
        defaults = BusinessDefaults()

        assert (defaults.start_hour, defaults.end_hour, defaults.horizon_days) == (9, 17, 7)
        assert defaults.as_time_range() == TimeRange(9, 17)

    def test_invalid_hour(self):
        with pytest.raises(ValueError, match="Hour must be between 0 and 23"):
            BusinessDefaults(start_hour=25)

    def test_end_before_start(self):
        with pytest.raises(ValueError, match="must be later than start_hour"):
            BusinessDefaults(start_hour=17, end_hour=9)

    def test_horizon_must_be_positive(self):
        with pytest.raises(ValueError, match="horizon_days must be positive"):
            BusinessDefaults(horizon_days=0)


class TestZoneKitSettings:
    """Tests for ZoneKitSettings."""

    def test_load_from_yaml(self, tmp_path):
        config_path = tmp_path / "zonekit.yaml"
        config_path.write_text(
            "display_timezone: Europe/Berlin\n"
            "log_level: info\n"
            "business:\n"
            "  start_hour: 8\n"
            "  end_hour: 16\n"
            "meeting_zones:\n"
            "  - America/New_York\n"
            "  - Europe/London\n",
            encoding="utf-8",
        )

        settings = ZoneKitSettings.load_from_yaml(config_path)

        assert settings.display_timezone == "Europe/Berlin"
        assert settings.log_level == "INFO"
        assert settings.business.start_hour == 8
        assert settings.business.horizon_days == 7
        assert settings.meeting_zones == ["America/New_York", "Europe/London"]

    def test_empty_file_gives_defaults(self, tmp_path):
        config_path = tmp_path / "zonekit.yaml"
        config_path.write_text("", encoding="utf-8")

        assert ZoneKitSettings.load_from_yaml(config_path) == ZoneKitSettings()

    def test_missing_file_raises_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ZoneKitSettings.load_from_yaml(tmp_path / "missing.yaml")

    def test_non_mapping_raises_error(self, tmp_path):
        config_path = tmp_path / "zonekit.yaml"
        config_path.write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(ValueError, match="must contain a mapping"):
            ZoneKitSettings.load_from_yaml(config_path)

    def test_invalid_yaml_raises_error(self, tmp_path):
        config_path = tmp_path / "zonekit.yaml"
        config_path.write_text("business: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            ZoneKitSettings.load_from_yaml(config_path)

    def test_unknown_log_level(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            ZoneKitSettings(log_level="LOUD")

    def test_load_or_default_without_file(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config_module, "get_default_config_path", lambda: tmp_path / "absent.yaml")

        assert ZoneKitSettings.load_or_default() == ZoneKitSettings()

    def test_load_or_default_explicit_missing_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ZoneKitSettings.load_or_default(tmp_path / "absent.yaml")


def test_default_config_path_prefers_working_directory(tmp_path, monkeypatch):
    (tmp_path / "zonekit.yaml").write_text("log_level: DEBUG\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert get_default_config_path() == tmp_path / "zonekit.yaml"


def test_default_config_path_falls_back_to_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Path, "home", lambda: home)

    assert get_default_config_path() == home / "zonekit.yaml"
