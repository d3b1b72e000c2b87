"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

import salonslots.config
from salonslots.config import AppConfig, get_default_config_path, load_config
from salonslots.domain.models import AppointmentStatus


class TestAppConfig:
    """Tests for AppConfig."""

    def test_defaults(self):
        config = AppConfig()

        assert config.defaults.slot_duration_minutes == 30
        assert config.timezone == "UTC"
        assert AppointmentStatus.CONFIRMED in config.active_appointment_statuses

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "timezone: Asia/Manila\n"
            "defaults:\n"
            "  slot_duration_minutes: 45\n"
            "active_appointment_statuses: [confirmed, in_service, confirmed]\n",
            encoding="utf-8",
        )

        config = AppConfig.load_from_yaml(path)

        assert config.timezone == "Asia/Manila"
        assert config.defaults.slot_duration_minutes == 45
        assert config.active_appointment_statuses == [
            AppointmentStatus.CONFIRMED,
            AppointmentStatus.IN_SERVICE,
        ]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.load_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("defaults: [unclosed\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(ValueError, match="mapping"):
            AppConfig.load_from_yaml(path)

    def test_non_positive_duration_rejected(self):
        with pytest.raises(ValidationError):
            AppConfig(defaults={"slot_duration_minutes": 0})

    def test_terminal_status_cannot_block_slots(self):
        with pytest.raises(ValidationError):
            AppConfig(active_appointment_statuses=["confirmed", "cancelled"])


def test_load_config_without_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("salonslots.config.get_default_config_path", lambda: tmp_path / "config.yaml")

    assert load_config() == AppConfig()


def test_load_config_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_default_config_path_prefers_cwd(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("timezone: UTC\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert get_default_config_path() == tmp_path / "config.yaml"


def test_default_config_path_falls_back_next_to_package(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    package_parent = Path(salonslots.config.__file__).resolve().parent.parent

    assert get_default_config_path() == package_parent / "config.yaml"
