"""Unit tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from influxdb_http.config import Settings, get_settings

pytestmark = pytest.mark.usefixtures("clean_settings")


def test_defaults() -> None:
    settings = Settings()
    assert settings.influx_url == "http://localhost:8086"
    assert settings.influx_database == "test"
    assert settings.influx_username == ""
    assert settings.influx_timeout == 10.0
    assert settings.log_level == "INFO"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INFLUX_URL", "http://influx:8086")
    monkeypatch.setenv("influx_database", "telemetry")
    monkeypatch.setenv("INFLUX_TIMEOUT", "2.5")
    settings = Settings()
    assert settings.influx_url == "http://influx:8086"
    assert settings.influx_database == "telemetry"
    assert settings.influx_timeout == 2.5


def test_get_settings_is_cached() -> None:
    assert get_settings() is get_settings()


def test_log_level_is_normalised_to_upper_case(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings().log_level == "DEBUG"


def test_unknown_log_level_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        Settings()
