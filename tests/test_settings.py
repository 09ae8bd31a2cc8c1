"""Tests for environment-backed settings."""

import pytest

from carbon_bytes.settings import CarbonBytesSettings, get_settings
from carbon_bytes.types import ModelType


def test_defaults():
    settings = get_settings()

    assert settings.default_model is None
    assert settings.log_level == "WARNING"
    assert settings.log_json is False


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("swd", ModelType.SWD),
        (" 1BYTE ", ModelType.ONE_BYTE),
        ("", None),
        ("carbon", None),
    ],
)
def test_default_model_from_environment(monkeypatch, raw, expected):
    monkeypatch.setenv("CARBON_BYTES_DEFAULT_MODEL", raw)

    assert CarbonBytesSettings().default_model is expected


def test_logging_settings_from_environment(monkeypatch):
    monkeypatch.setenv("CARBON_BYTES_LOG_LEVEL", " debug ")
    monkeypatch.setenv("CARBON_BYTES_LOG_JSON", "true")

    settings = CarbonBytesSettings()

    assert settings.log_level == "DEBUG"
    assert settings.log_json is True
