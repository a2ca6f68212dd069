from __future__ import annotations

import pytest
from loguru import logger

from backend.app import create_app
from backend.app.config import ConfigurationError, load_settings


def test_defaults(monkeypatch):
    for key in ("RETIREMENT_DB_PATH", "RETIREMENT_RETURN_RATE", "RETIREMENT_CORS_ORIGINS"):
        monkeypatch.delenv(key, raising=False)

    settings = load_settings()
    assert settings.database_path == ":memory:"
    assert settings.annual_return_rate == 0.05
    assert "http://localhost:5173" in settings.cors_origins


def test_environment_values_are_parsed(monkeypatch):
    monkeypatch.setenv("RETIREMENT_RETURN_RATE", "0.06")
    monkeypatch.setenv("RETIREMENT_CORS_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("RETIREMENT_SEED_DEMO", "false")

    settings = load_settings()
    assert settings.annual_return_rate == 0.06
    assert settings.cors_origins == ["http://a.test", "http://b.test"]
    assert settings.seed_demo_data is False


def test_overrides_win_over_environment(monkeypatch):
    monkeypatch.setenv("RETIREMENT_RETURN_RATE", "0.06")
    assert load_settings({"annual_return_rate": 0.04}).annual_return_rate == 0.04


@pytest.mark.parametrize("rate", ["0", "abc", "-0.5", "-1.5"])
def test_bad_return_rate_is_rejected(monkeypatch, rate):
    monkeypatch.setenv("RETIREMENT_RETURN_RATE", rate)
    with pytest.raises(ConfigurationError):
        load_settings()


def test_create_app_fails_fast_on_bad_config():
    with pytest.raises(ConfigurationError):
        create_app({"annual_return_rate": 0})


def test_create_app_keeps_sinks_added_by_the_host():
    messages = []
    sink_id = logger.add(messages.append, level="INFO")
    try:
        create_app({"seed_demo_data": False})
        create_app({"seed_demo_data": False})
    finally:
        logger.remove(sink_id)

    assert sum("App ready" in message for message in messages) == 2
