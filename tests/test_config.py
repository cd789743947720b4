"""
Tests for environment driven settings.
"""

import logging

from zoom_next.config import get_log_level, get_settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("CALENDAR_ID", "GOOGLE_TOKEN_FILE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.calendar_id == "primary"
    assert settings.google_token_file == "token.json"
    assert settings.log_level == logging.INFO


def test_environment_overrides(monkeypatch, tmp_path):
    token = tmp_path / "token.json"
    token.write_text("{}")
    monkeypatch.setenv("CALENDAR_ID", "team@example.com")
    monkeypatch.setenv("GOOGLE_TOKEN_FILE", str(token))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = get_settings()
    assert settings.calendar_id == "team@example.com"
    assert settings.google_token_file == str(token)
    assert settings.log_level == logging.DEBUG


def test_invalid_log_level(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert get_log_level() == logging.INFO
