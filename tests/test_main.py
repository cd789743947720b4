"""
Tests for the command line entry point.
"""

import datetime as dt
from unittest.mock import MagicMock, patch

import pytest
from googleapiclient.errors import HttpError

import main
from zoom_next.gcal import CredentialsError
from zoom_next.models import CalendarEvent


@pytest.fixture(autouse=True)
def token_env(monkeypatch, tmp_path):
    monkeypatch.setenv("GOOGLE_TOKEN_FILE", str(tmp_path / "token.json"))
    monkeypatch.setenv("CALENDAR_ID", "primary")
    monkeypatch.delenv("LOG_LEVEL", raising=False)


def test_format_notice_with_link():
    start = dt.datetime.now(tz=dt.timezone.utc) + dt.timedelta(minutes=2)
    event = CalendarEvent(
        summary="Standup",
        organizer="Alice",
        start=start.isoformat(),
        location="https://company.zoom.us/j/1234567890",
    )
    lines = main.format_notice(event)
    assert lines[0] == 'Your next meeting is "Standup", organized by Alice.'
    assert lines[1].startswith("Starting soon! Starts ")
    assert lines[2] == "Join: zoommtg://zoom.us/join?confno=1234567890"


def test_format_notice_without_link_or_start():
    lines = main.format_notice(CalendarEvent(summary="Offsite"))
    assert lines == [
        'Your next meeting is "Offsite".',
        "Starts event does not have a start datetime",
    ]


def test_main_prints_notice(capsys):
    event = CalendarEvent(summary="Sync", description="https://corp.zoom.us/my/room")
    with patch("main.build_service") as build, patch("main.next_event", return_value=event) as nxt:
        assert main.main(["--calendar", "work", "--token-file", "t.json"]) == 0
    build.assert_called_once_with("t.json")
    nxt.assert_called_once_with(build.return_value, calendar_id="work")
    out = capsys.readouterr().out
    assert 'Your next meeting is "Sync".' in out
    assert "Join: https://corp.zoom.us/my/room" in out


def test_main_no_meetings(capsys):
    with patch("main.build_service"), patch("main.next_event", return_value=None):
        assert main.main([]) == 0
    assert capsys.readouterr().out.strip() == "No upcoming meetings."


def test_main_credentials_error():
    with patch("main.build_service", side_effect=CredentialsError("no token")):
        assert main.main([]) == 1


def test_main_http_error():
    resp = MagicMock(status=403, reason="Forbidden")
    error = HttpError(resp, b'{"error": {"message": "Forbidden"}}')
    with patch("main.build_service"), patch("main.next_event", side_effect=error):
        assert main.main([]) == 1
