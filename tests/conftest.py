"""
Shared fixtures for zoom_next tests.
"""

import datetime as dt

import pytest

from zoom_next.models import CalendarEvent


@pytest.fixture
def start() -> dt.datetime:
    return dt.datetime(2024, 1, 2, 15, 4, 5, tzinfo=dt.timezone.utc)


@pytest.fixture
def make_event():
    """Build a CalendarEvent with only the fields a test cares about."""

    def _make(**kwargs) -> CalendarEvent:
        return CalendarEvent(**kwargs)

    return _make
