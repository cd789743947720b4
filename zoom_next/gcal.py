from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import List, Optional

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from .meeting import select_next_event
from .models import CalendarEvent

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]
MAX_RESULTS = 10


class CredentialsError(RuntimeError):
    pass


def load_credentials(token_file: str) -> Credentials:
    """Load an already authorized token file. The file is never written."""
    path = Path(token_file)
    if not path.exists():
        raise CredentialsError(f"Token file {token_file} not found; authorize the calendar client first")
    try:
        creds = Credentials.from_authorized_user_file(str(path), SCOPES)
    except ValueError as exc:
        raise CredentialsError(f"Token file {token_file} is not usable: {exc}") from exc

    if creds.valid:
        return creds
    if creds.expired and creds.refresh_token:
        logging.info("Refreshing expired credentials from %s", token_file)
        try:
            creds.refresh(Request())
        except RefreshError as exc:
            raise CredentialsError(f"Unable to refresh credentials: {exc}") from exc
        return creds
    raise CredentialsError(f"Credentials in {token_file} are invalid and cannot be refreshed")


def build_service(token_file: str):
    creds = load_credentials(token_file)
    return build("calendar", "v3", credentials=creds, cache_discovery=False)


def fetch_upcoming_events(
    service,
    calendar_id: str = "primary",
    now: Optional[dt.datetime] = None,
    max_results: int = MAX_RESULTS,
) -> List[CalendarEvent]:
    time_min = (now or dt.datetime.now(tz=dt.timezone.utc)).isoformat()
    logging.info("Fetching up to %d upcoming events from %s", max_results, calendar_id)
    events_result = (
        service.events()
        .list(
            calendarId=calendar_id,
            timeMin=time_min,
            showDeleted=False,
            singleEvents=True,
            maxResults=max_results,
            orderBy="startTime",
        )
        .execute()
    )
    events = [CalendarEvent.from_gcal(item) for item in events_result.get("items", []) if isinstance(item, dict)]
    logging.info("Found %d upcoming events", len(events))
    return events


def next_event(service, calendar_id: str = "primary", now: Optional[dt.datetime] = None) -> Optional[CalendarEvent]:
    """Next event in the calendar, preferring the first one with a Zoom link."""
    events = fetch_upcoming_events(service, calendar_id=calendar_id, now=now)
    if not events:
        logging.info("No upcoming events in %s", calendar_id)
        return None
    return select_next_event(events)
