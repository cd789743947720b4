from __future__ import annotations

import datetime as dt
import logging
import re
from typing import Iterable, Optional
from urllib.parse import urlsplit

import humanize

from .models import CalendarEvent, MeetingLink

ZOOM_URL_REGEX = re.compile(r"https://.*?\.zoom\.us/(?:j/(\d+)|my/(\S+))", re.ASCII)
BAD_ESCAPE_REGEX = re.compile(r"%(?![0-9A-Fa-f]{2})")
BAD_URL_CHAR_REGEX = re.compile(r"[\s\x00-\x1f\x7f]")
HOST_REGEX = re.compile(r"(?:[A-Za-z0-9\-._~!$&'()*+,;=]|%[0-9A-Fa-f]{2})+")
RFC3339_REGEX = re.compile(
    r"(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})", re.ASCII
)
ZOOM_APP_JOIN_URL = "zoommtg://zoom.us/join?confno="
# Largest meeting ID rewritten to the app scheme; longer IDs keep the web URL.
MAX_MEETING_ID = 2**63 - 1
SOON_WINDOW_MINUTES = 5

QUOTE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


class StartTimeError(ValueError):
    pass


def _parse_url(url: str):
    if BAD_URL_CHAR_REGEX.search(url):
        raise ValueError(f"invalid character in '{url}'")
    if BAD_ESCAPE_REGEX.search(url):
        raise ValueError(f"invalid escape in '{url}'")
    parsed = urlsplit(url)
    if not parsed.hostname or not HOST_REGEX.fullmatch(parsed.hostname):
        raise ValueError(f"invalid host in '{url}'")
    # Accessing port validates it.
    parsed.port
    return parsed


def extract_meeting_link(event: CalendarEvent) -> Optional[MeetingLink]:
    """Find the first Zoom URL in the event's location and description.

    Links with a numeric meeting ID are rewritten to the zoommtg:// scheme so
    they open the desktop client directly. Personal room links are returned
    as they appear. A match that is not a well-formed URL counts as no link.
    """
    text = f"{event.location or ''} {event.description or ''}"
    match = ZOOM_URL_REGEX.search(text)
    if not match:
        return None

    meeting_id = match.group(1)
    if meeting_id and int(meeting_id) > MAX_MEETING_ID:
        meeting_id = None
    url = ZOOM_APP_JOIN_URL + meeting_id if meeting_id else match.group(0)
    try:
        parsed = _parse_url(url)
    except ValueError as exc:
        logging.debug("Ignoring malformed meeting link %r: %s", url, exc)
        return None
    return MeetingLink(url=url, parsed=parsed, meeting_id=meeting_id)


def select_next_event(events: Iterable[CalendarEvent]) -> Optional[CalendarEvent]:
    """Pick the first event with a Zoom link, falling back to the first event."""
    first: Optional[CalendarEvent] = None
    for event in events:
        if first is None:
            first = event
        if extract_meeting_link(event) is not None:
            return event
    return first


def meeting_start_time(event: Optional[CalendarEvent]) -> dt.datetime:
    if event is None or not event.start:
        raise StartTimeError("event does not have a start datetime")
    value = event.start
    match = RFC3339_REGEX.fullmatch(value)
    if not match:
        raise StartTimeError(f"cannot parse start datetime '{value}'")
    base, fraction, offset = match.groups()
    if fraction:
        base += "." + fraction[:6].ljust(6, "0")
    try:
        return dt.datetime.fromisoformat(base + ("+00:00" if offset == "Z" else offset))
    except ValueError:
        raise StartTimeError(f"cannot parse start datetime '{value}'") from None


def _utc_now() -> dt.datetime:
    return dt.datetime.now(tz=dt.timezone.utc)


def is_starting_soon(event: Optional[CalendarEvent], now: Optional[dt.datetime] = None) -> bool:
    try:
        start = meeting_start_time(event)
    except StartTimeError:
        return False
    minutes_until_start = (start - (now or _utc_now())).total_seconds() / 60
    return -SOON_WINDOW_MINUTES < minutes_until_start < SOON_WINDOW_MINUTES


def humanized_start_time(event: Optional[CalendarEvent], now: Optional[dt.datetime] = None) -> str:
    """Relative start time such as "5 minutes from now".

    When the start time is missing or malformed the error message is
    returned instead, so the caller always has something to show.
    """
    try:
        start = meeting_start_time(event)
    except StartTimeError as exc:
        return str(exc)
    # A positive delta reads as "ago", a negative one as "from now".
    return humanize.naturaltime((now or _utc_now()) - start)


def _quote(text: str) -> str:
    """Double-quote text, escaping quotes, backslashes and unprintable characters."""
    out = ['"']
    for ch in text:
        if ch in QUOTE_ESCAPES:
            out.append(QUOTE_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif ord(ch) < 0x80:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    out.append('"')
    return "".join(out)


def meeting_summary(event: Optional[CalendarEvent]) -> str:
    if event is None:
        return ""

    if event.summary:
        output = f"Your next meeting is {_quote(event.summary)}"
    else:
        output = "You have a meeting coming up"

    if event.organizer:
        output += f", organized by {event.organizer}."
    elif event.creator:
        output += f", created by {event.creator}."
    else:
        output += "."
    return output
