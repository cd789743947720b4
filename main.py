from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from googleapiclient.errors import HttpError

from zoom_next.config import get_settings
from zoom_next.gcal import CredentialsError, build_service, next_event
from zoom_next.meeting import extract_meeting_link, humanized_start_time, is_starting_soon, meeting_summary
from zoom_next.models import CalendarEvent


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show the next Zoom meeting from Google Calendar")
    parser.add_argument("--calendar", type=str, default=None, help="Calendar ID (default: CALENDAR_ID or primary)")
    parser.add_argument("--token-file", type=str, default=None, help="Authorized user token JSON file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def format_notice(event: CalendarEvent) -> List[str]:
    lines = [meeting_summary(event)]
    starts = f"Starts {humanized_start_time(event)}"
    if is_starting_soon(event):
        starts = "Starting soon! " + starts
    lines.append(starts)
    link = extract_meeting_link(event)
    if link:
        lines.append(f"Join: {link}")
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")

    settings = get_settings()
    logging.getLogger().setLevel(logging.DEBUG if args.verbose else settings.log_level)
    calendar_id = args.calendar or settings.calendar_id
    token_file = args.token_file or settings.google_token_file

    try:
        service = build_service(token_file)
        event = next_event(service, calendar_id=calendar_id)
    except CredentialsError as exc:
        logging.error("%s", exc)
        return 1
    except HttpError as exc:
        logging.error("Calendar request failed: %s", exc)
        return 1

    if event is None:
        print("No upcoming meetings.")
        return 0

    for line in format_notice(event):
        print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
