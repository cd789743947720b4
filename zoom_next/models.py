from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import SplitResult


def _display_name(person: Any) -> Optional[str]:
    if isinstance(person, dict):
        name = person.get("displayName")
        if isinstance(name, str):
            return name
    return None


@dataclass(frozen=True)
class CalendarEvent:
    summary: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    start: Optional[str] = None
    organizer: Optional[str] = None
    creator: Optional[str] = None
    id: str = ""
    raw: Optional[dict] = field(default=None, compare=False, repr=False)

    @classmethod
    def from_gcal(cls, item: dict) -> "CalendarEvent":
        # All-day events only carry start.date, which is not a start datetime.
        start_obj = item.get("start")
        start = start_obj.get("dateTime") if isinstance(start_obj, dict) else None
        return cls(
            summary=item.get("summary"),
            description=item.get("description"),
            location=item.get("location"),
            start=start,
            organizer=_display_name(item.get("organizer")),
            creator=_display_name(item.get("creator")),
            id=str(item.get("id", "")),
            raw=item,
        )


@dataclass(frozen=True)
class MeetingLink:
    url: str
    parsed: SplitResult = field(compare=False, repr=False)
    meeting_id: Optional[str] = None

    @property
    def is_direct_join(self) -> bool:
        """True for the zoommtg:// form that opens the desktop client."""
        return self.meeting_id is not None

    def __str__(self) -> str:
        return self.url
