from __future__ import annotations

import re
from datetime import date, datetime

TIME_PATTERNS = [
    r"^(\d{1,2}):(\d{2})(?::\d{2})?\s*(am|pm)?$",
    r"^(\d{1,2})\s*(am|pm)$",
]


def parse_calendar_date(value: object) -> date | None:
    """Parse a calendar date from a date, datetime or ISO string. Returns None if invalid."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def normalize_time_of_day(value: object) -> str | None:
    """Normalize "9:30 am", "14:00" or "2pm" to "HH:MM". Returns None if not a time."""
    if not isinstance(value, str):
        return None
    normalized = value.lower().strip()

    for pattern in TIME_PATTERNS:
        match = re.match(pattern, normalized)
        if not match:
            continue
        hour = int(match.group(1))
        minute = int(match.group(2)) if match.lastindex >= 2 and match.group(2).isdigit() else 0
        am_pm = match.group(match.lastindex) if match.group(match.lastindex) in ("am", "pm") else None

        if am_pm == "pm" and hour != 12:
            hour += 12
        elif am_pm == "am" and hour == 12:
            hour = 0

        if 0 <= hour <= 23 and 0 <= minute <= 59:
            return f"{hour:02d}:{minute:02d}"

    return None


def format_date(value: date) -> str:
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def format_date_range(start: date, end: date) -> str:
    return f"{format_date(start)} - {format_date(end)}"


def ranges_overlap(start1: date, end1: date, start2: date, end2: date) -> bool:
    """Inclusive overlap: ranges that touch on a single day overlap."""
    return start1 <= end2 and start2 <= end1
