from __future__ import annotations

import re
from datetime import datetime, timezone

from dateutil import parser as date_parser

from eventhub.errors import InvalidFormat

# two defaults differing only in year; a parse that depends on which one was
# used had no year in the input (e.g. "10:30" or "5")
_DEFAULT = datetime(2000, 1, 1)
_ALT_DEFAULT = datetime(2001, 1, 1)

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})\s*(AM|PM)?$", re.IGNORECASE)


def normalize_date(value: str) -> str:
    """
    Parse any date string dateutil understands and return YYYY-MM-DD.

    Missing month and day default to the 1st ("March 2024" -> 2024-03-01).
    Input without a year, such as a bare time, is rejected. Aware values are
    shifted to UTC before truncating; naive values are taken as UTC already.
    """
    try:
        parsed = date_parser.parse(value, default=_DEFAULT)
        check = date_parser.parse(value, default=_ALT_DEFAULT)
    except (ValueError, OverflowError, TypeError) as e:
        raise InvalidFormat("Invalid date format") from e

    if parsed.date() != check.date():
        raise InvalidFormat("Invalid date format")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def normalize_time(value: str) -> str:
    """
    "2:30 PM" -> "14:30", "12:00 AM" -> "00:00", "9:05" -> "09:05".
    """
    match = _TIME_RE.match(value.strip())
    if not match:
        raise InvalidFormat("Invalid time format, expected HH:MM with optional AM/PM")

    hours = int(match.group(1))
    minutes = int(match.group(2))
    period = (match.group(3) or "").upper()

    if period == "PM" and hours != 12:
        hours += 12
    elif period == "AM" and hours == 12:
        hours = 0

    if not (0 <= hours <= 23 and 0 <= minutes <= 59):
        raise InvalidFormat("Time must be between 00:00 and 23:59")

    return f"{hours:02d}:{minutes:02d}"
