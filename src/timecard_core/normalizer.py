"""Date and clock-time normalization for timecard tokens.

Timecard exports print dates as ``M/D/YY`` and clock punches as a weekday
abbreviation glued to a compact time (``Wed 7:00a``). These helpers turn
such tokens into the canonical ``YYYY-MM-DD`` and ``HH:MM AM|PM`` forms
stored on a Shift.
"""

import re
from datetime import date
from typing import Optional

from .exceptions import InvalidDateFormat, InvalidTimeFormat

# A stray capital letter bleeding in from the adjacent column ("7:00a E")
STRAY_LETTER_PATTERN = re.compile(r'\s+[A-Z]\s*$')
CLOCK_PATTERN = re.compile(r'(\d{1,2}):(\d{2})\s*([ap])m?', re.IGNORECASE)
WEEKDAY_PATTERN = re.compile(r'^([A-Za-z]{3})\s*\d')
CANONICAL_TIME_PATTERN = re.compile(r'^(\d{2}):(\d{2}) ([AP]M)$')


def normalize_date(raw: str) -> str:
    """
    Convert a ``M/D/YY`` or ``M/D/YYYY`` token to ``YYYY-MM-DD``.

    Two-digit years always land in the 2000s.

    Raises:
        InvalidDateFormat: If the token is not three numeric ``/`` parts
            naming a real calendar day.
    """
    parts = raw.strip().split('/')
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise InvalidDateFormat(raw)

    month, day, year = (int(p) for p in parts)
    if year < 100:
        year += 2000

    try:
        return date(year, month, day).isoformat()
    except ValueError as e:
        raise InvalidDateFormat(raw, details={"reason": str(e)}) from e


def _to_display(hour_24: int, minutes: str, meridiem: str) -> str:
    display = hour_24 - 12 if hour_24 > 12 else (12 if hour_24 == 0 else hour_24)
    return f"{display:02d}:{minutes} {meridiem}"


def extract_clock_time(raw: str) -> str:
    """
    Pull the clock time out of a day+time token.

    ``"Wed 7:00a E"`` becomes ``"07:00 AM"``; ``"Thu 12:15p"`` becomes
    ``"12:15 PM"``. Canonical input is returned unchanged.

    Raises:
        InvalidTimeFormat: If no ``H:MM[ap]`` time is present.
    """
    cleaned = STRAY_LETTER_PATTERN.sub('', raw).strip()
    match = CLOCK_PATTERN.search(cleaned)
    if not match:
        raise InvalidTimeFormat(raw)

    hour = int(match.group(1))
    minutes = match.group(2)
    meridiem = 'PM' if match.group(3).lower() == 'p' else 'AM'
    if hour > 12 or int(minutes) > 59:
        raise InvalidTimeFormat(raw)

    if meridiem == 'PM' and hour != 12:
        hour += 12
    elif meridiem == 'AM' and hour == 12:
        hour = 0

    return _to_display(hour, minutes, meridiem)


def extract_weekday_abbreviation(raw: str) -> Optional[str]:
    """Return the leading three-letter weekday of a day+time token, if any."""
    match = WEEKDAY_PATTERN.match(raw.strip())
    return match.group(1) if match else None


def clock_minutes(canonical: str) -> int:
    """Minutes after midnight for a canonical ``HH:MM AM|PM`` time."""
    match = CANONICAL_TIME_PATTERN.match(canonical)
    if not match:
        raise InvalidTimeFormat(canonical)

    hour = int(match.group(1))
    if match.group(3) == 'PM' and hour != 12:
        hour += 12
    elif match.group(3) == 'AM' and hour == 12:
        hour = 0
    return hour * 60 + int(match.group(2))


def is_overnight(time_in: str, time_out: str) -> bool:
    """True when the clock-out wall time is earlier than the clock-in."""
    return clock_minutes(time_out) < clock_minutes(time_in)
