"""Line-matching strategies for timecard text.

A timecard line reads roughly::

    01/03/24  Wed 7:00a E  Sales  Wed 8:30p8.005.50

that is a date, a day+time clock-in (sometimes trailed by a stray column
letter), a department word, a day+time clock-out, then the hour columns.
Exports disagree on the hour columns, so three patterns are tried in order
of strictness. Each is a pure function over the whole document text; the
shift assembler runs them in order and stops at the first one that yields
a usable shift.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from .hours import HoursBreakdown, resolve_columns, resolve_hours

DATE = r'(\d{1,2}/\d{1,2}/\d{2,4})'
DAY_TIME = r'([A-Za-z]{3}\s*\d{1,2}:\d{2}[ap])'
DAY_TIME_STRAY = r'([A-Za-z]{3}\s*\d{1,2}:\d{2}[ap]\s*[A-Z]?\s*)'
DEPARTMENT = r'([A-Za-z]+)'
# An hour column never runs into a following date or number
HOURS_TOKEN = r'([\d.]+)(?![\d./])'
# Hour columns may wrap onto the line after the clock-out
TRAILING_HOURS = r'(?:\s+' + HOURS_TOKEN + r')?'

STRICT_PATTERN = re.compile(
    DATE + r'\s+' + DAY_TIME_STRAY + r'\s+' + DEPARTMENT + r'\s+' + DAY_TIME + HOURS_TOKEN,
    re.IGNORECASE,
)

FALLBACK_PATTERN = re.compile(
    DATE + r'\s+' + DAY_TIME + r'\s+' + DEPARTMENT + r'\s+' + DAY_TIME
    + TRAILING_HOURS * 3,
    re.IGNORECASE,
)

FLEXIBLE_PATTERN = re.compile(
    DATE + r'\s+(?:([\d.]+)\s+)?' + DAY_TIME_STRAY + r'\s+' + DEPARTMENT + r'\s+' + DAY_TIME
    + TRAILING_HOURS * 2,
    re.IGNORECASE,
)

DEFAULT_FLEXIBLE_MAX_SHIFTS = 20


@dataclass(frozen=True)
class RawMatch:
    """The raw fields of one recognized shift line, before normalization."""
    date_raw: str
    time_in_raw: str
    department: str
    time_out_raw: str
    hour_tokens: tuple[str, ...] = ()
    leading_total: Optional[str] = None
    span: tuple[int, int] = (0, 0)

    @property
    def text(self) -> str:
        """A compact rendering of the match for diagnostics."""
        parts = [self.date_raw, self.leading_total or '', self.time_in_raw,
                 self.department, self.time_out_raw, *self.hour_tokens]
        return ' '.join(p for p in parts if p)


def _group(match: re.Match, index: int) -> str:
    return (match.group(index) or '').strip()


def _hour_tokens(match: re.Match, first: int, last: int) -> tuple[str, ...]:
    return tuple(
        match.group(i).strip()
        for i in range(first, last + 1)
        if match.group(i)
    )


def match_strict(text: str) -> list[RawMatch]:
    """Lines whose hours string is glued to the clock-out time."""
    return [
        RawMatch(
            date_raw=_group(m, 1),
            time_in_raw=_group(m, 2),
            department=_group(m, 3),
            time_out_raw=_group(m, 4),
            hour_tokens=_hour_tokens(m, 5, 5),
            span=m.span(),
        )
        for m in STRICT_PATTERN.finditer(text)
    ]


def match_fallback(text: str) -> list[RawMatch]:
    """Lines with up to three separate hour columns after the clock-out."""
    return [
        RawMatch(
            date_raw=_group(m, 1),
            time_in_raw=_group(m, 2),
            department=_group(m, 3),
            time_out_raw=_group(m, 4),
            hour_tokens=_hour_tokens(m, 5, 7),
            span=m.span(),
        )
        for m in FALLBACK_PATTERN.finditer(text)
    ]


def match_flexible(text: str) -> list[RawMatch]:
    """Lines with an optional total column before the clock-in."""
    return [
        RawMatch(
            date_raw=_group(m, 1),
            leading_total=_group(m, 2) or None,
            time_in_raw=_group(m, 3),
            department=_group(m, 4),
            time_out_raw=_group(m, 5),
            hour_tokens=_hour_tokens(m, 6, 7),
            span=m.span(),
        )
        for m in FLEXIBLE_PATTERN.finditer(text)
    ]


def positional_hours(raw: RawMatch) -> Optional[HoursBreakdown]:
    """Hours from the separate tokens after the clock-out."""
    return resolve_hours(raw.hour_tokens)


def column_hours(raw: RawMatch) -> Optional[HoursBreakdown]:
    """Hours from (leading total, regular, overtime) columns."""
    tokens = raw.hour_tokens + (None, None)
    return resolve_columns(raw.leading_total, tokens[0], tokens[1])


@dataclass(frozen=True)
class Strategy:
    """A named line pattern plus the way its hour columns are read.

    Attributes:
        name: Identifier used in logs and on the parsed result.
        matcher: Pure function returning every match in the document.
        resolve_hours: Turns one match into an hours breakdown, or None.
        max_shifts: Stop accepting shifts from this strategy past this count.
    """
    name: str
    matcher: Callable[[str], list[RawMatch]]
    resolve_hours: Callable[[RawMatch], Optional[HoursBreakdown]] = field(repr=False)
    max_shifts: Optional[int] = None


def build_strategies(flexible_max_shifts: int = DEFAULT_FLEXIBLE_MAX_SHIFTS) -> tuple[Strategy, ...]:
    """Return the strategies in the order they are tried."""
    return (
        Strategy('strict', match_strict, positional_hours),
        Strategy('fallback', match_fallback, positional_hours),
        Strategy('flexible', match_flexible, column_hours, max_shifts=flexible_max_shifts),
    )


STRATEGIES = build_strategies()
