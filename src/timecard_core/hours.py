"""Resolution of the hours columns of a timecard line.

Timecard exports print up to three hour columns (total, regular, overtime)
and sometimes render two of them with no separator, so ``8.00`` regular and
``5.50`` overtime arrive as the single token ``8.005.50``. This module maps
the numeric tokens captured from one line to a ``HoursBreakdown``.

Resolution is driven by ``HOURS_RULES``, an ordered table of
``(name, applies, resolve)`` entries evaluated top to bottom. The first rule
whose precondition holds decides the outcome; new layouts add a row rather
than another branch.
"""

import math
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

# Two tokens summing past a day cannot be regular + overtime.
PAIR_SUM_LIMIT = 24.0

TWO_DECIMAL_PATTERN = re.compile(r'^\d+\.\d{2}$')
CONCATENATED_PATTERN = re.compile(r'^(\d+\.\d{2})(\d+\.\d{2})$')
# Overtime printed with extra decimal places ("8.005.500")
WIDE_CONCATENATED_PATTERN = re.compile(r'^(\d+\.\d{2})(\d+\.\d{2,})$')


@dataclass(frozen=True)
class HoursBreakdown:
    """Total, regular and first-tier overtime hours for one shift."""
    total: float
    regular: float
    overtime: float = 0.0

    @classmethod
    def of(cls, total: float, regular: float, overtime: float = 0.0) -> "HoursBreakdown":
        return cls(round(total, 2), round(regular, 2), round(overtime, 2))


@dataclass(frozen=True)
class HoursRule:
    """One row of the resolution table."""
    name: str
    applies: Callable[[Sequence[str]], bool]
    resolve: Callable[[Sequence[str]], Optional[HoursBreakdown]]


def _to_float(token: Optional[str]) -> Optional[float]:
    """Parse a numeric token, returning None for anything malformed."""
    if token is None:
        return None
    token = token.strip()
    if not token:
        return None
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def split_concatenated(token: str) -> Optional[tuple[str, str]]:
    """
    Split two two-decimal numbers printed without a separator.

    ``"8.005.50"`` gives ``("8.00", "5.50")`` and ``"8.005.500"`` gives
    ``("8.00", "5.500")``. Returns None when the token does not break
    cleanly into a two-decimal run followed by a second decimal run.
    """
    match = CONCATENATED_PATTERN.match(token)
    if match:
        return match.group(1), match.group(2)

    match = WIDE_CONCATENATED_PATTERN.match(token)
    if match:
        return match.group(1), match.group(2)

    parts = token.split('.')
    if len(parts) < 3:
        return None
    first = f"{parts[0]}.{parts[1]}"
    second = '.'.join(parts[2:])
    if TWO_DECIMAL_PATTERN.match(first) and TWO_DECIMAL_PATTERN.match(second):
        return first, second
    return None


def _resolve_explicit(tokens: Sequence[str]) -> Optional[HoursBreakdown]:
    total, regular, overtime = (_to_float(t) for t in tokens)
    if total is None or regular is None or overtime is None:
        return None
    return HoursBreakdown.of(total, regular, overtime)


def _resolve_pair(tokens: Sequence[str]) -> Optional[HoursBreakdown]:
    first, second = (_to_float(t) for t in tokens)
    if first is None or second is None:
        return None
    if first > 0 and second > 0 and first + second <= PAIR_SUM_LIMIT:
        return HoursBreakdown.of(first + second, first, second)
    # Read as total followed by regular
    return HoursBreakdown.of(first, second, 0.0)


def _is_concatenated(tokens: Sequence[str]) -> bool:
    return (
        len(tokens) == 1
        and tokens[0].count('.') >= 2
        and split_concatenated(tokens[0]) is not None
    )


def _resolve_concatenated(tokens: Sequence[str]) -> Optional[HoursBreakdown]:
    regular_str, overtime_str = split_concatenated(tokens[0])
    regular, overtime = float(regular_str), float(overtime_str)
    return HoursBreakdown.of(regular + overtime, regular, overtime)


def _resolve_single(tokens: Sequence[str]) -> Optional[HoursBreakdown]:
    value = _to_float(tokens[0])
    if value is None:
        return None
    return HoursBreakdown.of(value, value, 0.0)


HOURS_RULES: tuple[HoursRule, ...] = (
    HoursRule('explicit_columns', lambda t: len(t) == 3, _resolve_explicit),
    HoursRule('token_pair', lambda t: len(t) == 2, _resolve_pair),
    HoursRule('concatenated', _is_concatenated, _resolve_concatenated),
    HoursRule(
        'single_value',
        lambda t: len(t) == 1 and t[0].count('.') <= 1,
        _resolve_single,
    ),
)


def _accept(breakdown: Optional[HoursBreakdown]) -> Optional[HoursBreakdown]:
    if breakdown is None:
        return None
    if not math.isfinite(breakdown.total) or breakdown.total <= 0:
        return None
    return breakdown


def resolve_hours(tokens: Sequence[str]) -> Optional[HoursBreakdown]:
    """
    Resolve the hour tokens of one line into a breakdown.

    Args:
        tokens: The separate numeric strings captured after the clock-out
            time, in column order. Empty strings are ignored.

    Returns:
        The breakdown from the first applicable rule, or None when no rule
        applies or the total is not a positive number.
    """
    tokens = tuple(t.strip() for t in tokens if t and t.strip())
    for rule in HOURS_RULES:
        if rule.applies(tokens):
            return _accept(rule.resolve(tokens))
    return None


def resolve_columns(
    total: Optional[str],
    regular: Optional[str],
    overtime: Optional[str],
) -> Optional[HoursBreakdown]:
    """
    Resolve hours for layouts whose columns are known by position.

    A missing total is filled from regular + overtime; a missing regular
    value is filled from the total.
    """
    total_value = _to_float(total)
    regular_value = _to_float(regular)
    overtime_value = _to_float(overtime) or 0.0

    if not total_value:
        total_value = (regular_value or 0.0) + overtime_value
    if not regular_value:
        regular_value = total_value

    return _accept(HoursBreakdown.of(total_value, regular_value, overtime_value))
