"""Expected-pay summary for a parsed pay period.

The upload workflow shows total hours and expected pay (hours times the
configured hourly rate) before the period is saved, and compares it with
the pay actually received once the user enters it.
"""

from typing import Iterable, Optional

from pydantic import BaseModel, Field, computed_field

from .config import get_settings
from .exceptions import DuplicatePeriod
from .models import ParsedPayPeriod


class PayPeriodSummary(BaseModel):
    """Hours and pay figures for one pay period."""

    start_date: str = Field(description="Earliest shift date")
    end_date: str = Field(description="Latest shift date")
    shift_count: int = Field(ge=0, description="Number of shifts in the period")
    total_hours: float = Field(ge=0, description="Sum of shift hours")
    hourly_rate: float = Field(ge=0, description="Rate used for expected pay")
    expected_pay: float = Field(ge=0, description="total_hours * hourly_rate")
    actual_pay: Optional[float] = Field(default=None, description="Pay actually received")

    @computed_field
    @property
    def difference(self) -> Optional[float]:
        """Actual minus expected pay; None until actual pay is known."""
        if self.actual_pay is None:
            return None
        return round(self.actual_pay - self.expected_pay, 2)


def summarize_pay_period(
    period: ParsedPayPeriod,
    hourly_rate: Optional[float] = None,
    actual_pay: Optional[float] = None,
) -> PayPeriodSummary:
    """
    Compute total hours and expected pay for a parsed period.

    Args:
        period: The parsed pay period.
        hourly_rate: Rate per hour; defaults to the configured rate.
        actual_pay: Optional amount actually paid, for the difference.

    Returns:
        PayPeriodSummary with money rounded to cents.
    """
    rate = get_settings().pay.default_hourly_rate if hourly_rate is None else hourly_rate
    if rate < 0:
        raise ValueError(f"Hourly rate cannot be negative: {rate}")

    total_hours = period.total_hours
    return PayPeriodSummary(
        start_date=period.start_date,
        end_date=period.end_date,
        shift_count=len(period.shifts),
        total_hours=total_hours,
        hourly_rate=rate,
        expected_pay=round(total_hours * rate, 2),
        actual_pay=actual_pay,
    )


def ensure_unique_period(
    existing: Iterable[tuple[str, str]],
    start_date: str,
    end_date: str,
) -> None:
    """
    Reject a period whose date range is already recorded.

    Raises:
        DuplicatePeriod: If ``(start_date, end_date)`` is in ``existing``.
    """
    if (start_date, end_date) in set(existing):
        raise DuplicatePeriod(start_date, end_date)
