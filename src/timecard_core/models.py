"""Shift and pay period models produced by the timecard parser.

Both models are immutable value records built fresh for every parse call.
Dates are canonical ``YYYY-MM-DD`` strings, so lexicographic order is
chronological order; times are canonical ``HH:MM AM|PM`` strings.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .normalizer import is_overnight

# Allowed drift between hours and reg_hours + ot1_hours
HOURS_TOLERANCE = 0.01

DATE_PATTERN = r'^\d{4}-\d{2}-\d{2}$'
TIME_PATTERN = r'^\d{2}:\d{2} [AP]M$'


class Shift(BaseModel):
    """One worked interval recovered from a timecard line."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "date": "2024-01-03",
                    "time_in": "07:00 AM",
                    "time_out": "08:30 PM",
                    "hours": 13.5,
                    "reg_hours": 8.0,
                    "ot1_hours": 5.5,
                    "department": "Sales",
                }
            ]
        },
    )

    date: str = Field(pattern=DATE_PATTERN, description="Shift date, YYYY-MM-DD")
    time_in: str = Field(pattern=TIME_PATTERN, description="Clock-in time, HH:MM AM|PM")
    time_out: str = Field(pattern=TIME_PATTERN, description="Clock-out time, HH:MM AM|PM")
    hours: float = Field(gt=0, description="Total worked hours")
    reg_hours: float = Field(
        default=None,
        ge=0,
        description="Regular hours; defaults to the total when omitted",
    )
    ot1_hours: float = Field(default=0.0, ge=0, description="First-tier overtime hours")
    department: str = Field(default="", description="Department label, may be empty")

    @field_validator("hours", "reg_hours", "ot1_hours")
    @classmethod
    def round_hours(cls, v: float) -> float:
        """Keep two-decimal precision."""
        return round(v, 2)

    @model_validator(mode="before")
    @classmethod
    def default_reg_hours(cls, data: Any) -> Any:
        """Regular hours default to the total when not given."""
        if isinstance(data, dict) and data.get("reg_hours") is None and "hours" in data:
            data = {**data, "reg_hours": data["hours"]}
        return data

    @property
    def is_balanced(self) -> bool:
        """Whether hours equals reg_hours + ot1_hours within tolerance."""
        return abs(self.hours - (self.reg_hours + self.ot1_hours)) <= HOURS_TOLERANCE

    @property
    def is_overnight(self) -> bool:
        """Whether the shift clocks out on the following calendar day."""
        return is_overnight(self.time_in, self.time_out)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by request handlers."""
        return {
            "date": self.date,
            "timeIn": self.time_in,
            "timeOut": self.time_out,
            "hours": self.hours,
            "regHours": self.reg_hours,
            "ot1Hours": self.ot1_hours,
            "department": self.department,
        }


class ParsedPayPeriod(BaseModel):
    """The parser's output: every shift found plus the span they cover.

    ``shifts`` keeps the order in which lines were found in the text;
    consumers that need chronological order sort it themselves.
    """

    model_config = ConfigDict(frozen=True)

    start_date: str = Field(pattern=DATE_PATTERN, description="Earliest shift date")
    end_date: str = Field(pattern=DATE_PATTERN, description="Latest shift date")
    shifts: tuple[Shift, ...] = Field(description="Shifts in discovery order")
    strategy: str = Field(default="", description="Line-matching strategy that produced the shifts")

    @field_validator("shifts")
    @classmethod
    def validate_shifts(cls, v: tuple[Shift, ...]) -> tuple[Shift, ...]:
        """A pay period without shifts is never a valid result."""
        if not v:
            raise ValueError("A parsed pay period must contain at least one shift")
        return v

    @model_validator(mode="after")
    def validate_span(self) -> "ParsedPayPeriod":
        """The span must be exactly the min/max of the shift dates."""
        dates = [shift.date for shift in self.shifts]
        if self.start_date != min(dates) or self.end_date != max(dates):
            raise ValueError("start_date/end_date must match the earliest and latest shift dates")
        return self

    @classmethod
    def from_shifts(cls, shifts: list[Shift], strategy: str = "") -> "ParsedPayPeriod":
        """Build a period, deriving the span from the shift dates."""
        if not shifts:
            raise ValueError("A parsed pay period must contain at least one shift")
        dates = [shift.date for shift in shifts]
        return cls(
            start_date=min(dates),
            end_date=max(dates),
            shifts=tuple(shifts),
            strategy=strategy,
        )

    @property
    def total_hours(self) -> float:
        """Sum of shift hours."""
        return round(sum(shift.hours for shift in self.shifts), 2)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by request handlers."""
        return {
            "startDate": self.start_date,
            "endDate": self.end_date,
            "shifts": [shift.to_dict() for shift in self.shifts],
        }
