"""Timecard Core - shift extraction from timecard PDF text."""

__version__ = "0.1.0"

from .assembler import ShiftAssembler, parse_timecard
from .exceptions import (
    ExtractionFailed,
    ExtractionTimeout,
    InvalidDateFormat,
    InvalidTimeFormat,
    NoShiftsFound,
    TimecardError,
)
from .extraction import TimecardTextExtractor, parse_timecard_pdf
from .models import ParsedPayPeriod, Shift

__all__ = [
    "ShiftAssembler",
    "parse_timecard",
    "parse_timecard_pdf",
    "TimecardTextExtractor",
    "ParsedPayPeriod",
    "Shift",
    "TimecardError",
    "NoShiftsFound",
    "InvalidDateFormat",
    "InvalidTimeFormat",
    "ExtractionFailed",
    "ExtractionTimeout",
]
