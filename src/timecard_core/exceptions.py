"""Custom exceptions for timecard parsing.

This module provides a hierarchy of exception classes for consistent error
handling across the timecard pipeline. All exceptions inherit from
TimecardError, making it easy to catch all package-specific errors.

Example:
    try:
        period = parse_timecard_pdf(data)
    except ExtractionError as e:
        # The PDF could not be turned into text (slow or broken file)
        logger.warning("extraction_failed", error=str(e))
    except NoShiftsFound as e:
        # Text was extracted but no shift layout was recognized
        return {"success": False, "error": e.message}
"""

from typing import Any, Optional


class TimecardError(Exception):
    """Base exception for all timecard errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context.
        recoverable: Whether the error is potentially recoverable.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize TimecardError.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context about the error.
            recoverable: Whether the caller can reasonably retry or skip.
                Defaults to False.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message

    def __repr__(self) -> str:
        """Return detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"details={self.details!r}, "
            f"recoverable={self.recoverable!r})"
        )


class ParseError(TimecardError):
    """Error raised while turning timecard text into shift records."""


class InvalidDateFormat(ParseError):
    """A date token is not a ``M/D/YY`` or ``M/D/YYYY`` calendar date.

    Raised per line; the shift assembler absorbs it and drops the line.

    Attributes:
        raw: The offending token.
    """

    def __init__(self, raw: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(f"Invalid date format: {raw}", details=details, recoverable=True)
        self.raw = raw
        self.details["raw"] = raw


class InvalidTimeFormat(ParseError):
    """A clock token carries no compact ``H:MM[ap]`` time.

    Attributes:
        raw: The offending token.
    """

    def __init__(self, raw: str, *, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(f"Invalid time format: {raw}", details=details, recoverable=True)
        self.raw = raw
        self.details["raw"] = raw


class NoShiftsFound(ParseError):
    """Every line-matching strategy produced zero usable shifts.

    This is the only parse error surfaced to the caller. Its message is
    suitable for showing to the user as-is.

    Attributes:
        strategies_tried: Names of the strategies that ran, in order.
    """

    DEFAULT_MESSAGE = (
        "Could not find any shifts in PDF. Please check the PDF format "
        "matches the expected timecard format."
    )

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        strategies_tried: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message or self.DEFAULT_MESSAGE, details=details, recoverable=False)
        self.strategies_tried = list(strategies_tried or [])
        if self.strategies_tried:
            self.details["strategies_tried"] = self.strategies_tried


class ExtractionError(TimecardError):
    """Error raised when text cannot be extracted from a timecard PDF.

    Attributes:
        source: The document name or identifier, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        recoverable: bool = False,
    ) -> None:
        """Initialize ExtractionError.

        Args:
            message: Human-readable error description.
            source: The document path or identifier being processed.
            details: Optional dictionary with additional context.
            recoverable: Whether extraction can be retried.
        """
        super().__init__(message, details=details, recoverable=recoverable)
        self.source = source
        if source:
            self.details["source"] = source


class ExtractionTimeout(ExtractionError):
    """Text extraction did not finish within the allowed wall-clock time.

    Recoverable: the same file may extract fine on a less loaded worker.

    Attributes:
        timeout: The limit that was exceeded, in seconds.
    """

    def __init__(
        self,
        timeout: float,
        *,
        source: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            f"PDF parsing timeout after {timeout:g} seconds",
            source=source,
            details=details,
            recoverable=True,
        )
        self.timeout = timeout
        self.details["timeout"] = timeout


class ExtractionFailed(ExtractionError):
    """The PDF is unreadable, corrupt, or contains no extractable text."""


class DuplicatePeriod(TimecardError):
    """A pay period with the same date range already exists.

    Distinct from a validation failure: the data is fine, it is just
    already recorded.

    Attributes:
        start_date: Canonical start date of the rejected period.
        end_date: Canonical end date of the rejected period.
    """

    def __init__(
        self,
        start_date: str,
        end_date: str,
        *,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            "A pay period with this date range already exists.",
            details=details,
            recoverable=False,
        )
        self.start_date = start_date
        self.end_date = end_date
        self.details["start_date"] = start_date
        self.details["end_date"] = end_date


class ConfigurationError(TimecardError):
    """Error raised when configuration is invalid or missing.

    Attributes:
        config_key: The configuration key that is problematic.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details=details, recoverable=False)
        self.config_key = config_key
        if config_key:
            self.details["config_key"] = config_key


__all__ = [
    "TimecardError",
    "ParseError",
    "InvalidDateFormat",
    "InvalidTimeFormat",
    "NoShiftsFound",
    "ExtractionError",
    "ExtractionTimeout",
    "ExtractionFailed",
    "DuplicatePeriod",
    "ConfigurationError",
]
