"""Shift assembly: run the line cascade and build the parsed pay period.

Every candidate line is turned into either a Shift or a ParseIssue. Issues
are logged and dropped, so one malformed line never costs the rest of the
document. Only a document that yields no shift at all is an error.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from pydantic import ValidationError

from .cascade import RawMatch, Strategy, build_strategies
from .config import TimecardSettings
from .exceptions import NoShiftsFound, ParseError
from .models import ParsedPayPeriod, Shift
from .normalizer import extract_clock_time, extract_weekday_abbreviation, normalize_date

logger = structlog.get_logger()


@dataclass(frozen=True)
class ParseIssue:
    """Why a candidate line was dropped."""
    reason: str
    raw: str
    strategy: str


@dataclass(frozen=True)
class CandidateResult:
    """Outcome for one candidate line: exactly one of shift or issue is set."""
    shift: Optional[Shift] = None
    issue: Optional[ParseIssue] = None

    @property
    def ok(self) -> bool:
        return self.shift is not None


class ShiftAssembler:
    """
    Turns timecard text into a ParsedPayPeriod.

    Strategies run in order over the whole text. The first strategy that
    accepts at least one shift wins and later strategies never run.
    The assembler keeps no state between calls, so one instance can be
    shared across threads.
    """

    def __init__(
        self,
        settings: Optional[TimecardSettings] = None,
        strategies: Optional[tuple[Strategy, ...]] = None,
    ):
        """
        Initialize the assembler.

        Args:
            settings: Configuration. When omitted the built-in defaults are
                used and the environment is not read.
            strategies: Override the strategy list (mainly for tests).
        """
        if strategies is None:
            strategies = build_strategies() if settings is None else build_strategies(
                flexible_max_shifts=settings.parser.flexible_max_shifts,
            )
        self._strategies = strategies

    @property
    def strategies(self) -> tuple[Strategy, ...]:
        return self._strategies

    def assemble(self, text: str) -> ParsedPayPeriod:
        """
        Parse timecard text into shifts plus the pay period span.

        Args:
            text: Plain text extracted from a timecard document.

        Returns:
            ParsedPayPeriod with shifts in the order they appear in the text.

        Raises:
            NoShiftsFound: If no strategy produces a single usable shift.
        """
        if not isinstance(text, str):
            raise TypeError(f"Timecard text must be a string, got {type(text).__name__}")

        tried: list[str] = []
        for strategy in self._strategies:
            tried.append(strategy.name)
            shifts = self.run_strategy(strategy, text)
            if shifts:
                period = ParsedPayPeriod.from_shifts(shifts, strategy=strategy.name)
                logger.info(
                    "timecard_parsed",
                    strategy=strategy.name,
                    shifts=len(shifts),
                    start_date=period.start_date,
                    end_date=period.end_date,
                )
                return period
            logger.info("strategy_found_no_shifts", strategy=strategy.name)

        logger.warning("timecard_no_shifts", strategies=tried, chars=len(text))
        raise NoShiftsFound(strategies_tried=tried)

    def run_strategy(self, strategy: Strategy, text: str) -> list[Shift]:
        """Apply one strategy to the whole text and keep the accepted shifts."""
        shifts: list[Shift] = []
        for raw in strategy.matcher(text):
            if strategy.max_shifts is not None and len(shifts) >= strategy.max_shifts:
                logger.warning(
                    "strategy_shift_limit_reached",
                    strategy=strategy.name,
                    limit=strategy.max_shifts,
                )
                break

            result = self.build_candidate(raw, strategy)
            if result.ok:
                shifts.append(result.shift)
            else:
                logger.debug(
                    "shift_candidate_dropped",
                    strategy=result.issue.strategy,
                    reason=result.issue.reason,
                    line=result.issue.raw,
                )
        return shifts

    def build_candidate(self, raw: RawMatch, strategy: Strategy) -> CandidateResult:
        """Normalize one raw match into a Shift, or explain why not."""
        try:
            date = normalize_date(raw.date_raw)
            time_in = extract_clock_time(raw.time_in_raw)
            time_out = extract_clock_time(raw.time_out_raw)
        except ParseError as e:
            return CandidateResult(issue=ParseIssue(e.message, raw.text, strategy.name))

        breakdown = strategy.resolve_hours(raw)
        if breakdown is None:
            return CandidateResult(
                issue=ParseIssue("hours are missing or not positive", raw.text, strategy.name)
            )

        try:
            shift = Shift(
                date=date,
                time_in=time_in,
                time_out=time_out,
                hours=breakdown.total,
                reg_hours=breakdown.regular,
                ot1_hours=breakdown.overtime,
                department=raw.department,
            )
        except ValidationError as e:
            return CandidateResult(issue=ParseIssue(str(e), raw.text, strategy.name))

        if not shift.is_balanced:
            logger.warning(
                "shift_hours_unbalanced",
                date=shift.date,
                hours=shift.hours,
                reg_hours=shift.reg_hours,
                ot1_hours=shift.ot1_hours,
            )

        day_in = extract_weekday_abbreviation(raw.time_in_raw)
        day_out = extract_weekday_abbreviation(raw.time_out_raw)
        if day_in and day_out and day_in.lower() != day_out.lower():
            # Date stays the clock-in day
            logger.debug("shift_crosses_midnight", date=shift.date, day_in=day_in, day_out=day_out)

        return CandidateResult(shift=shift)


def parse_timecard(raw_text: str, settings: Optional[TimecardSettings] = None) -> ParsedPayPeriod:
    """
    Parse the extracted text of a timecard into a ParsedPayPeriod.

    Pass ``settings=get_settings()`` to apply ``TIMECARD_PARSER_*``
    environment overrides; without settings the built-in defaults apply.

    Raises:
        NoShiftsFound: If the text holds no recognizable shift lines.
    """
    return ShiftAssembler(settings=settings).assemble(raw_text)
