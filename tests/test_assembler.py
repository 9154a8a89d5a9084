"""Tests for shift assembly and the parse_timecard entry point."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from timecard_core import NoShiftsFound, ParsedPayPeriod, ShiftAssembler, parse_timecard
from timecard_core.cascade import STRATEGIES
from timecard_core.config import ParserConfig, TimecardSettings


def _good_line(day: int, hours: str = "8.00") -> str:
    return f"01/{day:02d}/24 Mon 9:00a Sales Mon 5:00p{hours}"


class TestParseTimecard:
    """Tests for parse_timecard on each layout."""

    def test_strict_layout(self, strict_text, settings):
        period = parse_timecard(strict_text, settings=settings)

        assert isinstance(period, ParsedPayPeriod)
        assert period.strategy == "strict"
        assert len(period.shifts) == 3

        first = period.shifts[0]
        assert first.date == "2024-01-03"
        assert first.time_in == "07:00 AM"
        assert first.time_out == "08:30 PM"
        assert first.hours == pytest.approx(13.5)
        assert first.reg_hours == pytest.approx(8.0)
        assert first.ot1_hours == pytest.approx(5.5)
        assert first.department == "Sales"

    def test_date_span_and_discovery_order(self, strict_text, settings):
        """Span is min/max of dates while shifts keep their text order."""
        period = parse_timecard(strict_text, settings=settings)

        assert period.start_date == "2024-01-01"
        assert period.end_date == "2024-01-07"
        assert [s.date for s in period.shifts] == ["2024-01-03", "2024-01-01", "2024-01-07"]

    def test_fallback_layout(self, fallback_text, settings):
        period = parse_timecard(fallback_text, settings=settings)

        assert period.strategy == "fallback"
        assert [(s.hours, s.reg_hours, s.ot1_hours) for s in period.shifts] == [
            (8.0, 6.0, 2.0),
            (20.0, 10.0, 0.0),
            (13.5, 8.0, 5.5),
            (4.0, 4.0, 0.0),
        ]
        assert period.start_date == "2024-01-02"
        assert period.end_date == "2024-01-05"

    def test_cascade_fallthrough_matches_fallback_alone(self, fallback_text, settings):
        """When strict finds nothing the result is exactly the fallback's."""
        assembler = ShiftAssembler(settings=settings)
        fallback = next(s for s in assembler.strategies if s.name == "fallback")

        assert assembler.run_strategy(assembler.strategies[0], fallback_text) == []
        expected = assembler.run_strategy(fallback, fallback_text)
        assert list(assembler.assemble(fallback_text).shifts) == expected

    def test_flexible_layout(self, flexible_text, settings):
        period = parse_timecard(flexible_text, settings=settings)

        assert period.strategy == "flexible"
        assert [(s.hours, s.reg_hours, s.ot1_hours) for s in period.shifts] == [
            (8.0, 8.0, 0.0),
            (10.0, 8.0, 2.0),
        ]
        assert period.shifts[0].time_in == "07:00 AM"

    def test_stops_at_first_productive_strategy(self, strict_text, fallback_text, settings):
        """Fallback lines in a document the strict strategy handles are ignored."""
        period = parse_timecard(strict_text + fallback_text, settings=settings)

        assert period.strategy == "strict"
        assert len(period.shifts) == 3


class TestSkipAndContinue:
    """Tests for per-line failure absorption."""

    def test_bad_time_is_dropped(self, settings):
        lines = [_good_line(day) for day in range(1, 6)]
        lines.insert(2, "01/09/24 Mon 9:75a Sales Mon 5:00p8.00")

        period = parse_timecard("\n".join(lines), settings=settings)

        assert len(period.shifts) == 5
        assert "2024-01-09" not in [s.date for s in period.shifts]

    def test_bad_date_is_dropped(self, settings):
        text = "\n".join([_good_line(1), "02/30/24 Mon 9:00a Sales Mon 5:00p8.00"])

        period = parse_timecard(text, settings=settings)

        assert [s.date for s in period.shifts] == ["2024-01-01"]

    def test_zero_hours_is_dropped(self, settings):
        text = "\n".join([_good_line(1, "0.00"), _good_line(2)])

        period = parse_timecard(text, settings=settings)

        assert [s.date for s in period.shifts] == ["2024-01-02"]

    def test_fallback_line_without_hours_is_dropped(self, settings):
        text = (
            "01/02/24 Tue 7:00a Sales Tue 3:00p\n"
            "01/03/24 Wed 7:00a Sales Wed 3:00p 8.00\n"
        )
        period = parse_timecard(text, settings=settings)

        assert [s.date for s in period.shifts] == ["2024-01-03"]


class TestWrappedHours:
    """Tests for hour columns printed on the line after the clock-out."""

    def test_wrapped_hours_are_parsed(self, settings):
        text = (
            "01/02/24 Tue 7:00a Sales Tue 3:00p\n6.00 2.00\n"
            "01/03/24 Wed 7:00a Sales Wed 3:00p\n8.00\n"
        )

        period = parse_timecard(text, settings=settings)

        assert period.strategy == "fallback"
        assert [(s.date, s.hours, s.reg_hours, s.ot1_hours) for s in period.shifts] == [
            ("2024-01-02", 8.0, 6.0, 2.0),
            ("2024-01-03", 8.0, 8.0, 0.0),
        ]

    def test_wide_overtime_in_strict_layout(self, settings):
        period = parse_timecard("01/03/24 Wed 7:00a Sales Wed 8:30p8.005.500", settings=settings)

        assert [(s.hours, s.reg_hours, s.ot1_hours) for s in period.shifts] == [(13.5, 8.0, 5.5)]


class TestNoShiftsFound:
    """Tests for the terminal failure."""

    def test_text_without_dates(self, settings):
        with pytest.raises(NoShiftsFound) as exc_info:
            parse_timecard("Employee Summary\nNo punches recorded this period.\n", settings=settings)

        error = exc_info.value
        assert error.strategies_tried == ["strict", "fallback", "flexible"]
        assert error.recoverable is False
        assert str(error).startswith("Could not find any shifts in PDF")

    def test_empty_text(self, settings):
        with pytest.raises(NoShiftsFound):
            parse_timecard("", settings=settings)

    def test_only_malformed_lines(self, settings):
        with pytest.raises(NoShiftsFound):
            parse_timecard("01/01/24 Mon 9:75a Sales Mon 5:00p8.00", settings=settings)

    def test_non_string_input(self, settings):
        with pytest.raises(TypeError):
            parse_timecard(b"01/01/24", settings=settings)


class TestFlexibleLimit:
    """Tests for the flexible strategy's shift cap."""

    @staticmethod
    def _flexible_document(count: int) -> str:
        return "\n".join(
            f"01/{day:02d}/24 8.00 Mon 7:00a E Sales Mon 3:00p" for day in range(1, count + 1)
        )

    def test_default_cap(self, settings):
        period = parse_timecard(self._flexible_document(25), settings=settings)

        assert period.strategy == "flexible"
        assert len(period.shifts) == 20
        assert period.end_date == "2024-01-20"

    def test_configured_cap(self):
        settings = TimecardSettings(parser=ParserConfig(flexible_max_shifts=3))

        period = parse_timecard(self._flexible_document(10), settings=settings)

        assert len(period.shifts) == 3


class TestShiftAssembler:
    """Tests for the assembler object."""

    def test_default_strategies(self, settings):
        assembler = ShiftAssembler(settings=settings)
        assert [s.name for s in assembler.strategies] == [s.name for s in STRATEGIES]

    def test_build_candidate_reports_issue(self, settings):
        assembler = ShiftAssembler(settings=settings)
        strict = assembler.strategies[0]
        raw = strict.matcher("01/01/24 Mon 9:75a Sales Mon 5:00p8.00")[0]

        result = assembler.build_candidate(raw, strict)

        assert result.ok is False
        assert result.shift is None
        assert result.issue.strategy == "strict"
        assert "Invalid time format" in result.issue.reason

    def test_without_settings_ignores_environment(self, monkeypatch, strict_text):
        """A broken environment variable does not affect a parse without settings."""
        monkeypatch.setenv("TIMECARD_PARSER_FLEXIBLE_MAX_SHIFTS", "not-a-number")

        assembler = ShiftAssembler()

        assert assembler.strategies[2].max_shifts == 20
        assert len(parse_timecard(strict_text).shifts) == 3

    def test_settings_control_flexible_cap(self):
        settings = TimecardSettings(parser=ParserConfig(flexible_max_shifts=4))
        assert ShiftAssembler(settings=settings).strategies[2].max_shifts == 4

    def test_concurrent_calls_are_independent(self, strict_text, fallback_text, settings):
        assembler = ShiftAssembler(settings=settings)
        texts = [strict_text, fallback_text] * 8

        with ThreadPoolExecutor(max_workers=4) as executor:
            results = list(executor.map(assembler.assemble, texts))

        assert [r.strategy for r in results] == ["strict", "fallback"] * 8
        assert results[0] == results[2]
