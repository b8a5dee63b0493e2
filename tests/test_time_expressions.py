"""
Tests for the business-hour expression parser.

Tests cover:
- Single time tokens: 24-hour, am/pm, noon/midnight, Japanese
- Equivalent range spellings parse to identical ranges
- Range separators and sorting
- Construction errors: malformed tokens, out of range, order, overlap
"""
import pytest
from datetime import time

from bizcal.exceptions import (
    ConfigurationError,
    SlotOrderError,
    SlotOverlapError,
    TimeExpressionError,
)
from bizcal.hours import parse_hours, parse_range, parse_time
from bizcal.models import MIDNIGHT, HourRange, Period


# =============================================================================
# Period Markers
# =============================================================================

class TestPeriod:
    """Tests for Period.classify."""

    @pytest.mark.parametrize("marker,expected", [
        ("", Period.NONE),
        ("am", Period.MORNING),
        ("AM", Period.MORNING),
        ("a", Period.MORNING),
        ("午前", Period.MORNING),
        ("pm", Period.AFTERNOON),
        ("p", Period.AFTERNOON),
        ("午後", Period.AFTERNOON),
        ("noon", Period.NOON),
        ("正午", Period.NOON),
        ("midnight", Period.MIDNIGHT),
    ])
    def test_known_markers(self, marker, expected) -> None:
        assert Period.classify(marker) == expected

    def test_unknown_marker_raises(self) -> None:
        with pytest.raises(ValueError):
            Period.classify("xm")


# =============================================================================
# Time Tokens
# =============================================================================

class TestParseTime:
    """Tests for parse_time."""

    @pytest.mark.parametrize("token,expected", [
        ("9", time(9, 0)),
        ("13:30", time(13, 30)),
        ("13:30:15", time(13, 30, 15)),
        ("9am", time(9, 0)),
        ("9a.m.", time(9, 0)),
        ("7:31pm", time(19, 31)),
        ("7:31 PM", time(19, 31)),
        ("12am", time(0, 0)),
        ("12pm", time(12, 0)),
        ("12 a.m.", time(0, 0)),
        ("noon", time(12, 0)),
        ("正午", time(12, 0)),
        ("午前9時", time(9, 0)),
        ("午後1時半", time(13, 30)),
        ("9時半", time(9, 30)),
        ("午後6時", time(18, 0)),
    ])
    def test_tokens(self, token, expected) -> None:
        assert parse_time(token) == expected

    def test_hour_24_is_midnight(self) -> None:
        assert parse_time("24") == MIDNIGHT
        assert parse_time("24:00") == MIDNIGHT
        assert parse_time("24:00:00") == MIDNIGHT

    def test_midnight_word(self) -> None:
        assert parse_time("midnight") == MIDNIGHT

    @pytest.mark.parametrize("token", [
        "",
        "25",
        "24:30",
        "24:00:01",
        "9:60",
        "9:30:60",
        "1:2:3:4",
        "9::30",
        "am",
        "9xm",
        "nine",
    ])
    def test_invalid_tokens(self, token) -> None:
        with pytest.raises(TimeExpressionError):
            parse_time(token)


# =============================================================================
# Ranges
# =============================================================================

class TestParseRange:
    """Tests for parse_range and parse_hours."""

    @pytest.mark.parametrize("expression", [
        "9-18",
        "9:00-18:00",
        "9am-6pm",
        "9 AM - 6 PM",
        "9a.m.-6p.m.",
        "9 to 18",
        "9to6pm",
        "9〜18",
        "9～18",
        "9~18",
        "9から18",
        "9から18まで",
        "午前9時〜午後6時",
        "午前9時から午後6時まで",
    ])
    def test_equivalent_expressions(self, expression) -> None:
        assert parse_hours(expression) == (HourRange(time(9, 0), time(18, 0)),)

    def test_end_of_day(self) -> None:
        assert parse_range("13-24") == HourRange(time(13, 0), MIDNIGHT)
        assert parse_range("13-midnight") == HourRange(time(13, 0), MIDNIGHT)
        assert parse_range("0-24:00") == HourRange(time(0, 0), MIDNIGHT)

    def test_almost_whole_day(self) -> None:
        assert parse_range("0-23:59") == HourRange(time(0, 0), time(23, 59))

    def test_noon_ranges(self) -> None:
        assert parse_range("9-noon") == HourRange(time(9, 0), time(12, 0))
        assert parse_range("9-正午") == HourRange(time(9, 0), time(12, 0))

    @pytest.mark.parametrize("separator", [",", "，", "、", "&", ", "])
    def test_range_separators(self, separator) -> None:
        ranges = parse_hours(f"9-12{separator}13-18")
        assert ranges == (
            HourRange(time(9, 0), time(12, 0)),
            HourRange(time(13, 0), time(18, 0)),
        )

    def test_ranges_are_sorted(self) -> None:
        ranges = parse_hours("19:31-24, 0-8, 13:30-17, 9-12")
        assert [str(r) for r in ranges] == ["00:00-08:00", "09:00-12:00", "13:30-17:00", "19:31-00:00"]

    def test_touching_ranges_are_allowed(self) -> None:
        assert len(parse_hours("9-12,12-13")) == 2


# =============================================================================
# Construction Errors
# =============================================================================

class TestRangeErrors:
    """Malformed business hours are configuration errors."""

    @pytest.mark.parametrize("expression", ["10-10", "10-9", "18-9am"])
    def test_start_not_before_end(self, expression) -> None:
        with pytest.raises(SlotOrderError):
            parse_hours(expression)

    @pytest.mark.parametrize("expression", ["-1-9", "10-25", "9", "9-12-15", "", "  ", "9-"])
    def test_malformed(self, expression) -> None:
        with pytest.raises(TimeExpressionError):
            parse_hours(expression)

    @pytest.mark.parametrize("expression", ["9-12,11-13", "13-24,9-14", "9-18,10-11", "20-24,23-23:30"])
    def test_overlap(self, expression) -> None:
        with pytest.raises(SlotOverlapError):
            parse_hours(expression)

    def test_all_are_configuration_errors(self) -> None:
        for expression in ("10-10", "10-25", "9-12,11-13"):
            with pytest.raises(ConfigurationError):
                parse_hours(expression)

    def test_error_code(self) -> None:
        with pytest.raises(SlotOrderError) as exc_info:
            parse_hours("10-9")
        assert exc_info.value.code == "BC_SLOT_ORDER_ERROR"
        assert exc_info.value.details["expression"] == "10-9"
