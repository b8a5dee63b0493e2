"""
bizcal Business Hours

Time expression parsing and per-day business-hour rules.

Usage:
    from bizcal.hours import DaySlotRule, parse_hours

    rule = DaySlotRule.parse("9am-12pm, 1pm-6pm")
    rule.slots_for(date(2024, 4, 1))
"""
from __future__ import annotations

from .parser import parse_hours, parse_range, parse_time, validate_ranges
from .rules import OPEN_24_HOURS, DaySlotRule

__all__ = [
    "parse_time",
    "parse_range",
    "parse_hours",
    "validate_ranges",
    "DaySlotRule",
    "OPEN_24_HOURS",
]
