"""
bizcal Engine

The BusinessCalendar query surface and its fluent builder.
"""
from __future__ import annotations

from .builder import BusinessCalendarBuilder, DatePredicateBuilder, predicate_from
from .calendar import BusinessCalendar

__all__ = [
    "BusinessCalendar",
    "BusinessCalendarBuilder",
    "DatePredicateBuilder",
    "predicate_from",
]
