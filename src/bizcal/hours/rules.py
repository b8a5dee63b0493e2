"""
bizcal Business Hour Rules

A DaySlotRule pairs a date predicate with the hour ranges that apply on
matching dates. The first rule whose predicate matches a date supplies
that date's slots; rules are never merged.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..exceptions import ConfigurationError
from ..models import BusinessHourSlot, HourRange
from ..predicates import DatePredicate, every_day
from .parser import parse_hours, validate_ranges


@dataclass(frozen=True)
class DaySlotRule:
    """
    Business hours for the dates selected by `predicate`.

    Attributes:
        predicate: Selects the dates this rule applies to
        ranges: Hour ranges, sorted by start and non-overlapping
        expression: The slot string the ranges were parsed from
    """
    predicate: DatePredicate
    ranges: tuple[HourRange, ...]
    expression: str = ""

    def __post_init__(self) -> None:
        if not self.ranges:
            raise ConfigurationError(
                message="business hours need at least one range",
                details={"expression": self.expression},
            )
        ordered = sorted(self.ranges)
        validate_ranges(ordered, self.expression)
        object.__setattr__(self, "ranges", tuple(ordered))

    @classmethod
    def parse(cls, expression: str, predicate: DatePredicate = every_day) -> "DaySlotRule":
        """Build a rule from a slot string such as "9-12,13-18"."""
        return cls(predicate=predicate, ranges=parse_hours(expression), expression=expression)

    def matches(self, d: date) -> bool:
        return self.predicate(d)

    def slots_for(self, d: date) -> Optional[list[BusinessHourSlot]]:
        """Slots anchored to `d`, or None if the rule does not apply to `d`."""
        if not self.predicate(d):
            return None
        return [r.anchor(d) for r in self.ranges]


OPEN_24_HOURS = DaySlotRule.parse("0-24")
