"""
bizcal Business Hour Models

- HourRange: a (start, end) pair of times of day, as parsed from a slot string
- BusinessHourSlot: an HourRange anchored to a concrete date

An HourRange whose end is 00:00 means "until the end of the day"; once
anchored, that end lands on 00:00 of the following date.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

MIDNIGHT = time(0, 0)


def format_time(t: time) -> str:
    """HH:MM, or HH:MM:SS when the seconds are not zero."""
    if t.second:
        return t.strftime("%H:%M:%S")
    return t.strftime("%H:%M")


# =============================================================================
# Hour Range
# =============================================================================

@dataclass(frozen=True, order=True)
class HourRange:
    """A recurring time-of-day interval [start, end)."""
    start: time
    end: time

    @property
    def ends_at_midnight(self) -> bool:
        return self.end == MIDNIGHT

    def overlaps(self, other: "HourRange") -> bool:
        """True if the two ranges share any instant."""
        first, second = sorted((self, other))
        return first.ends_at_midnight or second.start < first.end

    def anchor(self, base: date) -> "BusinessHourSlot":
        return BusinessHourSlot.anchored(base, self.start, self.end)

    def __str__(self) -> str:
        return f"{format_time(self.start)}-{format_time(self.end)}"


# =============================================================================
# Business Hour Slot
# =============================================================================

@dataclass(frozen=True, order=True)
class BusinessHourSlot:
    """
    A date-anchored business-hour interval.

    The interval is half-open: `start` is inside, `end` is not.

    Attributes:
        start: First instant of the slot
        end: First instant after the slot
    """
    start: datetime
    end: datetime

    @classmethod
    def anchored(cls, base: date, start: time, end: time) -> "BusinessHourSlot":
        """
        Combine `base` with two times; an end of 00:00 rolls to base + 1 day.

        On date.max that roll has nowhere to go, so the slot ends at datetime.max.
        """
        if end != MIDNIGHT:
            return cls(start=datetime.combine(base, start), end=datetime.combine(base, end))
        if base == date.max:
            return cls(start=datetime.combine(base, start), end=datetime.max)
        return cls(
            start=datetime.combine(base, start),
            end=datetime.combine(base + timedelta(days=1), end),
        )

    def contains(self, when: datetime) -> bool:
        """Check if `when` falls inside the slot."""
        return self.start <= when < self.end

    def __str__(self) -> str:
        return f"{format_time(self.start.time())}-{format_time(self.end.time())}"
