"""
bizcal Enumerations

Enumeration types shared by the time parser, the rule predicates and
the calendar pack schema.
"""
from __future__ import annotations

from enum import Enum


# =============================================================================
# Time Expression Periods
# =============================================================================

class Period(str, Enum):
    """Period marker found next to the digits of a time token."""
    MORNING = "morning"      # am, a, 午前
    AFTERNOON = "afternoon"  # pm, p, 午後
    NOON = "noon"            # noon, 正午
    MIDNIGHT = "midnight"
    NONE = "none"

    @classmethod
    def classify(cls, marker: str) -> "Period":
        """
        Classify the non-numeric remainder of a time token.

        Raises:
            ValueError: If the marker is not a known period word
        """
        marker = marker.lower()
        if marker == "":
            return cls.NONE
        if marker in ("am", "a", "午前"):
            return cls.MORNING
        if marker in ("pm", "p", "午後"):
            return cls.AFTERNOON
        if marker in ("noon", "正午"):
            return cls.NOON
        if marker == "midnight":
            return cls.MIDNIGHT
        raise ValueError(f"unknown period marker: {marker!r}")


# =============================================================================
# Days of Week
# =============================================================================

class Weekday(int, Enum):
    """Day of week, numbered like date.weekday()."""
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def parse(cls, token: str) -> "Weekday":
        """
        Parse a weekday name ("monday") or abbreviation ("mon").

        Matching is case-insensitive.

        Raises:
            ValueError: If the token names no weekday
        """
        normalized = token.strip().upper()
        for day in cls:
            if normalized in (day.name, day.name[:3]):
                return day
        raise ValueError(f"not a weekday: {token!r}")
