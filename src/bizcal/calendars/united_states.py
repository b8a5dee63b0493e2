"""
US Public Holidays

Implements the United States holiday schedule for business day
calculations.

Holidays:
- New Year's Day (January 1)
- Martin Luther King Jr. Day (3rd Monday in January)
- Memorial Day (Last Monday in May)
- Juneteenth (June 19) - Since 2023
- Independence Day (July 4)
- Labor Day (1st Monday in September)
- Veterans Day (November 11)
- Thanksgiving Day (4th Thursday in November)
- Christmas Day (December 25)

Observed holidays: When a fixed-date holiday falls on Saturday, it's
observed on Friday. When it falls on Sunday, it's observed on Monday.
The observed day is keyed "${<holiday>} (${unitedStates.observed})".
"""
from __future__ import annotations

from datetime import date, timedelta
from types import SimpleNamespace
from typing import Optional

from ..models import Weekday
from ..predicates import (
    last_weekday_of_month,
    nth_weekday_of_month,
    on_month_day,
)
from .rules import FirstMatch, HolidayRule, PredicateRule

KEY_PREFIX = "unitedStates."
OBSERVED = KEY_PREFIX + "observed"
JUNETEENTH_FIRST_YEAR = 2023


def observed_key(key: str) -> str:
    return "${" + key + "} (${" + OBSERVED + "})"


# =============================================================================
# Fixed-Date Holidays
# =============================================================================

class FixedDateHoliday(HolidayRule):
    """
    A holiday on a fixed month and day, with weekend observance.

    Attributes:
        key: Name key of the holiday
        month: Month (1-12)
        day: Day of month
        first_year: First year the holiday exists, if it was introduced later
    """

    def __init__(self, key: str, month: int, day: int, first_year: Optional[int] = None) -> None:
        self.key = key
        self.month = month
        self.day = day
        self.first_year = first_year
        self._on_day = on_month_day(month, day)

    def name_for(self, d: date) -> Optional[str]:
        if self.first_year is not None and d.year < self.first_year:
            return None
        if self._on_day(d):
            return self.key
        moved_from = None
        try:
            if d.weekday() == Weekday.MONDAY:
                moved_from = d - timedelta(days=1)
            elif d.weekday() == Weekday.FRIDAY:
                moved_from = d + timedelta(days=1)
        except OverflowError:
            return None
        if moved_from is not None and self._on_day(moved_from):
            return observed_key(self.key)
        return None

    def __repr__(self) -> str:
        return f"FixedDateHoliday({self.key}, {self.month}/{self.day})"


# =============================================================================
# Holiday Definitions
# =============================================================================

def _is_mlk_day(d: date) -> bool:
    return d.month == 1 and d == nth_weekday_of_month(d.year, 1, Weekday.MONDAY, 3)


def _is_memorial_day(d: date) -> bool:
    return d.month == 5 and d == last_weekday_of_month(d.year, 5, Weekday.MONDAY)


def _is_labor_day(d: date) -> bool:
    return d.month == 9 and d == nth_weekday_of_month(d.year, 9, Weekday.MONDAY, 1)


def _is_thanksgiving(d: date) -> bool:
    return d.month == 11 and d == nth_weekday_of_month(d.year, 11, Weekday.THURSDAY, 4)


NEW_YEARS_DAY = FixedDateHoliday(KEY_PREFIX + "NewYearsDay", 1, 1)
MARTIN_LUTHER_KING_JR_DAY = PredicateRule(_is_mlk_day, KEY_PREFIX + "MartinLutherKingJrDay")
MEMORIAL_DAY = PredicateRule(_is_memorial_day, KEY_PREFIX + "MemorialDay")
JUNETEENTH_DAY = FixedDateHoliday(KEY_PREFIX + "JuneteenthDay", 6, 19, first_year=JUNETEENTH_FIRST_YEAR)
INDEPENDENCE_DAY = FixedDateHoliday(KEY_PREFIX + "IndependenceDay", 7, 4)
LABOR_DAY = PredicateRule(_is_labor_day, KEY_PREFIX + "LaborDay")
VETERANS_DAY = FixedDateHoliday(KEY_PREFIX + "VeteransDay", 11, 11)
THANKSGIVING_DAY = PredicateRule(_is_thanksgiving, KEY_PREFIX + "ThanksgivingDay")
CHRISTMAS_DAY = FixedDateHoliday(KEY_PREFIX + "ChristmasDay", 12, 25)

PUBLIC_HOLIDAYS = FirstMatch(
    NEW_YEARS_DAY,
    MARTIN_LUTHER_KING_JR_DAY,
    MEMORIAL_DAY,
    JUNETEENTH_DAY,
    INDEPENDENCE_DAY,
    LABOR_DAY,
    VETERANS_DAY,
    THANKSGIVING_DAY,
    CHRISTMAS_DAY,
    label="united states public holidays",
)

UNITED_STATES = SimpleNamespace(
    PUBLIC_HOLIDAYS=PUBLIC_HOLIDAYS,
    NEW_YEARS_DAY=NEW_YEARS_DAY,
    MARTIN_LUTHER_KING_JR_DAY=MARTIN_LUTHER_KING_JR_DAY,
    MEMORIAL_DAY=MEMORIAL_DAY,
    JUNETEENTH_DAY=JUNETEENTH_DAY,
    INDEPENDENCE_DAY=INDEPENDENCE_DAY,
    LABOR_DAY=LABOR_DAY,
    VETERANS_DAY=VETERANS_DAY,
    THANKSGIVING_DAY=THANKSGIVING_DAY,
    CHRISTMAS_DAY=CHRISTMAS_DAY,
)
