"""
bizcal Date Predicates

Small date -> bool functions used to select the days a holiday rule or a
business-hour rule applies to, plus the weekday arithmetic they share.

Usage:
    from bizcal.predicates import on_ordinal_weekdays, on_weekdays

    first_monday = on_ordinal_weekdays(1, Weekday.MONDAY)
    weekend = on_weekdays(Weekday.SATURDAY, Weekday.SUNDAY)
"""
from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Callable

from .models import Weekday

DatePredicate = Callable[[date], bool]


# =============================================================================
# Weekday Arithmetic
# =============================================================================

def nth_weekday_of_month(year: int, month: int, weekday: int, n: int) -> date:
    """
    Get the nth occurrence of a weekday in a month.

    Args:
        year: Year
        month: Month (1-12)
        weekday: Day of week (0=Monday, 6=Sunday)
        n: Which occurrence (1=first, 2=second, etc.)

    Returns:
        The date of the nth weekday
    """
    first_day = date(year, month, 1)
    days_until_weekday = (weekday - first_day.weekday()) % 7
    return first_day + timedelta(days=days_until_weekday, weeks=n - 1)


def last_weekday_of_month(year: int, month: int, weekday: int) -> date:
    """
    Get the last occurrence of a weekday in a month.

    Args:
        year: Year
        month: Month (1-12)
        weekday: Day of week (0=Monday, 6=Sunday)

    Returns:
        The date of the last weekday
    """
    last_day = date(year, month, calendar.monthrange(year, month)[1])
    days_since_weekday = (last_day.weekday() - weekday) % 7
    return last_day - timedelta(days=days_since_weekday)


def ordinal_weekday_matches(d: date, ordinal: int, weekday: int) -> bool:
    """
    Check if `d` is the `ordinal`-th `weekday` of its month.

    A positive ordinal counts from the start of the month, -1 means the
    last occurrence, -2 the one before it. Ordinal 0 never matches.
    """
    if d.weekday() != weekday or ordinal == 0:
        return False
    if ordinal > 0:
        return (d.day - 1) // 7 + 1 == ordinal
    days_in_month = calendar.monthrange(d.year, d.month)[1]
    return (days_in_month - d.day) // 7 + 1 == -ordinal


# =============================================================================
# Predicate Factories
# =============================================================================

def every_day(d: date) -> bool:
    return True


def on_date(target: date) -> DatePredicate:
    """Match exactly one date."""
    return lambda d: d == target


def on_month_day(month: int, day: int) -> DatePredicate:
    """Match the same month and day every year."""
    return lambda d: d.month == month and d.day == day


def on_weekdays(*weekdays: Weekday) -> DatePredicate:
    """Match any of the given days of week."""
    days = frozenset(int(w) for w in weekdays)
    return lambda d: d.weekday() in days


def on_ordinal_weekdays(ordinal: int, *weekdays: Weekday) -> DatePredicate:
    """Match the `ordinal`-th occurrence in the month of any given weekday."""
    days = tuple(int(w) for w in weekdays)
    return lambda d: any(ordinal_weekday_matches(d, ordinal, w) for w in days)
