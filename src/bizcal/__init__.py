"""
bizcal - Business Calendar Rule Engine

Holidays, business days and business hours for Japan, the United States
or fully custom rules, with nearest-boundary searches over them.

Usage:
    from datetime import date, datetime
    from bizcal import JAPAN, CLOSED_ON_SATURDAYS_AND_SUNDAYS, BusinessCalendar

    calendar = (
        BusinessCalendar.builder()
        .holiday(JAPAN.PUBLIC_HOLIDAYS, CLOSED_ON_SATURDAYS_AND_SUNDAYS)
        .hours("9-12, 13-18")
        .build()
    )
    calendar.get_holiday(date(2024, 5, 6))            # Holiday(2024-05-06, "休日")
    calendar.next_business_hour_start(datetime(2024, 5, 2, 18, 0))
"""
from __future__ import annotations

from .calendars import (
    CLOSED_ON_SATURDAYS_AND_SUNDAYS,
    JAPAN,
    UNITED_STATES,
    FirstMatch,
    FixedDateMap,
    FunctionRule,
    HolidayRule,
    HolidayTable,
    JapaneseHolidays,
    PredicateRule,
    RuleChain,
    RuleSetHolder,
)
from .engine import BusinessCalendar, BusinessCalendarBuilder
from .exceptions import (
    BizCalError,
    CalendarAlreadyBuiltError,
    ConfigurationError,
    PackLoadError,
    PackValidationError,
    PackVersionMismatch,
    ReloadAlreadyScheduledError,
    RuleSourceError,
    SlotOrderError,
    SlotOverlapError,
    TimeExpressionError,
)
from .hours import DaySlotRule, parse_hours, parse_time
from .models import BusinessHourSlot, Holiday, HourRange, Weekday
from .packs import load_calendar_pack, load_calendar_pack_from_string

__version__ = "1.0.0"

__all__ = [
    # Calendar
    "BusinessCalendar",
    "BusinessCalendarBuilder",
    # Rules
    "HolidayRule",
    "FixedDateMap",
    "PredicateRule",
    "FunctionRule",
    "FirstMatch",
    "RuleChain",
    "RuleSetHolder",
    "HolidayTable",
    "JapaneseHolidays",
    "JAPAN",
    "UNITED_STATES",
    "CLOSED_ON_SATURDAYS_AND_SUNDAYS",
    # Hours
    "DaySlotRule",
    "parse_hours",
    "parse_time",
    # Models
    "Holiday",
    "HourRange",
    "BusinessHourSlot",
    "Weekday",
    # Packs
    "load_calendar_pack",
    "load_calendar_pack_from_string",
    # Exceptions
    "BizCalError",
    "ConfigurationError",
    "TimeExpressionError",
    "SlotOrderError",
    "SlotOverlapError",
    "CalendarAlreadyBuiltError",
    "RuleSourceError",
    "ReloadAlreadyScheduledError",
    "PackLoadError",
    "PackValidationError",
    "PackVersionMismatch",
]
