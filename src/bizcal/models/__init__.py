"""
bizcal Models

Value types shared across the rule engine:

    from bizcal.models import (
        # Enums
        Period, Weekday,
        # Holidays
        Holiday,
        # Business hours
        HourRange, BusinessHourSlot,
    )
"""
from __future__ import annotations

from .enums import Period, Weekday
from .holiday import Holiday
from .slot import MIDNIGHT, BusinessHourSlot, HourRange, format_time

__all__ = [
    # Enums
    "Period",
    "Weekday",
    # Holidays
    "Holiday",
    # Business hours
    "MIDNIGHT",
    "HourRange",
    "BusinessHourSlot",
    "format_time",
]
