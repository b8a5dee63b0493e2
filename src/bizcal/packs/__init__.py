"""
bizcal Calendar Packs

Declarative calendars in YAML or JSON.

Usage:
    from bizcal.packs import load_calendar_pack

    calendar = load_calendar_pack("packs/tokyo-office.yaml")
"""
from __future__ import annotations

from .loader import BUILTIN_RULES, load_calendar_pack, load_calendar_pack_from_string
from .schema import (
    SCHEMA_VERSION,
    CalendarPackSchema,
    HolidayRuleSchema,
    HoursRuleSchema,
    check_schema_version,
    validate_calendar_pack,
)

__all__ = [
    "SCHEMA_VERSION",
    "BUILTIN_RULES",
    "CalendarPackSchema",
    "HolidayRuleSchema",
    "HoursRuleSchema",
    "check_schema_version",
    "validate_calendar_pack",
    "load_calendar_pack",
    "load_calendar_pack_from_string",
]
