"""
bizcal Calendars

Holiday rules and the jurisdictions built from them.

Provides:
- HolidayRule variants and the RuleChain snapshot they are evaluated in
- RuleSetHolder for rule sets that are swapped at runtime
- JAPAN: public holidays (Cabinet Office table + statutory algorithm),
  new year closures
- UNITED_STATES: public holidays with weekend observance
- HolidayNames for localized display names

Usage:
    from bizcal.calendars import JAPAN, UNITED_STATES, FirstMatch

    JAPAN.PUBLIC_HOLIDAYS.name_for(date(2024, 5, 6))   # "japanese.休日"
    UNITED_STATES.PUBLIC_HOLIDAYS(date(2021, 7, 5))
"""
from __future__ import annotations

from .japan import (
    JAPAN,
    HolidayTable,
    JapaneseHolidays,
    load_bundled_table,
    statutory_name,
)
from .names import HolidayNames, normalize_locale
from .rules import (
    CLOSED_ON_SATURDAYS_AND_SUNDAYS,
    FirstMatch,
    FixedDateMap,
    FunctionRule,
    HolidayRule,
    HourRule,
    PredicateRule,
    RuleChain,
    RuleSetHolder,
    as_rule,
)
from .united_states import UNITED_STATES, FixedDateHoliday

__all__ = [
    # Rules
    "HolidayRule",
    "HourRule",
    "FixedDateMap",
    "PredicateRule",
    "FunctionRule",
    "FirstMatch",
    "RuleChain",
    "RuleSetHolder",
    "as_rule",
    "CLOSED_ON_SATURDAYS_AND_SUNDAYS",
    # Japan
    "JAPAN",
    "HolidayTable",
    "JapaneseHolidays",
    "load_bundled_table",
    "statutory_name",
    # United States
    "UNITED_STATES",
    "FixedDateHoliday",
    # Names
    "HolidayNames",
    "normalize_locale",
]
