"""
bizcal Calendar Builder

Fluent construction of a BusinessCalendar. Holiday rules and hour rules
are evaluated in the order they are registered.

Usage:
    calendar = (
        BusinessCalendarBuilder()
        .locale("en")
        .holiday(JAPAN.PUBLIC_HOLIDAYS)
        .on(Weekday.SATURDAY, Weekday.SUNDAY).holiday("weekend")
        .on(date(2024, 12, 27)).holiday("company holiday")
        .on(1, Weekday.MONDAY).hours("13-18")
        .hours("9-12, 13-18")
        .csv("rules.csv", reload_interval=timedelta(minutes=5))
        .build()
    )

`on()` accepts:
- a date                  -> that date
- year, month, day        -> that date
- month, day              -> that day every year
- weekdays                -> those days of week
- ordinal, weekdays       -> the ordinal-th such weekday of each month (-1 = last)
- a callable date -> bool -> the dates it selects
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Optional, Union

from ..calendars.rules import FixedDateMap, HolidayRule, PredicateRule, RuleChain, as_rule
from ..config import get_settings
from ..exceptions import CalendarAlreadyBuiltError, ConfigurationError
from ..hours import DaySlotRule
from ..models import Weekday
from ..predicates import (
    DatePredicate,
    every_day,
    on_date,
    on_month_day,
    on_ordinal_weekdays,
    on_weekdays,
)
from ..sources.csv_config import CsvRuleSource
from .calendar import BusinessCalendar

logger = logging.getLogger(__name__)


def predicate_from(*selector) -> tuple[DatePredicate, Optional[date]]:
    """
    Turn an on() selector into a predicate.

    Returns:
        (predicate, the single date selected or None)

    Raises:
        ConfigurationError: If the selector is not understood
    """
    if len(selector) == 1 and isinstance(selector[0], date):
        return on_date(selector[0]), selector[0]
    if len(selector) == 1 and callable(selector[0]) and not isinstance(selector[0], Weekday):
        return selector[0], None
    if selector and all(isinstance(s, Weekday) for s in selector):
        return on_weekdays(*selector), None
    if (
        len(selector) > 1
        and type(selector[0]) is int
        and all(isinstance(s, Weekday) for s in selector[1:])
    ):
        return on_ordinal_weekdays(selector[0], *selector[1:]), None
    if all(type(s) is int for s in selector):
        try:
            if len(selector) == 3:
                target = date(*selector)
                return on_date(target), target
            if len(selector) == 2:
                date(2000, *selector)  # validates month/day, 2000 is a leap year
                return on_month_day(*selector), None
        except ValueError as e:
            raise ConfigurationError(
                message=f"invalid date selector: {selector}",
                details={"error": str(e)},
            )
    raise ConfigurationError(
        message=f"unsupported date selector: {selector!r}",
        details={"selector": repr(selector)},
    )


class DatePredicateBuilder:
    """The dates picked by BusinessCalendarBuilder.on(), waiting for hours or a holiday name."""

    def __init__(self, builder: "BusinessCalendarBuilder", predicate: DatePredicate,
                 single_date: Optional[date] = None) -> None:
        self._builder = builder
        self._predicate = predicate
        self._single_date = single_date

    def hours(self, expression: str) -> "BusinessCalendarBuilder":
        """Business hours for the selected dates."""
        return self._builder._add_hours(DaySlotRule.parse(expression, self._predicate))

    def holiday(self, name: str) -> "BusinessCalendarBuilder":
        """Mark the selected dates as a holiday called `name`."""
        if self._single_date is not None:
            return self._builder._add_fixed_holiday(self._single_date, name)
        return self._builder.holiday(PredicateRule(self._predicate, name))


class BusinessCalendarBuilder:
    """
    Collects rules and builds a BusinessCalendar once.

    Fixed-date holidays registered through on(date).holiday(name) are
    kept in a single FixedDateMap placed where the first of them was
    registered.
    """

    def __init__(self) -> None:
        self._locale = get_settings().locale
        self._holiday_rules: list[Union[HolidayRule, None]] = []
        self._hour_rules: list = []
        self._fixed_dates: dict[date, str] = {}
        self._fixed_index: Optional[int] = None
        self._sources: list = []
        self._built = False

    def _ensure_not_built(self) -> None:
        if self._built:
            raise CalendarAlreadyBuiltError(message="calendar already built")

    def locale(self, locale: str) -> "BusinessCalendarBuilder":
        self._ensure_not_built()
        self._locale = locale
        return self

    def holiday(self, *rules: Union[HolidayRule, Callable[[date], Optional[str]]]) -> "BusinessCalendarBuilder":
        """Add holiday rules, or plain functions date -> Optional[name]."""
        self._ensure_not_built()
        self._holiday_rules.extend(as_rule(r) for r in rules)
        return self

    def hours(self, expression: str) -> "BusinessCalendarBuilder":
        """Business hours for every date not matched by an earlier hour rule."""
        return self._add_hours(DaySlotRule.parse(expression, every_day))

    def on(self, *selector) -> DatePredicateBuilder:
        self._ensure_not_built()
        predicate, single_date = predicate_from(*selector)
        return DatePredicateBuilder(self, predicate, single_date)

    def csv(
        self,
        path: Optional[Union[str, Path]] = None,
        url: Optional[str] = None,
        reload_interval: Optional[timedelta] = None,
    ) -> "BusinessCalendarBuilder":
        """
        Add the rules of a CSV rule file or URL.

        The source is loaded now; with `reload_interval` it is reloaded in
        the background and its rules are swapped in as a whole.
        """
        self._ensure_not_built()
        source = CsvRuleSource(path=path, url=url)
        source.reload()
        if reload_interval is not None:
            source.schedule_reload(reload_interval)
        self._sources.append(source)
        self._holiday_rules.append(source.holder)
        self._hour_rules.append(source.holder)
        return self

    def build(self) -> BusinessCalendar:
        self._ensure_not_built()
        self._built = True
        holiday_rules = list(self._holiday_rules)
        if self._fixed_index is not None:
            holiday_rules[self._fixed_index] = FixedDateMap(self._fixed_dates)
        chain = RuleChain(holiday_rules=tuple(holiday_rules), hour_rules=tuple(self._hour_rules))
        logger.debug(
            "built calendar: %d holiday rules, %d hour rules",
            len(chain.holiday_rules), len(chain.hour_rules),
        )
        return BusinessCalendar(rules=chain, locale=self._locale, sources=self._sources)

    def _add_hours(self, rule: DaySlotRule) -> "BusinessCalendarBuilder":
        self._ensure_not_built()
        self._hour_rules.append(rule)
        return self

    def _add_fixed_holiday(self, d: date, name: str) -> "BusinessCalendarBuilder":
        self._ensure_not_built()
        if self._fixed_index is None:
            self._fixed_index = len(self._holiday_rules)
            self._holiday_rules.append(None)
        self._fixed_dates[d] = name
        return self
