"""
bizcal Business Calendar

Answers holiday, business-day and business-hour questions from a
RuleChain snapshot, and walks the chain day by day to find the nearest
business day, holiday, or business-hour boundary.

Key rules:
- A date is a holiday if any holiday rule names it; otherwise it is a
  business day
- A holiday has no business-hour slots
- A business day takes its slots from the first hour rule that matches
  it, or is open 24 hours when none does
- Slots are half-open: a slot ending at 18:00 does not contain 18:00

Boundary searches are linear scans. last_holiday/first_holiday stop at
date.min/date.max and return a sentinel Holiday there. The business-hour
boundary searches return datetime.min/datetime.max when the answer
would lie outside the representable range. last_business_day
and first_business_day have no bound; a rule set that marks every day
as a holiday makes them run until the date range overflows.

Usage:
    calendar = (
        BusinessCalendar.builder()
        .holiday(JAPAN.PUBLIC_HOLIDAYS, CLOSED_ON_SATURDAYS_AND_SUNDAYS)
        .hours("9-12, 13-18")
        .build()
    )
    calendar.is_business_day(date(2024, 5, 6))         # False
    calendar.next_business_hour_start(datetime(2024, 5, 2, 18, 30))
"""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Optional, Sequence

from ..calendars.names import DEFAULT_LOCALE, HolidayNames
from ..calendars.rules import RuleChain
from ..hours import OPEN_24_HOURS
from ..models import BusinessHourSlot, Holiday

if TYPE_CHECKING:
    from ..sources.csv_config import CsvRuleSource
    from .builder import BusinessCalendarBuilder

ONE_DAY = timedelta(days=1)
DEFAULT_DATE_FORMAT = "%Y/%m/%d"


def _as_date(d: Optional[date]) -> date:
    if d is None:
        return date.today()
    if isinstance(d, datetime):
        return d.date()
    return d


def _as_datetime(when: Optional[datetime]) -> datetime:
    if when is None:
        return datetime.now()
    if not isinstance(when, datetime):
        return datetime.combine(when, datetime.min.time())
    return when


class BusinessCalendar:
    """
    A business calendar over one rule chain.

    Attributes:
        rules: The RuleChain queries are evaluated against
        locale: Locale holiday names are resolved for
    """

    def __init__(
        self,
        rules: Optional[RuleChain] = None,
        locale: str = DEFAULT_LOCALE,
        sources: Sequence["CsvRuleSource"] = (),
    ) -> None:
        self.rules = rules or RuleChain.EMPTY
        self.names = HolidayNames(locale)
        self.sources = tuple(sources)

    @staticmethod
    def builder() -> "BusinessCalendarBuilder":
        from .builder import BusinessCalendarBuilder
        return BusinessCalendarBuilder()

    @property
    def locale(self) -> str:
        return self.names.locale

    def close(self) -> None:
        """Stop background reloading of any rule sources."""
        for source in self.sources:
            source.stop()

    # =========================================================================
    # Holidays
    # =========================================================================

    def get_holiday(self, d: Optional[date] = None) -> Optional[Holiday]:
        """
        Get the holiday on a date.

        Args:
            d: Date to check (default: today)

        Returns:
            The Holiday, or None if `d` is a business day
        """
        d = _as_date(d)
        key = self.rules.holiday_key(d)
        if key is None:
            return None
        return Holiday(date=d, name=self.names.resolve(key), key=key)

    def is_holiday(self, d: Optional[date] = None) -> bool:
        return self.rules.holiday_key(_as_date(d)) is not None

    def is_business_day(self, d: Optional[date] = None) -> bool:
        return not self.is_holiday(d)

    def get_holidays_between(self, start: date, end: date) -> list[Holiday]:
        """
        Get all holidays within a date range.

        Bounds are inclusive and may be given in either order; the result
        is in chronological order.
        """
        holidays = []
        for d in _days_between(start, end):
            holiday = self.get_holiday(d)
            if holiday is not None:
                holidays.append(holiday)
        return holidays

    def get_business_days_between(self, start: date, end: date) -> list[date]:
        """
        Get all business days within a date range.

        Bounds are inclusive and may be given in either order; the result
        is in chronological order.
        """
        return [d for d in _days_between(start, end) if self.is_business_day(d)]

    # =========================================================================
    # Business Hours
    # =========================================================================

    def get_business_hour_slots(self, d: Optional[date] = None) -> list[BusinessHourSlot]:
        """
        Get the business-hour slots of a date.

        Returns:
            Slots sorted by start; empty if `d` is a holiday
        """
        d = _as_date(d)
        if self.is_holiday(d):
            return []
        slots = self.rules.slots_for(d)
        if slots is None:
            slots = OPEN_24_HOURS.slots_for(d)
        return slots

    def is_business_hour(self, when: Optional[datetime] = None) -> bool:
        """Check if `when` falls inside a business-hour slot of its date."""
        when = _as_datetime(when)
        return any(slot.contains(when) for slot in self.get_business_hour_slots(when.date()))

    # =========================================================================
    # Nearest Business Day / Holiday
    # =========================================================================

    def last_business_day(self, d: Optional[date] = None) -> date:
        """The latest business day on or before `d`."""
        current = _as_date(d)
        while self.is_holiday(current):
            current -= ONE_DAY
        return current

    def first_business_day(self, d: Optional[date] = None) -> date:
        """The earliest business day on or after `d`."""
        current = _as_date(d)
        while self.is_holiday(current):
            current += ONE_DAY
        return current

    def last_holiday(self, d: Optional[date] = None) -> Holiday:
        """
        The latest holiday on or before `d`.

        Returns Holiday(date.min, "min") if there is none.
        """
        current = _as_date(d)
        while True:
            holiday = self.get_holiday(current)
            if holiday is not None:
                return holiday
            if current == date.min:
                return Holiday(date=date.min, name="min")
            current -= ONE_DAY

    def first_holiday(self, d: Optional[date] = None) -> Holiday:
        """
        The earliest holiday on or after `d`.

        Returns Holiday(date.max, "max") if there is none.
        """
        current = _as_date(d)
        while True:
            holiday = self.get_holiday(current)
            if holiday is not None:
                return holiday
            if current == date.max:
                return Holiday(date=date.max, name="max")
            current += ONE_DAY

    # =========================================================================
    # Nearest Business Hour Boundaries
    # =========================================================================

    def last_business_hour_end(self, when: Optional[datetime] = None) -> datetime:
        """The latest slot end at or before `when`."""
        when = _as_datetime(when)
        ends = [s.end for s in self.get_business_hour_slots(when.date()) if s.end <= when]
        if ends:
            return ends[-1]
        if when.date() == date.min:
            return datetime.min
        previous = self.last_business_day(when.date() - ONE_DAY)
        return self.get_business_hour_slots(previous)[-1].end

    def next_business_hour_end(self, when: Optional[datetime] = None) -> datetime:
        """The earliest slot end at or after `when`."""
        when = _as_datetime(when)
        ends = [s.end for s in self.get_business_hour_slots(when.date()) if s.end >= when]
        if ends:
            return ends[0]
        if when.date() == date.max:
            return datetime.max
        following = self.first_business_day(when.date() + ONE_DAY)
        return self.get_business_hour_slots(following)[0].end

    def last_business_hour_start(self, when: Optional[datetime] = None) -> datetime:
        """The latest slot start strictly before `when`."""
        when = _as_datetime(when)
        starts = [s.start for s in self.get_business_hour_slots(when.date()) if s.start < when]
        if starts:
            return starts[-1]
        if when.date() == date.min:
            return datetime.min
        previous = self.last_business_day(when.date() - ONE_DAY)
        return self.get_business_hour_slots(previous)[-1].start

    def next_business_hour_start(self, when: Optional[datetime] = None) -> datetime:
        """The earliest slot start at or after `when`."""
        when = _as_datetime(when)
        starts = [s.start for s in self.get_business_hour_slots(when.date()) if s.start >= when]
        if starts:
            return starts[0]
        if when.date() == date.max:
            return datetime.max
        following = self.first_business_day(when.date() + ONE_DAY)
        return self.get_business_hour_slots(following)[0].start

    # =========================================================================
    # Reporting
    # =========================================================================

    def dump(self, start: date, end: date, date_format: str = DEFAULT_DATE_FORMAT) -> str:
        """
        One line per date: "<date> : <slots>" for business days,
        "<date> : <holiday name>" for holidays.
        """
        lines = []
        for d in _days_between(start, end):
            holiday = self.get_holiday(d)
            if holiday is not None:
                detail = holiday.name
            else:
                detail = ", ".join(str(s) for s in self.get_business_hour_slots(d))
            lines.append(f"{d.strftime(date_format)} : {detail}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"BusinessCalendar(locale={self.locale!r}, "
            f"{len(self.rules.holiday_rules)} holiday rules, "
            f"{len(self.rules.hour_rules)} hour rules)"
        )


def _days_between(start: date, end: date):
    """Every date from the earlier bound to the later one, inclusive."""
    current, last = sorted((_as_date(start), _as_date(end)))
    while True:
        yield current
        if current == last:
            return
        current += ONE_DAY
