"""
Japanese Public Holidays

Implements the national holidays of Japan (国民の祝日) for business day
calculations.

Two sources are combined:
- The Cabinet Office table (syukujitsu.csv), authoritative for every
  date up to its last entry
- The statutory algorithm, used after the table ends

Statutory holidays:
- 元日 (January 1)
- 成人の日 (2nd Monday in January)
- 建国記念の日 (February 11)
- 天皇誕生日 (February 23)
- 春分の日 (March 20 or 21)
- 昭和の日 (April 29)
- 憲法記念日, みどりの日, こどもの日 (May 3, 4, 5)
- 海の日 (3rd Monday in July)
- 山の日 (August 11)
- 敬老の日 (3rd Monday in September)
- 秋分の日 (September 22 or 23)
- スポーツの日 (2nd Monday in October)
- 文化の日 (November 3)
- 勤労感謝の日 (November 23)

Derived holidays, both named 休日:
- Substitute holiday: a holiday on Sunday makes the next day that is not
  itself a holiday a holiday.
- Bridge holiday: a September day between 敬老の日 and 秋分の日.

Equinox days come from published exception-year tables rather than an
astronomical formula.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path
from types import MappingProxyType, SimpleNamespace
from typing import Iterable, Mapping, Optional

from ..exceptions import RuleSourceError
from ..models import Weekday
from ..predicates import nth_weekday_of_month
from .rules import FunctionRule, HolidayRule

logger = logging.getLogger(__name__)

KEY_PREFIX = "japanese."
SUBSTITUTE = KEY_PREFIX + "休日"
NEW_YEARS_DAY = KEY_PREFIX + "元日"

# Years in which the vernal equinox falls on March 21 instead of March 20
VERNAL_EQUINOX_ON_21ST = frozenset({
    2002, 2003, 2006, 2007, 2010, 2011, 2014, 2015,
    2018, 2019, 2022, 2023, 2027,
})

# Years in which the autumnal equinox falls on September 22 instead of 23
AUTUMNAL_EQUINOX_ON_22ND = frozenset({2012, 2016, 2020, 2024, 2028})

MAX_SUBSTITUTE_WALK_DAYS = 14

DATA_DIR = Path(__file__).resolve().parent.parent / "data"
BUNDLED_TABLE_PATH = DATA_DIR / "syukujitsu.csv"


# =============================================================================
# Cabinet Office Table
# =============================================================================

@dataclass(frozen=True)
class HolidayTable:
    """
    Immutable snapshot of the Cabinet Office holiday table.

    The table is authoritative for every date up to and including
    `last_day`: such a date without an entry is not a holiday (January 1
    excepted).

    Attributes:
        entries: date -> name key ("japanese.元日")
        first_day: Earliest date in the table
        last_day: Latest date in the table
    """
    entries: Mapping[date, str] = field(default_factory=dict)
    first_day: Optional[date] = None
    last_day: Optional[date] = None

    def __post_init__(self) -> None:
        ordered = dict(sorted(self.entries.items()))
        object.__setattr__(self, "entries", MappingProxyType(ordered))
        if ordered:
            keys = list(ordered)
            object.__setattr__(self, "first_day", keys[0])
            object.__setattr__(self, "last_day", keys[-1])
        else:
            object.__setattr__(self, "first_day", None)
            object.__setattr__(self, "last_day", None)

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[date, str]], prefix: str = KEY_PREFIX) -> "HolidayTable":
        return cls(entries={d: prefix + name for d, name in rows})

    @classmethod
    def from_csv(cls, text: str, prefix: str = KEY_PREFIX) -> "HolidayTable":
        """
        Parse the Cabinet Office CSV format.

        The first line is a header. Each following line is "yyyy/M/d,name".

        Raises:
            RuleSourceError: If a data line is malformed
        """
        rows = []
        for number, line in enumerate(text.splitlines()[1:], start=2):
            line = line.strip()
            if not line:
                continue
            try:
                day, name = line.split(",", 1)
                rows.append((datetime.strptime(day.strip(), "%Y/%m/%d").date(), name.strip()))
            except ValueError as e:
                raise RuleSourceError(
                    message=f"malformed holiday table line {number}: {line}",
                    details={"line": number, "error": str(e)},
                )
        return cls.from_rows(rows, prefix)

    def get(self, d: date) -> Optional[str]:
        return self.entries.get(d)

    def covers(self, d: date) -> bool:
        """True if the table is authoritative for `d`, i.e. `d` is on or before its last entry."""
        if self.last_day is None:
            return False
        return d <= self.last_day

    def __contains__(self, d: object) -> bool:
        return d in self.entries

    def __len__(self) -> int:
        return len(self.entries)


HolidayTable.EMPTY = HolidayTable()


def load_bundled_table() -> HolidayTable:
    """Load the holiday table shipped with the package."""
    with open(BUNDLED_TABLE_PATH, encoding="utf-8") as f:
        table = HolidayTable.from_csv(f.read())
    logger.debug("bundled holiday table: %s - %s", table.first_day, table.last_day)
    return table


# =============================================================================
# Statutory Algorithm
# =============================================================================

def vernal_equinox_day(year: int) -> int:
    return 21 if year in VERNAL_EQUINOX_ON_21ST else 20


def autumnal_equinox_day(year: int) -> int:
    return 22 if year in AUTUMNAL_EQUINOX_ON_22ND else 23


def statutory_name(d: date) -> Optional[str]:
    """
    Name of the statutory holiday falling on `d`, ignoring substitutes.

    The current law is applied to every year. A bridge holiday in
    September is reported as 休日.
    """
    year, month, day = d.year, d.month, d.day
    name = None
    if month == 1:
        if day == 1:
            name = "元日"
        elif d == nth_weekday_of_month(year, 1, Weekday.MONDAY, 2):
            name = "成人の日"
    elif month == 2:
        if day == 11:
            name = "建国記念の日"
        elif day == 23:
            name = "天皇誕生日"
    elif month == 3:
        if day == vernal_equinox_day(year):
            name = "春分の日"
    elif month == 4:
        if day == 29:
            name = "昭和の日"
    elif month == 5:
        name = {3: "憲法記念日", 4: "みどりの日", 5: "こどもの日"}.get(day)
    elif month == 7:
        if d == nth_weekday_of_month(year, 7, Weekday.MONDAY, 3):
            name = "海の日"
    elif month == 8:
        if day == 11:
            name = "山の日"
    elif month == 9:
        respect_for_the_aged = nth_weekday_of_month(year, 9, Weekday.MONDAY, 3).day
        equinox = autumnal_equinox_day(year)
        if day == respect_for_the_aged:
            name = "敬老の日"
        elif day == equinox:
            name = "秋分の日"
        elif day - 1 == respect_for_the_aged and day + 1 == equinox:
            name = "休日"
    elif month == 10:
        if d == nth_weekday_of_month(year, 10, Weekday.MONDAY, 2):
            name = "スポーツの日"
    elif month == 11:
        name = {3: "文化の日", 23: "勤労感謝の日"}.get(day)
    return KEY_PREFIX + name if name else None


class JapaneseHolidays(HolidayRule):
    """
    Japanese public holidays: the Cabinet Office table where it applies,
    the statutory algorithm elsewhere.

    The table is an immutable snapshot. `replace_table()` installs a new
    snapshot with a single reference assignment, so a lookup running
    concurrently sees either the old table or the new one.
    """

    def __init__(self, table: Optional[HolidayTable] = None) -> None:
        self._table = table if table is not None else HolidayTable.EMPTY

    @property
    def table(self) -> HolidayTable:
        return self._table

    def replace_table(self, table: HolidayTable) -> HolidayTable:
        """Install a new table and return the previous one."""
        previous, self._table = self._table, table
        logger.info(
            "holiday table replaced: %d entries, %s - %s",
            len(table), table.first_day, table.last_day,
        )
        return previous

    def name_for(self, d: date) -> Optional[str]:
        table = self._table
        name = table.get(d)
        if name:
            return name
        if d.month == 1 and d.day == 1:
            return NEW_YEARS_DAY
        if table.covers(d):
            return None
        return statutory_name(d) or self._substitute_name(d, table)

    def _is_genuine_holiday(self, d: date, table: HolidayTable) -> bool:
        """A listed or statutory holiday; bridge and substitute days do not count."""
        if d in table or (d.month == 1 and d.day == 1):
            return True
        if table.covers(d):
            return False
        name = statutory_name(d)
        return name is not None and name != SUBSTITUTE

    def _substitute_name(self, d: date, table: HolidayTable) -> Optional[str]:
        """
        Walk back from the previous day through consecutive holidays.

        Reaching a Sunday holiday makes `d` a substitute holiday; a
        Saturday or a regular day ends the walk.
        """
        if d == date.min:
            return None
        current = d - timedelta(days=1)
        for _ in range(MAX_SUBSTITUTE_WALK_DAYS):
            if current.weekday() == Weekday.SATURDAY:
                return None
            if not self._is_genuine_holiday(current, table):
                return None
            if current.weekday() == Weekday.SUNDAY:
                return SUBSTITUTE
            if current == date.min:
                return None
            current -= timedelta(days=1)
        return None

    def __repr__(self) -> str:
        return f"JapaneseHolidays({len(self._table)} table entries)"


# =============================================================================
# Closure Rules
# =============================================================================

def _new_years_holidays(d: date) -> Optional[str]:
    if d.month == 1 and d.day <= 3:
        return KEY_PREFIX + "三が日"
    return None


def _new_years_eve(d: date) -> Optional[str]:
    if d.month == 12 and d.day == 31:
        return KEY_PREFIX + "大晦日"
    return None


PUBLIC_HOLIDAYS = JapaneseHolidays(load_bundled_table())
CLOSED_ON_NEW_YEARS_HOLIDAYS = FunctionRule(_new_years_holidays, "closed on new year's holidays")
CLOSED_ON_NEW_YEARS_EVE = FunctionRule(_new_years_eve, "closed on new year's eve")


def cabinet_official_first_day() -> Optional[date]:
    """First date of the Cabinet Office table currently in use."""
    return PUBLIC_HOLIDAYS.table.first_day


def cabinet_official_last_day() -> Optional[date]:
    """Last date of the Cabinet Office table currently in use."""
    return PUBLIC_HOLIDAYS.table.last_day


JAPAN = SimpleNamespace(
    PUBLIC_HOLIDAYS=PUBLIC_HOLIDAYS,
    CLOSED_ON_NEW_YEARS_HOLIDAYS=CLOSED_ON_NEW_YEARS_HOLIDAYS,
    CLOSED_ON_NEW_YEARS_EVE=CLOSED_ON_NEW_YEARS_EVE,
    cabinet_official_first_day=cabinet_official_first_day,
    cabinet_official_last_day=cabinet_official_last_day,
)
