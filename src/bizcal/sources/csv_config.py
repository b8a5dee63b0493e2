"""
bizcal CSV Rule Sources

Reads business-hour and holiday rules from a CSV rule file or URL and
publishes them as a RuleChain snapshot through a RuleSetHolder.

Line grammar:
    # comment
    ymdFormat,<pattern>                 date pattern for later lines (default yyyy/M/d)
    mdFormat,<pattern>                  month/day pattern for later lines (default M/d)
    hours,[<selector>,]<slots>          business hours, e.g. hours,sat,10-15
    holiday,[<selector>,]<name>         holiday, e.g. holiday,2,mon,board meeting

A selector is one of:
    <date>                  2021/12/24
    <month/day>             12/24
    [<ordinal>,]<weekday>…  sun | 2,sun | mon,tue
and when absent the line applies to every day.

A line that cannot be parsed is skipped with a warning; the rest of the
file still loads.

Usage:
    source = CsvRuleSource(path="rules.csv")
    source.reload()
    source.schedule_reload(timedelta(minutes=5))
    calendar = BusinessCalendar(RuleChain((source.holder,), (source.holder,)))
"""
from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Iterable, Optional, Union

import httpx

from ..calendars.rules import FixedDateMap, PredicateRule, RuleChain, RuleSetHolder
from ..config import get_settings
from ..exceptions import ConfigurationError, ReloadAlreadyScheduledError
from ..hours import DaySlotRule
from ..models import Weekday
from ..predicates import DatePredicate, every_day, on_date, on_month_day, on_ordinal_weekdays, on_weekdays
from .reloader import PeriodicReloader

logger = logging.getLogger(__name__)

DEFAULT_YMD_FORMAT = "yyyy/M/d"
DEFAULT_MD_FORMAT = "M/d"

_PATTERN_TOKENS = re.compile(r"y+|M+|d+")
_PATTERN_CODES = {"y": "%Y", "M": "%m", "d": "%d"}


# =============================================================================
# Date Patterns
# =============================================================================

def to_strptime(pattern: str) -> str:
    """Translate a yyyy/MM/dd style pattern into a strptime format."""
    def code(match: re.Match) -> str:
        token = match.group(0)
        if token[0] == "y" and len(token) == 2:
            return "%y"
        return _PATTERN_CODES[token[0]]
    return _PATTERN_TOKENS.sub(code, pattern.replace("%", "%%"))


def parse_ymd(text: str, pattern: str) -> date:
    return datetime.strptime(text.strip(), to_strptime(pattern)).date()


def parse_md(text: str, pattern: str) -> tuple[int, int]:
    # leap year, so that 2/29 is accepted
    parsed = datetime.strptime("2000 " + text.strip(), "%Y " + to_strptime(pattern))
    return parsed.month, parsed.day


# =============================================================================
# Line Parser
# =============================================================================

def _skip_message(number: int, line: str) -> str:
    return f'Skipping line[{number}] (unable to parse): "{line}"'


def _is_weekday(token: str) -> bool:
    try:
        Weekday.parse(token)
    except ValueError:
        return False
    return True


def _select(fields: list[str], ymd_format: str, md_format: str) -> tuple[DatePredicate, Optional[date], str]:
    """
    Split a rule line's fields into a date predicate and the remaining text.

    Returns:
        (predicate, the single date selected or None, remaining text)
    """
    head = fields[0] if fields else ""
    try:
        target = parse_ymd(head, ymd_format)
        return on_date(target), target, ",".join(fields[1:])
    except ValueError:
        pass
    try:
        month, day = parse_md(head, md_format)
        return on_month_day(month, day), None, ",".join(fields[1:])
    except ValueError:
        pass

    index = 0
    ordinal = None
    try:
        ordinal = int(head.strip())
        index = 1
    except ValueError:
        pass

    # The last field is always the value, even when it reads as a weekday.
    weekdays = []
    while index < len(fields) - 1:
        try:
            weekdays.append(Weekday.parse(fields[index]))
        except ValueError:
            break
        index += 1
    if index == 0 and len(fields) == 1 and _is_weekday(head):
        raise ValueError(f"selector without value: {head}")
    rest = ",".join(fields[index:])

    if ordinal is not None:
        if not weekdays:
            raise ValueError("ordinal without weekday")
        return on_ordinal_weekdays(ordinal, *weekdays), None, rest
    if weekdays:
        return on_weekdays(*weekdays), None, rest
    return every_day, None, rest


def parse_rule_lines(lines: Iterable[str]) -> tuple[RuleChain, list[str]]:
    """
    Parse rule-file lines into a RuleChain.

    Returns:
        (chain, warnings for the lines that were skipped)
    """
    ymd_format = DEFAULT_YMD_FORMAT
    md_format = DEFAULT_MD_FORMAT
    holiday_rules: list = []
    hour_rules: list[DaySlotRule] = []
    fixed_dates: dict[date, str] = {}
    fixed_index: Optional[int] = None
    warnings: list[str] = []

    for number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip() or line.startswith("#"):
            continue
        keyword, *fields = line.split(",")
        try:
            if keyword == "ymdFormat":
                to_strptime(fields[0])
                ymd_format = fields[0]
            elif keyword == "mdFormat":
                to_strptime(fields[0])
                md_format = fields[0]
            elif keyword == "hours":
                predicate, _, slots = _select(fields, ymd_format, md_format)
                hour_rules.append(DaySlotRule.parse(slots, predicate))
            elif keyword == "holiday":
                predicate, single_date, name = _select(fields, ymd_format, md_format)
                if not name.strip():
                    raise ValueError("holiday without name")
                if single_date is not None:
                    if fixed_index is None:
                        fixed_index = len(holiday_rules)
                        holiday_rules.append(None)
                    fixed_dates[single_date] = name
                else:
                    holiday_rules.append(PredicateRule(predicate, name))
            else:
                raise ValueError(f"unknown keyword: {keyword}")
        except (ValueError, IndexError, KeyError, ConfigurationError):
            message = _skip_message(number, line)
            warnings.append(message)
            logger.warning(message, extra={"line": number})

    if fixed_index is not None:
        holiday_rules[fixed_index] = FixedDateMap(fixed_dates)
    return RuleChain(holiday_rules=tuple(holiday_rules), hour_rules=tuple(hour_rules)), warnings


# =============================================================================
# Rule Source
# =============================================================================

class CsvRuleSource:
    """
    A rule file or URL and the snapshot most recently loaded from it.

    A failed read (missing or undecodable file, network error) keeps the previous
    snapshot. A file that reads fine but holds no rules yields an empty
    snapshot.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, url: Optional[str] = None) -> None:
        if (path is None) == (url is None):
            raise ConfigurationError(
                message="exactly one of path or url is required",
                details={"path": str(path), "url": url},
            )
        self.path = Path(path) if path is not None else None
        self.url = url
        self.holder = RuleSetHolder()
        self.warnings: list[str] = []
        self._reloader: Optional[PeriodicReloader] = None

    @property
    def location(self) -> str:
        return str(self.path.absolute()) if self.path is not None else self.url

    def read(self) -> Optional[str]:
        """Return the source text, or None (after a warning) if it cannot be read."""
        if self.path is not None:
            if not self.path.exists():
                message = f"{self.path.absolute()} does not exist"
                self.warnings.append(message)
                logger.warning(message, extra={"source": self.location})
                return None
            try:
                return self.path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                message = f"failed to read: {self.path.absolute()}"
                self.warnings.append(message)
                logger.warning("%s (%s)", message, e, extra={"source": self.location})
                return None

        settings = get_settings()
        timeout = httpx.Timeout(settings.read_timeout_seconds, connect=settings.fetch_timeout_seconds)
        try:
            response = httpx.get(self.url, timeout=timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            message = f"failed to connect: {self.url}"
            self.warnings.append(message)
            logger.warning("%s (%s)", message, e, extra={"source": self.location})
            return None
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            message = f"failed to read: {self.url}"
            self.warnings.append(message)
            logger.warning("%s (%s)", message, e, extra={"source": self.location})
            return None

    def reload(self) -> list[str]:
        """
        Read and parse the source, then swap the new rules in.

        Returns:
            Warnings produced by this load
        """
        logger.info("loading: %s", self.location, extra={"source": self.location})
        self.warnings = []
        text = self.read()
        if text is None:
            return self.warnings
        chain, warnings = parse_rule_lines(text.splitlines())
        self.warnings.extend(warnings)
        self.holder.swap(chain)
        return self.warnings

    def schedule_reload(self, interval: Union[timedelta, float]) -> None:
        """
        Reload in the background every `interval`.

        Raises:
            ReloadAlreadyScheduledError: If a reload is already scheduled
        """
        if self._reloader is not None:
            raise ReloadAlreadyScheduledError(
                message=f"reload already scheduled: {self.location}",
                details={"source": self.location},
            )
        self._reloader = PeriodicReloader(self.reload, interval, name=f"bizcal-csv:{self.location}")
        self._reloader.start()

    def stop(self) -> None:
        if self._reloader is not None:
            self._reloader.stop()

    def __repr__(self) -> str:
        return f"CsvRuleSource({self.location!r})"
