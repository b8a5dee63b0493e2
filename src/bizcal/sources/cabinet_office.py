"""
Cabinet Office Holiday Feed

Fetches the Cabinet Office holiday table (syukujitsu.csv) and installs
it in a JapaneseHolidays rule. The published file is Shift_JIS encoded,
has a header line, and lists one "yyyy/M/d,name" holiday per line.

A failed fetch or an unparsable file is logged and the rule keeps the
table it already has.

Usage:
    feed = CabinetOfficeFeed(JAPAN.PUBLIC_HOLIDAYS)
    feed.refresh()                       # fetch once
    feed.start(timedelta(days=31))       # and keep refreshing
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional, Union

import httpx

from ..calendars.japan import PUBLIC_HOLIDAYS, HolidayTable, JapaneseHolidays
from ..config import get_settings
from ..exceptions import ReloadAlreadyScheduledError, RuleSourceError
from .reloader import PeriodicReloader

logger = logging.getLogger(__name__)

ENCODINGS = ("shift_jis", "cp932", "utf-8")


def decode_syukujitsu(content: bytes) -> str:
    """Decode the table, trying Shift_JIS, then CP932, then UTF-8."""
    for encoding in ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise RuleSourceError(
        message="unable to decode holiday table",
        details={"encodings": list(ENCODINGS)},
    )


def parse_syukujitsu(text: str) -> HolidayTable:
    """Parse the Cabinet Office CSV format into a HolidayTable."""
    return HolidayTable.from_csv(text)


def fetch_syukujitsu(url: Optional[str] = None) -> HolidayTable:
    """
    Download and parse the Cabinet Office table.

    Raises:
        httpx.HTTPError: If the download fails
        RuleSourceError: If the content cannot be decoded or parsed
    """
    settings = get_settings()
    url = url or settings.syukujitsu_url
    timeout = httpx.Timeout(settings.read_timeout_seconds, connect=settings.fetch_timeout_seconds)
    response = httpx.get(url, timeout=timeout, follow_redirects=True)
    response.raise_for_status()
    return parse_syukujitsu(decode_syukujitsu(response.content))


class CabinetOfficeFeed:
    """
    Keeps a JapaneseHolidays rule supplied with the latest Cabinet Office table.

    Attributes:
        holidays: The rule whose table is replaced
        url: Where the table is downloaded from
    """

    def __init__(self, holidays: JapaneseHolidays = PUBLIC_HOLIDAYS, url: Optional[str] = None) -> None:
        self.holidays = holidays
        self.url = url or get_settings().syukujitsu_url
        self._reloader: Optional[PeriodicReloader] = None

    def refresh(self) -> bool:
        """
        Fetch the table once and install it.

        Returns:
            True if a new table was installed
        """
        logger.info("loading: %s", self.url, extra={"source": self.url})
        try:
            table = fetch_syukujitsu(self.url)
        except (httpx.HTTPError, RuleSourceError) as e:
            logger.warning("failed to load holiday table from %s: %s", self.url, e,
                           extra={"source": self.url})
            return False
        if not len(table):
            logger.warning("holiday table from %s is empty, keeping current table", self.url,
                           extra={"source": self.url})
            return False
        self.holidays.replace_table(table)
        return True

    def start(self, interval: Optional[Union[timedelta, float]] = None) -> None:
        """
        Refresh now, then every `interval` in the background.

        Raises:
            ReloadAlreadyScheduledError: If the feed is already running
        """
        if self._reloader is not None:
            raise ReloadAlreadyScheduledError(
                message=f"holiday feed already running: {self.url}",
                details={"source": self.url},
            )
        if interval is None:
            interval = get_settings().syukujitsu_interval_seconds
        self.refresh()
        self._reloader = PeriodicReloader(self.refresh, interval, name=f"bizcal-syukujitsu:{self.url}")
        self._reloader.start()

    def stop(self) -> None:
        if self._reloader is not None:
            self._reloader.stop()
