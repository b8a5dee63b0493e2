"""
Pytest configuration and fixtures for bizcal tests.

Provides calendar fixtures and helpers for writing rule files.
"""
import logging
from datetime import date, datetime, time
from pathlib import Path

import pytest

from bizcal import (
    CLOSED_ON_SATURDAYS_AND_SUNDAYS,
    JAPAN,
    BusinessCalendar,
)


# =============================================================================
# Factory Helpers
# =============================================================================

def at(d: date, hour: int, minute: int = 0, second: int = 0) -> datetime:
    """Combine a date with a time of day."""
    return datetime.combine(d, time(hour, minute, second))


def write_rules(path: Path, *lines: str) -> Path:
    """Write a CSV rule file, one rule per line."""
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def reset_bizcal_logger():
    """Drop handlers installed by configure_logging() between tests."""
    yield
    logger = logging.getLogger("bizcal")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Run every test with default settings."""
    for name in (
        "BIZCAL_LOCALE",
        "BIZCAL_LOG_LEVEL",
        "BIZCAL_LOG_JSON",
        "BIZCAL_SYUKUJITSU_URL",
        "BIZCAL_SYUKUJITSU_REFRESH",
        "BIZCAL_SYUKUJITSU_INTERVAL_SECONDS",
        "BIZCAL_FETCH_TIMEOUT_SECONDS",
        "BIZCAL_READ_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def japan_calendar() -> BusinessCalendar:
    """Japanese public holidays only, English names, open 24 hours."""
    return BusinessCalendar.builder().locale("en").holiday(JAPAN.PUBLIC_HOLIDAYS).build()


@pytest.fixture
def office_calendar() -> BusinessCalendar:
    """Japanese public holidays and weekends, 9-12 and 13-18, English names."""
    return (
        BusinessCalendar.builder()
        .locale("en")
        .holiday(JAPAN.PUBLIC_HOLIDAYS, CLOSED_ON_SATURDAYS_AND_SUNDAYS)
        .hours("9-12, 13-18")
        .build()
    )


@pytest.fixture
def rules_file(tmp_path):
    """Factory writing a rule file into a temporary directory."""
    def _write(*lines: str, name: str = "rules.csv") -> Path:
        return write_rules(tmp_path / name, *lines)
    return _write
