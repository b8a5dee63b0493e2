"""
bizcal Configuration

Runtime settings, read from BIZCAL_* environment variables.

    BIZCAL_LOCALE                       Locale for holiday names (default: ja)
    BIZCAL_LOG_LEVEL                    Log level for the bizcal logger (default: INFO)
    BIZCAL_LOG_JSON                     JSON log lines instead of plain text (default: false)
    BIZCAL_SYUKUJITSU_URL               Cabinet Office holiday table URL
    BIZCAL_SYUKUJITSU_REFRESH           Fetch the table from the URL (default: false)
    BIZCAL_SYUKUJITSU_INTERVAL_SECONDS  Refresh interval (default: 31 days)
    BIZCAL_FETCH_TIMEOUT_SECONDS        Connect timeout for URL fetches (default: 30)
    BIZCAL_READ_TIMEOUT_SECONDS         Read timeout for URL fetches (default: 60)
"""
from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_SYUKUJITSU_URL = "https://www8.cao.go.jp/chosei/shukujitsu/syukujitsu.csv"
DEFAULT_SYUKUJITSU_INTERVAL_SECONDS = 31 * 24 * 60 * 60


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    locale: str = "ja"
    log_level: str = "INFO"
    log_json: bool = False
    syukujitsu_url: str = DEFAULT_SYUKUJITSU_URL
    syukujitsu_refresh: bool = False
    syukujitsu_interval_seconds: float = DEFAULT_SYUKUJITSU_INTERVAL_SECONDS
    fetch_timeout_seconds: float = 30.0
    read_timeout_seconds: float = 60.0


def get_settings() -> Settings:
    """Read settings from the environment."""
    return Settings(
        locale=os.getenv("BIZCAL_LOCALE", "ja"),
        log_level=os.getenv("BIZCAL_LOG_LEVEL", "INFO").upper(),
        log_json=_env_bool("BIZCAL_LOG_JSON", "false"),
        syukujitsu_url=os.getenv("BIZCAL_SYUKUJITSU_URL", DEFAULT_SYUKUJITSU_URL),
        syukujitsu_refresh=_env_bool("BIZCAL_SYUKUJITSU_REFRESH", "false"),
        syukujitsu_interval_seconds=float(
            os.getenv("BIZCAL_SYUKUJITSU_INTERVAL_SECONDS", str(DEFAULT_SYUKUJITSU_INTERVAL_SECONDS))
        ),
        fetch_timeout_seconds=float(os.getenv("BIZCAL_FETCH_TIMEOUT_SECONDS", "30")),
        read_timeout_seconds=float(os.getenv("BIZCAL_READ_TIMEOUT_SECONDS", "60")),
    )
