"""
Tests for error codes, runtime settings and logging setup.

Tests cover:
- Exception codes, string form and serialization
- Exception hierarchy
- BIZCAL_* environment settings
- Plain and JSON log output
"""
import io
import json
import logging

import pytest

from bizcal.config import DEFAULT_SYUKUJITSU_URL, get_settings
from bizcal.exceptions import (
    BizCalError,
    CalendarAlreadyBuiltError,
    ConfigurationError,
    PackLoadError,
    PackValidationError,
    PackVersionMismatch,
    ReloadAlreadyScheduledError,
    RuleSourceError,
    SlotOrderError,
    SlotOverlapError,
    TimeExpressionError,
)
from bizcal.hours import parse_hours
from bizcal.logging_setup import JSONFormatter, configure_logging


# =============================================================================
# Exceptions
# =============================================================================

class TestExceptions:

    @pytest.mark.parametrize("cls,code", [
        (BizCalError, "BC_INTERNAL_ERROR"),
        (ConfigurationError, "BC_CONFIGURATION_ERROR"),
        (TimeExpressionError, "BC_TIME_EXPRESSION_ERROR"),
        (SlotOrderError, "BC_SLOT_ORDER_ERROR"),
        (SlotOverlapError, "BC_SLOT_OVERLAP_ERROR"),
        (CalendarAlreadyBuiltError, "BC_CALENDAR_ALREADY_BUILT"),
        (RuleSourceError, "BC_RULE_SOURCE_ERROR"),
        (ReloadAlreadyScheduledError, "BC_RELOAD_ALREADY_SCHEDULED"),
        (PackLoadError, "BC_PACK_LOAD_ERROR"),
        (PackValidationError, "BC_PACK_VALIDATION_ERROR"),
        (PackVersionMismatch, "BC_PACK_VERSION_MISMATCH"),
    ])
    def test_codes(self, cls, code) -> None:
        error = cls(message="boom")
        assert error.code == code
        assert str(error) == f"[{code}] boom"

    def test_to_dict(self) -> None:
        error = SlotOrderError(message="bad range", details={"range": "10-9"})
        assert error.to_dict() == {
            "code": "BC_SLOT_ORDER_ERROR",
            "message": "bad range",
            "details": {"range": "10-9"},
        }

    def test_to_dict_without_details(self) -> None:
        assert RuleSourceError(message="gone").to_dict() == {
            "code": "BC_RULE_SOURCE_ERROR",
            "message": "gone",
        }

    def test_hierarchy(self) -> None:
        for cls in (TimeExpressionError, SlotOrderError, SlotOverlapError, CalendarAlreadyBuiltError):
            assert issubclass(cls, ConfigurationError)
        assert issubclass(ReloadAlreadyScheduledError, RuleSourceError)
        for cls in (ConfigurationError, RuleSourceError, PackLoadError, PackValidationError,
                    PackVersionMismatch):
            assert issubclass(cls, BizCalError)
        assert issubclass(BizCalError, Exception)

    def test_raised_by_parser(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            parse_hours("10-9")
        assert exc_info.value.code == "BC_SLOT_ORDER_ERROR"


# =============================================================================
# Settings
# =============================================================================

class TestSettings:

    def test_defaults(self) -> None:
        settings = get_settings()
        assert settings.locale == "ja"
        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.syukujitsu_url == DEFAULT_SYUKUJITSU_URL
        assert settings.syukujitsu_refresh is False
        assert settings.syukujitsu_interval_seconds == 31 * 24 * 60 * 60
        assert settings.fetch_timeout_seconds == 30.0
        assert settings.read_timeout_seconds == 60.0

    def test_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("BIZCAL_LOCALE", "en_US")
        monkeypatch.setenv("BIZCAL_LOG_LEVEL", "debug")
        monkeypatch.setenv("BIZCAL_LOG_JSON", "true")
        monkeypatch.setenv("BIZCAL_SYUKUJITSU_REFRESH", "1")
        monkeypatch.setenv("BIZCAL_SYUKUJITSU_INTERVAL_SECONDS", "3600")
        monkeypatch.setenv("BIZCAL_FETCH_TIMEOUT_SECONDS", "5")
        settings = get_settings()
        assert settings.locale == "en_US"
        assert settings.log_level == "DEBUG"
        assert settings.log_json is True
        assert settings.syukujitsu_refresh is True
        assert settings.syukujitsu_interval_seconds == 3600.0
        assert settings.fetch_timeout_seconds == 5.0

    @pytest.mark.parametrize("value", ["0", "false", "no", "off"])
    def test_false_flags(self, monkeypatch, value) -> None:
        monkeypatch.setenv("BIZCAL_LOG_JSON", value)
        assert get_settings().log_json is False


# =============================================================================
# Logging
# =============================================================================

class TestLogging:

    def test_json_formatter(self) -> None:
        record = logging.LogRecord(
            "bizcal.sources.csv_config", logging.WARNING, __file__, 1,
            "skipping %s", ("line",), None,
        )
        record.source = "rules.csv"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "bizcal.sources.csv_config"
        assert entry["message"] == "skipping line"
        assert entry["source"] == "rules.csv"
        assert "timestamp" in entry
        assert "line" not in entry

    def test_configure_json(self) -> None:
        stream = io.StringIO()
        logger = configure_logging("DEBUG", json_format=True, stream=stream)
        logging.getLogger("bizcal.test").debug("休日 loaded", extra={"entries": 3})
        entry = json.loads(stream.getvalue())
        assert logger.level == logging.DEBUG
        assert entry["message"] == "休日 loaded"
        assert entry["entries"] == 3

    def test_configure_plain(self) -> None:
        stream = io.StringIO()
        configure_logging("WARNING", stream=stream)
        logging.getLogger("bizcal.test").info("hidden")
        logging.getLogger("bizcal.test").warning("shown")
        output = stream.getvalue()
        assert "hidden" not in output
        assert "WARNING bizcal.test: shown" in output

    def test_configure_replaces_handler(self) -> None:
        configure_logging(stream=io.StringIO())
        logger = configure_logging(stream=io.StringIO())
        assert len(logger.handlers) == 1
