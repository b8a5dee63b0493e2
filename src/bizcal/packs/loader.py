"""
bizcal Calendar Pack Loader

Loads and validates calendar packs from YAML or JSON files.

Converts Pydantic schema models to holiday rules, hour rules and finally
a BusinessCalendar.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import ValidationError

from ..calendars.japan import JAPAN
from ..calendars.rules import (
    CLOSED_ON_SATURDAYS_AND_SUNDAYS,
    FixedDateMap,
    HolidayRule,
    PredicateRule,
    RuleChain,
)
from ..calendars.united_states import UNITED_STATES
from ..engine import BusinessCalendar
from ..exceptions import PackLoadError, PackValidationError, PackVersionMismatch
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
from .schema import (
    SCHEMA_VERSION,
    CalendarPackSchema,
    DateSelectorSchema,
    HolidayRuleSchema,
    HoursRuleSchema,
    check_schema_version,
    validate_calendar_pack,
)

logger = logging.getLogger(__name__)

BUILTIN_RULES: dict[str, HolidayRule] = {
    "japan.public_holidays": JAPAN.PUBLIC_HOLIDAYS,
    "japan.new_years_holidays": JAPAN.CLOSED_ON_NEW_YEARS_HOLIDAYS,
    "japan.new_years_eve": JAPAN.CLOSED_ON_NEW_YEARS_EVE,
    "united_states.public_holidays": UNITED_STATES.PUBLIC_HOLIDAYS,
    "weekends": CLOSED_ON_SATURDAYS_AND_SUNDAYS,
}


# =============================================================================
# Schema to Model Converters
# =============================================================================

def _convert_selector(schema: DateSelectorSchema) -> DatePredicate:
    """Convert a selector to a date predicate; no selector means every day."""
    if schema.on is not None:
        return on_date(schema.on)
    if schema.month_and_day is not None:
        return on_month_day(*schema.month_and_day)
    if schema.weekdays:
        weekdays = [Weekday.parse(w) for w in schema.weekdays]
        if schema.ordinal is not None:
            return on_ordinal_weekdays(schema.ordinal, *weekdays)
        return on_weekdays(*weekdays)
    return every_day


def _convert_holiday_rules(schemas: list[HolidayRuleSchema]) -> list[HolidayRule]:
    """
    Convert holiday entries in order.

    Single-date entries are gathered into one FixedDateMap placed where
    the first of them appears.
    """
    rules: list = []
    fixed_dates = {}
    fixed_index = None
    for schema in schemas:
        if schema.builtin is not None:
            rules.append(BUILTIN_RULES[schema.builtin])
        elif schema.on is not None:
            if fixed_index is None:
                fixed_index = len(rules)
                rules.append(None)
            fixed_dates[schema.on] = schema.name
        else:
            rules.append(PredicateRule(_convert_selector(schema), schema.name))
    if fixed_index is not None:
        rules[fixed_index] = FixedDateMap(fixed_dates)
    return rules


def _convert_hours_rule(schema: HoursRuleSchema) -> DaySlotRule:
    """Convert HoursRuleSchema to DaySlotRule."""
    return DaySlotRule.parse(schema.slots, _convert_selector(schema))


def _convert_calendar_pack(schema: CalendarPackSchema) -> BusinessCalendar:
    """Convert CalendarPackSchema to a BusinessCalendar."""
    chain = RuleChain(
        holiday_rules=tuple(_convert_holiday_rules(schema.holidays)),
        hour_rules=tuple(_convert_hours_rule(h) for h in schema.hours),
    )
    return BusinessCalendar(rules=chain, locale=schema.locale)


# =============================================================================
# Calendar Pack Loader
# =============================================================================

def _parse_content(content: str, format: str = "yaml") -> Any:
    if format.lower() == "json":
        return json.loads(content)
    return yaml.safe_load(content)


def _build(data: Any, source: str, strict_version: bool = True) -> BusinessCalendar:
    if not isinstance(data, dict):
        raise PackValidationError(
            message="Calendar pack must be a mapping",
            details={"path": source},
        )

    # Check schema version
    if strict_version and not check_schema_version(data):
        pack_version = data.get("schema_version", "unknown")
        raise PackVersionMismatch(
            message=f"Schema version mismatch: pack has {pack_version}, expected {SCHEMA_VERSION}",
            details={
                "pack_version": pack_version,
                "expected_version": SCHEMA_VERSION,
            },
        )

    # Validate against schema
    try:
        schema = validate_calendar_pack(data)
    except ValidationError as e:
        raise PackValidationError(
            message=f"Calendar pack validation failed: {e.error_count()} errors",
            details={"errors": e.errors(include_context=False), "path": source},
        )

    calendar = _convert_calendar_pack(schema)
    logger.info(
        "loaded calendar pack %s: %d holiday rules, %d hour rules",
        schema.name, len(schema.holidays), len(schema.hours),
        extra={"source": source},
    )
    return calendar


def load_calendar_pack(path: Union[str, Path], strict_version: bool = True) -> BusinessCalendar:
    """
    Load a calendar pack from a file.

    Args:
        path: Path to YAML or JSON file
        strict_version: If True, reject packs with incompatible schema versions

    Returns:
        BusinessCalendar built from the pack

    Raises:
        PackLoadError: If file cannot be read
        PackValidationError: If validation fails
        PackVersionMismatch: If schema version incompatible
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
        data = _parse_content(content, "json" if path.suffix.lower() == ".json" else "yaml")
    except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise PackLoadError(
            message=f"Failed to load calendar pack: {e}",
            details={"path": str(path), "error": str(e)},
        )
    return _build(data, str(path), strict_version)


def load_calendar_pack_from_string(
    content: str,
    format: str = "yaml",
    strict_version: bool = True,
) -> BusinessCalendar:
    """
    Load a calendar pack from a string.

    Args:
        content: YAML or JSON string
        format: "yaml" or "json"

    Returns:
        BusinessCalendar built from the pack
    """
    try:
        data = _parse_content(content, format)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise PackLoadError(
            message=f"Failed to parse calendar pack: {e}",
            details={"error": str(e)},
        )
    return _build(data, "<string>", strict_version)
