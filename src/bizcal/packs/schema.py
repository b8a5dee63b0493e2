"""
bizcal Calendar Pack Schemas

Pydantic models for validating calendar pack YAML/JSON files.

A calendar pack declares, in order, the holiday rules and business-hour
rules of one calendar. The loader turns a validated pack into a
BusinessCalendar.

Example:
    schema_version: "1.0.0"
    name: tokyo-office
    locale: en
    holidays:
      - builtin: japan.public_holidays
      - builtin: weekends
      - date: 2024-12-27
        name: Year-end closing
    hours:
      - weekdays: [sat]
        slots: "10-15"
      - slots: "9-12, 13-18"

Schema versioning:
- schema_version field tracks breaking changes
- Loaders should check version compatibility
"""
from __future__ import annotations

import re
from datetime import date
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..hours import parse_hours
from ..models import Weekday


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

BuiltinRuleValue = Literal[
    "japan.public_holidays",
    "japan.new_years_holidays",
    "japan.new_years_eve",
    "united_states.public_holidays",
    "weekends",
]

_MONTH_DAY = re.compile(r"^(\d{1,2})/(\d{1,2})$")


# =============================================================================
# Selector Schemas
# =============================================================================

class DateSelectorSchema(BaseModel):
    """
    Which dates a rule applies to.

    At most one of `on`, `month_day` and `weekdays` may be given;
    `ordinal` narrows `weekdays` to the n-th occurrence in the month
    (-1 = last).
    """
    on: Optional[date] = Field(None, alias="date", description="A single date")
    month_day: Optional[str] = Field(None, description="Month and day every year, 'M/D'")
    weekdays: list[str] = Field(default_factory=list, description="Days of week ('mon', 'sunday')")
    ordinal: Optional[int] = Field(None, description="n-th weekday of the month, -1 = last")

    model_config = {
        "extra": "forbid",  # Reject unknown fields
        "populate_by_name": True,
    }

    @field_validator("month_day")
    @classmethod
    def validate_month_day(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        match = _MONTH_DAY.match(v.strip())
        if not match:
            raise ValueError(f"month_day must look like 'M/D': {v!r}")
        date(2000, int(match.group(1)), int(match.group(2)))  # raises ValueError
        return v.strip()

    @field_validator("weekdays")
    @classmethod
    def validate_weekdays(cls, v: list[str]) -> list[str]:
        for token in v:
            Weekday.parse(token)  # raises ValueError
        return v

    @model_validator(mode="after")
    def validate_selector(self) -> "DateSelectorSchema":
        given = [s for s in (self.on, self.month_day, self.weekdays or None) if s is not None]
        if len(given) > 1:
            raise ValueError("use only one of date, month_day, weekdays")
        if self.ordinal is not None:
            if not self.weekdays:
                raise ValueError("ordinal requires weekdays")
            if self.ordinal == 0:
                raise ValueError("ordinal must not be 0")
        return self

    @property
    def has_selector(self) -> bool:
        return self.on is not None or self.month_day is not None or bool(self.weekdays)

    @property
    def month_and_day(self) -> Optional[tuple[int, int]]:
        if self.month_day is None:
            return None
        month, day = self.month_day.split("/")
        return int(month), int(day)


class HolidayRuleSchema(DateSelectorSchema):
    """
    One holiday rule: either a builtin rule set or a named selector.
    """
    builtin: Optional[BuiltinRuleValue] = Field(None, description="Predefined holiday rules")
    name: Optional[str] = Field(None, description="Holiday name")

    @model_validator(mode="after")
    def validate_holiday(self) -> "HolidayRuleSchema":
        if self.builtin is not None:
            if self.has_selector or self.name:
                raise ValueError("builtin holiday rules take no selector or name")
        else:
            if not self.has_selector:
                raise ValueError("holiday rule needs builtin, date, month_day or weekdays")
            if not self.name or not self.name.strip():
                raise ValueError("holiday rule needs a name")
        return self


class HoursRuleSchema(DateSelectorSchema):
    """Business hours for the selected dates, or for every date without a selector."""
    slots: str = Field(..., description="Business hours, e.g. '9-12, 13-18'")

    @field_validator("slots")
    @classmethod
    def validate_slots(cls, v: str) -> str:
        try:
            parse_hours(v)
        except Exception as e:
            raise ValueError(str(e))
        return v


# =============================================================================
# Calendar Pack Schema
# =============================================================================

class CalendarPackSchema(BaseModel):
    """Top-level calendar pack."""
    schema_version: str = Field(SCHEMA_VERSION, description="Pack schema version")
    name: str = Field(..., description="Calendar name")
    description: Optional[str] = Field(None, description="Human-readable description")
    locale: str = Field("ja", description="Locale for holiday names")
    holidays: list[HolidayRuleSchema] = Field(default_factory=list)
    hours: list[HoursRuleSchema] = Field(default_factory=list)

    model_config = {
        "extra": "forbid",  # Reject unknown fields
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_calendar_pack(data: dict[str, Any]) -> CalendarPackSchema:
    """
    Validate a calendar pack dictionary against the schema.

    Args:
        data: Dictionary loaded from YAML/JSON

    Returns:
        Validated CalendarPackSchema

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return CalendarPackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """
    Check if a calendar pack's schema version is compatible.

    Args:
        data: Dictionary with schema_version field

    Returns:
        True if compatible, False otherwise
    """
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    pack_major = pack_version.split(".")[0]
    current_major = SCHEMA_VERSION.split(".")[0]
    return pack_major == current_major
