"""
bizcal Exception Hierarchy

Domain-specific exceptions for the business calendar rule engine.
All exceptions include error codes for tracking and logging.

Configuration problems (bad slot strings, overlapping slots, malformed
packs) are raised while a calendar is being built. Queries against a
built calendar do not raise.

Exception codes follow the pattern: BC_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class BizCalError(Exception):
    """
    Base exception for all bizcal errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (BC_*)
        details: Additional context about the error
    """
    message: str
    code: str = "BC_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Serialize exception for logging/CLI output."""
        result: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Configuration Errors
# =============================================================================

@dataclass
class ConfigurationError(BizCalError):
    """Calendar rules could not be constructed."""
    code: str = "BC_CONFIGURATION_ERROR"


@dataclass
class TimeExpressionError(ConfigurationError):
    """A time token or time range could not be parsed."""
    code: str = "BC_TIME_EXPRESSION_ERROR"


@dataclass
class SlotOrderError(ConfigurationError):
    """A business-hour range does not start before it ends."""
    code: str = "BC_SLOT_ORDER_ERROR"


@dataclass
class SlotOverlapError(ConfigurationError):
    """Two business-hour ranges of the same rule overlap."""
    code: str = "BC_SLOT_OVERLAP_ERROR"


@dataclass
class CalendarAlreadyBuiltError(ConfigurationError):
    """A builder was used after build() was called."""
    code: str = "BC_CALENDAR_ALREADY_BUILT"


# =============================================================================
# Rule Source Errors
# =============================================================================

@dataclass
class RuleSourceError(BizCalError):
    """A rule set or holiday table could not be read."""
    code: str = "BC_RULE_SOURCE_ERROR"


@dataclass
class ReloadAlreadyScheduledError(RuleSourceError):
    """Periodic reload was requested twice for the same source."""
    code: str = "BC_RELOAD_ALREADY_SCHEDULED"


# =============================================================================
# Calendar Pack Errors
# =============================================================================

@dataclass
class PackLoadError(BizCalError):
    """Failed to load calendar pack from file."""
    code: str = "BC_PACK_LOAD_ERROR"


@dataclass
class PackValidationError(BizCalError):
    """Calendar pack schema validation failed."""
    code: str = "BC_PACK_VALIDATION_ERROR"


@dataclass
class PackVersionMismatch(BizCalError):
    """Calendar pack schema version is not supported."""
    code: str = "BC_PACK_VERSION_MISMATCH"
