"""
bizcal Holiday Rule Chain

Holiday rules map a date to an optional holiday name key. A RuleChain
evaluates its holiday rules in registration order and the first rule that
answers wins; hour rules are evaluated the same way.

Rule variants:
- FixedDateMap: explicit date -> name entries
- PredicateRule: one name for every date a predicate selects
- FunctionRule: any plain function date -> Optional[str]
- FirstMatch: an ordered group of rules
- JapaneseHolidays (calendars.japan): the statutory algorithm

Every rule is a pure function of the date. Rule sets that are reloaded at
runtime live behind a RuleSetHolder, which swaps in a new RuleChain as a
single reference assignment; readers see the old chain or the new one,
never a mix.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Protocol, runtime_checkable

from ..models import BusinessHourSlot, Weekday
from ..predicates import DatePredicate


# =============================================================================
# Rule Protocols
# =============================================================================

class HolidayRule(ABC):
    """A pure function from a date to an optional holiday name key."""

    @abstractmethod
    def name_for(self, d: date) -> Optional[str]:
        """Return the holiday name key for `d`, or None if `d` is not a holiday."""
        ...

    def __call__(self, d: date) -> Optional[str]:
        return self.name_for(d)


@runtime_checkable
class HourRule(Protocol):
    """Anything that can supply business-hour slots for a date."""

    def slots_for(self, d: date) -> Optional[list[BusinessHourSlot]]:
        ...


# =============================================================================
# Rule Variants
# =============================================================================

class FixedDateMap(HolidayRule):
    """Holidays declared for explicit dates."""

    def __init__(self, entries: Optional[Mapping[date, str]] = None) -> None:
        self._entries = MappingProxyType(dict(entries or {}))

    @property
    def entries(self) -> Mapping[date, str]:
        return self._entries

    def name_for(self, d: date) -> Optional[str]:
        return self._entries.get(d)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FixedDateMap({len(self._entries)} dates)"


class PredicateRule(HolidayRule):
    """One holiday name for every date a predicate selects."""

    def __init__(self, predicate: DatePredicate, name: str) -> None:
        self.predicate = predicate
        self.name = name

    def name_for(self, d: date) -> Optional[str]:
        return self.name if self.predicate(d) else None

    def __repr__(self) -> str:
        return f"PredicateRule({self.name!r})"


class FunctionRule(HolidayRule):
    """Adapts a plain function date -> Optional[str] to a rule."""

    def __init__(self, function: Callable[[date], Optional[str]], label: str = "") -> None:
        self.function = function
        self.label = label or getattr(function, "__name__", "function")

    def name_for(self, d: date) -> Optional[str]:
        return self.function(d) or None

    def __repr__(self) -> str:
        return f"FunctionRule({self.label})"


class FirstMatch(HolidayRule):
    """An ordered group of rules; the first one that answers wins."""

    def __init__(self, *rules: HolidayRule, label: str = "") -> None:
        self.rules: tuple[HolidayRule, ...] = tuple(as_rule(r) for r in rules)
        self.label = label

    def name_for(self, d: date) -> Optional[str]:
        for rule in self.rules:
            name = rule.name_for(d)
            if name:
                return name
        return None

    def __repr__(self) -> str:
        return f"FirstMatch({self.label or len(self.rules)})"


def as_rule(rule) -> HolidayRule:
    """Accept a HolidayRule or a plain callable."""
    if isinstance(rule, HolidayRule):
        return rule
    if callable(rule):
        return FunctionRule(rule)
    raise TypeError(f"not a holiday rule: {rule!r}")


# =============================================================================
# Rule Chain Snapshot
# =============================================================================

@dataclass(frozen=True)
class RuleChain:
    """
    An immutable snapshot of holiday rules and hour rules.

    Attributes:
        holiday_rules: Evaluated front to back, first name wins
        hour_rules: Evaluated front to back, first matching rule supplies the slots
    """
    holiday_rules: tuple[HolidayRule, ...] = field(default_factory=tuple)
    hour_rules: tuple[HourRule, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "holiday_rules", tuple(as_rule(r) for r in self.holiday_rules))
        object.__setattr__(self, "hour_rules", tuple(self.hour_rules))

    def holiday_key(self, d: date) -> Optional[str]:
        for rule in self.holiday_rules:
            name = rule.name_for(d)
            if name:
                return name
        return None

    def slots_for(self, d: date) -> Optional[list[BusinessHourSlot]]:
        for rule in self.hour_rules:
            slots = rule.slots_for(d)
            if slots is not None:
                return slots
        return None

    @property
    def is_empty(self) -> bool:
        return not self.holiday_rules and not self.hour_rules


RuleChain.EMPTY = RuleChain()


class RuleSetHolder(HolidayRule):
    """
    A swappable reference to the current RuleChain.

    Registered in a calendar both as a holiday rule and as an hour rule;
    each evaluation reads the reference once and works on that snapshot.
    """

    def __init__(self, chain: Optional[RuleChain] = None) -> None:
        self._chain = chain or RuleChain.EMPTY

    @property
    def current(self) -> RuleChain:
        return self._chain

    def swap(self, chain: RuleChain) -> RuleChain:
        """Install a new snapshot and return the previous one."""
        previous, self._chain = self._chain, chain
        return previous

    def name_for(self, d: date) -> Optional[str]:
        return self._chain.holiday_key(d)

    def slots_for(self, d: date) -> Optional[list[BusinessHourSlot]]:
        return self._chain.slots_for(d)

    def __repr__(self) -> str:
        chain = self._chain
        return (
            f"RuleSetHolder({len(chain.holiday_rules)} holiday rules, "
            f"{len(chain.hour_rules)} hour rules)"
        )


# =============================================================================
# Common Rules
# =============================================================================

def _weekend_name(d: date) -> Optional[str]:
    if d.weekday() == Weekday.SATURDAY:
        return "japanese.土曜日"
    if d.weekday() == Weekday.SUNDAY:
        return "japanese.日曜日"
    return None


CLOSED_ON_SATURDAYS_AND_SUNDAYS = FunctionRule(_weekend_name, "closed on saturdays and sundays")
