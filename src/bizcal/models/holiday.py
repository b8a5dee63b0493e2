"""
bizcal Holiday Model

A holiday is a date plus the name the rule chain produced for it.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True, order=True)
class Holiday:
    """
    A resolved holiday.

    Attributes:
        date: The holiday date
        name: Display name, localized for the calendar's locale
        key: Raw rule output the name was resolved from
    """
    date: date
    name: str
    key: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.key:
            object.__setattr__(self, "key", self.name)
