"""
bizcal Holiday Names

Resolves the name keys produced by holiday rules into display text for a
locale. Names live in data/holiday_names.yaml.

Resolution order for a key:
1. The key's entry for the locale
2. Template expansion: each "${other.key}" is resolved in turn
3. The key's English entry
4. The key without its namespace prefix ("japanese.休日" -> "休日")
5. The key itself, which is how caller-supplied names pass through

Usage:
    from bizcal.calendars.names import HolidayNames

    HolidayNames("en").resolve("japanese.憲法記念日")   # "Constitution Memorial Day"
"""
from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

NAMES_PATH = Path(__file__).resolve().parent.parent / "data" / "holiday_names.yaml"
SUPPORTED_LOCALES = ("ja", "en")
DEFAULT_LOCALE = "ja"
NAMESPACES = ("japanese.", "unitedStates.")

_TEMPLATE = re.compile(r"\$\{([^}]+)\}")


@lru_cache(maxsize=1)
def _load_names() -> dict[str, dict[str, str]]:
    with open(NAMES_PATH, encoding="utf-8") as f:
        data: Any = yaml.safe_load(f) or {}
    return {locale: dict(data.get(locale) or {}) for locale in SUPPORTED_LOCALES}


def normalize_locale(locale: str) -> str:
    """Reduce "ja_JP", "en-US" and similar to a supported language code."""
    language = re.split(r"[_\-.]", (locale or "").strip().lower())[0]
    if language in ("ja", "jp", "japanese"):
        return "ja"
    return "en"


class HolidayNames:
    """Display names for one locale."""

    def __init__(self, locale: str = DEFAULT_LOCALE) -> None:
        self.locale = normalize_locale(locale)
        names = _load_names()
        self._names = names[self.locale]
        self._fallback = names["en"]

    def resolve(self, key: str) -> str:
        if key in self._names:
            return self._names[key]
        if "${" in key:
            return _TEMPLATE.sub(lambda m: self.resolve(m.group(1)), key)
        if key in self._fallback:
            return self._fallback[key]
        for namespace in NAMESPACES:
            if key.startswith(namespace):
                return key[len(namespace):]
        return key

    def __repr__(self) -> str:
        return f"HolidayNames({self.locale!r})"
