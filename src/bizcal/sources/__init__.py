"""
bizcal Rule Sources

Loading rule sets and holiday tables from files and URLs, with optional
periodic reload. Each load produces a new immutable snapshot that is
swapped in whole.

Usage:
    from bizcal.sources import CsvRuleSource, CabinetOfficeFeed

    source = CsvRuleSource(path="rules.csv")
    source.reload()
    CabinetOfficeFeed().start()
"""
from __future__ import annotations

from .cabinet_office import (
    CabinetOfficeFeed,
    decode_syukujitsu,
    fetch_syukujitsu,
    parse_syukujitsu,
)
from .csv_config import CsvRuleSource, parse_rule_lines, to_strptime
from .reloader import PeriodicReloader

__all__ = [
    "CsvRuleSource",
    "parse_rule_lines",
    "to_strptime",
    "CabinetOfficeFeed",
    "decode_syukujitsu",
    "fetch_syukujitsu",
    "parse_syukujitsu",
    "PeriodicReloader",
]
