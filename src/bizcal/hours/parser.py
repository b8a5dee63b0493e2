"""
bizcal Time Expression Parser

Parses human-readable business-hour strings into sorted HourRange tuples.

Accepted forms include 24-hour clock ("9-17:30"), 12-hour clock with a
period marker ("9am-5:30pm", "12 a.m. to 8:30"), the words noon and
midnight, and Japanese ("午前9時から午後5時半まで", "9-正午").

Usage:
    from bizcal.hours import parse_hours, parse_time

    parse_time("午後1時半")            # time(13, 30)
    parse_hours("9-12, 13-18")       # (HourRange(9:00, 12:00), HourRange(13:00, 18:00))
    parse_hours("13-24")             # end 00:00 means end of day
"""
from __future__ import annotations

import re
from datetime import time

from ..exceptions import SlotOrderError, SlotOverlapError, TimeExpressionError
from ..models import MIDNIGHT, HourRange, Period

_WHITESPACE = re.compile(r"\s+")
_RANGE_SEPARATORS = re.compile(r"[,，、&]")
_FROM_TO_SEPARATORS = re.compile(r"to|から|まで|〜|～|~", re.IGNORECASE)
_NON_PERIOD = re.compile(r"[0-9.:時半]")
_NON_CLOCK = re.compile(r"[^0-9:]")
_HALF_HOUR = "半"


# =============================================================================
# Single Time Token
# =============================================================================

def parse_time(token: str) -> time:
    """
    Parse one time token such as "9", "13:30", "7:31pm", "noon" or "午後1時半".

    A token resolving to 24:00 is returned as 00:00; callers treat an
    end time of 00:00 as the end of the day.

    Raises:
        TimeExpressionError: If the token is malformed or out of range
    """
    token = _WHITESPACE.sub("", token)
    if not token:
        raise TimeExpressionError(message="empty time token")

    try:
        period = Period.classify(_NON_PERIOD.sub("", token))
    except ValueError as e:
        raise TimeExpressionError(
            message=f"unable to parse time: {token}",
            details={"token": token, "error": str(e)},
        )

    clock = _NON_CLOCK.sub("", token)
    fields = clock.split(":") if clock else []
    if len(fields) > 3 or any(f == "" for f in fields):
        raise TimeExpressionError(
            message=f"unable to parse time: {token}",
            details={"token": token},
        )
    if not fields and period not in (Period.NOON, Period.MIDNIGHT):
        raise TimeExpressionError(
            message=f"no hour in time: {token}",
            details={"token": token},
        )

    hour = int(fields[0]) if fields else 0
    if period == Period.NOON:
        hour = 12
    elif period == Period.MORNING and hour == 12:
        hour = 0
    elif period == Period.AFTERNOON and hour != 12:
        hour += 12
    elif period == Period.MIDNIGHT:
        hour = 24

    if len(fields) > 1:
        minute = int(fields[1])
    elif _HALF_HOUR in token:
        minute = 30
    else:
        minute = 0
    second = int(fields[2]) if len(fields) > 2 else 0

    if not (0 <= hour <= 24 and 0 <= minute <= 59 and 0 <= second <= 59):
        raise TimeExpressionError(
            message=f"time out of range: {token}",
            details={"token": token, "hour": hour, "minute": minute, "second": second},
        )
    if hour == 24:
        if minute or second:
            raise TimeExpressionError(
                message=f"time out of range: {token}",
                details={"token": token, "hour": hour, "minute": minute, "second": second},
            )
        return MIDNIGHT
    return time(hour, minute, second)


# =============================================================================
# Business Hour Expression
# =============================================================================

def parse_range(expression: str) -> HourRange:
    """
    Parse a single "from-to" range.

    Raises:
        TimeExpressionError: If the range does not have exactly two times
        SlotOrderError: If the range does not start before it ends
    """
    normalized = _FROM_TO_SEPARATORS.sub("-", _WHITESPACE.sub("", expression))
    parts = normalized.split("-")
    while parts and parts[-1] == "":
        parts.pop()
    if len(parts) != 2 or not all(parts):
        raise TimeExpressionError(
            message=f"unable to parse business hours: {expression}",
            details={"expression": expression},
        )

    start, end = parse_time(parts[0]), parse_time(parts[1])
    if not (start < end or end == MIDNIGHT):
        raise SlotOrderError(
            message=f"business hour must start before it ends: {expression}",
            details={"expression": expression, "start": str(start), "end": str(end)},
        )
    return HourRange(start=start, end=end)


def parse_hours(expression: str) -> tuple[HourRange, ...]:
    """
    Parse a comma-separated list of ranges, e.g. "0-8:30,9-12,13:30-17".

    Ranges may also be separated by "&", "、" or a full-width comma.

    Returns:
        The ranges sorted by start time

    Raises:
        TimeExpressionError: If a range or token is malformed
        SlotOrderError: If a range does not start before it ends
        SlotOverlapError: If two ranges overlap
    """
    compact = _WHITESPACE.sub("", expression)
    if not compact:
        raise TimeExpressionError(message="empty business hours")

    ranges = sorted(parse_range(part) for part in _RANGE_SEPARATORS.split(compact))
    validate_ranges(ranges, expression)
    return tuple(ranges)


def validate_ranges(ranges: list[HourRange], expression: str = "") -> None:
    """
    Check that sorted ranges do not overlap.

    Raises:
        SlotOverlapError: If two consecutive ranges overlap
    """
    for previous, current in zip(ranges, ranges[1:]):
        if previous.overlaps(current):
            raise SlotOverlapError(
                message=f"business hours overlap: {previous} and {current}",
                details={"expression": expression},
            )
