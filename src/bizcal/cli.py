"""
bizcal CLI

Query a business calendar from the command line.

Usage:
    bizcal holidays --from 2024-01-01 --to 2024-12-31
    bizcal holidays --calendar united-states --locale en --from 2024-01-01 --to 2024-12-31
    bizcal check 2024-05-06 --weekends --hours "9-12,13-18" --time 10:30
    bizcal dump --pack packs/tokyo-office.yaml --from 2024-04-26 --to 2024-05-07
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date, datetime
from typing import Optional, Sequence

from .calendars.japan import JAPAN
from .calendars.rules import CLOSED_ON_SATURDAYS_AND_SUNDAYS
from .calendars.united_states import UNITED_STATES
from .config import get_settings
from .engine import BusinessCalendar, BusinessCalendarBuilder
from .exceptions import BizCalError
from .hours import parse_time
from .logging_setup import configure_logging
from .packs import load_calendar_pack
from .sources import CabinetOfficeFeed

logger = logging.getLogger(__name__)

CALENDARS = {
    "japan": JAPAN.PUBLIC_HOLIDAYS,
    "united-states": UNITED_STATES.PUBLIC_HOLIDAYS,
}


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a date (YYYY-MM-DD): {value}")


def build_calendar(args: argparse.Namespace) -> BusinessCalendar:
    """Build the calendar selected by the command line options."""
    if args.pack:
        return load_calendar_pack(args.pack)

    builder = BusinessCalendarBuilder()
    if args.locale:
        builder.locale(args.locale)
    builder.holiday(CALENDARS[args.calendar])
    if args.weekends:
        builder.holiday(CLOSED_ON_SATURDAYS_AND_SUNDAYS)
    if args.rules:
        builder.csv(path=args.rules)
    if args.hours:
        builder.hours(args.hours)
    return builder.build()


def cmd_holidays(calendar: BusinessCalendar, args: argparse.Namespace) -> int:
    holidays = calendar.get_holidays_between(args.start, args.end)
    if args.json:
        print(json.dumps(
            [{"date": h.date.isoformat(), "name": h.name, "key": h.key} for h in holidays],
            ensure_ascii=False, indent=2,
        ))
    else:
        for holiday in holidays:
            print(f"{holiday.date.isoformat()}  {holiday.name}")
    return 0


def cmd_check(calendar: BusinessCalendar, args: argparse.Namespace) -> int:
    holiday = calendar.get_holiday(args.date)
    slots = calendar.get_business_hour_slots(args.date)
    result = {
        "date": args.date.isoformat(),
        "business_day": holiday is None,
        "holiday": holiday.name if holiday else None,
        "slots": [str(s) for s in slots],
    }
    if args.time:
        when = datetime.combine(args.date, parse_time(args.time))
        result["business_hour"] = calendar.is_business_hour(when)
        result["next_business_hour_start"] = calendar.next_business_hour_start(when).isoformat()
        result["next_business_hour_end"] = calendar.next_business_hour_end(when).isoformat()
    if args.json:
        print(json.dumps(result, ensure_ascii=False, indent=2))
    else:
        status = f"holiday ({result['holiday']})" if holiday else "business day"
        print(f"{result['date']}: {status}")
        if slots:
            print(f"  hours: {', '.join(result['slots'])}")
        if args.time:
            print(f"  business hour at {args.time}: {result['business_hour']}")
            print(f"  next start: {result['next_business_hour_start']}")
            print(f"  next end:   {result['next_business_hour_end']}")
    return 0


def cmd_dump(calendar: BusinessCalendar, args: argparse.Namespace) -> int:
    print(calendar.dump(args.start, args.end, args.date_format))
    return 0


def make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bizcal",
        description="Business calendar: holidays, business days and business hours",
    )
    parser.add_argument("--calendar", choices=sorted(CALENDARS), default="japan",
                        help="Public holiday rules (default: japan)")
    parser.add_argument("--pack", help="Calendar pack (YAML/JSON) instead of --calendar")
    parser.add_argument("--locale", help="Locale for holiday names (default: $BIZCAL_LOCALE)")
    parser.add_argument("--weekends", action="store_true", help="Treat Saturdays and Sundays as holidays")
    parser.add_argument("--hours", help="Business hours, e.g. '9-12,13-18'")
    parser.add_argument("--rules", help="CSV rule file to add")
    parser.add_argument("--json", action="store_true", help="JSON output")
    parser.add_argument("--log-json", action="store_true", help="JSON log lines")

    sub = parser.add_subparsers(dest="command", required=True)

    holidays = sub.add_parser("holidays", help="List holidays in a date range")
    holidays.add_argument("--from", dest="start", type=_parse_date, required=True)
    holidays.add_argument("--to", dest="end", type=_parse_date, required=True)
    holidays.set_defaults(func=cmd_holidays)

    check = sub.add_parser("check", help="Report on a single date")
    check.add_argument("date", type=_parse_date)
    check.add_argument("--time", help="Also check a time of day, e.g. 10:30")
    check.set_defaults(func=cmd_check)

    dump = sub.add_parser("dump", help="One line per date with hours or holiday name")
    dump.add_argument("--from", dest="start", type=_parse_date, required=True)
    dump.add_argument("--to", dest="end", type=_parse_date, required=True)
    dump.add_argument("--date-format", default="%Y/%m/%d")
    dump.set_defaults(func=cmd_dump)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = make_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level, json_format=args.log_json or settings.log_json)

    try:
        if settings.syukujitsu_refresh:
            CabinetOfficeFeed(JAPAN.PUBLIC_HOLIDAYS, settings.syukujitsu_url).refresh()
        calendar = build_calendar(args)
        return args.func(calendar, args)
    except BizCalError as e:
        logger.error("%s", e)
        print(json.dumps(e.to_dict(), ensure_ascii=False, default=str), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
