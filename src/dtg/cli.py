"""Command-line entry point for parsing, validating and formatting DTGs."""

import argparse
import logging
import sys
from typing import Sequence

from dtg.base import DTG
from dtg.enums import DayOverflow, TimeZoneLetter
from dtg.exceptions import DTGError
from dtg.formatting import EXPANDED_LAYOUT
from dtg.parser import get_numeric_time_zone, validate

logger = logging.getLogger(__name__)


def _validate(args: argparse.Namespace) -> int:
    failures = 0
    for text in args.dtgs:
        try:
            validate(text)
        except DTGError as err:
            failures += 1
            print(f"{text}: {err}", file=sys.stderr)
        else:
            print(f"{text}: OK")
    return 1 if failures else 0


def _parse(args: argparse.Namespace) -> int:
    dtg = DTG.parse(args.dtg, day_overflow=args.day_overflow)
    print(f"canonical: {dtg}")
    print(f"expanded:  {dtg.expanded()}  ({EXPANDED_LAYOUT})")
    print(f"iso:       {dtg.time.isoformat()}")
    return 0


def _zone(args: argparse.Namespace) -> int:
    zone = get_numeric_time_zone(args.letter, *args.fields)
    print(f"{args.letter.upper()}: {zone.tzname(None)} ({int(zone.utcoffset(None).total_seconds())} seconds)")
    return 0


def _now(args: argparse.Namespace) -> int:
    print(DTG.now(args.letter))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dtg", description="Parse, validate and format military Date-Time Groups.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate", help="Check that DTG strings are valid")
    validate_parser.add_argument("dtgs", nargs="+", metavar="DTG")
    validate_parser.set_defaults(func=_validate)

    parse_parser = subparsers.add_parser("parse", help="Parse a DTG and show its canonical and expanded forms")
    parse_parser.add_argument("dtg", metavar="DTG")
    parse_parser.add_argument(
        "--day-overflow",
        choices=[o.value for o in DayOverflow],
        default=DayOverflow.ROLLOVER.value,
        help="What to do if the day is beyond the end of the month",
    )
    parse_parser.set_defaults(func=_parse)

    zone_parser = subparsers.add_parser("zone", help="Show the UTC offset of a time zone letter")
    zone_parser.add_argument("letter", metavar="LETTER")
    zone_parser.add_argument("fields", nargs="*", metavar="FIELD", help="Optional day, hour, minute, month and year")
    zone_parser.set_defaults(func=_zone)

    now_parser = subparsers.add_parser("now", help="Show the current moment as a DTG")
    now_parser.add_argument("--letter", default=TimeZoneLetter.Z.name, help="Time zone letter (default: Z)")
    now_parser.set_defaults(func=_now)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except DTGError as err:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
