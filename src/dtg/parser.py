"""
DTG Parsing Module.

This module turns Date-Time Group strings into timezone-aware datetimes. A DTG is made up of:

- ``DD``  day of the month, 01-31
- ``HH``  hour, 00-23
- ``MM``  minute, 00-59
- ``L``   optional time zone letter (case-insensitive); "J" or no letter at all means local time
- ``MON`` optional three-letter month abbreviation (case-insensitive), only allowed after a letter
- ``YY``  optional two-digit year (20YY), only allowed after a month

For example "271337BDEC10", "131337z" or "030102". Anything left out is filled in from the clock: the month and
year from the current moment, and the UTC offset (for "J" or no letter) from the local time zone.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from dtg.clock import Clock, get_clock
from dtg.enums import DayOverflow, Month, TimeZoneLetter
from dtg.exceptions import (
    FieldRangeError,
    InvalidFormatError,
    UnhandledEnumError,
    UnknownLetterError,
    UnknownMonthError,
)
from dtg.zones import fixed_zone, format_offset, offset_for_letter

logger = logging.getLogger(__name__)

CENTURY = 2000

_DTG_PATTERN = re.compile(
    r"(?P<day>[0-9]{2})(?P<hour>[0-9]{2})(?P<minute>[0-9]{2})"
    r"(?:(?P<letter>[^0-9])(?:(?P<month>[^0-9]{3})(?P<year>[0-9]{2})?)?)?"
)

_FIELD_RANGES = {
    "day": (1, 31),
    "hour": (0, 23),
    "minute": (0, 59),
}

_ZONE_FIELD_NAMES = ("day", "hour", "minute", "month", "year")


@dataclass(frozen=True)
class DTGFields:
    """The individual fields of a DTG string, after validation.

    Attributes:
        day: Day of the month, 1-31.
        hour: Hour of the day, 0-23.
        minute: Minute of the hour, 0-59.
        letter: The time zone letter, if given.
        month: The month, if given.
        year: The full year (e.g. 2010 for "10"), if given.
        source: The string the fields were parsed from.
    """

    day: int
    hour: int
    minute: int
    letter: TimeZoneLetter | None = None
    month: Month | None = None
    year: int | None = None
    source: str | None = field(default=None, compare=False)


def _check_number(name: str, text: str, value: str | None = None) -> int:
    """Check a two-digit day, hour or minute field and convert it to an integer.

    Args:
        name: Name of the field, one of "day", "hour" or "minute".
        text: The field text.
        value: The full DTG string the field came from, for error messages.

    Returns:
        The field value.

    Raises:
        InvalidFormatError: If the field is not exactly two ASCII digits.
        FieldRangeError: If the field is outside of its valid range.
    """
    if len(text) != 2 or not text.isascii() or not text.isdigit():
        raise InvalidFormatError(f"{name} must be two digits, got '{text}'", value)

    number = int(text)
    low, high = _FIELD_RANGES[name]
    if not low <= number <= high:
        raise FieldRangeError(f"{name} must be between {low:02d} and {high:02d}, got '{text}'", value)
    return number


def _check_letter(text: str, value: str | None = None) -> TimeZoneLetter:
    try:
        return TimeZoneLetter.from_str(text)
    except KeyError:
        raise UnknownLetterError(f"unknown time zone letter '{text}'", value)


def _check_month(text: str, value: str | None = None) -> Month:
    try:
        return Month.from_str(text)
    except KeyError:
        raise UnknownMonthError(f"unknown month '{text}'", value)


def _check_year(text: str, value: str | None = None) -> int:
    if len(text) != 2 or not text.isascii() or not text.isdigit():
        raise InvalidFormatError(f"year must be two digits, got '{text}'", value)
    return CENTURY + int(text)


def parse_fields(text: str) -> DTGFields:
    """Split a DTG string into its fields, validating each of them.

    Checks are carried out in order (shape, day, hour, minute, letter, month, year) and the first failure is raised.

    Args:
        text: The DTG string.

    Returns:
        The validated fields. Optional fields that were left out are None.

    Raises:
        InvalidFormatError: If the string does not have the shape of a DTG.
        FieldRangeError: If the day, hour or minute is out of range.
        UnknownLetterError: If the time zone letter is not recognised.
        UnknownMonthError: If the month abbreviation is not recognised.
    """
    if not isinstance(text, str):
        raise TypeError(f"DTG must be a string. Got: '{type(text)}'")

    match = _DTG_PATTERN.fullmatch(text)
    if match is None:
        raise InvalidFormatError("expected DDHHMM, DDHHMM[L], DDHHMM[L][MON] or DDHHMM[L][MON][YY]", text)

    groups = match.groupdict()
    day = _check_number("day", groups["day"], text)
    hour = _check_number("hour", groups["hour"], text)
    minute = _check_number("minute", groups["minute"], text)

    letter = _check_letter(groups["letter"], text) if groups["letter"] is not None else None
    month = _check_month(groups["month"], text) if groups["month"] is not None else None
    year = _check_year(groups["year"], text) if groups["year"] is not None else None

    return DTGFields(day, hour, minute, letter, month, year, source=text)


def validate(text: str) -> None:
    """Check that a string is a valid DTG, without resolving it to a point in time.

    Args:
        text: The DTG string.

    Raises:
        InvalidDTGError: If the string is not a valid DTG. The subclass raised describes the problem.
    """
    parse_fields(text)


def _wall_time(
    year: int, month: int, day: int, hour: int, minute: int, day_overflow: DayOverflow, value: str | None = None
) -> datetime:
    """Build a naive wall clock datetime from the DTG fields.

    Args:
        year: Full year.
        month: Month number.
        day: Day of the month, 1-31.
        hour: Hour of the day.
        minute: Minute of the hour.
        day_overflow: What to do if the day is beyond the end of the month.
        value: The DTG string, for error messages.

    Returns:
        Naive datetime of the wall clock time.

    Raises:
        FieldRangeError: If the day is beyond the end of the month, and ``day_overflow`` is ERROR.
    """
    if day_overflow == DayOverflow.ROLLOVER:
        # Count forward from the first of the month, so day 31 of a 30-day month lands on the 1st of the next
        return datetime(year, month, 1, hour, minute) + timedelta(days=day - 1)

    elif day_overflow == DayOverflow.ERROR:
        try:
            return datetime(year, month, day, hour, minute)
        except ValueError:
            raise FieldRangeError(f"day {day:02d} is beyond the end of {Month(month)} {year}", value)

    else:
        # Should never reach here, unless a new enum value is added in the future and logic has not been added here
        raise UnhandledEnumError(f"Unhandled day overflow option: {day_overflow}")


def _zone_for_letter(letter: TimeZoneLetter, wall_time: datetime, clock: Clock) -> timezone:
    """Get the fixed-offset zone a DTG's wall time is expressed in.

    Args:
        letter: The time zone letter.
        wall_time: The naive wall clock time, used to find the local offset in effect at that time for "J".
        clock: Source of the local offset.

    Returns:
        Fixed-offset time zone, labelled with its numeric offset.
    """
    if letter.is_local:
        offset = clock.local_offset(wall_time)
        logger.debug("Resolved local time zone letter J at %s to %s", wall_time.isoformat(), format_offset(offset))
        return fixed_zone(offset)
    return fixed_zone(offset_for_letter(letter))


def resolve(
    fields: DTGFields,
    clock: Clock | None = None,
    day_overflow: str | DayOverflow = DayOverflow.ROLLOVER,
) -> datetime:
    """Resolve validated DTG fields to a point in time.

    Args:
        fields: The DTG fields.
        clock: Source of the current moment and local offset. Defaults to the system clock.
        day_overflow: What to do if the day is beyond the end of the month.

    Returns:
        Timezone-aware datetime, in the (fixed offset) time zone given by the DTG.
    """
    clock = get_clock(clock)
    day_overflow = DayOverflow(day_overflow)

    year = fields.year
    month = fields.month.value if fields.month is not None else None
    if year is None or month is None:
        now = clock.now()
        if year is None:
            year = now.year
        if month is None:
            month = now.month
        logger.debug("Filled in month/year of DTG '%s' from the clock: %s %s", fields.source, Month(month), year)

    wall_time = _wall_time(year, month, fields.day, fields.hour, fields.minute, day_overflow, fields.source)
    letter = fields.letter if fields.letter is not None else TimeZoneLetter.J
    return wall_time.replace(tzinfo=_zone_for_letter(letter, wall_time, clock))


def parse_datetime(
    text: str,
    clock: Clock | None = None,
    day_overflow: str | DayOverflow = DayOverflow.ROLLOVER,
) -> datetime:
    """Parse a DTG string to a timezone-aware datetime.

    Args:
        text: The DTG string.
        clock: Source of the current moment and local offset. Defaults to the system clock.
        day_overflow: What to do if the day is beyond the end of the month.

    Returns:
        Timezone-aware datetime. The time zone is a fixed offset, so formatting the result gives back the DTG.

    Raises:
        InvalidDTGError: If the string is not a valid DTG.
    """
    return resolve(parse_fields(text), clock, day_overflow)


def get_numeric_time_zone(letter: str, *fields: str, clock: Clock | None = None) -> timezone:
    """Get the fixed-offset time zone of a time zone letter.

    For the ordinary letters this is simply the fixed offset. For "J" (local time) the offset depends on the date,
    because of daylight saving, so the day, hour, minute, month and year can optionally be given to say *when* the
    local offset is wanted. Any of these left out, or given as an empty string, is taken from the current moment.

    Every non-empty field is validated, even when the letter is not "J".

    Args:
        letter: The time zone letter (case-insensitive).
        *fields: Up to five strings: day, hour, minute, month and year, in that order.
        clock: Source of the current moment and local offset. Defaults to the system clock.

    Returns:
        A ``datetime.timezone`` with the resolved offset, named with its numeric label (e.g. "-0300").

    Raises:
        UnknownLetterError: If the letter is not recognised.
        InvalidFormatError: If too many fields are given, or a field has the wrong width or characters.
        FieldRangeError: If the day, hour or minute is out of range.
        UnknownMonthError: If the month is not recognised.
    """
    if len(fields) > len(_ZONE_FIELD_NAMES):
        raise InvalidFormatError(
            f"expected at most {len(_ZONE_FIELD_NAMES)} fields ({', '.join(_ZONE_FIELD_NAMES)}), got {len(fields)}"
        )

    tz_letter = _check_letter(letter)

    supplied = {name: text for name, text in zip(_ZONE_FIELD_NAMES, fields) if text}
    day = _check_number("day", supplied["day"]) if "day" in supplied else None
    hour = _check_number("hour", supplied["hour"]) if "hour" in supplied else None
    minute = _check_number("minute", supplied["minute"]) if "minute" in supplied else None
    month = _check_month(supplied["month"]).value if "month" in supplied else None
    year = _check_year(supplied["year"]) if "year" in supplied else None

    if not tz_letter.is_local:
        return fixed_zone(offset_for_letter(tz_letter))

    clock = get_clock(clock)
    if not supplied:
        return fixed_zone(clock.local_offset())

    now = clock.now()
    local_now = now.astimezone(fixed_zone(clock.local_offset(now)))
    wall_time = _wall_time(
        year if year is not None else local_now.year,
        month if month is not None else local_now.month,
        day if day is not None else local_now.day,
        hour if hour is not None else local_now.hour,
        minute if minute is not None else local_now.minute,
        DayOverflow.ROLLOVER,
    )
    return _zone_for_letter(tz_letter, wall_time, clock)
