"""
DTG Formatting Module.

This module renders timezone-aware datetimes as Date-Time Group strings. Two forms are provided:

- The canonical form, ``DDHHMM`` + time zone letter + ``MONYY``, e.g. "271337BDEC10".
- The expanded form, which has the numeric UTC offset in place of the letter, e.g. "271337+0200DEC10".

Month names always come from the fixed English abbreviations, never from the process locale.
"""

import logging
import re
from datetime import datetime, timedelta

from dtg.enums import Month, TimeZoneLetter
from dtg.exceptions import InvalidFormatError, UnknownMonthError, UnknownOffsetError
from dtg.zones import fixed_zone, format_offset, letter_for_offset

logger = logging.getLogger(__name__)

NUMERIC_LAYOUT = "DDHHMM±HHMMMonYY"
EXPANDED_LAYOUT = "DDHHMM±HHMMMONYY"

_EXPANDED_PATTERN = re.compile(
    r"(?P<day>[0-9]{2})(?P<hour>[0-9]{2})(?P<minute>[0-9]{2})"
    r"(?P<sign>[+-])(?P<offset_hours>[0-9]{2})(?P<offset_minutes>[0-5][0-9])"
    r"(?P<month>[A-Za-z]{3})(?P<year>[0-9]{2})"
)


def _check_aware(time: datetime) -> timedelta:
    """Return the UTC offset of a datetime, checking that it has one.

    Args:
        time: The datetime to check.

    Returns:
        The UTC offset of the datetime.

    Raises:
        TypeError: If the value is not a datetime.
        ValueError: If the datetime is naive.
    """
    if not isinstance(time, datetime):
        raise TypeError(f"Expected a datetime. Got: '{type(time)}'")
    offset = time.utcoffset()
    if offset is None:
        raise ValueError(f"Datetime must be timezone-aware to format as a DTG: {time}")
    return offset


def format_month(time: datetime) -> str:
    """Format the month of a datetime as an uppercase three-letter abbreviation, e.g. "DEC"."""
    return Month(time.month).name


def format_year(time: datetime) -> str:
    """Format the year of a datetime as two digits."""
    return f"{time.year % 100:02d}"


def letter_for_time(time: datetime) -> TimeZoneLetter:
    """Work out the time zone letter for the UTC offset of a datetime.

    Offsets that are not one of the 25 whole-hour offsets of the letter table (e.g. UTC+5:30) have no letter of their
    own. These fall back to "J", meaning "local time", which is the same letter used on input for the observer's local
    time zone.

    Args:
        time: A timezone-aware datetime.

    Returns:
        The time zone letter.
    """
    offset = _check_aware(time)
    try:
        return letter_for_offset(offset)
    except UnknownOffsetError:
        logger.debug("No time zone letter for offset %s, falling back to J", format_offset(offset))
        return TimeZoneLetter.J


def format_dtg(time: datetime) -> str:
    """Format a datetime as a canonical DTG string.

    The day, hour and minute are those of the datetime's own wall clock time (i.e. in its own time zone, not converted
    to UTC). The month and year are always included. Seconds and smaller are dropped.

    Args:
        time: A timezone-aware datetime.

    Returns:
        The DTG string, e.g. "271337BDEC10".
    """
    letter = letter_for_time(time)
    return f"{time.day:02d}{time.hour:02d}{time.minute:02d}{letter.name}{format_month(time)}{format_year(time)}"


def format_expanded(time: datetime) -> str:
    """Format a datetime as an expanded DTG string, with the numeric UTC offset in place of the letter.

    Args:
        time: A timezone-aware datetime.

    Returns:
        The expanded DTG string, e.g. "271337+0200DEC10".
    """
    offset = _check_aware(time)
    day_hour_minute = f"{time.day:02d}{time.hour:02d}{time.minute:02d}"
    return f"{day_hour_minute}{format_offset(offset)}{format_month(time)}{format_year(time)}"


def parse_expanded(text: str) -> datetime:
    """Parse an expanded DTG string, in the ``DDHHMM±HHMMMonYY`` layout, to a timezone-aware datetime.

    The month is matched case-insensitively. Unlike the canonical form, every part of the expanded form is required,
    so no clock is needed.

    Args:
        text: The expanded DTG string, e.g. "181920+0200Feb26".

    Returns:
        Timezone-aware datetime in a fixed-offset zone.

    Raises:
        InvalidFormatError: If the string does not match the expanded layout, or a field is out of range.
        UnknownMonthError: If the month is not recognised.
    """
    match = _EXPANDED_PATTERN.fullmatch(text) if isinstance(text, str) else None
    if match is None:
        raise InvalidFormatError(f"expected the layout {NUMERIC_LAYOUT}", text)

    groups = match.groupdict()
    try:
        month = Month.from_str(groups["month"])
    except KeyError:
        raise UnknownMonthError(f"unknown month '{groups['month']}'", text)

    offset = int(groups["offset_hours"]) * 3600 + int(groups["offset_minutes"]) * 60
    if groups["sign"] == "-":
        offset = -offset

    try:
        return datetime(
            2000 + int(groups["year"]),
            month.value,
            int(groups["day"]),
            int(groups["hour"]),
            int(groups["minute"]),
            tzinfo=fixed_zone(offset),
        )
    except ValueError as err:
        raise InvalidFormatError(str(err), text)
