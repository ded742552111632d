"""
Time Zone Letter Module.

This module holds the fixed, bidirectional mapping between the military time zone letters and their UTC offsets:

- ``offset_for_letter`` maps one of the 25 ordinary letters to its offset in seconds.
- ``letter_for_offset`` maps a whole-hour offset back to its letter.

Both mappings are built once at import and never modified afterwards. The local time letter "J" has no fixed offset
and so is not part of either mapping; resolving it requires a clock (see ``dtg.clock``).
"""

from datetime import timedelta, timezone

from dtg.enums import TimeZoneLetter
from dtg.exceptions import UnknownLetterError, UnknownOffsetError

SECONDS_PER_HOUR = 3600

_LETTER_TO_OFFSET: dict[TimeZoneLetter, int] = {
    letter: letter.value * SECONDS_PER_HOUR for letter in TimeZoneLetter if not letter.is_local
}
_OFFSET_TO_LETTER: dict[int, TimeZoneLetter] = {offset: letter for letter, offset in _LETTER_TO_OFFSET.items()}


def _offset_seconds(offset: int | timedelta) -> int:
    if isinstance(offset, timedelta):
        return int(offset.total_seconds())
    return offset


def offset_for_letter(letter: str | TimeZoneLetter) -> int:
    """Get the fixed UTC offset of a time zone letter.

    Args:
        letter: A single canonical (uppercase) letter, or a TimeZoneLetter.

    Returns:
        The signed offset from UTC, in seconds.

    Raises:
        UnknownLetterError: If the letter has no fixed offset. This includes "J" (local time), lowercase letters,
                            multi-character strings and anything non-alphabetic.
    """
    if isinstance(letter, str):
        try:
            letter = TimeZoneLetter[letter]
        except KeyError:
            raise UnknownLetterError(f"Unknown time zone letter: '{letter}'")

    try:
        return _LETTER_TO_OFFSET[letter]
    except KeyError:
        raise UnknownLetterError(f"Time zone letter '{letter}' has no fixed offset")


def letter_for_offset(offset: int | timedelta) -> TimeZoneLetter:
    """Get the time zone letter for a fixed UTC offset.

    Args:
        offset: The offset from UTC, in seconds or as a timedelta.

    Returns:
        The TimeZoneLetter whose fixed offset equals the given offset.

    Raises:
        UnknownOffsetError: If the offset is not one of the 25 whole-hour offsets between -12 and +12 hours.
    """
    seconds = _offset_seconds(offset)
    try:
        return _OFFSET_TO_LETTER[seconds]
    except KeyError:
        raise UnknownOffsetError(f"No time zone letter for UTC offset of {seconds} seconds ({format_offset(seconds)})")


def format_offset(offset: int | timedelta) -> str:
    """Format a UTC offset as a numeric label.

    Args:
        offset: The offset from UTC, in seconds or as a timedelta.

    Returns:
        The offset formatted as ``±HHMM``, e.g. "+0200", "-0930", "+0000". Any seconds are dropped.
    """
    seconds = _offset_seconds(offset)
    sign = "-" if seconds < 0 else "+"
    hours, remainder = divmod(abs(seconds), SECONDS_PER_HOUR)
    return f"{sign}{hours:02d}{remainder // 60:02d}"


def fixed_zone(offset: int | timedelta) -> timezone:
    """Create a fixed-offset time zone labelled with its numeric offset.

    Args:
        offset: The offset from UTC, in seconds or as a timedelta.

    Returns:
        A ``datetime.timezone`` with the given offset, named e.g. "+0200".
    """
    seconds = _offset_seconds(offset)
    return timezone(timedelta(seconds=seconds), format_offset(seconds))


def resolve_letter(letter: str | TimeZoneLetter) -> TimeZoneLetter:
    """Convert a time zone letter given as a string (in any case) to a TimeZoneLetter.

    Args:
        letter: A single letter, or a TimeZoneLetter (returned as-is).

    Returns:
        The TimeZoneLetter.

    Raises:
        UnknownLetterError: If the letter is not part of the military time zone alphabet.
    """
    if isinstance(letter, TimeZoneLetter):
        return letter
    try:
        return TimeZoneLetter.from_str(letter)
    except KeyError:
        raise UnknownLetterError(f"Unknown time zone letter: '{letter}'")
