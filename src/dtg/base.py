"""
Core DTG Data Model.

This module defines the `DTG` class, an immutable Date-Time Group value. A `DTG` wraps a single timezone-aware
datetime and keeps its UTC offset as given, so that formatting a parsed DTG gives back the same letter.

Main responsibilities
---------------------
1. **Parsing** (via ``dtg.parser``): build a DTG from strings such as "271337BDEC10", "131337Z" or "030102", filling
   in omitted parts from an injectable clock.
2. **Formatting** (via ``dtg.formatting``): render the canonical form (time zone letter, always with month and year)
   or the expanded form (numeric UTC offset).
3. **Time zone conversion**: re-express the same instant using another time zone letter.
"""

from datetime import datetime, timedelta, timezone
from typing import Self

from dtg.clock import Clock, get_clock
from dtg.enums import DayOverflow, TimeZoneLetter
from dtg.formatting import format_dtg, format_expanded, letter_for_time
from dtg.parser import parse_datetime
from dtg.zones import fixed_zone, offset_for_letter, resolve_letter


def zone_for_letter_at(letter: str | TimeZoneLetter, instant: datetime, clock: Clock | None = None) -> timezone:
    """Get the fixed-offset time zone of a time zone letter at a given instant.

    Args:
        letter: The time zone letter (case-insensitive).
        instant: The timezone-aware instant, used to find the local offset in effect for "J".
        clock: Source of the local offset. Defaults to the system clock.

    Returns:
        Fixed-offset time zone, labelled with its numeric offset.

    Raises:
        UnknownLetterError: If the letter is not recognised.
    """
    letter = resolve_letter(letter)
    if letter.is_local:
        return fixed_zone(get_clock(clock).local_offset(instant))
    return fixed_zone(offset_for_letter(letter))


class DTG:
    """An immutable Date-Time Group: a point in time along with the UTC offset it is expressed in.

    Args:
        time: A timezone-aware datetime.

    Examples:
        >>> dtg = DTG.parse("271337BDEC10")
        >>> str(dtg)
        '271337BDEC10'
        >>> dtg.expanded()
        '271337+0200DEC10'
        >>> str(dtg.in_zone("Z"))
        '271137ZDEC10'
    """

    __slots__ = ("_time",)

    def __init__(self, time: datetime):
        if not isinstance(time, datetime):
            raise TypeError(f"DTG time must be a datetime. Got: '{type(time)}'")
        if time.utcoffset() is None:
            raise ValueError(f"DTG time must be timezone-aware. Got: '{time}'")
        self._time = time

    @classmethod
    def parse(
        cls,
        text: str,
        clock: Clock | None = None,
        day_overflow: str | DayOverflow = DayOverflow.ROLLOVER,
    ) -> Self:
        """Parse a DTG string.

        Args:
            text: The DTG string, e.g. "271337BDEC10", "131337z" or "030102".
            clock: Source of the current moment (for an omitted month or year) and of the local offset (for "J" or
                   an omitted letter). Defaults to the system clock.
            day_overflow: What to do if the day is beyond the end of the month:

                - ``ROLLOVER`` (default): Normalise forward into the following month.
                - ``ERROR``: Raise an error.

        Returns:
            The parsed DTG.

        Raises:
            InvalidDTGError: If the string is not a valid DTG.
        """
        return cls(parse_datetime(text, clock, day_overflow))

    @classmethod
    def now(cls, letter: str | TimeZoneLetter = TimeZoneLetter.Z, clock: Clock | None = None) -> Self:
        """Get the current moment as a DTG, to the minute.

        Args:
            letter: The time zone letter to express the current moment in. "J" is the local time zone.
            clock: Source of the current moment and local offset. Defaults to the system clock.

        Returns:
            The current DTG.
        """
        instant = get_clock(clock).now().replace(second=0, microsecond=0)
        return cls(instant.astimezone(zone_for_letter_at(letter, instant, clock)))

    @property
    def time(self) -> datetime:
        return self._time

    @property
    def offset(self) -> timedelta:
        return self._time.utcoffset()

    @property
    def letter(self) -> TimeZoneLetter:
        """The time zone letter of the DTG. Offsets without a letter of their own give "J"."""
        return letter_for_time(self._time)

    def in_zone(self, letter: str | TimeZoneLetter, clock: Clock | None = None) -> Self:
        """Express the same instant using a different time zone letter.

        Args:
            letter: The time zone letter to convert to. "J" is the local time zone.
            clock: Source of the local offset. Defaults to the system clock.

        Returns:
            A new DTG for the same instant.
        """
        return type(self)(self._time.astimezone(zone_for_letter_at(letter, self._time, clock)))

    def expanded(self) -> str:
        """Return the expanded form of the DTG, with the numeric UTC offset in place of the letter."""
        return format_expanded(self._time)

    def __str__(self) -> str:
        """Return the canonical form of the DTG."""
        return format_dtg(self._time)

    def __repr__(self) -> str:
        return f"DTG('{format_dtg(self._time)}')"

    def __eq__(self, other: object) -> bool:
        """Check if two DTG instances are equal.

        Two DTGs are equal when they are the same instant expressed with the same UTC offset.

        Args:
            other: The object to compare.

        Returns:
            bool: True if the DTG instances are equal, False otherwise.
        """
        if not isinstance(other, DTG):
            return NotImplemented
        return self._time == other._time and self.offset == other.offset

    def __hash__(self) -> int:
        return hash((self._time, self.offset))


def parse(
    text: str,
    clock: Clock | None = None,
    day_overflow: str | DayOverflow = DayOverflow.ROLLOVER,
) -> DTG:
    """Parse a DTG string. See :meth:`DTG.parse`."""
    return DTG.parse(text, clock, day_overflow)
