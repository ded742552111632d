"""
Clock Module.

Parsing a DTG depends on two pieces of ambient state: the current moment (to fill in an omitted month or year) and
the UTC offset of the observer's local time zone (to resolve the "J" letter, or a DTG with no letter at all). Both
reads are isolated behind the ``Clock`` interface so that they can be replaced, e.g. with a ``FixedClock`` in tests.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone


class Clock(ABC):
    """Source of the current moment and of the local UTC offset."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current moment as a timezone-aware datetime in UTC."""

    @abstractmethod
    def local_offset(self, at: datetime | None = None) -> timedelta:
        """Return the UTC offset of local time.

        Local offsets may change throughout the year (daylight saving), so the offset can be requested for a
        specific point in time.

        Args:
            at: When to get the offset for. ``None`` means now; an aware datetime is taken as an absolute instant; a
                naive datetime is taken as a local wall clock time.

        Returns:
            The offset of local time from UTC.
        """


class SystemClock(Clock):
    """Clock backed by the system clock and the process's local time zone."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def local_offset(self, at: datetime | None = None) -> timedelta:
        if at is None:
            at = datetime.now(timezone.utc)
        # astimezone() without arguments converts into the system local zone; naive values are taken as local time
        return at.astimezone().utcoffset()

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock(Clock):
    """Clock frozen at a given instant, with a constant local offset."""

    def __init__(self, instant: datetime, offset: int | timedelta = 0):
        """Initialise the fixed clock.

        Args:
            instant: The moment returned by ``now``. Naive datetimes are taken as UTC.
            offset: The local UTC offset, in seconds or as a timedelta.
        """
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        if not isinstance(offset, timedelta):
            offset = timedelta(seconds=offset)

        self._instant = instant.astimezone(timezone.utc)
        self._offset = offset

    def now(self) -> datetime:
        return self._instant

    def local_offset(self, at: datetime | None = None) -> timedelta:
        return self._offset

    def __repr__(self) -> str:
        return f"FixedClock({self._instant.isoformat()}, offset={self._offset})"


_SYSTEM_CLOCK = SystemClock()


def get_clock(clock: Clock | None = None) -> Clock:
    """Resolve an optional clock argument, defaulting to the system clock.

    Args:
        clock: The clock to use, if any.

    Returns:
        The given clock, or the shared SystemClock if none was given.
    """
    if clock is None:
        return _SYSTEM_CLOCK
    if not isinstance(clock, Clock):
        raise TypeError(f"Clock must be a Clock instance or None. Got: '{type(clock)}'")
    return clock
