"""
DTG Enumerations.

This module defines the closed sets of symbols used in Date-Time Groups, along with the enums used to configure
parsing behaviour.
"""

from enum import Enum


class TimeZoneLetter(Enum):
    """Enum representing the military time zone letters.

    The 25 ordinary letters (A-Z, skipping J) each stand for a fixed whole-hour offset from UTC, increasing from
    Y (UTC-12) through Z (UTC) to M (UTC+12). The value of each ordinary member is that offset in hours.

    J ("Juliet") is the special case: it has no fixed offset and means "the local time of the observer". Its value is
    ``None``.
    """

    Y = -12
    X = -11
    W = -10
    V = -9
    U = -8
    T = -7
    S = -6
    R = -5
    Q = -4
    P = -3
    O = -2  # noqa: E741
    N = -1
    Z = 0
    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7
    H = 8
    I = 9  # noqa: E741
    K = 10
    L = 11
    M = 12
    J = None

    @property
    def is_local(self) -> bool:
        return self is TimeZoneLetter.J

    @classmethod
    def from_str(cls, letter: str) -> "TimeZoneLetter":
        """Look up a time zone letter, ignoring case.

        Args:
            letter: A single letter.

        Returns:
            The matching TimeZoneLetter.

        Raises:
            KeyError: If the input is not a single letter of the military time zone alphabet.
        """
        if not isinstance(letter, str) or len(letter) != 1 or not letter.isascii():
            raise KeyError(letter)
        return cls[letter.upper()]

    def __str__(self) -> str:
        return self.name


class Month(Enum):
    """Enum representing the twelve fixed English month abbreviations used in DTGs.

    The value of each member is the calendar month number.
    """

    JAN = 1
    FEB = 2
    MAR = 3
    APR = 4
    MAY = 5
    JUN = 6
    JUL = 7
    AUG = 8
    SEP = 9
    OCT = 10
    NOV = 11
    DEC = 12

    @classmethod
    def from_str(cls, abbreviation: str) -> "Month":
        """Look up a month by its three-letter abbreviation, ignoring case.

        Args:
            abbreviation: A three-letter month abbreviation such as "Jan" or "DEC".

        Returns:
            The matching Month.

        Raises:
            KeyError: If the abbreviation is not one of the twelve known months.
        """
        if not isinstance(abbreviation, str) or len(abbreviation) != 3 or not abbreviation.isascii():
            raise KeyError(abbreviation)
        return cls[abbreviation.upper()]

    def __str__(self) -> str:
        return self.name


class DayOverflow(Enum):
    """Enum representing how to handle a day that is within 01-31 but beyond the length of its month
    (e.g. the 31st of November).

    Attributes:
        ROLLOVER: Normalise forward into the following month (31 NOV becomes 1 DEC).
        ERROR: Raise an error.
    """

    ROLLOVER = "rollover"
    ERROR = "error"
