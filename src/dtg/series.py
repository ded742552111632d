"""
Polars Integration Module.

This module applies the DTG parser and formatter to whole Polars columns:

- ``validate_series``: boolean mask of which strings are valid DTGs.
- ``parse_series``: DTG strings to a ``Datetime`` column.
- ``format_series``: ``Datetime`` column to canonical DTG strings.
- ``parse_column``: add a parsed ``Datetime`` column to a DataFrame.

A Polars ``Datetime`` column has a single time zone, so parsed instants are stored in UTC. The original letters are
not kept; use ``format_series`` with a letter to get DTGs back in a particular zone.
"""

import logging
from datetime import timezone

import polars as pl

from dtg.base import zone_for_letter_at
from dtg.clock import Clock, get_clock
from dtg.enums import DayOverflow, TimeZoneLetter
from dtg.exceptions import InvalidDTGError
from dtg.formatting import format_dtg
from dtg.parser import parse_datetime, validate
from dtg.utils import check_columns_in_dataframe, check_series_dtype
from dtg.zones import resolve_letter

logger = logging.getLogger(__name__)

DATETIME_DTYPE = pl.Datetime("us", "UTC")


def _is_valid(text: str | None) -> bool:
    if text is None:
        return False
    try:
        validate(text)
    except InvalidDTGError:
        return False
    return True


def validate_series(dtgs: pl.Series) -> pl.Series:
    """Check which values of a Series are valid DTG strings.

    Args:
        dtgs: A String Series of DTGs.

    Returns:
        A Boolean Series of the same name and length. Null values are not valid.
    """
    check_series_dtype(dtgs, pl.String)
    return pl.Series(dtgs.name, [_is_valid(text) for text in dtgs.to_list()], dtype=pl.Boolean)


def parse_series(
    dtgs: pl.Series,
    clock: Clock | None = None,
    day_overflow: str | DayOverflow = DayOverflow.ROLLOVER,
    strict: bool = True,
) -> pl.Series:
    """Parse a Series of DTG strings into a UTC Datetime Series.

    Args:
        dtgs: A String Series of DTGs.
        clock: Source of the current moment and local offset. Defaults to the system clock.
        day_overflow: What to do if the day is beyond the end of the month.
        strict: If True, raise on the first invalid DTG. If False, invalid DTGs become null.

    Returns:
        A ``Datetime("us", "UTC")`` Series of the same name and length. Null values stay null.

    Raises:
        InvalidDTGError: If ``strict`` and any value is not a valid DTG.
    """
    check_series_dtype(dtgs, pl.String)
    clock = get_clock(clock)
    day_overflow = DayOverflow(day_overflow)

    values = []
    for text in dtgs.to_list():
        if text is None:
            values.append(None)
            continue
        try:
            values.append(parse_datetime(text, clock, day_overflow).astimezone(timezone.utc))
        except InvalidDTGError as err:
            if strict:
                raise
            logger.debug("Setting invalid DTG to null: %s", err)
            values.append(None)

    return pl.Series(dtgs.name, values, dtype=DATETIME_DTYPE)


def format_series(
    date_times: pl.Series,
    letter: str | TimeZoneLetter = TimeZoneLetter.Z,
    clock: Clock | None = None,
) -> pl.Series:
    """Format a Datetime Series as canonical DTG strings.

    Args:
        date_times: A Datetime Series. Values without a time zone are taken as UTC.
        letter: The time zone letter to express each DTG in. "J" uses the local offset in effect at each instant.
        clock: Source of the local offset for "J". Defaults to the system clock.

    Returns:
        A String Series of the same name and length. Null values stay null.

    Raises:
        UnknownLetterError: If the letter is not recognised.
    """
    check_series_dtype(date_times, pl.Datetime)
    letter = resolve_letter(letter)
    clock = get_clock(clock)

    values = []
    for date_time in date_times.to_list():
        if date_time is None:
            values.append(None)
            continue
        if date_time.tzinfo is None:
            date_time = date_time.replace(tzinfo=timezone.utc)
        values.append(format_dtg(date_time.astimezone(zone_for_letter_at(letter, date_time, clock))))

    return pl.Series(date_times.name, values, dtype=pl.String)


def parse_column(
    df: pl.DataFrame,
    column: str,
    alias: str | None = None,
    clock: Clock | None = None,
    day_overflow: str | DayOverflow = DayOverflow.ROLLOVER,
    strict: bool = True,
) -> pl.DataFrame:
    """Parse a column of DTG strings in a DataFrame.

    Args:
        df: The DataFrame.
        column: Name of the column of DTG strings.
        alias: Name of the parsed column. If None, the DTG column is replaced.
        clock: Source of the current moment and local offset. Defaults to the system clock.
        day_overflow: What to do if the day is beyond the end of the month.
        strict: If True, raise on the first invalid DTG. If False, invalid DTGs become null.

    Returns:
        A new DataFrame with the parsed ``Datetime("us", "UTC")`` column.

    Raises:
        ColumnNotFoundError: If the column does not exist in the DataFrame.
    """
    check_columns_in_dataframe(df, column)
    parsed = parse_series(df[column], clock, day_overflow, strict)
    return df.with_columns(parsed.alias(alias or column))
