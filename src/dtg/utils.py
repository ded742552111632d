"""
DTG Utility Module.

This module provides helper functions used by the Polars integration of the dtg package.
"""

from collections.abc import Iterable

import polars as pl

from dtg.exceptions import ColumnNotFoundError


def check_columns_in_dataframe(df: pl.DataFrame, columns: str | Iterable[str]) -> None:
    """Checks that columns exist in the dataframe.

    Args:
        df: DataFrame to check against
        columns: String or Iterable of column name(s) to check

    Raises:
        ColumnNotFoundError: If any of the columns in the list do not exist in the dataframe.
    """
    if isinstance(columns, str):
        columns = [columns]

    invalid_columns = sorted(set(columns) - set(df.columns))
    if invalid_columns:
        raise ColumnNotFoundError(f"Columns not found in dataframe: {invalid_columns}")


def check_series_dtype(series: pl.Series, expected: type[pl.DataType]) -> None:
    """Checks that a Series holds the expected type of data.

    A Series of type ``pl.Null`` (e.g. empty, or only nulls) is always accepted.

    Args:
        series: The Series to check.
        expected: The expected Polars data type class, e.g. ``pl.String`` or ``pl.Datetime``.

    Raises:
        TypeError: If the Series is of a different type.
    """
    if series.dtype == pl.Null or series.dtype == expected:
        return
    raise TypeError(f"Series '{series.name}' must be of type {expected}, got '{series.dtype}'")
