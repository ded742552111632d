# [start_block_1]
from datetime import datetime, timedelta, timezone

import polars as pl

from dtg import DTG, FixedClock, get_numeric_time_zone, validate

# [end_block_1]
from dtg.exceptions import InvalidDTGError
from dtg.series import format_series, parse_column

# A fixed clock so that the examples give the same output whenever they are run
CLOCK = FixedClock(datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc), offset=timedelta(hours=1))


def parse_full_dtg() -> DTG:
    # [start_block_2]
    dtg = DTG.parse("271337BDEC10")

    print(dtg)  # 271337BDEC10
    print(dtg.expanded())  # 271337+0200DEC10
    print(dtg.time.isoformat())  # 2010-12-27T13:37:00+02:00
    # [end_block_2]
    return dtg


def parse_short_dtg() -> DTG:
    # [start_block_3]
    # Month and year are filled in from the clock, so "241500Z" is the 24th of the current month
    dtg = DTG.parse("241500z", clock=CLOCK)
    print(dtg)  # 241500ZOCT26

    # With no letter (or "J") the local time zone of the clock is used
    local = DTG.parse("241500", clock=CLOCK)
    print(local.expanded())  # 241500+0100OCT26
    # [end_block_3]
    return dtg


def convert_zones() -> None:
    # [start_block_4]
    dtg = DTG.parse("271337BDEC10")
    print(dtg.in_zone("Z"))  # 271137ZDEC10
    print(dtg.in_zone("R"))  # 270637RDEC10

    print(get_numeric_time_zone("K"))  # +1000
    # [end_block_4]


def validate_dtgs() -> None:
    # [start_block_5]
    for text in ["131337Z", "131337bfeb", "441200", "121212AFXB01"]:
        try:
            validate(text)
            print(f"{text}: valid")
        except InvalidDTGError as err:
            print(f"{text}: {err.cause}")
    # [end_block_5]


def dtg_columns() -> pl.DataFrame:
    # [start_block_6]
    df = pl.DataFrame({"reported": ["271337BDEC10", "010000NJAN11", "150102AJAN01"], "value": [1.5, 2.0, 0.5]})

    # Parse to a UTC datetime column, then render the times back as DTGs in another zone
    df = parse_column(df, "reported", alias="time")
    df = df.with_columns(format_series(df["time"], letter="M").alias("reported_m"))
    print(df)
    # [end_block_6]
    return df
