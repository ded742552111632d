import importlib
from typing import TYPE_CHECKING, Any

import autosemver

if TYPE_CHECKING:
    # These imports are only for static type checkers (e.g., Pyright, IDEs).
    # At runtime, they are not executed, so the modules won't be imported unless needed.
    from dtg.base import DTG, parse
    from dtg.clock import Clock, FixedClock, SystemClock
    from dtg.enums import DayOverflow, Month, TimeZoneLetter
    from dtg.parser import get_numeric_time_zone, validate

try:
    __version__ = autosemver.packaging.get_current_version(project_name="dtg-stream")
except Exception:
    __version__ = "0.0.0"


# Declare the public API of the package. This tells `from dtg import *` what to include.
__all__ = [  # noqa
    "DTG",
    "Clock",
    "DayOverflow",
    "FixedClock",
    "Month",
    "SystemClock",
    "TimeZoneLetter",
    "get_numeric_time_zone",
    "parse",
    "validate",
]

_LAZY_IMPORTS = {
    "DTG": "dtg.base",
    "parse": "dtg.base",
    "Clock": "dtg.clock",
    "FixedClock": "dtg.clock",
    "SystemClock": "dtg.clock",
    "DayOverflow": "dtg.enums",
    "Month": "dtg.enums",
    "TimeZoneLetter": "dtg.enums",
    "get_numeric_time_zone": "dtg.parser",
    "validate": "dtg.parser",
}


def __getattr__(name: str) -> Any:
    # NOTE: We use __getattr__ for lazy imports instead of top-level imports so that tools reading dtg.__version__
    #   (e.g. the Sphinx config) can import the package before its submodules are needed.
    #   Polars is only imported once the `dtg.series` helpers are used.
    if name in _LAZY_IMPORTS:
        return getattr(importlib.import_module(_LAZY_IMPORTS[name]), name)

    raise AttributeError(f"module {__name__} has no attribute {name}")
