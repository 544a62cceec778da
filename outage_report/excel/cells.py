from __future__ import annotations

import math
from datetime import date, datetime, time
from typing import Any

import numpy as np
import pandas as pd

"""Raw cell coercion.

pandas hands back spreadsheet cells as a mix of Python and numpy scalars,
NaN/NaT markers and, for date-formatted xlsx cells, datetime objects. Every
value is folded into the closed set {str, int, float, bool, ""} before any
other code looks at it:

- None / NaN / NaT -> ""
- numpy scalars -> Python scalars
- integral floats -> int (a spreadsheet number has no int/float split)
- datetime / date / time -> spreadsheet serial number (1899-12-30 epoch)
"""

__all__ = [
    "EXCEL_EPOCH",
    "coerce_cell",
    "is_empty",
    "is_number",
    "cell_text",
]

EXCEL_EPOCH = datetime(1899, 12, 30)
SECONDS_PER_DAY = 86400


def _datetime_to_serial(value: datetime) -> float:
    if value.tzinfo is not None:
        value = value.replace(tzinfo=None)
    return (value - EXCEL_EPOCH).total_seconds() / SECONDS_PER_DAY


def _time_to_serial(value: time) -> float:
    seconds = value.hour * 3600 + value.minute * 60 + value.second + value.microsecond / 1e6
    return seconds / SECONDS_PER_DAY


def _normalize_number(value: float) -> int | float:
    if math.isfinite(value) and value == int(value):
        return int(value)
    return value


def coerce_cell(value: Any) -> Any:
    """Fold a raw pandas cell into str, int, float, bool or ""."""
    if value is None:
        return ""
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, (str, bool)):
        return value
    if isinstance(value, datetime):  # pd.Timestamp included
        if pd.isna(value):
            return ""
        return _normalize_number(_datetime_to_serial(value))
    if isinstance(value, date):
        return _normalize_number(_datetime_to_serial(datetime(value.year, value.month, value.day)))
    if isinstance(value, time):
        return _normalize_number(_time_to_serial(value))
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        return _normalize_number(value)
    if isinstance(value, int):
        return value
    if pd.isna(value):
        return ""
    return str(value)


def is_empty(value: Any) -> bool:
    """True for None and for strings that are empty after trimming.

    Numeric zero and False are values, not emptiness.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def cell_text(value: Any) -> str:
    """Render a coerced cell as display text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(_normalize_number(value))
    return str(value)
