from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Any

from .cells import cell_text, is_number

"""Spreadsheet date serial decoding.

A serial counts days, with the time of day in the fractional part. Serial
25569 is 1970-01-01, which lets the integer part be treated as days since
the Unix epoch. The calendar date is computed in UTC; no local timezone is
applied.
"""

__all__ = [
    "UNIX_EPOCH_SERIAL",
    "excel_serial_to_string",
]

UNIX_EPOCH_SERIAL = 25569
# absorbs float error such as 0.9999999 for 23:59:59.99
TIME_EPSILON = 0.0000001

_UNIX_EPOCH = date(1970, 1, 1)


def excel_serial_to_string(serial: Any) -> str:
    """Decode a date serial into ``DD/MM/YYYY HH:MM``.

    Values that are not finite numbers, or that fall outside the supported
    calendar range, come back as their text form.
    """
    if not is_number(serial) or not math.isfinite(serial):
        return cell_text(serial)

    utc_days = math.floor(serial - UNIX_EPOCH_SERIAL)
    try:
        day = _UNIX_EPOCH + timedelta(days=utc_days)
    except OverflowError:
        return cell_text(serial)

    fractional_day = serial - math.floor(serial) + TIME_EPSILON
    total_seconds = math.floor(86400 * fractional_day)

    seconds = total_seconds % 60
    total_seconds -= seconds
    hours = total_seconds // 3600
    minutes = (total_seconds // 60) % 60

    return f"{day.day:02d}/{day.month:02d}/{day.year:04d} {hours:02d}:{minutes:02d}"
