from __future__ import annotations

import csv
import io
import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

import pandas as pd

from outage_report.models.config_models import DEFAULT_CONFIG, ReportConfig
from outage_report.models.processing_result import Record, SheetStat

from .cells import cell_text, coerce_cell, is_empty, is_number
from .dates import excel_serial_to_string
from .headers import canonical_headers, normalize_header

"""Workbook reading and per-sheet parsing.

Sheets are read with ``header=None``: the header row is not assumed to be
the first one. Title banners, blank lines and merged cells commonly sit
above the real header, so the header is located by scoring the first rows
(``detect_header_row``) and everything above it is ignored.

Row problems never raise. A row without a service name or SID is dropped,
a malformed cell is kept as whatever text it holds.
"""

__all__ = [
    "CSV_SHEET_NAME",
    "ParsedSheet",
    "read_workbook",
    "detect_header_row",
    "parse_sheet",
]

logger = logging.getLogger(__name__)

CSV_SHEET_NAME = "Sheet1"
SERVICE_ID_FIELD = "sid"
MIN_HEADER_KEY_LENGTH = 3

_TRAILING_ZERO = re.compile(r"\.0$")
_CSV_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


@dataclass(frozen=True)
class ParsedSheet:
    records: list[Record]
    stat: SheetStat


def _decode_text(content: bytes) -> str:
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def _csv_value(text: str) -> Any:
    stripped = text.strip()
    if _CSV_NUMBER.match(stripped):
        if stripped.lstrip("+-").isdigit():
            return int(stripped)
        number = float(stripped)
        return int(number) if number.is_integer() else number
    return text


def _read_csv(content: bytes) -> pd.DataFrame:
    # csv.reader tolerates ragged rows (banner lines shorter than the header)
    rows = [[_csv_value(v) for v in row] for row in csv.reader(io.StringIO(_decode_text(content)))]
    return pd.DataFrame(rows, dtype=object)


def read_workbook(content: bytes, filename: str) -> dict[str, pd.DataFrame]:
    """Read every sheet of an uploaded file, keyed by sheet name in file order.

    Parameters
    ----------
    content: raw bytes of the upload
    filename: original file name; only its extension is used

    Excel engines are picked by pandas from the file signature (openpyxl
    for .xlsx, xlrd for .xls). pandas' default NA strings are disabled so a
    literal "NA" or "null" cell stays text.
    """
    if filename.lower().endswith(".csv"):
        return {CSV_SHEET_NAME: _read_csv(content)}

    frames: dict[str, pd.DataFrame] = {}
    with pd.ExcelFile(io.BytesIO(content)) as xls:
        for name in xls.sheet_names:
            frame = xls.parse(name, header=None, keep_default_na=False)
            frames[str(name)] = _trim_to_used_range(frame)
    return frames


def _frame_rows(frame: pd.DataFrame) -> list[list[Any]]:
    return [[coerce_cell(v) for v in row] for row in frame.to_numpy(dtype=object).tolist()]


def _trim_to_used_range(frame: pd.DataFrame) -> pd.DataFrame:
    """Drop blank rows above and blank columns left of the first used cell.

    pandas returns every sheet anchored at A1; a sheet whose content starts
    at C3 would otherwise grow two unlabeled columns. Interior blank rows
    and columns are kept.
    """
    rows = _frame_rows(frame)
    used = [(r, row) for r, row in enumerate(rows) if any(v != "" for v in row)]
    if not used:
        return frame.iloc[0:0, 0:0]
    first_row = used[0][0]
    first_col = min(next(c for c, v in enumerate(row) if v != "") for _, row in used)
    trimmed = frame.iloc[first_row:, first_col:]
    return trimmed.set_axis(range(trimmed.shape[0]), axis=0).set_axis(range(trimmed.shape[1]), axis=1)


def detect_header_row(frame: pd.DataFrame, max_scan: int = 15) -> int:
    """Return the zero-based index of the row most likely to be the header.

    A row scores one point per text cell that normalizes to a key of at
    least three characters. Only a strictly higher score replaces the
    current best, so ties go to the earliest row. An empty sheet gives 0.
    """
    best_row = 0
    best_score = -1
    for r, row in enumerate(_frame_rows(frame.head(max_scan))):
        score = 0
        for value in row:
            if isinstance(value, str) and value.strip():
                if len(normalize_header(value, fallback="")) >= MIN_HEADER_KEY_LENGTH:
                    score += 1
        if score > best_score:
            best_score = score
            best_row = r
    return best_row


def _read_rows(frame: pd.DataFrame, header_row: int) -> list[list[Any]]:
    """Coerced rows from the header row down, fully blank rows skipped."""
    rows = _frame_rows(frame.iloc[header_row:])
    return [row for row in rows if any(v != "" for v in row)]


def _build_record(headers: Sequence[str], row: Sequence[Any], date_field: str) -> Record:
    record: Record = {}
    for idx, key in enumerate(headers):
        value = row[idx] if idx < len(row) else ""
        if isinstance(value, str):
            value = value.strip()
        if key == date_field and is_number(value):
            value = excel_serial_to_string(value)
        record[key] = value
    return record


def _clean_service_id(value: Any) -> str:
    return _TRAILING_ZERO.sub("", cell_text(value)).strip()


def validate_records(records: list[Record], required_fields: Sequence[str]) -> list[Record]:
    """Pass 1: drop rows missing a required field, normalize the SID text."""
    valid: list[Record] = []
    for record in records:
        if any(is_empty(record.get(f)) for f in required_fields):
            continue
        if SERVICE_ID_FIELD in record:
            record[SERVICE_ID_FIELD] = _clean_service_id(record[SERVICE_ID_FIELD])
        valid.append(record)
    return valid


def drop_blank_records(records: list[Record]) -> list[Record]:
    """Pass 2: drop rows whose every value is empty."""
    return [r for r in records if any(not is_empty(v) for v in r.values())]


def parse_sheet(
    frame: pd.DataFrame,
    sheet_name: str = "",
    config: ReportConfig | None = None,
) -> ParsedSheet:
    """Turn one raw sheet into validated records in original row order.

    Steps:
    1. Detect the header row and read from there down
    2. Canonicalize + de-duplicate the header labels
    3. Zip every later row with the headers (missing cells -> "")
    4. Decode numeric date serials in the date field
    5. Drop rows missing required fields, clean the SID
    6. Drop rows that are entirely empty
    """
    cfg = config or DEFAULT_CONFIG
    header_row = detect_header_row(frame, cfg.header_scan_rows)
    rows = _read_rows(frame, header_row)
    if not rows:
        return ParsedSheet(records=[], stat=SheetStat(sheet_name, header_row, 0, 0))

    headers = canonical_headers(rows[0])
    data_rows = rows[1:]
    records = [_build_record(headers, row, cfg.date_field) for row in data_rows]
    records = validate_records(records, cfg.required_fields)
    records = drop_blank_records(records)

    stat = SheetStat(
        sheet_name=sheet_name,
        header_row=header_row,
        data_rows=len(data_rows),
        kept_rows=len(records),
    )
    logger.debug(
        f"sheet={sheet_name!r} header_row={header_row} headers={headers} "
        f"rows={stat.data_rows} kept={stat.kept_rows} dropped={stat.dropped_rows}"
    )
    return ParsedSheet(records=records, stat=stat)
