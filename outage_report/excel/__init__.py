"""Spreadsheet reading: cell coercion, header handling, date serials, sheet parsing."""

from .dates import excel_serial_to_string
from .headers import canonical_headers, dedupe_headers, normalize_header
from .reader import ParsedSheet, detect_header_row, parse_sheet, read_workbook

__all__ = [
    "ParsedSheet",
    "canonical_headers",
    "dedupe_headers",
    "detect_header_row",
    "excel_serial_to_string",
    "normalize_header",
    "parse_sheet",
    "read_workbook",
]
