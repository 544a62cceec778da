from __future__ import annotations

import logging
import time
import unicodedata
from collections.abc import Mapping, Sequence
from typing import Any

import pandas as pd

from ..excel.cells import cell_text
from ..excel.reader import parse_sheet, read_workbook
from ..models.config_models import DEFAULT_CONFIG, ReportConfig
from ..models.processing_result import ProcessingResult, Record, ServiceGroup, SheetStat
from .errors import EmptyWorkbookError
from .narrative import build_narrative

"""Workbook processing: sheets -> ordered, grouped, narrated records.

The whole workbook is handled in one synchronous pass:
1. parse every sheet in file order and concatenate the records
2. put each record's keys in canonical order
3. sort by SID, then service name (locale-style order, "10" < "2")
4. group by (service name, SID) in first-seen order
5. attach one narrative per record
"""

__all__ = [
    "collation_key",
    "order_keys",
    "sort_records",
    "group_records",
    "process_workbook",
    "process_file",
]

logger = logging.getLogger(__name__)

SERVICE_NAME_FIELD = "nama_service"
SERVICE_ID_FIELD = "sid"


def order_keys(record: Mapping[str, Any], canonical_keys: Sequence[str] = DEFAULT_CONFIG.canonical_keys) -> Record:
    """Canonical keys first (those present, fixed order), then the rest sorted."""
    leading = [k for k in canonical_keys if k in record]
    canonical = set(canonical_keys)
    rest = sorted(k for k in record if k not in canonical)
    return {k: record[k] for k in leading + rest}


def collation_key(text: str) -> tuple[str, str, str]:
    """Locale-style comparison key.

    Letters compare case- and accent-blind first, then by accent, then
    lower case before upper case ("apple" < "Banana", "e" < "é" < "f").
    Digits compare as characters, so "10" < "2".
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), decomposed.casefold(), text.swapcase()


def _identity(record: Mapping[str, Any]) -> tuple[str, str]:
    return (
        cell_text(record.get(SERVICE_NAME_FIELD, "")),
        cell_text(record.get(SERVICE_ID_FIELD, "")),
    )


def _sort_key(record: Mapping[str, Any]) -> tuple[tuple[str, str, str], tuple[str, str, str]]:
    name, sid = _identity(record)
    return collation_key(sid), collation_key(name)


def sort_records(records: list[Record]) -> list[Record]:
    # sorted() is stable: equal (sid, name) pairs keep their sheet order
    return sorted(records, key=_sort_key)


def group_records(records: list[Record]) -> list[ServiceGroup]:
    """Group records by the exact (nama_service, sid) pair, first-seen order."""
    grouped: dict[tuple[str, str], list[Record]] = {}
    for record in records:
        name, sid = _identity(record)
        grouped.setdefault((name, sid), []).append(record)

    return [
        ServiceGroup(
            nama_service=name,
            sid=sid,
            records=members,
            narratives=[build_narrative(r) for r in members],
        )
        for (name, sid), members in grouped.items()
    ]


def process_workbook(
    sheets: Mapping[str, pd.DataFrame],
    config: ReportConfig | None = None,
) -> ProcessingResult:
    """Process all sheets of one workbook.

    Args:
        sheets: Raw sheet frames keyed by name, in workbook order
        config: Processing configuration (defaults when None)

    Returns:
        ProcessingResult with groups, record count and column report

    Raises:
        EmptyWorkbookError: If no sheet yields a single valid record
    """
    cfg = config or DEFAULT_CONFIG
    start = time.perf_counter()

    all_records: list[Record] = []
    stats: list[SheetStat] = []
    for sheet_name, frame in sheets.items():
        parsed = parse_sheet(frame, sheet_name, cfg)
        stats.append(parsed.stat)
        if not parsed.records:
            logger.info(f"sheet {sheet_name!r}: no usable rows, skipped")
            continue
        all_records.extend(parsed.records)

    if not all_records:
        raise EmptyWorkbookError("no readable rows in any sheet")

    normalized = sort_records([order_keys(r, cfg.canonical_keys) for r in all_records])
    services = group_records(normalized)

    return ProcessingResult(
        services=services,
        total_records=len(normalized),
        cleaned_columns=list(normalized[0].keys()),
        sheet_stats=stats,
        elapsed_seconds=time.perf_counter() - start,
    )


def process_file(content: bytes, filename: str, config: ReportConfig | None = None) -> ProcessingResult:
    sheets = read_workbook(content, filename)
    logger.debug(f"{filename}: sheets={list(sheets)}")
    return process_workbook(sheets, config)
