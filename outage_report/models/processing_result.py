from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Processing result models for the outage report ingest.

A ProcessingResult is built once per uploaded workbook and never mutated.
Only ``services``, ``total_records`` and ``cleaned_columns`` are part of the
response payload; sheet statistics and timing feed the SUMMARY line.
"""

__all__ = [
    "Record",
    "ServiceGroup",
    "SheetStat",
    "ProcessingResult",
]

# Canonical key -> coerced value (str, int, float, bool or "")
Record = dict[str, Any]


@dataclass(frozen=True)
class ServiceGroup:
    """All records sharing one (nama_service, sid) identity.

    ``narratives[i]`` is the generated sentence for ``records[i]``.
    """
    nama_service: str
    sid: str
    records: list[Record]
    narratives: list[str]

    def to_payload(self) -> dict[str, Any]:
        return {
            "nama_service": self.nama_service,
            "sid": self.sid,
            "records": [dict(r) for r in self.records],
            "narratives": list(self.narratives),
        }


@dataclass(frozen=True)
class SheetStat:
    """Per-sheet parse statistics."""
    sheet_name: str
    header_row: int  # zero-based row index of the detected header
    data_rows: int  # non-blank rows read below the header
    kept_rows: int  # records surviving validation

    @property
    def dropped_rows(self) -> int:
        return self.data_rows - self.kept_rows


@dataclass(frozen=True)
class ProcessingResult:
    """Grouped records of one workbook plus its processing report."""
    services: list[ServiceGroup]
    total_records: int
    cleaned_columns: list[str]
    sheet_stats: list[SheetStat] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def dropped_rows(self) -> int:
        return sum(s.dropped_rows for s in self.sheet_stats)

    def to_payload(self) -> dict[str, Any]:
        """Return the ``data`` block of the success response."""
        return {
            "services": [g.to_payload() for g in self.services],
            "totalRecords": self.total_records,
            "cleanedColumns": list(self.cleaned_columns),
        }
