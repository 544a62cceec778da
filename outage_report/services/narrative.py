from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..excel.cells import cell_text

"""Per-record narrative sentences.

Fields are read by canonical key and default to "" when a sheet does not
carry them, so a sheet with a renamed duration column still yields a
sentence (with an empty segment) instead of failing.
"""

__all__ = [
    "build_narrative",
    "field_text",
]

DURATION_FIELD = "durasi_(menit)"
STOP_CLOCK_FIELD = "stop_clock_(icon)"
TOTAL_DURATION_FIELD = "durasi_total"


def field_text(record: Mapping[str, Any], key: str) -> str:
    return cell_text(record.get(key, ""))


def build_narrative(record: Mapping[str, Any]) -> str:
    """Render the fixed Indonesian report sentence for one record.

    >>> build_narrative({"nama_service": "ICON-A", "sid": "1001", "keterangan1": "Akses sulit"})
    'ICON-A (1001), - pada , perbaikan selama  menit dengan  menit berhenti sehingga  menit waktu yang terhitung. Penyebab: , Action: , Keterangan: Akses sulit'
    """
    remark2 = field_text(record, "keterangan2")
    return (
        f"{field_text(record, 'nama_service')} ({field_text(record, 'sid')}), "
        f"- pada {field_text(record, 'tiket_open')}, "
        f"perbaikan selama {field_text(record, DURATION_FIELD)} menit "
        f"dengan {field_text(record, STOP_CLOCK_FIELD)} menit berhenti "
        f"sehingga {field_text(record, TOTAL_DURATION_FIELD)} menit waktu yang terhitung. "
        f"Penyebab: {field_text(record, 'penyebab')}, "
        f"Action: {field_text(record, 'action')}, "
        f"Keterangan: {field_text(record, 'keterangan1')}"
        + (f", {remark2}" if remark2 else "")
    )
