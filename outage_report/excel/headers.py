from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from .cells import cell_text

"""Header label normalization and de-duplication.

"Nama Service" -> "nama_service", "Durasi (Menit)" -> "durasi_(menit)".
Within one header row, repeated "Keterangan" columns become keterangan1,
keterangan2, ... and any other repeated key gets a _2, _3 ... suffix.
"""

__all__ = [
    "FALLBACK_KEY",
    "KETERANGAN_PREFIX",
    "normalize_header",
    "dedupe_headers",
    "canonical_headers",
]

FALLBACK_KEY = "col"
KETERANGAN_PREFIX = "keterangan"

_PUNCTUATION = re.compile(r"[.,;]")
_WHITESPACE = re.compile(r"\s+")


def normalize_header(label: Any, fallback: str = FALLBACK_KEY) -> str:
    """Map a raw header label to a lower_snake key.

    Args:
        label: Raw header cell (any type; None is treated as empty)
        fallback: Key returned when nothing is left after normalization

    Returns:
        Normalized key, or ``fallback`` when the label normalizes to ""
    """
    text = cell_text(label).strip()
    text = _PUNCTUATION.sub("", text)
    text = _WHITESPACE.sub("_", text).lower()
    return text or fallback


def _next_free(base: str, start: int, used: set[str], sep: str) -> tuple[str, int]:
    n = start
    while f"{base}{sep}{n}" in used:
        n += 1
    return f"{base}{sep}{n}", n


def dedupe_headers(keys: Iterable[str]) -> tuple[list[str], dict[str, int]]:
    """Make normalized keys unique, left to right.

    Every key starting with ``keterangan`` shares one counter, so
    ["keterangan", "keterangan_tambahan"] gives ["keterangan1", "keterangan2"].
    A suffix already taken by an earlier column is skipped, so
    ["status", "status", "status_2"] gives ["status", "status_2", "status_2_2"].

    Returns:
        (unique keys in column order, occurrence count per base key)
    """
    counts: dict[str, int] = {}
    used: set[str] = set()
    result: list[str] = []
    for key in keys:
        if key.startswith(KETERANGAN_PREFIX):
            start = counts.get(KETERANGAN_PREFIX, 0) + 1
            key, counts[KETERANGAN_PREFIX] = _next_free(KETERANGAN_PREFIX, start, used, "")
        elif key in used:
            base = key
            key, counts[base] = _next_free(base, counts.get(base, 1) + 1, used, "_")
        else:
            counts.setdefault(key, 1)
        used.add(key)
        result.append(key)
    return result, counts


def canonical_headers(labels: Iterable[Any]) -> list[str]:
    keys, _ = dedupe_headers(normalize_header(label) for label in labels)
    return keys
