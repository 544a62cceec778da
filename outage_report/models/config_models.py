from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the outage report ingest.

The loader in outage_report/config/loader.py produces these from YAML; every
field has a default so the pipeline runs without any config file.
"""

__all__ = [
    "CANONICAL_KEYS",
    "ReportConfig",
    "SummarizerSettings",
    "DEFAULT_CONFIG",
]

CANONICAL_KEYS: tuple[str, ...] = (
    "nama_service",
    "sid",
    "tiket_open",
    "penyebab",
    "action",
    "keterangan1",
    "keterangan2",
    "durasi_(menit)",
    "stop_clock_(icon)",
    "durasi_total",
)


@dataclass(frozen=True)
class SummarizerSettings:
    """Connection settings for the external text-completion service.

    Environment variables OUTAGE_LLM_ENDPOINT / OUTAGE_LLM_MODEL take
    precedence over values from the YAML file.
    """
    endpoint: str = "http://localhost:8000/v1/chat/completions"
    model: str = "DeepSeek-PLN"
    timeout: float = 300.0
    temperature: float = 0.0
    top_p: float = 0.7


@dataclass(frozen=True)
class ReportConfig:
    """Root configuration object for workbook processing."""
    header_scan_rows: int = 15  # rows inspected when looking for the header
    canonical_keys: tuple[str, ...] = CANONICAL_KEYS  # fixed leading key order
    required_fields: tuple[str, ...] = ("nama_service", "sid")
    date_field: str = "tiket_open"  # numeric values here are date serials
    allowed_suffixes: tuple[str, ...] = (".xlsx", ".xls", ".csv")
    summarizer: SummarizerSettings = field(default_factory=SummarizerSettings)


DEFAULT_CONFIG = ReportConfig()
