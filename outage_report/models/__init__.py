"""Domain models for the outage report ingest.

Configuration, per-request results and the error log record. Records
themselves are plain dicts keyed by canonical column key.
"""

from .config_models import CANONICAL_KEYS, DEFAULT_CONFIG, ReportConfig, SummarizerSettings
from .error_record import ErrorRecord
from .processing_result import ProcessingResult, Record, ServiceGroup, SheetStat

__all__ = [
    # Configuration models
    "CANONICAL_KEYS",
    "DEFAULT_CONFIG",
    "ReportConfig",
    "SummarizerSettings",
    # Processing models
    "ErrorRecord",
    "ProcessingResult",
    "Record",
    "ServiceGroup",
    "SheetStat",
]
