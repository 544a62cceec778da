from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for request-level failure logging.

One ErrorRecord is written per rejected or failed upload. Dropped rows are
a filtering policy, not a failure, and never produce an ErrorRecord.
"""

__all__ = [
    "ErrorRecord",
    "ERROR_TYPES",
]

ERROR_TYPES = frozenset(
    {
        "NO_FILE",
        "INVALID_FILE_TYPE",
        "EMPTY_WORKBOOK",
        "PROCESSING_FAILED",
    }
)


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Uploaded file name ("" when no file was provided)
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: User-visible error message returned for the request
    """
    timestamp: str  # ISO8601 UTC
    file: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # fixed schema: no keys beyond the dataclass fields
        return json.dumps(asdict(self), ensure_ascii=False)
