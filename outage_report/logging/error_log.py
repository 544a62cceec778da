from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from outage_report.models.error_record import ERROR_TYPES, ErrorRecord

"""Failed-upload ledger.

Every upload that does not end in a 200 response leaves one line here: the
file name, its classification (NO_FILE, INVALID_FILE_TYPE, EMPTY_WORKBOOK,
PROCESSING_FAILED) and the message the caller received. Lines are kept in
memory for the run and appended to ``logs/errors-YYYYMMDD-HHMMSS.log``
(JSON Lines, UTC stamp of the first write) on flush. A run without failed
uploads never creates the file.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Failed uploads of one run (one CLI invocation or one server worker)."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._pending: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._pending)

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def reject(self, filename: str | None, error_type: str, message: str) -> ErrorRecord:
        """Record a failed upload; a missing file name is logged as ""."""
        if error_type not in ERROR_TYPES:
            raise ValueError(f"unknown upload error type: {error_type}")
        record = ErrorRecord.create(filename or "", error_type, message)
        self._pending.append(record)
        return record

    def counts_by_type(self) -> dict[str, int]:
        """Pending failures per error type, e.g. {"INVALID_FILE_TYPE": 2}."""
        return dict(Counter(r.error_type for r in self._pending))

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Append pending failures to the log file and forget them.

        Returns:
            Path written to, or None when no upload failed since the last flush
        """
        if not self._pending:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            f.writelines(r.to_json_line() + "\n" for r in self._pending)
        self._pending.clear()
        return fp
