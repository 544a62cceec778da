from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import DEFAULT_CONFIG, ReportConfig
from ..models.processing_result import ProcessingResult
from .errors import EmptyWorkbookError, UploadRejectedError
from .processor import process_file

"""Upload request/response boundary.

``handle_upload`` is what an HTTP route (or the CLI) calls with the uploaded
file name and bytes. It always returns an UploadResponse; failures are
classified into the fixed set of error bodies and never raise.
"""

__all__ = [
    "MSG_SUCCESS",
    "MSG_NO_FILE",
    "MSG_INVALID_TYPE",
    "MSG_EMPTY",
    "MSG_FAILED",
    "UploadResponse",
    "check_upload",
    "handle_upload",
]

logger = logging.getLogger(__name__)

MSG_SUCCESS = "Excel file processed successfully"
MSG_NO_FILE = "No file provided"
MSG_INVALID_TYPE = "Invalid file type. Please upload Excel or CSV file."
MSG_EMPTY = "Tidak ada data yang dapat dibaca dari file."
MSG_FAILED = "Failed to process Excel file"


@dataclass(frozen=True)
class UploadResponse:
    status_code: int
    body: dict[str, Any]
    result: ProcessingResult | None = None  # kept for reporting, not serialized

    @property
    def ok(self) -> bool:
        return self.status_code == 200

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.body, ensure_ascii=False, indent=indent)


def check_upload(filename: str | None, content: bytes | None, config: ReportConfig) -> None:
    """Reject missing files and unsupported suffixes before any parsing.

    Raises:
        UploadRejectedError: with error_type NO_FILE or INVALID_FILE_TYPE
    """
    if not filename or content is None:
        raise UploadRejectedError("NO_FILE", MSG_NO_FILE)
    if not filename.lower().endswith(config.allowed_suffixes):
        raise UploadRejectedError("INVALID_FILE_TYPE", MSG_INVALID_TYPE)


def _failure(
    status_code: int,
    error_type: str,
    message: str,
    filename: str | None,
    error_log: ErrorLogBuffer | None,
) -> UploadResponse:
    if error_log is not None:
        error_log.reject(filename, error_type, message)
    return UploadResponse(status_code=status_code, body={"error": message})


def handle_upload(
    filename: str | None,
    content: bytes | None,
    config: ReportConfig | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> UploadResponse:
    """Process one uploaded spreadsheet into the response payload.

    Args:
        filename: Original upload name (None when the form had no file)
        content: Uploaded bytes
        config: Processing configuration (defaults when None)
        error_log: Optional buffer receiving one ErrorRecord per failure

    Returns:
        200 with the success payload, 400 for rejected or empty input,
        500 for any unexpected fault
    """
    cfg = config or DEFAULT_CONFIG
    try:
        check_upload(filename, content, cfg)
    except UploadRejectedError as e:
        logger.warning(f"upload rejected: {e.message} ({filename})")
        return _failure(400, e.error_type, e.message, filename, error_log)

    try:
        result = process_file(content, filename, cfg)  # type: ignore[arg-type]
    except EmptyWorkbookError:
        logger.warning(f"{filename}: no readable rows")
        return _failure(400, "EMPTY_WORKBOOK", MSG_EMPTY, filename, error_log)
    except Exception:
        logger.exception(f"Error processing Excel file: {filename}")
        return _failure(500, "PROCESSING_FAILED", MSG_FAILED, filename, error_log)

    logger.info(
        f"{filename}: services={len(result.services)} records={result.total_records}"
    )
    return UploadResponse(
        status_code=200,
        body={"success": True, "data": result.to_payload(), "message": MSG_SUCCESS},
        result=result,
    )
