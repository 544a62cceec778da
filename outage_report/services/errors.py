from __future__ import annotations

"""Exception taxonomy for request-level failures.

Row and cell problems are not represented here: they degrade the row or
cell and processing continues.
"""

__all__ = [
    "ProcessingError",
    "EmptyWorkbookError",
    "UploadRejectedError",
    "SummarizerError",
]


class ProcessingError(Exception):
    """Base exception for processing errors."""
    pass


class EmptyWorkbookError(ProcessingError):
    """No row survived validation in any sheet."""


class UploadRejectedError(Exception):
    """Upload refused before parsing (missing file, unsupported suffix)."""

    def __init__(self, error_type: str, message: str) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.message = message


class SummarizerError(Exception):
    """The text-completion service failed or returned an unusable payload."""
