from .errors import EmptyWorkbookError, ProcessingError, SummarizerError, UploadRejectedError
from .narrative import build_narrative
from .processor import process_file, process_workbook
from .upload import UploadResponse, handle_upload

__all__ = [
    "EmptyWorkbookError",
    "ProcessingError",
    "SummarizerError",
    "UploadRejectedError",
    "UploadResponse",
    "build_narrative",
    "handle_upload",
    "process_file",
    "process_workbook",
]
