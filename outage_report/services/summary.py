from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for the CLI.

Format:
SUMMARY file={name} sheets={n} services={n} records={n} dropped={n} elapsed_sec={x}
"""

__all__ = [
    "format_seconds",
    "render_summary_line",
]


def format_seconds(value: float) -> str:
    """Render seconds without trailing zeros or scientific notation."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(file_name: str, result: ProcessingResult) -> str:
    """Render the SUMMARY line for one processed workbook.

    Examples:
        >>> result = ProcessingResult(services=[], total_records=0, cleaned_columns=[], elapsed_seconds=2.0)
        >>> render_summary_line("gangguan.xlsx", result)
        'SUMMARY file=gangguan.xlsx sheets=0 services=0 records=0 dropped=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY file={file_name} "
        f"sheets={len(result.sheet_stats)} "
        f"services={len(result.services)} "
        f"records={result.total_records} "
        f"dropped={result.dropped_rows} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )
