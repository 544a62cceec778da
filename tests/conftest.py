# Shared pytest fixtures
from __future__ import annotations

import io
import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

from outage_report.logging.init import reset_logging

HEADER = ["Nama Service", "SID", "Tiket Open", "Penyebab", "Action", "Keterangan", "Keterangan"]


def workbook_bytes(sheets: dict[str, list[list[object]]]) -> bytes:
    """Build an .xlsx in memory; each sheet is written without header/index."""
    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        for sheet_name, rows in sheets.items():
            df = pd.DataFrame(rows)
            df.to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return buf.getvalue()


def frame(rows: list[list[object]]) -> pd.DataFrame:
    """Raw sheet frame shaped like read_workbook output (header=None)."""
    return pd.DataFrame(rows, dtype=object)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def sample_config_yaml() -> str:
    return """header_scan_rows: 15
required_fields: [nama_service, sid]
date_field: tiket_open
allowed_suffixes: [".xlsx", ".xls", ".csv"]
summarizer:
  endpoint: http://llm.local/v1/chat/completions
  model: test-model
  timeout: 5
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "report.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def two_sheet_workbook() -> bytes:
    """Banner + header + one record on sheet 1, only SID-less rows on sheet 2."""
    return workbook_bytes(
        {
            "Oktober": [
                ["Laporan Gangguan ICON Oktober 2023"],
                HEADER,
                ["ICON-A", "1001.0", 45123.5, "Kabel putus", "Ganti kabel", "Akses sulit", "Selesai malam"],
            ],
            "Catatan": [
                ["Nama Service", "Keterangan"],
                ["ICON-B", "tanpa SID"],
            ],
        }
    )


@pytest.fixture()
def write_workbook(temp_workdir: Path) -> Callable[[str, dict[str, list[list[object]]]], Path]:
    def _write(name: str, sheets: dict[str, list[list[object]]]) -> Path:
        path = temp_workdir / "data" / name
        path.write_bytes(workbook_bytes(sheets))
        return path
    return _write


@pytest.fixture()
def make_frame() -> Callable[[list[list[object]]], pd.DataFrame]:
    return frame


@pytest.fixture()
def make_workbook() -> Callable[[dict[str, list[list[object]]]], bytes]:
    return workbook_bytes


@pytest.fixture()
def header() -> list[str]:
    return list(HEADER)
