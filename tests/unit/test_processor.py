from __future__ import annotations

import pytest

from outage_report.models.config_models import CANONICAL_KEYS
from outage_report.services.errors import EmptyWorkbookError
from outage_report.services.processor import (
    collation_key,
    group_records,
    order_keys,
    process_workbook,
    sort_records,
)


def test_order_keys_canonical_first_then_alphabetical():
    record = {
        "zona": "Z",
        "durasi_total": 40,
        "sid": "1",
        "alamat": "Jl. A",
        "nama_service": "ICON-A",
        "keterangan1": "x",
    }
    assert list(order_keys(record)) == ["nama_service", "sid", "keterangan1", "durasi_total", "alamat", "zona"]


def test_order_keys_tolerates_missing_canonical_fields():
    assert order_keys({"b": 1, "a": 2}) == {"a": 2, "b": 1}


def test_order_keys_custom_canonical_set():
    record = {"sid": "1", "penyebab": "x", "nama_service": "A"}
    assert list(order_keys(record, ("penyebab",))) == ["penyebab", "nama_service", "sid"]


def test_sort_is_lexicographic_not_numeric():
    records = [
        {"nama_service": "A", "sid": "10", "n": 1},
        {"nama_service": "A", "sid": "2", "n": 2},
        {"nama_service": "A", "sid": "10", "n": 3},
    ]
    ordered = sort_records(records)
    assert [r["sid"] for r in ordered] == ["10", "10", "2"]
    # stable: equal keys keep input order
    assert [r["n"] for r in ordered] == [1, 3, 2]


def test_sort_breaks_sid_ties_by_name():
    records = [
        {"nama_service": "ICON-B", "sid": "5"},
        {"nama_service": "ICON-A", "sid": "5"},
    ]
    assert [r["nama_service"] for r in sort_records(records)] == ["ICON-A", "ICON-B"]


def test_group_records_by_exact_pair():
    records = [
        {"nama_service": "A", "sid": "1"},
        {"nama_service": "B", "sid": "1"},
        {"nama_service": "A", "sid": "1"},
        {"nama_service": "A|1", "sid": ""},
    ]
    groups = group_records(records)
    assert [(g.nama_service, g.sid, len(g.records)) for g in groups] == [
        ("A", "1", 2),
        ("B", "1", 1),
        ("A|1", "", 1),
    ]
    for g in groups:
        assert len(g.narratives) == len(g.records)


def test_process_workbook_groups_and_counts(make_frame):
    header = ["Nama Service", "SID", "Penyebab", "Zona"]
    sheets = {
        "Jan": make_frame([header, ["ICON-B", "2", "Kabel", "Utara"], ["ICON-A", "10", "Router", "Selatan"]]),
        "Feb": make_frame([header, ["ICON-B", "2", "Listrik", "Utara"], ["ICON-A", "10", "Kabel", ""]]),
    }
    result = process_workbook(sheets)

    assert [(g.sid, g.nama_service) for g in result.services] == [("10", "ICON-A"), ("2", "ICON-B")]
    assert result.total_records == 4
    assert sum(len(g.records) for g in result.services) == result.total_records
    assert len({(g.nama_service, g.sid) for g in result.services}) == len(result.services)
    # sheet order preserved inside a group
    assert [r["penyebab"] for r in result.services[1].records] == ["Kabel", "Listrik"]
    assert result.cleaned_columns == ["nama_service", "sid", "penyebab", "zona"]
    assert [s.sheet_name for s in result.sheet_stats] == ["Jan", "Feb"]


def test_process_workbook_skips_sheets_without_rows(make_frame):
    sheets = {
        "Kosong": make_frame([]),
        "Data": make_frame([["Nama Service", "SID"], ["ICON-A", 1]]),
    }
    result = process_workbook(sheets)
    assert result.total_records == 1
    assert len(result.sheet_stats) == 2


def test_process_workbook_raises_when_nothing_survives(make_frame):
    sheets = {
        "S1": make_frame([["Nama Service", "SID"], ["ICON-A", ""]]),
        "S2": make_frame([["Nama Service", "Penyebab"], ["ICON-B", "Kabel"]]),
    }
    with pytest.raises(EmptyWorkbookError):
        process_workbook(sheets)


def test_process_workbook_is_deterministic(make_frame):
    rows = [
        ["Nama Service", "SID", "Keterangan", "Keterangan"],
        ["ICON-C", "3", "a", "b"],
        ["ICON-A", "1", "c", ""],
        ["ICON-C", "3", "d", "e"],
    ]
    first = process_workbook({"S": make_frame(rows)}).to_payload()
    second = process_workbook({"S": make_frame(rows)}).to_payload()
    assert first == second


def test_canonical_keys_constant_order():
    assert CANONICAL_KEYS[:2] == ("nama_service", "sid")
    assert len(CANONICAL_KEYS) == 10


def test_sort_uses_locale_style_order_for_mixed_case():
    records = [
        {"nama_service": "Banana", "sid": "1"},
        {"nama_service": "apple", "sid": "1"},
        {"nama_service": "Apple", "sid": "1"},
        {"nama_service": "cherry", "sid": "1"},
    ]
    assert [r["nama_service"] for r in sort_records(records)] == ["apple", "Apple", "Banana", "cherry"]


def test_sort_mixed_case_sid_and_digits_stay_lexicographic():
    records = [
        {"nama_service": "A", "sid": "b-2"},
        {"nama_service": "A", "sid": "B-1"},
        {"nama_service": "A", "sid": "2"},
        {"nama_service": "A", "sid": "10"},
    ]
    assert [r["sid"] for r in sort_records(records)] == ["10", "2", "B-1", "b-2"]


def test_collation_key_orders_accents_after_base_letter():
    words = ["f", "é", "e", "E"]
    assert sorted(words, key=collation_key) == ["e", "E", "é", "f"]
