from __future__ import annotations

from pathlib import Path

import pytest

from outage_report.config.loader import ConfigError, load_config
from outage_report.models.config_models import CANONICAL_KEYS, DEFAULT_CONFIG


@pytest.fixture(autouse=True)
def _no_llm_env(monkeypatch):
    monkeypatch.delenv("OUTAGE_LLM_ENDPOINT", raising=False)
    monkeypatch.delenv("OUTAGE_LLM_MODEL", raising=False)


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.header_scan_rows == 15
    assert cfg.required_fields == ("nama_service", "sid")
    assert cfg.canonical_keys == CANONICAL_KEYS
    assert cfg.summarizer.endpoint == "http://llm.local/v1/chat/completions"
    assert cfg.summarizer.model == "test-model"
    assert cfg.summarizer.timeout == 5.0
    # unspecified summarizer keys keep defaults
    assert cfg.summarizer.top_p == DEFAULT_CONFIG.summarizer.top_p


def test_load_config_none_gives_defaults():
    assert load_config(None) == DEFAULT_CONFIG


def test_repository_default_config_is_valid():
    repo_config = Path(__file__).resolve().parents[2] / "config" / "report.yml"
    assert load_config(repo_config) == DEFAULT_CONFIG


def test_empty_file_gives_defaults(temp_workdir: Path):
    path = temp_workdir / "config" / "report.yml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == DEFAULT_CONFIG


def test_suffixes_are_lowercased(write_config: Path):
    text = write_config.read_text(encoding="utf-8").replace('[".xlsx", ".xls", ".csv"]', '[".XLSX"]')
    write_config.write_text(text, encoding="utf-8")
    assert load_config(write_config).allowed_suffixes == (".xlsx",)


def test_load_config_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError):
        load_config(temp_workdir / "config" / "not_exists.yml")


def test_load_config_invalid_yaml(write_config: Path):
    write_config.write_text("header_scan_rows: [1,\n", encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(write_config)
    assert "invalid yaml" in str(e.value)


def test_load_config_non_mapping_root(write_config: Path):
    write_config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(write_config)


@pytest.mark.parametrize(
    "extra",
    [
        "extra_field: not_allowed\n",
        "header_scan_rows: 0\n",
        "required_fields: []\n",
        "allowed_suffixes: [xlsx]\n",
    ],
)
def test_load_config_schema_violations(temp_workdir: Path, extra: str):
    path = temp_workdir / "config" / "report.yml"
    path.write_text(extra, encoding="utf-8")
    with pytest.raises(ConfigError) as e:
        load_config(path)
    assert "config validation failed" in str(e.value)


def test_env_overrides_summarizer(write_config: Path, monkeypatch):
    monkeypatch.setenv("OUTAGE_LLM_ENDPOINT", "http://other/v1/chat/completions")
    monkeypatch.setenv("OUTAGE_LLM_MODEL", "env-model")
    cfg = load_config(write_config)
    assert cfg.summarizer.endpoint == "http://other/v1/chat/completions"
    assert cfg.summarizer.model == "env-model"
