from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from outage_report.models.config_models import DEFAULT_CONFIG, ReportConfig, SummarizerSettings

"""Config loader.

Responsibilities:
- Load YAML config (config/report.yml by default in the CLI)
- Validate against the JSON schema shipped next to this module
- Apply defaults for every missing key
- Apply environment overrides for the summarizer connection
"""

__all__ = [
    "ConfigError",
    "SCHEMA_PATH",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")

ENV_LLM_ENDPOINT = "OUTAGE_LLM_ENDPOINT"
ENV_LLM_MODEL = "OUTAGE_LLM_MODEL"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or
            if the config data fails schema validation (unknown keys,
            wrong types, out-of-range values).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _summarizer_settings(raw: dict[str, Any]) -> SummarizerSettings:
    defaults = DEFAULT_CONFIG.summarizer
    return SummarizerSettings(
        endpoint=os.getenv(ENV_LLM_ENDPOINT) or raw.get("endpoint", defaults.endpoint),
        model=os.getenv(ENV_LLM_MODEL) or raw.get("model", defaults.model),
        timeout=float(raw.get("timeout", defaults.timeout)),
        temperature=float(raw.get("temperature", defaults.temperature)),
        top_p=float(raw.get("top_p", defaults.top_p)),
    )


def load_config(path: Path | None = None) -> ReportConfig:
    """Load configuration from ``path``; ``None`` yields the defaults.

    Environment overrides are applied in both cases.
    """
    if path is None:
        return _build_config({})
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    return _build_config(data)


def _build_config(data: dict[str, Any]) -> ReportConfig:
    suffixes = data.get("allowed_suffixes")
    return ReportConfig(
        header_scan_rows=data.get("header_scan_rows", DEFAULT_CONFIG.header_scan_rows),
        canonical_keys=tuple(data.get("canonical_keys", DEFAULT_CONFIG.canonical_keys)),
        required_fields=tuple(data.get("required_fields", DEFAULT_CONFIG.required_fields)),
        date_field=data.get("date_field", DEFAULT_CONFIG.date_field),
        allowed_suffixes=(
            tuple(s.lower() for s in suffixes) if suffixes else DEFAULT_CONFIG.allowed_suffixes
        ),
        summarizer=_summarizer_settings(data.get("summarizer", {})),
    )
