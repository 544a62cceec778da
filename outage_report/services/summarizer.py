from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Any

import requests

from ..models.config_models import SummarizerSettings
from ..models.processing_result import ServiceGroup
from .errors import SummarizerError
from .narrative import DURATION_FIELD, STOP_CLOCK_FIELD, TOTAL_DURATION_FIELD, field_text
from .prompts import SYSTEM_INSTRUCTION

"""Client for the external text-completion service.

One ServiceGroup at a time is turned into a DATA block (a header line plus
one line per record) and sent to an OpenAI-compatible chat completions
endpoint. The reply is expected to hold a "Rangkuman:" section followed by
an "Evaluasi:" section.
"""

__all__ = [
    "Evaluation",
    "SummarizerClient",
    "build_data_context",
    "build_chat_request",
    "parse_evaluation",
]

logger = logging.getLogger(__name__)

NO_SUMMARY = "Tidak ada rangkuman."
NO_EVALUATION = "Tidak ada evaluasi."

_THINK_BLOCK = re.compile(r"<think>[\s\S]*?</think>", re.IGNORECASE)
_SUMMARY_SECTION = re.compile(r"Rangkuman:\s*([\s\S]*?)(?=Evaluasi:|$)", re.IGNORECASE)
_EVALUATION_SECTION = re.compile(r"Evaluasi:\s*([\s\S]*?)$", re.IGNORECASE)


@dataclass(frozen=True)
class Evaluation:
    nama_service: str
    sid: str
    summary: str
    evaluation: str
    elapsed_seconds: float | None = None


def _record_line(record: dict[str, Any]) -> str:
    ticket = field_text(record, "tiket_open")
    if not ticket:
        return "- "
    return (
        f"- Pada {ticket}, perbaikan selama {field_text(record, DURATION_FIELD)} menit "
        f"dengan {field_text(record, STOP_CLOCK_FIELD)} menit berhenti sehingga "
        f"{field_text(record, TOTAL_DURATION_FIELD)} menit waktu yang terhitung. "
        f"Penyebab: {field_text(record, 'penyebab')}, Action: {field_text(record, 'action')}, "
        f"Keterangan: {field_text(record, 'keterangan2')}"
    )


def build_data_context(group: ServiceGroup) -> str:
    header = f"{group.nama_service} ({group.sid})"
    return "\n".join([header] + [_record_line(r) for r in group.records])


def build_chat_request(group: ServiceGroup, settings: SummarizerSettings) -> dict[str, Any]:
    return {
        "model": settings.model,
        "messages": [
            {"role": "system", "content": SYSTEM_INSTRUCTION},
            {"role": "user", "content": f"DATA:\n```\n{build_data_context(group)}\n```"},
        ],
        "temperature": settings.temperature,
        "top_p": settings.top_p,
        "top_k": 40,
        "repeat_penalty": 1.1,
        "max_tokens": -1,
    }


def parse_evaluation(text: str) -> tuple[str, str]:
    """Split a completion into (summary, evaluation), reasoning blocks removed."""
    cleaned = _THINK_BLOCK.sub("", text or "")
    summary_match = _SUMMARY_SECTION.search(cleaned)
    evaluation_match = _EVALUATION_SECTION.search(cleaned)
    summary = summary_match.group(1).strip() if summary_match else ""
    evaluation = evaluation_match.group(1).strip() if evaluation_match else ""
    return summary or NO_SUMMARY, evaluation or NO_EVALUATION


class SummarizerClient:
    """Blocking client; one POST per evaluated service group."""

    def __init__(self, settings: SummarizerSettings, session: requests.Session | None = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    def complete(self, payload: dict[str, Any]) -> str:
        try:
            response = self.session.post(
                self.settings.endpoint, json=payload, timeout=self.settings.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise SummarizerError(f"completion request failed: {e}") from e
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise SummarizerError(f"unexpected completion payload: {data!r}") from e

    def evaluate(self, group: ServiceGroup) -> Evaluation:
        start = time.perf_counter()
        raw = self.complete(build_chat_request(group, self.settings))
        summary, evaluation = parse_evaluation(raw)
        elapsed = time.perf_counter() - start
        logger.info(f"evaluated {group.nama_service} ({group.sid}) in {elapsed:.1f}s")
        return Evaluation(
            nama_service=group.nama_service,
            sid=group.sid,
            summary=summary,
            evaluation=evaluation,
            elapsed_seconds=elapsed,
        )
