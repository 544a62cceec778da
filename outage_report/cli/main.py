from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from outage_report.config.loader import ConfigError, load_config
from outage_report.excel.cells import coerce_cell
from outage_report.excel.headers import canonical_headers
from outage_report.excel.reader import detect_header_row, read_workbook
from outage_report.logging.error_log import ErrorLogBuffer
from outage_report.logging.init import log_summary, set_debug, setup_logging
from outage_report.models.config_models import ReportConfig
from outage_report.services.errors import SummarizerError
from outage_report.services.progress import ProgressTracker
from outage_report.services.summarizer import SummarizerClient
from outage_report.services.summary import render_summary_line
from outage_report.services.upload import UploadResponse, handle_upload

"""CLI entrypoint.

Processes one or more outage workbooks the same way the upload endpoint
does and writes each response body as JSON:

    python -m outage_report.cli gangguan_okt.xlsx --output out/

Exit codes: 0 every file succeeded, 2 at least one file failed,
1 fatal (bad config).
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

DEFAULT_CONFIG_PATH = Path("config/report.yml")


def _load_env_file(path: Path) -> None:
    # .env values win over the process environment for the LLM endpoint
    if path.exists():
        load_dotenv(dotenv_path=path, override=True)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Outage spreadsheet normalizer")
    p.add_argument("files", nargs="+", type=Path, help="Spreadsheets to process (.xlsx/.xls/.csv)")
    p.add_argument("--config", type=Path, default=None, help="YAML config (default: config/report.yml if present)")
    p.add_argument("--output", type=Path, default=None, help="Directory for <name>.json responses (default: stdout)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print detected header rows & keys then exit")
    p.add_argument("--evaluate", action="store_true", help="Send every service group to the summarizer")
    return p.parse_args(argv)


def _resolve_config(path: Path | None) -> ReportConfig:
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return load_config(None)


def _inspect_data(files: list[Path], cfg: ReportConfig) -> int:
    for f in files:
        print(f"FILE: {f.name}")
        try:
            sheets = read_workbook(f.read_bytes(), f.name)
        except Exception as e:  # pragma: no cover
            print(f"  read_error: {e}")
            continue
        for sname, frame in sheets.items():
            header_row = detect_header_row(frame, cfg.header_scan_rows)
            if frame.empty:
                print(f"  SHEET: {sname} empty")
                continue
            labels = [coerce_cell(v) for v in frame.iloc[header_row].tolist()]
            print(f"  SHEET: {sname} header_row={header_row} keys={canonical_headers(labels)}")
    return EXIT_SUCCESS_ALL


def _write_response(response: UploadResponse, source: Path, output: Path | None) -> None:
    text = response.to_json(indent=2)
    if output is None:
        print(text)
        return
    output.mkdir(parents=True, exist_ok=True)
    (output / f"{source.stem}.json").write_text(text + "\n", encoding="utf-8")


def _evaluate(response: UploadResponse, cfg: ReportConfig, logger) -> list[dict[str, object]]:
    client = SummarizerClient(cfg.summarizer)
    evaluations: list[dict[str, object]] = []
    # biggest groups first, they carry most of the month's incidents
    groups = sorted(response.result.services, key=lambda g: len(g.records), reverse=True)
    for group in groups:
        try:
            ev = client.evaluate(group)
        except SummarizerError as e:
            logger.error(f"summarizer: {group.nama_service} ({group.sid}): {e}")
            continue
        evaluations.append(
            {
                "nama_service": ev.nama_service,
                "sid": ev.sid,
                "summary": ev.summary,
                "evaluation": ev.evaluation,
                "evalTime": ev.elapsed_seconds,
            }
        )
    return evaluations


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when argv is None; tests pass explicit lists
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(args.files, cfg)

    error_log = ErrorLogBuffer()
    failed = 0
    with ProgressTracker(len(args.files)) as progress:
        for path in args.files:
            progress.start_file(path.name)
            content = path.read_bytes() if path.is_file() else None
            if content is None:
                logger.error(f"file not found: {path}")
            response = handle_upload(path.name, content, cfg, error_log=error_log)

            if response.ok and args.evaluate:
                response.body["evaluations"] = _evaluate(response, cfg, logger)
            _write_response(response, path, args.output)

            if response.ok:
                summary_line = render_summary_line(path.name, response.result)
                log_summary(summary_line[len("SUMMARY "):])
            else:
                failed += 1
            progress.finish_file(
                success=response.ok,
                records=response.result.total_records if response.result else 0,
            )

    counts = error_log.counts_by_type()
    written = error_log.flush()
    if written is not None:
        breakdown = " ".join(f"{k}={v}" for k, v in sorted(counts.items()))
        logger.info(f"error log: {written} ({breakdown})")

    return EXIT_PARTIAL_FAILURE if failed else EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
