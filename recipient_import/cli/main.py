from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config, resolve_config_path
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, set_debug, setup_logging
from ..matching.engine import confidence_label, match
from ..models.config_models import ImportConfig
from ..models.import_report import ImportReport
from ..services.pipeline import ProcessingError, run_import
from ..services.summary import render_summary_line
from ..table.reader import InputFileError, TableData, read_table
from ..transform.template import is_named_params, preview_message

"""CLI entrypoint: recipient-import FILE [options]

Flow:
- Load .env (python-dotenv), then config/import.yml (or --config)
- Read the CSV / XLSX input
- Auto-map, check, transform; write the broadcast payload (--output)
- Log validation errors, optional previews and the SUMMARY line

Exit codes: 0 no validation errors, 2 finished with validation errors,
1 fatal (config, input or mapping check).
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = False) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="CSV -> WhatsApp broadcast recipient importer")
    p.add_argument("input", help="CSV or XLSX file with one recipient per row")
    p.add_argument("--config", help="config file (default: $RECIPIENT_IMPORT_CONFIG or config/import.yml)")
    p.add_argument("--output", help="write the recipients payload as JSON to this path")
    p.add_argument("--inspect-data", action="store_true", help="Print headers, suggested mapping & first rows then exit")
    p.add_argument("--preview", type=int, default=0, metavar="N", help="Log message previews for the first N recipients")
    p.add_argument("--error-log", action="store_true", help="Write validation errors to logs/errors-*.log")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _inspect_data(table: TableData, cfg: ImportConfig) -> int:
    print(f"headers={table.headers} rows={len(table.rows)}")
    suggestion = match(table.headers, cfg.fields, cfg.param_counts, cfg.matching)
    for target, column in suggestion.mappings.items():
        score = suggestion.confidence[target]
        print(f"  {target} <- '{column}' score={score:.2f} ({confidence_label(score)})")
    for s in suggestion.suggestions:
        print(f"  {s.target} ?? '{s.column}' score={s.score:.2f} (suggestion)")
    unmapped = [f.key for f in cfg.fields if f.key not in suggestion.mappings]
    if unmapped:
        print(f"  unmapped={unmapped}")
    unused = [h for h in table.headers if h not in suggestion.mapped_columns()]
    if unused:
        print(f"  unused_columns={unused}")
    print("  sample_rows=", table.rows[:INSPECT_SAMPLE_ROWS])
    return EXIT_SUCCESS_ALL


def _write_payload(path: Path, report: ImportReport, cfg: ImportConfig) -> None:
    payload = {
        "template_id": cfg.template.template_id if cfg.template else None,
        "recipients": [r.to_payload() for r in report.result.recipients],
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _log_previews(logger, report: ImportReport, cfg: ImportConfig, count: int) -> None:
    if cfg.template is None or not cfg.template.body_text:
        logger.warning("preview: no template body_text configured")
        return
    body = cfg.template.body_text
    named = is_named_params(body)
    for r in report.result.recipients[:count]:
        logger.info(f"preview {r.phone or '<no phone>'}: {preview_message(body, r.template_params.body_params, named)}")


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む (テストで main([...]) を呼ぶため)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    config_path = resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    try:
        table = read_table(Path(args.input))
    except InputFileError as e:
        logger.error(f"input: {e}")
        return EXIT_FATAL

    logger.info(f"Processing file: {args.input} rows={len(table.rows)} columns={len(table.headers)}")

    if args.inspect_data:
        return _inspect_data(table, cfg)

    try:
        report = run_import(table, cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    for err in report.result.errors:
        suffix = f" value='{err.value}'" if err.value is not None else ""
        logger.warning(f"row={err.row} field={err.field} {err.message}{suffix}")

    if args.error_log and report.result.errors:
        buffer = ErrorLogBuffer(started_at=report.start_time)
        buffer.extend(report.result.errors)
        logger.info(f"error log: {buffer.flush()}")

    if args.output:
        _write_payload(Path(args.output), report, cfg)
        logger.info(f"payload written: {args.output} recipients={report.result.valid_count}")

    if args.preview > 0:
        _log_previews(logger, report, cfg, args.preview)

    summary_line = render_summary_line(report)
    log_summary(summary_line[len("SUMMARY "):])  # log_summary が SUMMARY ラベルを付ける

    if report.has_errors:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL
