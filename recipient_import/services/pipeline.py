from __future__ import annotations

import logging
import time
from datetime import UTC, datetime

from ..matching.engine import match
from ..models.config_models import ImportConfig
from ..models.field_definition import PARAM_KINDS
from ..models.import_report import ImportReport
from ..models.recipient import RecipientRecord
from ..models.transform_result import MappingCheck, TransformResult
from ..models.validation_error import ValidationError
from ..table.reader import TableData
from ..transform.mapping_check import get_required_fields, validate_mappings
from ..transform.recipients import transform
from .interfaces import BroadcastSender
from .progress import ProgressTracker

"""Import pipeline: table -> suggested mapping -> pre-flight check -> recipients.

Steps:
1. Auto-map headers onto the configured fields and template slots
2. Apply manual mapping overrides from the config
3. Pre-flight check (required fields mapped onto existing columns)
4. Transform rows in batches (row numbers in errors stay global)
5. Optionally hand the recipients to a BroadcastSender
"""

__all__ = [
    "ProcessingError",
    "effective_mappings",
    "required_fields_for",
    "transform_in_batches",
    "run_import",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Raised when an import cannot go ahead (e.g. required field unmapped)."""

    def __init__(self, message: str, check: MappingCheck | None = None) -> None:
        super().__init__(message)
        self.check = check


def effective_mappings(auto: dict[str, str], overrides: dict[str, str]) -> dict[str, str]:
    """Matcher proposal with manual overrides on top. An empty override unmaps."""
    merged = dict(auto)
    for target, column in overrides.items():
        if column:
            merged[target] = column
        else:
            merged.pop(target, None)
    return merged


def required_fields_for(config: ImportConfig) -> list[str]:
    required: list[str] = []
    for key in [*config.required_field_keys, *get_required_fields(config.param_counts)]:
        if key not in required:
            required.append(key)
    return required


def transform_in_batches(
    table: TableData,
    mappings: dict[str, str],
    config: ImportConfig,
    progress: ProgressTracker | None = None,
) -> TransformResult:
    recipients: list[RecipientRecord] = []
    errors: list[ValidationError] = []
    rows = table.rows
    for start in range(0, len(rows), config.batch_size):
        batch = rows[start:start + config.batch_size]
        partial = transform(batch, mappings, config.param_counts, config.transform, row_offset=start)
        recipients.extend(partial.recipients)
        errors.extend(partial.errors)
        if progress is not None:
            progress.advance(len(batch), errors=len(errors))
    return TransformResult(
        recipients=recipients,
        errors=errors,
        valid_count=len(recipients),
        invalid_count=len(rows) - len(recipients),
    )


def run_import(
    table: TableData,
    config: ImportConfig,
    *,
    sender: BroadcastSender | None = None,
    show_progress: bool | None = None,
) -> ImportReport:
    """Run the full import over an already parsed table.

    Raises:
        ProcessingError: when the pre-flight mapping check reports errors
    """
    start_time = datetime.now(UTC)
    t0 = time.perf_counter()

    suggestion = match(table.headers, config.fields, config.param_counts, config.matching)
    for s in suggestion.suggestions:
        logger.info(f"low-confidence suggestion: {s.target} <- '{s.column}' (score={s.score:.2f})")
    mappings = effective_mappings(suggestion.mappings, config.mappings)

    check = validate_mappings(mappings, table.headers, required_fields_for(config))
    for w in check.warnings:
        logger.warning(w)
    if not check.valid:
        for e in check.errors:
            logger.error(f"mapping: {e}")
        raise ProcessingError(f"mapping check failed ({len(check.errors)} error(s))", check)

    with ProgressTracker(len(table.rows), enabled=show_progress) as progress:
        result = transform_in_batches(table, mappings, config, progress)

    if config.transform.skip_invalid_rows and result.invalid_count:
        logger.warning(f"skipped {result.invalid_count} invalid row(s)")

    send_result = None
    if sender is not None:
        template_id = config.template.template_id if config.template else None
        if result.recipients:
            send_result = sender.send(result.recipients, template_id)
            logger.info(f"sent {len(result.recipients)} recipient(s) template_id={template_id}")
        else:
            logger.warning("no recipients to send")

    targets = [f.key for f in config.fields]
    for kind in PARAM_KINDS:
        targets.extend(config.param_counts.slot_keys(kind))
    targets = list(dict.fromkeys(targets))

    elapsed = time.perf_counter() - t0
    return ImportReport(
        total_rows=len(table.rows),
        total_fields=len(targets),
        mapped_fields=sum(1 for t in targets if t in mappings),
        mapping=suggestion,
        mappings=mappings,
        mapping_check=check,
        result=result,
        start_time=start_time,
        end_time=datetime.now(UTC),
        elapsed_seconds=elapsed,
        send_result=send_result,
    )
