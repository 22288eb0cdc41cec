from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from ..models.config_models import TransformOptions
from ..models.field_definition import PARAM_KINDS, ParamCounts
from ..models.recipient import RecipientRecord, TemplateParams
from ..models.transform_result import TransformResult
from ..models.validation_error import ValidationError
from .phone import format_phone_number, is_valid_phone_number

"""Recipient transformer: CSV rows + confirmed mapping -> send-ready recipients.

Rows never raise. Each problem becomes a ValidationError (row numbers are
1-based input positions) and the row is either dropped (skip_invalid_rows) or
still turned into a best-effort recipient so the caller can show it next to
its errors.
"""

__all__ = [
    "CSVRow",
    "CUSTOM_FIELD_PREFIX",
    "get_mapped_value",
    "validate_row",
    "build_recipient",
    "transform",
    "extract_custom_fields",
]

logger = logging.getLogger(__name__)

CSVRow = Mapping[str, "str | None"]

CUSTOM_FIELD_PREFIX = "custom."


def get_mapped_value(row: CSVRow, mappings: Mapping[str, str], target_field: str) -> str:
    """Trimmed cell value of the column mapped to target_field ('' if none)."""
    column = mappings.get(target_field)
    if not column:
        return ""
    value = row.get(column)
    return value.strip() if value else ""


def validate_row(
    row: CSVRow,
    mappings: Mapping[str, str],
    param_counts: ParamCounts,
    row_number: int,
    options: TransformOptions,
) -> list[ValidationError]:
    """Collect the validation errors of one row (empty list when clean).

    Only body parameters are checked for emptiness; header and button
    parameters may be blank. With validate_phone off an empty phone is not
    reported either.
    """
    errors: list[ValidationError] = []

    if options.validate_phone:
        phone = get_mapped_value(row, mappings, "phone")
        if not phone:
            errors.append(ValidationError(row=row_number, field="phone", message="Phone number is required"))
        elif not is_valid_phone_number(phone):
            errors.append(
                ValidationError(
                    row=row_number, field="phone", message="Invalid phone number format", value=phone
                )
            )

    if options.validate_params:
        for i, key in enumerate(param_counts.slot_keys("body")):
            if not get_mapped_value(row, mappings, key):
                errors.append(
                    ValidationError(row=row_number, field=key, message=f"Body parameter {i + 1} is empty")
                )

    return errors


def _param_values(row: CSVRow, mappings: Mapping[str, str], param_counts: ParamCounts, kind: str) -> list[str]:
    # 常に count 個 (欠損は '')
    return [get_mapped_value(row, mappings, key) for key in param_counts.slot_keys(kind)]


def build_recipient(row: CSVRow, mappings: Mapping[str, str], param_counts: ParamCounts) -> RecipientRecord:
    params = {f"{kind}_params": _param_values(row, mappings, param_counts, kind) for kind in PARAM_KINDS}
    return RecipientRecord(
        phone=format_phone_number(get_mapped_value(row, mappings, "phone")),
        template_params=TemplateParams(**params),
        fullname=get_mapped_value(row, mappings, "fullname") or None,
        email=get_mapped_value(row, mappings, "email") or None,
    )


def transform(
    rows: Sequence[CSVRow],
    mappings: Mapping[str, str],
    param_counts: ParamCounts,
    options: TransformOptions | None = None,
    *,
    row_offset: int = 0,
) -> TransformResult:
    """Transform CSV rows into broadcast recipients.

    Args:
        rows: Parsed CSV rows (column -> raw string)
        mappings: Target field key -> CSV column
        param_counts: Template slot counts; parameter arrays get exactly these lengths
        options: Validation / skipping behaviour, defaults to TransformOptions()
        row_offset: Added to row numbers in errors (for chunked input)

    Returns:
        TransformResult. invalid_count is len(rows) - len(recipients), which is
        0 whenever skip_invalid_rows is False even if errors were recorded.
    """
    opts = options or TransformOptions()
    recipients: list[RecipientRecord] = []
    errors: list[ValidationError] = []

    for index, row in enumerate(rows):
        row_number = row_offset + index + 1
        row_errors = validate_row(row, mappings, param_counts, row_number, opts)
        if row_errors:
            errors.extend(row_errors)
            if opts.skip_invalid_rows:
                logger.debug(f"transform: skip row={row_number} errors={len(row_errors)}")
                continue
        recipients.append(build_recipient(row, mappings, param_counts))

    return TransformResult(
        recipients=recipients,
        errors=errors,
        valid_count=len(recipients),
        invalid_count=len(rows) - len(recipients),
    )


def extract_custom_fields(row: CSVRow, mappings: Mapping[str, str]) -> dict[str, str]:
    """Pull 'custom.<key>' mappings into {key: trimmed value}, skipping empty cells."""
    custom: dict[str, str] = {}
    for target, column in mappings.items():
        if not target.startswith(CUSTOM_FIELD_PREFIX):
            continue
        value = row.get(column)
        if value:
            custom[target[len(CUSTOM_FIELD_PREFIX):]] = value.strip()
    return custom
