from __future__ import annotations

from collections.abc import Mapping, Sequence

from ..models.field_definition import ParamCounts
from ..models.transform_result import MappingCheck

"""Pre-flight check of a (possibly user edited) mapping before transforming."""

__all__ = [
    "get_required_fields",
    "validate_mappings",
]


def get_required_fields(param_counts: ParamCounts) -> list[str]:
    """Phone plus every body parameter slot."""
    return ["phone", *param_counts.slot_keys("body")]


def validate_mappings(
    mappings: Mapping[str, str],
    csv_headers: Sequence[str],
    required_fields: Sequence[str],
) -> MappingCheck:
    """Check required fields are mapped onto columns that exist.

    Errors: required field unmapped, or mapped to a column missing from
    csv_headers. Warnings: a column mapped to several fields, and columns no
    field uses.
    """
    errors: list[str] = []
    warnings: list[str] = []
    headers = list(csv_headers)

    for field in required_fields:
        column = mappings.get(field)
        if not column:
            errors.append(f'Required field "{field}" must be mapped')
        elif column not in headers:
            errors.append(f'Mapped column "{column}" not found in CSV headers')

    mapped_columns = list(mappings.values())
    duplicates: list[str] = []
    for idx, column in enumerate(mapped_columns):
        if column in mapped_columns[:idx] and column not in duplicates:
            duplicates.append(column)
    for column in duplicates:
        warnings.append(f'Column "{column}" is mapped to multiple fields')

    unmapped = [h for h in headers if h not in mapped_columns]
    if unmapped:
        warnings.append(f"{len(unmapped)} CSV column(s) are unmapped: {', '.join(unmapped)}")

    return MappingCheck(valid=not errors, errors=errors, warnings=warnings)
