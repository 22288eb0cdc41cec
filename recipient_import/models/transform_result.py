from __future__ import annotations

from dataclasses import dataclass, field

from .recipient import RecipientRecord
from .validation_error import ValidationError

"""Transformer and pre-flight check result models."""

__all__ = [
    "TransformResult",
    "MappingCheck",
]


@dataclass(frozen=True)
class TransformResult:
    """Result of transforming CSV rows into recipients.

    invalid_count is len(rows) - len(recipients). When invalid rows are not
    skipped every row yields a recipient, so invalid_count stays 0 even when
    errors is non-empty; look at errors to find incomplete recipients.
    """
    recipients: list[RecipientRecord]
    errors: list[ValidationError]
    valid_count: int
    invalid_count: int

    def errors_for_row(self, row: int) -> list[ValidationError]:
        return [e for e in self.errors if e.row == row]

    @property
    def error_rows(self) -> list[int]:
        """Distinct row numbers with at least one error, in input order."""
        seen: list[int] = []
        for e in self.errors:
            if e.row not in seen:
                seen.append(e.row)
        return seen


@dataclass(frozen=True)
class MappingCheck:
    """Outcome of validate_mappings (pre-flight, before transforming)."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
