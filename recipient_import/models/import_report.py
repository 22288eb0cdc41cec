from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .mapping_result import MappingResult
from .transform_result import MappingCheck, TransformResult

"""Aggregated outcome of one import run (match -> check -> transform -> send)."""

__all__ = [
    "ImportReport",
]


@dataclass(frozen=True)
class ImportReport:
    """Everything the CLI needs for output, the SUMMARY line and the exit code.

    `mappings` is the effective mapping used for the transform: the matcher's
    proposal with the configured manual overrides applied on top.
    """
    total_rows: int
    total_fields: int  # contact fields + template slots
    mapped_fields: int  # targets with an effective mapping
    mapping: MappingResult
    mappings: dict[str, str]
    mapping_check: MappingCheck
    result: TransformResult
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    send_result: Any | None = None

    @property
    def has_errors(self) -> bool:
        return bool(self.result.errors)
