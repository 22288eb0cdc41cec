from __future__ import annotations

import json
from dataclasses import asdict, dataclass

"""ValidationError model for per-row transform problems.

Validation errors are data, not exceptions: the transformer collects them in a
flat list next to the recipients it produced. `row` is 1-based and matches the
row's position in the input (header row excluded).

The JSON Lines form written by ErrorLogBuffer carries exactly the four
dataclass fields.
"""

__all__ = [
    "ValidationError",
]


@dataclass(frozen=True)
class ValidationError:
    """Structured validation error for one field of one row.

    Attributes:
        row: Row number (1-based, position in the input rows)
        field: Target field key ('phone', 'body_0', ...)
        message: Human readable description
        value: Offending value, when there is one to show
    """
    row: int
    field: str
    message: str
    value: str | None = None

    def to_json_line(self) -> str:
        """Serialize to a single JSON Lines record."""
        return json.dumps(asdict(self), ensure_ascii=False)
