from __future__ import annotations

from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..models.validation_error import ValidationError

"""Row validation error log (JSON Lines).

One file per import run, named after the run's UTC start time:
logs/errors-YYYYMMDD-HHMMSS.log. The directory and file only appear once
something is flushed. Each line is ValidationError.to_json_line(), i.e. an
object with exactly the keys row / field / message / value.
"""

__all__ = [
    "ValidationError",
    "ErrorLogBuffer",
    "error_log_path",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


def error_log_path(logs_dir: Path, started_at: datetime) -> Path:
    return logs_dir / f"errors-{started_at.astimezone(UTC).strftime(TIMESTAMP_FMT)}.log"


class ErrorLogBuffer:
    """Collects validation errors in memory; flush() appends them to the run's log file.

    Not thread safe. Use one buffer per run so all flushes go to the same file.
    """

    def __init__(self, logs_dir: Path | None = None, started_at: datetime | None = None) -> None:
        self.path = error_log_path(
            logs_dir if logs_dir is not None else LOGS_DIR,
            started_at if started_at is not None else datetime.now(UTC),
        )
        self._pending: list[ValidationError] = []

    def append(self, error: ValidationError) -> None:
        self._pending.append(error)

    def extend(self, errors: Iterable[ValidationError]) -> None:
        self._pending.extend(errors)

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path:
        """Write pending errors and return the log path (no file when nothing is pending)."""
        if self._pending:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            lines = "".join(e.to_json_line() + "\n" for e in self._pending)
            with self.path.open("a", encoding="utf-8") as fh:
                fh.write(lines)
            self._pending = []
        return self.path
