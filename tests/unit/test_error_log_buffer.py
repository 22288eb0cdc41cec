from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

from recipient_import.logging.error_log import ErrorLogBuffer, ValidationError, error_log_path


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ValidationError(row=2, field="phone", message="Invalid phone number format", value="0712"))
    buf.append(ValidationError(row=3, field="body_0", message="Body parameter 1 is empty"))
    path = buf.flush()
    assert path.exists()
    assert path.parent == Path("logs")
    assert path.name.startswith("errors-") and path.suffix == ".log"

    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw)) == {"row", "field", "message", "value"}
    # flush 後バッファクリア
    assert len(buf) == 0


def test_error_log_buffer_multiple_flushes(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ValidationError(row=1, field="phone", message="Phone number is required"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.extend([ValidationError(row=2, field="phone", message="Phone number is required")])
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_error_log_buffer_empty_flush_creates_no_file(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "out")
    path = buf.flush()
    assert path.parent == tmp_path / "out"
    assert not path.exists()


def test_error_log_path_uses_run_start_time(tmp_path: Path):
    started = datetime(2024, 3, 5, 7, 8, 9, tzinfo=UTC)
    buf = ErrorLogBuffer(logs_dir=tmp_path, started_at=started)
    buf.append(ValidationError(row=1, field="phone", message="Phone number is required"))
    assert buf.flush() == tmp_path / "errors-20240305-070809.log"
    assert error_log_path(tmp_path, started) == buf.path
