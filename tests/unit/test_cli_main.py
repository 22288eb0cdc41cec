from __future__ import annotations

import json
from pathlib import Path

from recipient_import.cli import main as cli_main
from recipient_import.logging.init import reset_logging


def test_cli_valid_file_success(write_config, valid_csv: Path, capsys):
    reset_logging()
    code = cli_main([str(valid_csv)])
    out = capsys.readouterr().out
    assert code == 0
    assert f"INFO Processing file: {valid_csv} rows=2 columns=5" in out
    assert "SUMMARY rows=2 valid=2 invalid=0 errors=0 error_rows=0 mapped=5/5" in out
    assert "WARN" not in out


def test_cli_writes_payload(write_config, valid_csv: Path, temp_workdir: Path, capsys):
    reset_logging()
    out_path = temp_workdir / "out" / "payload.json"
    code = cli_main([str(valid_csv), "--output", str(out_path)])
    assert code == 0
    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["template_id"] == "order_update"
    assert [r["phone"] for r in payload["recipients"]] == ["+254712345678", "+254799000111"]
    assert "INFO payload written:" in capsys.readouterr().out


def test_cli_inspect_data(write_config, sample_csv: Path, capsys):
    reset_logging()
    code = cli_main([str(sample_csv), "--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "headers=['Mobile', 'Customer Name', 'E-mail', 'First Name', 'Order Number'] rows=4" in out
    assert "phone <- 'Mobile' score=0.90 (high)" in out
    assert "email <- 'E-mail' score=0.95 (high)" in out
    assert "body_0 <- 'First Name' score=0.80 (medium)" in out
    assert "sample_rows=" in out
    # inspect では変換しない
    assert "SUMMARY" not in out


def test_cli_error_log(write_config, sample_csv: Path, temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([str(sample_csv), "--error-log"])
    out = capsys.readouterr().out
    assert code == 2
    assert "INFO error log:" in out
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    records = [json.loads(line) for line in logs[0].read_text(encoding="utf-8").splitlines()]
    assert [(r["row"], r["field"]) for r in records] == [(2, "phone"), (3, "phone"), (3, "body_0")]


def test_cli_no_error_log_without_flag(write_config, sample_csv: Path, temp_workdir: Path, capsys):
    reset_logging()
    assert cli_main([str(sample_csv)]) == 2
    assert not list((temp_workdir / "logs").glob("errors-*.log"))


def test_cli_preview(write_config, valid_csv: Path, capsys):
    reset_logging()
    code = cli_main([str(valid_csv), "--preview", "1"])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO preview +254712345678: Hello Alice, order A123 is ready" in out
    assert "preview +254799000111" not in out


def test_cli_preview_without_template_body(write_config, valid_csv: Path, capsys):
    reset_logging()
    text = write_config.read_text(encoding="utf-8").replace(
        '  body_text: "Hello {{1}}, order {{2}} is ready"\n', ""
    )
    write_config.write_text(text, encoding="utf-8")
    assert cli_main([str(valid_csv), "--preview", "2"]) == 0
    assert "WARN preview: no template body_text configured" in capsys.readouterr().out


def test_cli_debug_mode(write_config, valid_csv: Path, capsys):
    reset_logging()
    code = cli_main([str(valid_csv), "--debug"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
    reset_logging()


def test_cli_config_from_env(temp_workdir: Path, write_config: Path, valid_csv: Path, monkeypatch, capsys):
    reset_logging()
    moved = temp_workdir / "alt.yml"
    write_config.rename(moved)
    monkeypatch.setenv("RECIPIENT_IMPORT_CONFIG", str(moved))
    assert cli_main([str(valid_csv)]) == 0


def test_cli_config_from_dotenv(temp_workdir: Path, write_config: Path, valid_csv: Path, monkeypatch, capsys):
    reset_logging()
    moved = temp_workdir / "dotenv.yml"
    write_config.rename(moved)
    (temp_workdir / ".env").write_text(f"RECIPIENT_IMPORT_CONFIG={moved}\n", encoding="utf-8")
    # load_dotenv が os.environ に書くので後片付けを monkeypatch に任せる
    monkeypatch.setenv("RECIPIENT_IMPORT_CONFIG", "")
    monkeypatch.delenv("RECIPIENT_IMPORT_CONFIG")
    assert cli_main([str(valid_csv)]) == 0


def test_cli_inspect_data_lists_unused_columns(write_config, temp_workdir: Path, capsys):
    reset_logging()
    p = temp_workdir / "data" / "extra.csv"
    p.write_text("Mobile,Notes,First Name,Order Number\n+254712345678,vip,Alice,A1\n", encoding="utf-8")
    assert cli_main([str(p), "--inspect-data"]) == 0
    out = capsys.readouterr().out
    assert "unmapped=['fullname', 'email']" in out
    assert "unused_columns=['Notes']" in out
