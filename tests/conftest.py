# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from recipient_import.models import FieldDefinition, ParamCounts

SAMPLE_CSV = """Mobile,Customer Name,E-mail,First Name,Order Number
+254712345678,Alice Wanjiru,alice@example.com,Alice,A123
0712 345 678,Bob Otieno,,Bob,A124
,Carol Njeri,carol@example.com,,A125
(254) 799-000-111,Dan Kamau,,Dan,A126
"""

VALID_ONLY_CSV = """Mobile,Customer Name,E-mail,First Name,Order Number
+254712345678,Alice Wanjiru,alice@example.com,Alice,A123
254799000111,Dan Kamau,,Dan,A126
"""


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("RECIPIENT_IMPORT_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """fields:
  - key: phone
    label: Phone
    required: true
  - key: fullname
    label: Full name
  - key: email
    label: Email
param_counts:
  header: 0
  body: 2
  button: 0
matching:
  min_confidence_score: 0.7
transform:
  skip_invalid_rows: false
  batch_size: 2
template:
  template_id: order_update
  body_text: "Hello {{1}}, order {{2}} is ready"
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv(temp_workdir: Path) -> Path:
    p = temp_workdir / "data" / "recipients.csv"
    p.write_text(SAMPLE_CSV, encoding="utf-8")
    return p


@pytest.fixture()
def valid_csv(temp_workdir: Path) -> Path:
    p = temp_workdir / "data" / "valid.csv"
    p.write_text(VALID_ONLY_CSV, encoding="utf-8")
    return p


@pytest.fixture()
def contact_fields() -> list[FieldDefinition]:
    return [
        FieldDefinition(key="phone", label="Phone", required=True),
        FieldDefinition(key="fullname", label="Full name"),
        FieldDefinition(key="email", label="Email"),
    ]


@pytest.fixture()
def no_params() -> ParamCounts:
    return ParamCounts()
