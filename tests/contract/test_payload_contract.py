from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import pytest

from recipient_import.cli import main as cli_main
from recipient_import.logging.init import reset_logging
from recipient_import.models import RecipientRecord, TemplateParams

"""Broadcast payload contract (--output JSON)."""

STRING_ARRAY = {"type": "array", "items": {"type": "string"}}

PAYLOAD_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "required": ["template_id", "recipients"],
    "properties": {
        "template_id": {"type": ["string", "null"]},
        "recipients": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["phone", "template_params"],
                "properties": {
                    "phone": {"type": "string"},
                    "fullname": {"type": "string", "minLength": 1},
                    "email": {"type": "string", "minLength": 1},
                    "template_params": {
                        "type": "object",
                        "additionalProperties": False,
                        "required": ["header_params", "body_params", "button_params"],
                        "properties": {
                            "header_params": STRING_ARRAY,
                            "body_params": STRING_ARRAY,
                            "button_params": STRING_ARRAY,
                        },
                    },
                },
            },
        },
    },
}


def test_recipient_payload_omits_empty_contact_fields():
    record = RecipientRecord(phone="+254712345678", template_params=TemplateParams([], ["Alice"], []))
    payload = {"template_id": None, "recipients": [record.to_payload()]}
    jsonschema.validate(payload, PAYLOAD_SCHEMA)
    assert "fullname" not in payload["recipients"][0]


def test_payload_rejects_unknown_recipient_key():
    payload = {
        "template_id": "t",
        "recipients": [{"phone": "+1", "template_params": {
            "header_params": [], "body_params": [], "button_params": []}, "city": "Nairobi"}],
    }
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(payload, PAYLOAD_SCHEMA)


def test_cli_payload_matches_contract(write_config, sample_csv: Path, temp_workdir: Path, capsys):
    reset_logging()
    out_path = temp_workdir / "payload.json"
    cli_main([str(sample_csv), "--output", str(out_path)])
    payload = json.loads(out_path.read_text(encoding="utf-8"))
    jsonschema.validate(payload, PAYLOAD_SCHEMA)
    # パラメータ配列は常に param_counts の長さ
    for r in payload["recipients"]:
        assert len(r["template_params"]["header_params"]) == 0
        assert len(r["template_params"]["body_params"]) == 2
        assert len(r["template_params"]["button_params"]) == 0
