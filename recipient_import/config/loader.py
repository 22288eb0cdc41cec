from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError as SchemaValidationError

from ..models.config_models import ImportConfig, MatchOptions, TemplateConfig, TransformOptions
from ..models.field_definition import FieldDefinition, ParamCounts
from ..transform.template import count_template_params

"""Config loader for config/import.yml.

Responsibilities:
- Load YAML
- Validate against the bundled JSON schema (unknown keys rejected)
- Apply defaults and build ImportConfig

param_counts falls back to counting placeholders in the template section
when it is omitted.
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "SCHEMA_PATH",
    "resolve_config_path",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/import.yml")
CONFIG_ENV_VAR = "RECIPIENT_IMPORT_CONFIG"
SCHEMA_PATH = Path(__file__).parent / "config_schema.json"


class ConfigError(Exception):
    pass


def resolve_config_path(explicit: str | None = None) -> Path:
    """--config > RECIPIENT_IMPORT_CONFIG > config/import.yml"""
    if explicit:
        return Path(explicit)
    env = os.getenv(CONFIG_ENV_VAR)
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing / not JSON, or data not matching it
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except SchemaValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _build_fields(raw: list[dict[str, Any]]) -> list[FieldDefinition]:
    return [
        FieldDefinition(
            key=f["key"],
            label=f.get("label"),
            required=bool(f.get("required", False)),
            aliases=tuple(f.get("aliases", ())),
        )
        for f in raw
    ]


def _build_template(raw: dict[str, Any] | None) -> TemplateConfig | None:
    if raw is None:
        return None
    return TemplateConfig(
        body_text=raw.get("body_text", ""),
        header_text=raw.get("header_text", ""),
        button_urls=tuple(raw.get("button_urls", ())),
        template_id=raw.get("template_id"),
    )


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top level must be a mapping")

    _validate_config_schema(data)

    template = _build_template(data.get("template"))
    if "param_counts" in data:
        pc = data["param_counts"]
        param_counts = ParamCounts(
            header=pc.get("header", 0), body=pc.get("body", 0), button=pc.get("button", 0)
        )
    elif template is not None:
        param_counts = count_template_params(template.header_text, template.body_text, template.button_urls)
    else:
        param_counts = ParamCounts()

    matching_raw = data.get("matching", {})
    transform_raw = dict(data.get("transform", {}))
    batch_size = transform_raw.pop("batch_size", 500)

    return ImportConfig(
        fields=_build_fields(data["fields"]),
        param_counts=param_counts,
        matching=MatchOptions(**matching_raw),
        transform=TransformOptions(**transform_raw),
        template=template,
        mappings=dict(data.get("mappings", {})),
        batch_size=batch_size,
    )
