from __future__ import annotations

from dataclasses import dataclass, field

from .field_definition import FieldDefinition, ParamCounts

"""Config dataclasses for the recipient import.

MatchOptions / TransformOptions hold the per-call options of the field matcher
and the recipient transformer with their defaults. ImportConfig is the root
object produced by config.loader from config/import.yml.
"""

__all__ = [
    "MatchOptions",
    "TransformOptions",
    "TemplateConfig",
    "ImportConfig",
]


@dataclass(frozen=True)
class MatchOptions:
    """Field matcher options.

    Mappings scoring below min_confidence_score are reported as suggestions
    instead of mappings.
    """
    prioritize_required: bool = True
    allow_fuzzy_matching: bool = True
    min_confidence_score: float = 0.7


@dataclass(frozen=True)
class TransformOptions:
    validate_phone: bool = True
    validate_params: bool = True
    skip_invalid_rows: bool = False


@dataclass(frozen=True)
class TemplateConfig:
    """Message template text used for previews and for deriving ParamCounts."""
    body_text: str = ""
    header_text: str = ""
    button_urls: tuple[str, ...] = ()
    template_id: str | None = None


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for an import run."""
    fields: list[FieldDefinition]
    param_counts: ParamCounts
    matching: MatchOptions = field(default_factory=MatchOptions)
    transform: TransformOptions = field(default_factory=TransformOptions)
    template: TemplateConfig | None = None
    mappings: dict[str, str] = field(default_factory=dict)  # 手動マッピング (auto-map を上書き)
    batch_size: int = 500

    @property
    def required_field_keys(self) -> list[str]:
        return [f.key for f in self.fields if f.required]
