"""Domain models for the CSV -> WhatsApp broadcast recipient import.

This package contains the value objects passed between the field matcher,
the recipient transformer, the config loader and the CLI.
"""

from .config_models import ImportConfig, MatchOptions, TemplateConfig, TransformOptions
from .field_definition import PARAM_KINDS, FieldDefinition, ParamCounts
from .import_report import ImportReport
from .mapping_result import MappingResult, MappingSuggestion
from .recipient import RecipientRecord, TemplateParams
from .transform_result import MappingCheck, TransformResult
from .validation_error import ValidationError

__all__ = [
    # Configuration models
    "ImportConfig",
    "MatchOptions",
    "TemplateConfig",
    "TransformOptions",
    # Mapping models
    "PARAM_KINDS",
    "FieldDefinition",
    "ParamCounts",
    "MappingResult",
    "MappingSuggestion",
    # Transform models
    "ImportReport",
    "RecipientRecord",
    "TemplateParams",
    "MappingCheck",
    "TransformResult",
    "ValidationError",
]
