"""CSV -> WhatsApp broadcast recipient import.

Two pure steps, used one after the other by an import wizard:

- matching.match: propose a CSV column for each contact field / template slot
- transform.transform: turn rows + confirmed mapping into send-ready recipients
"""

from .matching.engine import match
from .models import (
    FieldDefinition,
    MappingResult,
    MatchOptions,
    ParamCounts,
    RecipientRecord,
    TransformOptions,
    TransformResult,
    ValidationError,
)
from .transform import (
    extract_custom_fields,
    format_phone_number,
    get_mapped_value,
    is_valid_phone_number,
    preview_message,
    transform,
    validate_mappings,
)

__version__ = "0.1.0"

__all__ = [
    "FieldDefinition",
    "MappingResult",
    "MatchOptions",
    "ParamCounts",
    "RecipientRecord",
    "TransformOptions",
    "TransformResult",
    "ValidationError",
    "extract_custom_fields",
    "format_phone_number",
    "get_mapped_value",
    "is_valid_phone_number",
    "match",
    "preview_message",
    "transform",
    "validate_mappings",
]
