"""Recipient transformer: CSV rows + mapping -> validated recipients."""

from .mapping_check import get_required_fields, validate_mappings
from .phone import format_phone_number, is_valid_phone_number
from .recipients import extract_custom_fields, get_mapped_value, transform
from .template import count_template_params, extract_placeholders, is_named_params, preview_message

__all__ = [
    "count_template_params",
    "extract_custom_fields",
    "extract_placeholders",
    "format_phone_number",
    "get_mapped_value",
    "get_required_fields",
    "is_named_params",
    "is_valid_phone_number",
    "preview_message",
    "transform",
    "validate_mappings",
]
