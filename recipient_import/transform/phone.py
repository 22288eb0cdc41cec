from __future__ import annotations

import re

"""Phone number checks used by the recipient transformer.

Accepted forms after removing whitespace, '-', '(', ')' and '.':
- E.164: '+' then 8-15 digits, first digit non-zero
- bare digits: 10-15 digits, first digit non-zero (local numbers with a
  leading 0 are rejected unless written in E.164 form)
"""

__all__ = [
    "clean_phone_number",
    "is_valid_phone_number",
    "format_phone_number",
]

_SEPARATORS = re.compile(r"[\s\-().]")
E164_PATTERN = re.compile(r"\+[1-9]\d{7,14}")
BARE_DIGITS_PATTERN = re.compile(r"[1-9]\d{9,14}")
MIN_DIGITS_FOR_PLUS_PREFIX = 10


def clean_phone_number(phone: str) -> str:
    return _SEPARATORS.sub("", phone)


def is_valid_phone_number(phone: str | None) -> bool:
    if not phone:
        return False
    cleaned = clean_phone_number(phone)
    return bool(E164_PATTERN.fullmatch(cleaned) or BARE_DIGITS_PATTERN.fullmatch(cleaned))


def format_phone_number(phone: str | None) -> str:
    """Strip separators and prefix '+' when it is missing.

    Only a heuristic: '+' is added when the cleaned value has at least 10
    characters, no country code detection is done.
    """
    if not phone:
        return ""
    cleaned = clean_phone_number(phone)
    if not cleaned.startswith("+") and len(cleaned) >= MIN_DIGITS_FOR_PLUS_PREFIX:
        cleaned = "+" + cleaned
    return cleaned
