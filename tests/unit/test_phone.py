from __future__ import annotations

import pytest

from recipient_import.transform.phone import clean_phone_number, format_phone_number, is_valid_phone_number


@pytest.mark.parametrize(
    ("phone", "valid"),
    [
        ("+254712345678", True),
        ("254712345678", True),
        ("+1 (415) 555-2671", True),
        ("+44.20.7946.0958", True),
        ("+12345678", True),          # 8 digits after '+'
        ("+1234567", False),          # 7 digits after '+'
        ("0712345678", False),        # leading 0 without '+'
        ("+0712345678", False),
        ("12345", False),
        ("1234567890123456", False),  # 16 digits
        ("12345abcde", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_phone_number(phone, valid: bool):
    assert is_valid_phone_number(phone) is valid


def test_clean_phone_number():
    assert clean_phone_number(" (254) 712-345.678 ") == "254712345678"


@pytest.mark.parametrize(
    ("phone", "formatted"),
    [
        ("254-712-345-678", "+254712345678"),
        ("+254 712 345 678", "+254712345678"),
        ("0712 345 678", "+0712345678"),  # heuristic only: 10 chars -> '+' prefix
        ("12345", "12345"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_phone_number(phone, formatted: str):
    assert format_phone_number(phone) == formatted
