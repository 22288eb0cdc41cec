from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

"""Mapping target models for the CSV -> broadcast recipient import.

A FieldDefinition names something a CSV column can be mapped onto: a core
contact attribute (phone / fullname / email), a custom field (custom.<key>)
or a positional template parameter slot (header_<i> / body_<i> / button_<i>).

ParamCounts carries how many positional slots a message template exposes
per component.
"""

__all__ = [
    "FieldDefinition",
    "ParamCounts",
    "PARAM_KINDS",
]

# 固定順: header -> body -> button
PARAM_KINDS: tuple[str, ...] = ("header", "body", "button")


@dataclass(frozen=True)
class FieldDefinition:
    """A mappable target field.

    Attributes:
        key: Field key, optionally namespaced with '.' (e.g. 'custom.loyalty')
        label: Display label. Falls back to key when omitted
        required: Required fields get first pick of ambiguous columns
        aliases: Extra aliases checked after the built-in alias table
    """
    key: str
    label: str | None = None
    required: bool = False
    aliases: tuple[str, ...] = ()

    @property
    def display_label(self) -> str:
        return self.label if self.label is not None else self.key

    @property
    def base_key(self) -> str:
        """Segment after the last '.' ('custom.loyalty' -> 'loyalty')."""
        if "." in self.key:
            return self.key.rsplit(".", 1)[-1] or self.key
        return self.key


@dataclass(frozen=True)
class ParamCounts:
    """Counts of positional template parameter slots (all >= 0)."""
    header: int = 0
    body: int = 0
    button: int = 0

    def __post_init__(self) -> None:
        for kind in PARAM_KINDS:
            value = getattr(self, kind)
            if value < 0:
                raise ValueError(f"param count '{kind}' must be >= 0, got {value}")

    def count(self, kind: str) -> int:
        if kind not in PARAM_KINDS:
            raise ValueError(f"unknown parameter kind: {kind}")
        return getattr(self, kind)

    def slot_keys(self, kind: str) -> Iterator[str]:
        """Yield slot keys for one component: 'body_0', 'body_1', ..."""
        for i in range(self.count(kind)):
            yield f"{kind}_{i}"

    @property
    def total(self) -> int:
        return self.header + self.body + self.button
