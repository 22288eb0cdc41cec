from __future__ import annotations

from dataclasses import asdict, dataclass, field

"""Field matcher output models.

MappingResult.mappings is target field key -> CSV column. Every key in
mappings has an entry in confidence. Within one matcher pass a column is
used as a mapping value at most once; callers editing mappings afterwards
may break that on purpose.
"""

__all__ = [
    "MappingSuggestion",
    "MappingResult",
]


@dataclass(frozen=True)
class MappingSuggestion:
    """Best candidate for a field that scored below the confidence threshold."""
    target: str
    column: str
    score: float


@dataclass
class MappingResult:
    mappings: dict[str, str] = field(default_factory=dict)
    confidence: dict[str, float] = field(default_factory=dict)
    suggestions: list[MappingSuggestion] = field(default_factory=list)

    def assign(self, target: str, column: str, score: float) -> None:
        self.mappings[target] = column
        self.confidence[target] = score

    def mapped_columns(self) -> set[str]:
        return set(self.mappings.values())

    def suggestion_for(self, target: str) -> MappingSuggestion | None:
        for s in self.suggestions:
            if s.target == target:
                return s
        return None

    def to_dict(self) -> dict[str, object]:
        return {
            "mappings": dict(self.mappings),
            "confidence": dict(self.confidence),
            "suggestions": [asdict(s) for s in self.suggestions],
        }
