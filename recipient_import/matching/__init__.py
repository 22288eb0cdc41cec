"""Field matcher: CSV headers -> suggested target field mapping."""

from .engine import FIELD_ALIASES, confidence_label, find_best_match, match, score_column
from .normalize import levenshtein_distance, normalize

__all__ = [
    "FIELD_ALIASES",
    "confidence_label",
    "find_best_match",
    "levenshtein_distance",
    "match",
    "normalize",
    "score_column",
]
