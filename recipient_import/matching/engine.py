from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..models.config_models import MatchOptions
from ..models.field_definition import FieldDefinition, ParamCounts
from ..models.mapping_result import MappingResult, MappingSuggestion
from .normalize import exact_match, fuzzy_similarity, normalize, normalized_match

"""Field matcher: propose CSV column -> target field mappings.

Each field is scored against every still-available column with four
strategies (exact, normalized, alias, fuzzy) and takes the best column. A
confident match consumes the column so no column serves two fields in one
pass. Template parameter slots are then filled from the leftover columns with
weaker, substring / position based heuristics.

The matcher is pure: same headers + same fields (same order) -> same result.
Ties go to the first column in header order.
"""

__all__ = [
    "FIELD_ALIASES",
    "EXACT_SCORE",
    "NORMALIZED_SCORE",
    "ALIAS_SCORE",
    "FUZZY_THRESHOLD",
    "POSITIONAL_SCORE",
    "BODY_PATTERN_SCORE",
    "BUTTON_PATTERN_SCORE",
    "DEFAULT_MIN_CONFIDENCE",
    "score_column",
    "find_best_match",
    "match",
    "confidence_label",
]

logger = logging.getLogger(__name__)

# Strategy scores
EXACT_SCORE = 1.0
NORMALIZED_SCORE = 0.95
ALIAS_SCORE = 0.9
FUZZY_THRESHOLD = 0.7  # fuzzy similarity must be strictly above this
DEFAULT_MIN_CONFIDENCE = 0.7

# Template slot heuristics
POSITIONAL_SCORE = 0.5
BODY_PATTERN_SCORE = 0.8
BUTTON_PATTERN_SCORE = 0.85

HIGH_CONFIDENCE = 0.9
MEDIUM_CONFIDENCE = 0.7

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "phone": ("mobile", "telephone", "tel", "cell", "phone_number", "phonenumber", "contact", "numero"),
    "fullname": (
        "name", "full_name", "customer_name", "contact_name", "displayname", "nom", "client", "prenom",
    ),
    "email": ("mail", "e-mail", "email_address", "emailaddress", "courriel"),
}

_BODY_NAME_PATTERNS = ("name", "nom", "prenom", "firstname")
_BODY_FIRST_SLOT_PATTERNS = ("customer", "client")
_BODY_SECOND_SLOT_PATTERNS = ("order", "commande", "numero")
_BUTTON_URL_PATTERNS = ("url", "link", "lien", "tracking", "suivi", "http")


def _alias_match(header: str, key: str, extra_aliases: Iterable[str] = ()) -> bool:
    aliases = FIELD_ALIASES.get(key, ())
    if any(normalized_match(header, a) for a in aliases):
        return True
    return any(normalized_match(header, a) for a in extra_aliases)


def score_column(header: str, field: FieldDefinition, allow_fuzzy_matching: bool = True) -> float:
    """Score one CSV header against one field (0 when nothing matches).

    Strategies are tried strongest first; the first that applies decides.
    """
    names = (field.key, field.display_label, field.base_key)

    if any(exact_match(header, n) for n in names):
        return EXACT_SCORE
    if any(normalized_match(header, n) for n in names):
        return NORMALIZED_SCORE
    if _alias_match(header, field.key, field.aliases) or _alias_match(header, field.base_key):
        return ALIAS_SCORE
    if allow_fuzzy_matching:
        return max(fuzzy_similarity(header, n, FUZZY_THRESHOLD) for n in names)
    return 0.0


def find_best_match(
    headers: Sequence[str], field: FieldDefinition, allow_fuzzy_matching: bool = True
) -> tuple[str, float] | None:
    """Return (column, score) of the best scoring header, or None if all score 0."""
    best: tuple[str, float] | None = None
    for header in headers:
        score = score_column(header, field, allow_fuzzy_matching)
        # 同点は先勝ち (strict >)
        if score > (best[1] if best else 0.0):
            best = (header, score)
    return best


def _take(available: list[str], column: str) -> None:
    # 同名ヘッダは全て消費する
    available[:] = [h for h in available if h != column]


def _first_containing(available: Sequence[str], patterns: Iterable[str]) -> str | None:
    patterns = tuple(patterns)
    for header in available:
        normalized = normalize(header)
        if any(p in normalized for p in patterns):
            return header
    return None


def _body_patterns(index: int) -> list[str]:
    patterns = list(_BODY_NAME_PATTERNS)
    if index == 0:
        patterns.extend(_BODY_FIRST_SLOT_PATTERNS)
    if index == 1:
        patterns.extend(_BODY_SECOND_SLOT_PATTERNS)
    patterns.append(f"param{index + 1}")
    patterns.append(f"body{index + 1}")
    return patterns


def _map_template_slots(result: MappingResult, available: list[str], param_counts: ParamCounts) -> None:
    # header: 位置ベースのみ
    for key in param_counts.slot_keys("header"):
        if key in result.mappings or not available:
            continue
        result.assign(key, available[0], POSITIONAL_SCORE)
        _take(available, available[0])

    for i, key in enumerate(param_counts.slot_keys("body")):
        if key in result.mappings or not available:
            continue
        column = _first_containing(available, _body_patterns(i))
        if column is not None:
            result.assign(key, column, BODY_PATTERN_SCORE)
        else:
            column = available[0]
            result.assign(key, column, POSITIONAL_SCORE)
        _take(available, column)

    for key in param_counts.slot_keys("button"):
        if key in result.mappings or not available:
            continue
        column = _first_containing(available, _BUTTON_URL_PATTERNS)
        if column is not None:
            result.assign(key, column, BUTTON_PATTERN_SCORE)
        else:
            column = available[0]
            result.assign(key, column, POSITIONAL_SCORE)
        _take(available, column)


def match(
    column_headers: Sequence[str],
    fields: Sequence[FieldDefinition],
    param_counts: ParamCounts,
    options: MatchOptions | None = None,
) -> MappingResult:
    """Propose a mapping from target fields to CSV columns.

    Args:
        column_headers: CSV header row. A header name is consumed as a whole, so
            duplicate names map at most once
        fields: Contact / custom fields to map (template slots may be included)
        param_counts: Template slots to fill from the remaining columns
        options: Matcher options, defaults to MatchOptions()

    Returns:
        MappingResult with mappings, per-mapping confidence and low-confidence
        suggestions. Fields without any scoring column are simply absent.
    """
    opts = options or MatchOptions()
    result = MappingResult()
    available = list(column_headers)

    ordered = list(fields)
    if opts.prioritize_required:
        ordered.sort(key=lambda f: not f.required)  # stable sort: required first

    for f in ordered:
        best = find_best_match(available, f, opts.allow_fuzzy_matching)
        if best is None:
            logger.debug(f"match: no candidate for field={f.key}")
            continue
        column, score = best
        if score >= opts.min_confidence_score:
            result.assign(f.key, column, score)
            _take(available, column)
            logger.debug(f"match: field={f.key} column={column} score={score:.2f}")
        else:
            result.suggestions.append(MappingSuggestion(target=f.key, column=column, score=score))
            logger.debug(f"match: suggestion field={f.key} column={column} score={score:.2f}")

    _map_template_slots(result, available, param_counts)
    return result


def confidence_label(score: float) -> str:
    """Bucket a confidence score into 'high' / 'medium' / 'low'."""
    if score >= HIGH_CONFIDENCE:
        return "high"
    if score >= MEDIUM_CONFIDENCE:
        return "medium"
    return "low"
