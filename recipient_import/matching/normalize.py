from __future__ import annotations

import re

"""String comparison helpers for the field matcher.

All comparisons are between a CSV header and one candidate name of a target
field (its key, label or base key).
"""

__all__ = [
    "normalize",
    "levenshtein_distance",
    "exact_match",
    "normalized_match",
    "fuzzy_similarity",
]

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize(text: str) -> str:
    """Lowercase and strip everything except ASCII letters and digits.

    >>> normalize("Phone Number")
    'phonenumber'
    >>> normalize("e-mail_address")
    'emailaddress'
    """
    return _NON_ALNUM.sub("", text.lower())


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance (insert / delete / substitute, each cost 1)."""
    len_a = len(a)
    len_b = len(b)
    # 1 行ずつ保持する DP テーブル
    prev = list(range(len_b + 1))
    for i in range(1, len_a + 1):
        curr = [i] + [0] * len_b
        for j in range(1, len_b + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            curr[j] = min(
                prev[j] + 1,         # deletion
                curr[j - 1] + 1,     # insertion
                prev[j - 1] + cost,  # substitution
            )
        prev = curr
    return prev[len_b]


def exact_match(header: str, candidate: str) -> bool:
    return header.lower() == candidate.lower()


def normalized_match(header: str, candidate: str) -> bool:
    return normalize(header) == normalize(candidate)


def fuzzy_similarity(header: str, candidate: str, threshold: float = 0.7) -> float:
    """Similarity in [0, 1] based on the edit distance of the normalized forms.

    The distance is divided by the longer of the two raw strings, so
    separators in the header make a match slightly more lenient. Scores not
    above `threshold` are reported as 0.
    """
    max_length = max(len(header), len(candidate))
    if max_length == 0:
        return 0.0
    distance = levenshtein_distance(normalize(header), normalize(candidate))
    similarity = 1 - (distance / max_length)
    return similarity if similarity > threshold else 0.0
