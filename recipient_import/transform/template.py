from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from ..models.field_definition import ParamCounts

"""WhatsApp template text helpers.

Templates use positional ({{1}}, {{2}}) or named ({{name}}) placeholders.
preview_message is for human preview only: a missing value leaves a visible
marker ([param_2] or [name]) instead of producing the send payload.
"""

__all__ = [
    "extract_placeholders",
    "is_named_params",
    "count_template_params",
    "preview_message",
]

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")
NAMED_PLACEHOLDER_PATTERN = re.compile(r"\{\{[A-Za-z_]\w*\}\}")


def extract_placeholders(text: str | None) -> list[str]:
    """Distinct placeholder names in order of first appearance.

    >>> extract_placeholders("Hi {{1}}, order {{2}} ({{1}})")
    ['1', '2']
    """
    seen: list[str] = []
    for name in PLACEHOLDER_PATTERN.findall(text or ""):
        if name not in seen:
            seen.append(name)
    return seen


def is_named_params(text: str | None) -> bool:
    return NAMED_PLACEHOLDER_PATTERN.search(text or "") is not None


def count_template_params(
    header_text: str | None = None,
    body_text: str | None = None,
    button_urls: Iterable[str] = (),
) -> ParamCounts:
    """Derive slot counts from template component texts."""
    return ParamCounts(
        header=len(extract_placeholders(header_text)),
        body=len(extract_placeholders(body_text)),
        button=sum(len(extract_placeholders(url)) for url in button_urls),
    )


def preview_message(template_body: str, body_params: Sequence[str], is_named_params: bool = False) -> str:
    """Substitute body parameter values into a template body for display.

    Positional mode replaces every {{n}} with body_params[n-1]. Named mode
    fills placeholders left to right, one value per placeholder. Empty values
    show as [param_n] (positional) or [name] (named). Placeholders without a
    value in body_params are left untouched.

    >>> preview_message("Hello {{1}}, order {{2}}", ["Alice", "A123"])
    'Hello Alice, order A123'
    >>> preview_message("Hello {{1}}, order {{2}}", ["Alice", ""])
    'Hello Alice, order [param_2]'
    """
    preview = template_body

    if is_named_params:
        for value in body_params:
            preview = PLACEHOLDER_PATTERN.sub(
                lambda m, v=value: v or f"[{m.group(1)}]", preview, count=1
            )
        return preview

    for index, value in enumerate(body_params):
        position = index + 1
        replacement = value or f"[param_{position}]"
        preview = preview.replace(f"{{{{{position}}}}}", replacement)
    return preview
