from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from ..models.recipient import RecipientRecord

"""Collaborator contracts used around the core.

The pipeline never sends anything itself; a BroadcastSender (e.g. a client
for the backend broadcast API) can be handed to run_import.
"""

__all__ = [
    "BroadcastSender",
]


class BroadcastSender(Protocol):
    """Dispatches an already validated payload."""

    def send(self, recipients: Sequence[RecipientRecord], template_id: str | None) -> Any: ...
