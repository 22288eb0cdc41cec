from __future__ import annotations

from dataclasses import dataclass, field

"""Send-ready recipient models.

Template parameter arrays are dense: each list has exactly as many entries as
the template has slots for that component, missing values being ''. The
optional contact fields are sparse instead and are left out of the payload
when empty.
"""

__all__ = [
    "TemplateParams",
    "RecipientRecord",
]


@dataclass(frozen=True)
class TemplateParams:
    header_params: list[str] = field(default_factory=list)
    body_params: list[str] = field(default_factory=list)
    button_params: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[str]]:
        return {
            "header_params": list(self.header_params),
            "body_params": list(self.body_params),
            "button_params": list(self.button_params),
        }


@dataclass(frozen=True)
class RecipientRecord:
    """One broadcast recipient.

    phone is E.164-formatted when it could be derived, otherwise passed through
    with separators stripped (possibly '').
    """
    phone: str
    template_params: TemplateParams
    fullname: str | None = None
    email: str | None = None

    def to_payload(self) -> dict[str, object]:
        """Dict in the broadcast-send API shape."""
        payload: dict[str, object] = {"phone": self.phone}
        if self.fullname:
            payload["fullname"] = self.fullname
        if self.email:
            payload["email"] = self.email
        payload["template_params"] = self.template_params.to_dict()
        return payload
