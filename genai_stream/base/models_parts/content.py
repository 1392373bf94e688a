"""
Content DTO: a role tag plus an ordered sequence of parts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal

from .part import Part, Text

Role = Literal["user", "model"]

ROLE_USER: Role = "user"
ROLE_MODEL: Role = "model"


@dataclass
class Content:
    """The base structured datatype containing multi-part content of a message.

    Attributes:
        role: Producer of the content, ``"user"`` or ``"model"``.
        parts: Ordered parts; order is significant when rendering.
    """

    role: Role = ROLE_USER
    parts: List[Part] = field(default_factory=list)

    def text(self) -> str:
        """Concatenate the text parts, skipping inline data and file references."""
        return "".join(p.text for p in self.parts if isinstance(p, Text))

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "parts": [p.to_dict() for p in self.parts]}


__all__ = ["Content", "Role", "ROLE_USER", "ROLE_MODEL"]
