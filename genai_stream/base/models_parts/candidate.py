"""
Candidate DTO: one generation alternative within a response.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .citation import CitationMetadata
from .content import Content, ROLE_MODEL
from .enums import FinishReason
from .safety import SafetyRating


@dataclass
class Candidate:
    """A response candidate generated from the model.

    Attributes:
        index: Position of the candidate in the request's candidate set. Stable
            across the chunks of one stream and used as the merge key.
        content: Generated content; ``None`` when the chunk carried no parts.
        finish_reason: Why generation stopped, as of the latest chunk.
        safety_ratings: Safety ratings as of the latest chunk.
        citation_metadata: Citations accumulated so far.
        finish_message: Optional human-readable detail for ``finish_reason``.
        token_count: Token count reported for this candidate, if any.
    """

    index: int = 0
    content: Optional[Content] = None
    finish_reason: FinishReason = FinishReason.FINISH_REASON_UNSPECIFIED
    safety_ratings: List[SafetyRating] = field(default_factory=list)
    citation_metadata: Optional[CitationMetadata] = None
    finish_message: Optional[str] = None
    token_count: Optional[int] = None

    @property
    def is_safety_blocked(self) -> bool:
        return self.finish_reason is FinishReason.SAFETY

    def text(self) -> str:
        return self.content.text() if self.content is not None else ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "content": self.content.to_dict() if self.content else {"role": ROLE_MODEL, "parts": []},
            "finish_reason": self.finish_reason.value,
            "safety_ratings": [r.to_dict() for r in self.safety_ratings],
            "citation_metadata": self.citation_metadata.to_dict() if self.citation_metadata else None,
            "finish_message": self.finish_message,
            "token_count": self.token_count,
        }


__all__ = ["Candidate"]
