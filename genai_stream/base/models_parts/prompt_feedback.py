"""
PromptFeedback DTO.

Presence on a decoded chunk means the whole request was rejected before any
generation took place.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .enums import BlockReason
from .safety import SafetyRating


@dataclass
class PromptFeedback:
    """Feedback about the prompt, produced when the prompt was blocked.

    Attributes:
        block_reason: Why the prompt was blocked.
        safety_ratings: Ratings of the prompt, at most one per category.
        block_reason_message: Human-readable explanation of ``block_reason``.
    """

    block_reason: BlockReason = BlockReason.BLOCK_REASON_UNSPECIFIED
    safety_ratings: List[SafetyRating] = field(default_factory=list)
    block_reason_message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "block_reason": self.block_reason.value,
            "safety_ratings": [r.to_dict() for r in self.safety_ratings],
            "block_reason_message": self.block_reason_message,
        }


__all__ = ["PromptFeedback"]
