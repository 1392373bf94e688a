"""
Safety rating (response side) and safety setting (request side) DTOs.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from .enums import HarmBlockThreshold, HarmCategory, HarmProbability


@dataclass(frozen=True)
class SafetyRating:
    """Safety rating for a piece of content.

    Attributes:
        category: Harm category this rating is for.
        probability: Probability of harm for the content.
        blocked: Whether the content was filtered out because of this rating.
    """

    category: HarmCategory
    probability: HarmProbability
    blocked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "probability": self.probability.value,
            "blocked": self.blocked,
        }


@dataclass(frozen=True)
class SafetySetting:
    """Per-request override of the blocking threshold for one harm category."""

    category: HarmCategory
    threshold: HarmBlockThreshold


__all__ = ["SafetyRating", "SafetySetting"]
