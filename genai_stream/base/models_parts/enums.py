"""
Enumerations shared by the domain model.

Member names mirror the wire enum names (without the ``HARM_CATEGORY_`` style
prefixes) so the codec can map both directions by name.
"""
from __future__ import annotations

from enum import Enum


class FinishReason(str, Enum):
    """Why a candidate's generation stopped."""

    FINISH_REASON_UNSPECIFIED = "unspecified"
    STOP = "stop"
    MAX_TOKENS = "max_tokens"
    SAFETY = "safety"
    RECITATION = "recitation"
    OTHER = "other"


class HarmCategory(str, Enum):
    """Category a safety rating or safety setting applies to."""

    UNSPECIFIED = "unspecified"
    HARASSMENT = "harassment"
    HATE_SPEECH = "hate_speech"
    SEXUALLY_EXPLICIT = "sexually_explicit"
    DANGEROUS_CONTENT = "dangerous_content"


class HarmProbability(str, Enum):
    """Probability that a piece of content is harmful."""

    UNSPECIFIED = "unspecified"
    NEGLIGIBLE = "negligible"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HarmBlockThreshold(str, Enum):
    """Probability threshold at and above which content is blocked."""

    UNSPECIFIED = "unspecified"
    BLOCK_LOW_AND_ABOVE = "block_low_and_above"
    BLOCK_MEDIUM_AND_ABOVE = "block_medium_and_above"
    BLOCK_ONLY_HIGH = "block_only_high"
    BLOCK_NONE = "block_none"


class BlockReason(str, Enum):
    """Why a prompt was rejected."""

    BLOCK_REASON_UNSPECIFIED = "unspecified"
    SAFETY = "safety"
    OTHER = "other"


__all__ = [
    "FinishReason",
    "HarmCategory",
    "HarmProbability",
    "HarmBlockThreshold",
    "BlockReason",
]
