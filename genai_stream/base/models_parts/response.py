"""
GenerateContentResponse DTO.

The same type describes a single decoded chunk and the aggregate produced by
merging every chunk of a stream.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .candidate import Candidate
from .prompt_feedback import PromptFeedback
from .usage import UsageMetadata


@dataclass
class GenerateContentResponse:
    """Response from a ``generate_content`` or ``generate_content_stream`` call.

    Attributes:
        candidates: Candidates in the order the service returned them.
        prompt_feedback: Set only when the prompt was rejected.
        usage_metadata: Token usage as of the latest chunk, when reported.

    Methods:
        text: Text of the first candidate (empty string when there is none).
        to_dict: JSON-serializable view, inline bytes summarized by size.
    """

    candidates: List[Candidate] = field(default_factory=list)
    prompt_feedback: Optional[PromptFeedback] = None
    usage_metadata: Optional[UsageMetadata] = None

    def text(self) -> str:
        return self.candidates[0].text() if self.candidates else ""

    def candidate(self, index: int) -> Optional[Candidate]:
        """Return the candidate whose ``index`` field equals ``index``."""
        return next((c for c in self.candidates if c.index == index), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "candidates": [c.to_dict() for c in self.candidates],
            "prompt_feedback": self.prompt_feedback.to_dict() if self.prompt_feedback else None,
            "usage_metadata": self.usage_metadata.to_dict() if self.usage_metadata else None,
        }


__all__ = ["GenerateContentResponse"]
