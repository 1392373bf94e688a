"""
GenerationConfig DTO: sampling and length parameters sent with every request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..constants import DEFAULT_MAX_OUTPUT_TOKENS, DEFAULT_TOP_K


@dataclass
class GenerationConfig:
    """Configuration options for model generation.

    Attributes:
        candidate_count: Number of candidates to generate.
        stop_sequences: Character sequences that stop generation.
        max_output_tokens: Upper bound on tokens per candidate.
        temperature: Sampling temperature.
        top_p: Nucleus sampling cutoff.
        top_k: Top-k sampling cutoff.

    ``None`` fields are left out of the request so the service default applies.
    """

    candidate_count: Optional[int] = None
    stop_sequences: List[str] = field(default_factory=list)
    max_output_tokens: Optional[int] = DEFAULT_MAX_OUTPUT_TOKENS
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = DEFAULT_TOP_K

    def to_dict(self) -> Dict[str, Any]:
        """Return the set fields only, keyed by their wire names."""
        out: Dict[str, Any] = {}
        for key in ("candidate_count", "max_output_tokens", "temperature", "top_p", "top_k"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        if self.stop_sequences:
            out["stop_sequences"] = list(self.stop_sequences)
        return out


__all__ = ["GenerationConfig"]
