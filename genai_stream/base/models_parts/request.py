"""
GenerateContentRequest DTO.

Everything a transport needs to open a ``generate_content`` stream: the model
resource name, the conversation so far, safety overrides and sampling
parameters. The transport maps it to the wire request.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .content import Content
from .generation_config import GenerationConfig
from .safety import SafetySetting


@dataclass
class GenerateContentRequest:
    """Normalized request handed to a transport.

    Attributes:
        model: Full model resource name (e.g. ``models/gemini-pro``).
        contents: Ordered conversation contents, oldest first.
        safety_settings: Per-category blocking overrides.
        generation_config: Sampling and length parameters.
    """

    model: str
    contents: List[Content]
    safety_settings: List[SafetySetting] = field(default_factory=list)
    generation_config: GenerationConfig = field(default_factory=GenerationConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable summary suitable for logging."""
        return {
            "model": self.model,
            "contents": [c.to_dict() for c in self.contents],
            "safety_settings": [
                {"category": s.category.value, "threshold": s.threshold.value}
                for s in self.safety_settings
            ],
            "generation_config": self.generation_config.to_dict(),
        }


__all__ = ["GenerateContentRequest"]
