"""
Citation DTOs attached to generated candidates.

A candidate's citation list only ever grows while a stream is merged; see
``join_citation_metadata`` in the streaming package.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Citation:
    """Source attribution for a span of generated text.

    Attributes:
        start_index: Start of the attributed segment, in bytes of the response text.
        end_index: End of the attributed segment, exclusive.
        uri: URI of the source, when known.
        license: License of the source, when known.
    """

    start_index: int = 0
    end_index: int = 0
    uri: Optional[str] = None
    license: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_index": self.start_index,
            "end_index": self.end_index,
            "uri": self.uri,
            "license": self.license,
        }


@dataclass
class CitationMetadata:
    """Ordered collection of citations for one candidate."""

    citations: List[Citation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"citations": [c.to_dict() for c in self.citations]}


__all__ = ["Citation", "CitationMetadata"]
