"""Token usage reported on response chunks."""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class UsageMetadata:
    prompt_token_count: Optional[int] = None
    candidates_token_count: Optional[int] = None
    total_token_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["UsageMetadata"]
