"""CountTokensResponse DTO."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CountTokensResponse:
    """Number of tokens the model would consume for the given contents."""

    total_tokens: int = 0


__all__ = ["CountTokensResponse"]
