"""
Decode failure raised when a wire chunk cannot be mapped to the domain model.

Treated by the response iterator exactly like a :class:`TransportError`:
terminal and surfaced to the caller.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .error_code import ErrorCode
from .provider_error import ProviderError


@dataclass
class DecodeError(ProviderError):
    """Malformed chunk content received from the transport."""

    code: ErrorCode = field(default=ErrorCode.DECODE)
    message: str = "malformed response chunk"
    provider: str = "genai"


__all__ = ["DecodeError"]
