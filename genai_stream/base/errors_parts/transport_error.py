"""
Transport failure raised while pulling chunks from a streaming call.

Covers network failures, transport-level deserialization problems and
cooperative cancellation. Never retried by the response iterator.
"""
from __future__ import annotations

from dataclasses import dataclass

from .provider_error import ProviderError


@dataclass
class TransportError(ProviderError):
    """Failure to obtain the next chunk from the transport."""


__all__ = ["TransportError"]
