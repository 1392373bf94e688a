"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``genai_stream.base.errors_parts`` to maintain a stable import path.

Error kinds surfaced by a streaming call:

- :class:`TransportError` -- the next chunk could not be obtained (network,
  transport deserialization, cancellation).
- :class:`DecodeError` -- a chunk arrived but could not be mapped to the
  domain model.
- :class:`BlockedError` -- the prompt or a candidate was rejected by policy.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.transport_error import TransportError
from .errors_parts.decode_error import DecodeError
from .errors_parts.blocked_error import BlockedError
from .errors_parts.classification import RETRYABLE_CODES, classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "TransportError",
    "DecodeError",
    "BlockedError",
    "RETRYABLE_CODES",
    "classify_exception",
]
