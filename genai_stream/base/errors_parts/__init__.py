"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `genai_stream.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .transport_error import TransportError
from .decode_error import DecodeError
from .blocked_error import BlockedError
from .classification import RETRYABLE_CODES, classify_exception

__all__ = [
    "ErrorCode",
    "ProviderError",
    "TransportError",
    "DecodeError",
    "BlockedError",
    "RETRYABLE_CODES",
    "classify_exception",
]
