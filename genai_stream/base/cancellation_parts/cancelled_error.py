"""Cancellation error type.

Defines the public ``CancelledError`` raised by a chunk stream that observes a
cancellation request before receiving the next chunk.
"""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a streaming call is cancelled cooperatively.

    The response iterator treats it like any other transport failure: the
    iterator enters its failed state and surfaces a ``TransportError`` whose
    code is ``ErrorCode.CANCELLED``.
    """

__all__ = ["CancelledError"]
