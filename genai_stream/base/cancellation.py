"""Cooperative cancellation primitives (public API facade).

Cancellation of a streaming call is delegated entirely to the transport: the
caller cancels a :class:`CancellationToken`, the chunk stream observes it and
raises :class:`CancelledError`, and the response iterator surfaces that as a
transport failure. Neither the merge engine nor the iterator keeps timers.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
