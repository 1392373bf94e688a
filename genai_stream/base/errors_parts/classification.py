"""
Error classification helpers mapping exceptions to normalized ErrorCode values.

Implements HTTP status extraction (``google.api_core`` exceptions expose the
HTTP equivalent as ``code``), gRPC status-name mapping for raw ``grpc.RpcError``
objects, and message-based heuristics as a fallback.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional

from ..cancellation_parts.cancelled_error import CancelledError
from .error_code import ErrorCode
from .provider_error import ProviderError


def _extract_status(exc: BaseException) -> Optional[int]:
    """Attempt to extract an HTTP status code from an exception.

    Supported attribute shapes (checked in order):
    - ``exc.status_code``
    - ``exc.status``
    - ``exc.code`` (``google.api_core.exceptions.GoogleAPICallError``)
    - ``exc.response.status_code``
    Returns ``None`` if no valid status can be found.
    """
    for attr in ("status_code", "status", "code"):
        val = getattr(exc, attr, None)
        if isinstance(val, int) and 100 <= val < 600:
            return val
    resp = getattr(exc, "response", None)
    if resp is not None:
        sc = getattr(resp, "status_code", None)
        if isinstance(sc, int) and 100 <= sc < 600:
            return sc
    return None


def _extract_grpc_status(exc: BaseException) -> Optional[str]:
    """Return the gRPC status name (e.g. ``"UNAVAILABLE"``) when exposed.

    ``grpc.RpcError`` implementations expose ``code()`` returning a
    ``grpc.StatusCode`` member; ``google.api_core`` errors expose
    ``grpc_status_code``.
    """
    status = getattr(exc, "grpc_status_code", None)
    if status is None:
        code_fn = getattr(exc, "code", None)
        if callable(code_fn):
            try:
                status = code_fn()
            except Exception:  # pragma: no cover - foreign object
                return None
    name = getattr(status, "name", None)
    return name if isinstance(name, str) else None


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    499: ErrorCode.CANCELLED,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}

_GRPC_STATUS_MAP: Dict[str, ErrorCode] = {
    "CANCELLED": ErrorCode.CANCELLED,
    "DEADLINE_EXCEEDED": ErrorCode.TIMEOUT,
    "INVALID_ARGUMENT": ErrorCode.VALIDATION,
    "FAILED_PRECONDITION": ErrorCode.VALIDATION,
    "OUT_OF_RANGE": ErrorCode.VALIDATION,
    "NOT_FOUND": ErrorCode.NOT_FOUND,
    "ALREADY_EXISTS": ErrorCode.CONFLICT,
    "ABORTED": ErrorCode.CONFLICT,
    "PERMISSION_DENIED": ErrorCode.AUTH,
    "UNAUTHENTICATED": ErrorCode.AUTH,
    "RESOURCE_EXHAUSTED": ErrorCode.RATE_LIMIT,
    "UNIMPLEMENTED": ErrorCode.UNSUPPORTED,
    "INTERNAL": ErrorCode.SERVER_ERROR,
    "UNAVAILABLE": ErrorCode.UNAVAILABLE,
    "DATA_LOSS": ErrorCode.SERVER_ERROR,
}


def _heuristic_from_message(msg: str) -> Optional[ErrorCode]:  # pragma: no cover - simple mapping
    """Substring heuristic mapping for exceptions without status information."""
    PATTERN_GROUPS = (
        (ErrorCode.RATE_LIMIT, ("rate", "limit")),
        (ErrorCode.TIMEOUT, ("timeout",)),
        (ErrorCode.TIMEOUT, ("timed out",)),
        (ErrorCode.CANCELLED, ("cancelled",)),
        (ErrorCode.AUTH, ("api key",)),
        (ErrorCode.AUTH, ("unauthorized",)),
        (ErrorCode.AUTH, ("forbidden",)),
        (ErrorCode.UNSUPPORTED, ("unsupported",)),
        (ErrorCode.UNSUPPORTED, ("not supported",)),
        (ErrorCode.NOT_FOUND, ("not found",)),
        (ErrorCode.UNAVAILABLE, ("unavailable",)),
        (ErrorCode.VALIDATION, ("invalid",)),
        (ErrorCode.VALIDATION, ("malformed",)),
        (ErrorCode.SERVER_ERROR, ("server error",)),
        (ErrorCode.SERVER_ERROR, ("internal error",)),
    )
    for code, patterns in PATTERN_GROUPS:
        if code is ErrorCode.RATE_LIMIT and patterns == ("rate", "limit"):
            if all(p in msg for p in patterns):
                return code
            continue
        if any(p in msg for p in patterns):
            return code
    return None


def classify_exception(exc: BaseException) -> ErrorCode:
    """Classify an exception into a normalized :class:`ErrorCode`.

    Precedence:
        1. ProviderError passthrough.
        2. Cooperative cancellation.
        3. Timeout exceptions (sync/async).
        4. gRPC status mapping.
        5. HTTP status mapping.
        6. Substring heuristics.
        7. ``UNKNOWN`` fallback.
    """
    if isinstance(exc, ProviderError):
        return exc.code
    if isinstance(exc, CancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, (TimeoutError, asyncio.TimeoutError)):
        return ErrorCode.TIMEOUT
    grpc_status = _extract_grpc_status(exc)
    if grpc_status is not None and grpc_status in _GRPC_STATUS_MAP:
        return _GRPC_STATUS_MAP[grpc_status]
    status = _extract_status(exc)
    if status is not None and status in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status]
    code = _heuristic_from_message(str(exc).lower())
    return code if code is not None else ErrorCode.UNKNOWN


RETRYABLE_CODES = (ErrorCode.TRANSIENT, ErrorCode.RATE_LIMIT, ErrorCode.TIMEOUT, ErrorCode.UNAVAILABLE)


__all__ = [
    "classify_exception",
    "RETRYABLE_CODES",
    "_extract_status",
    "_HTTP_STATUS_MAP",
    "_GRPC_STATUS_MAP",
]
