"""gRPC transport backed by the ``GenerativeServiceClient`` GAPIC client.

Opening a call maps the domain request to the wire request and returns a
:class:`GrpcChunkStream`. The stream checks the call's cancellation token
before every receive and cancels the in-flight RPC as soon as the token is
cancelled, so a caller blocked in ``next()`` is released with a
``Cancelled`` error from the RPC layer.
"""
from __future__ import annotations

from contextlib import suppress
from typing import Any, Callable, Iterable, List, Optional

from google.ai import generativelanguage as glm
from google.api_core.client_options import ClientOptions

from ..base.cancellation import CancellationToken
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Content, CountTokensResponse, GenerateContentRequest, GenerateContentResponse
from . import codec


class GrpcChunkStream:
    """Cancellable wrapper over the server-streaming response iterator."""

    def __init__(self, call: Iterable[Any], token: Optional[CancellationToken] = None) -> None:
        self._call = call
        self._it = iter(call)
        self._token = token
        self._closed = False
        self._on_cancel: Optional[Callable[[Optional[str]], None]] = None
        if token is not None:
            self._on_cancel = self._cancel_from_token
            token.add_callback(self._on_cancel)

    def __iter__(self) -> "GrpcChunkStream":
        return self

    def __next__(self) -> Any:
        if self._token is not None:
            self._token.raise_if_cancelled()
        try:
            return next(self._it)
        except Exception:
            # StopIteration included: the call is over either way
            self._detach()
            raise

    def close(self) -> None:
        self._detach()
        if self._closed:
            return
        self._closed = True
        cancel_fn = getattr(self._call, "cancel", None)
        if callable(cancel_fn):
            with suppress(Exception):
                cancel_fn()

    def _cancel_from_token(self, _reason: Optional[str]) -> None:
        self.close()

    def _detach(self) -> None:
        if self._token is not None and self._on_cancel is not None:
            self._token.remove_callback(self._on_cancel)
            self._on_cancel = None


class GrpcTransport:
    """Transport over ``google.ai.generativelanguage``.

    Args:
        api_key: API key passed through client options.
        endpoint: Override of the service endpoint (``host:port``).
        client: Pre-built ``GenerativeServiceClient``; takes precedence over
            ``api_key`` and ``endpoint``.
        credentials: Optional ``google.auth`` credentials object.
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        client: Any = None,
        credentials: Any = None,
    ) -> None:
        if client is None:
            client = glm.GenerativeServiceClient(
                credentials=credentials,
                client_options=ClientOptions(api_key=api_key or None, api_endpoint=endpoint or None),
            )
        self._client = client
        self._logger = get_logger("transport")

    def stream_generate_content(
        self,
        request: GenerateContentRequest,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> GrpcChunkStream:
        if cancellation_token is not None:
            cancellation_token.raise_if_cancelled()
        ctx = LogContext(model=request.model)
        normalized_log_event(
            self._logger,
            "transport.open",
            ctx,
            phase="start",
            contents=len(request.contents),
            safety_settings=len(request.safety_settings),
            **request.generation_config.to_dict(),
        )
        call = self._client.stream_generate_content(request=codec.request_to_proto(request))
        return GrpcChunkStream(call, cancellation_token)

    def decode_chunk(self, raw: Any) -> GenerateContentResponse:
        return codec.decode_response(raw)

    def count_tokens(self, model: str, contents: List[Content]) -> CountTokensResponse:
        raw = self._client.count_tokens(request=codec.count_tokens_request_to_proto(model, contents))
        return codec.count_tokens_from_proto(raw)

    def close(self) -> None:
        transport = getattr(self._client, "transport", None)
        close_fn = getattr(transport, "close", None)
        if callable(close_fn):
            close_fn()


__all__ = ["GrpcChunkStream", "GrpcTransport"]
