"""Pull-based iterator over the chunks of one streaming call.

Each pull reads one raw chunk from the transport, decodes it, checks it for
blocking signals, folds it into the running aggregate and returns the chunk's
own (unmerged) response. The aggregate stays owned by the iterator and is
available through :attr:`GenerateContentResponseIterator.merged`.

Terminal outcomes are memoized: once the stream ended, failed or was blocked,
further pulls replay the same outcome without touching the transport.

The iterator is not safe for concurrent pulls; use one per in-flight call.
"""
from __future__ import annotations

import logging
from contextlib import suppress
from types import TracebackType
from typing import Any, Callable, Iterator, List, Optional

from ..errors import (
    RETRYABLE_CODES,
    BlockedError,
    DecodeError,
    ErrorCode,
    ProviderError,
    TransportError,
    classify_exception,
)
from ..logging import LogContext, get_logger, normalized_log_event
from ..models import Candidate, GenerateContentResponse
from .iterator_state import IteratorState
from .merge import clone_response, join_responses
from .stream_metrics import StreamMetrics

Decoder = Callable[[Any], GenerateContentResponse]
HistorySink = Callable[[List[Candidate]], None]


class GenerateContentResponseIterator:
    """Iterator over the responses of a ``generate_content_stream`` call.

    Args:
        stream: Iterator of raw chunks from the transport. ``StopIteration``
            marks a clean end; any other exception is a transport failure.
            ``None`` together with ``error`` builds an iterator for a call that
            could not be opened.
        decoder: Maps one raw chunk to a :class:`GenerateContentResponse`.
        error: Failure raised while opening the stream; surfaced on first pull.
        history_sink: Called once with the merged candidates on clean end.
        insert_new_candidates: Add candidates first seen after the first chunk.
        ctx: Logging context shared by every event of this call.
        logger: Logger to emit to; defaults to ``genai_stream.stream``.
    """

    def __init__(
        self,
        stream: Optional[Iterator[Any]],
        *,
        decoder: Decoder,
        error: Optional[BaseException] = None,
        history_sink: Optional[HistorySink] = None,
        insert_new_candidates: bool = False,
        ctx: Optional[LogContext] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        if stream is None and error is None:
            raise ValueError("stream or error is required")
        self._stream = iter(stream) if stream is not None else None
        self._decoder = decoder
        self._history_sink = history_sink
        self._insert_new = insert_new_candidates
        self._ctx = ctx or LogContext()
        self._logger = logger or get_logger("stream")
        self._merged: Optional[GenerateContentResponse] = None
        self._state = IteratorState.ACTIVE
        self._error: Optional[ProviderError] = None
        self._error_tb: Optional[TracebackType] = None
        self.metrics = StreamMetrics()
        if error is not None:
            self._fail(self._as_transport_error(error))

    # Iterator protocol ---------------------------------------------------
    def __iter__(self) -> "GenerateContentResponseIterator":
        return self

    def __next__(self) -> GenerateContentResponse:
        return self.next_response()

    # API -----------------------------------------------------------------
    @property
    def state(self) -> IteratorState:
        return self._state

    @property
    def merged(self) -> Optional[GenerateContentResponse]:
        """Aggregate of every chunk received so far (``None`` before the first)."""
        return self._merged

    @property
    def error(self) -> Optional[ProviderError]:
        """The terminal error once the iterator failed or was blocked."""
        return self._error

    def next_response(self) -> GenerateContentResponse:
        """Return the next chunk's response.

        Raises:
            StopIteration: The stream ended cleanly (now and on every later call).
            TransportError: The next chunk could not be obtained.
            DecodeError: The chunk could not be mapped to the domain model.
            BlockedError: The prompt or a candidate was blocked.
        """
        if self._state.terminal:
            self._replay_terminal()
        try:
            raw = next(self._stream)  # type: ignore[arg-type]
        except StopIteration:
            self._finish_done()
            raise StopIteration from None
        except BlockedError as exc:
            self._block(exc)
        except ProviderError as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            self._fail(self._as_transport_error(exc))
            raise self._error from exc  # type: ignore[misc]

        try:
            response = self._decoder(raw)
        except DecodeError as exc:
            self._fail(exc)
            raise
        except Exception as exc:
            self._fail(
                DecodeError(
                    message=f"malformed response chunk: {exc}",
                    model=self._ctx.model,
                    raw=exc,
                )
            )
            raise self._error from exc  # type: ignore[misc]

        self._check_blocked(response)
        if self._merged is None:
            self._merged = clone_response(response)
        else:
            self._merged = join_responses(self._merged, response, insert_new=self._insert_new)
        self.metrics.record_chunk()
        normalized_log_event(
            self._logger,
            "stream.chunk",
            self._ctx,
            phase="stream",
            emitted=True,
            tokens=response.usage_metadata,
            level=logging.DEBUG,
            chunk=self.metrics.chunks,
            candidates=len(response.candidates),
        )
        return response

    def drain(self) -> GenerateContentResponse:
        """Pull until the stream ends and return the aggregate.

        Raises the first error or block encountered. A stream that ends
        without any chunk yields an empty response.
        """
        for _ in self:
            pass
        return self._merged if self._merged is not None else GenerateContentResponse()

    def close(self) -> None:
        """Release the underlying stream; later pulls fail as cancelled."""
        if self._state.terminal:
            return
        self._fail(
            TransportError(
                code=ErrorCode.CANCELLED,
                message="iterator closed",
                provider=self._ctx.provider or "genai",
                model=self._ctx.model,
            )
        )

    # Internal ------------------------------------------------------------
    def _replay_terminal(self) -> None:
        if self._state is IteratorState.DONE:
            raise StopIteration
        # replay from the saved traceback so repeated polls do not grow it
        raise self._error.with_traceback(self._error_tb)  # type: ignore[union-attr]

    def _check_blocked(self, response: GenerateContentResponse) -> None:
        if response.prompt_feedback is not None:
            self._block(BlockedError(prompt_feedback=response.prompt_feedback, model=self._ctx.model))
        for candidate in response.candidates:
            if candidate.is_safety_blocked:
                self._block(BlockedError(candidate=candidate, model=self._ctx.model))

    def _block(self, error: BlockedError) -> None:
        self._enter_terminal(IteratorState.BLOCKED, error)
        normalized_log_event(
            self._logger,
            "stream.blocked",
            self._ctx,
            phase="finalize",
            error_code=error.code.value,
            emitted=self.metrics.chunks > 0,
            level=logging.WARNING,
            error=error.message,
            chunks=self.metrics.chunks,
        )
        raise error

    def _fail(self, error: ProviderError) -> None:
        self._enter_terminal(IteratorState.FAILED, error)
        normalized_log_event(
            self._logger,
            "stream.error",
            self._ctx,
            phase="finalize",
            error_code=error.code.value,
            emitted=self.metrics.chunks > 0,
            level=logging.ERROR,
            error=error.message,
            retryable=error.retryable,
            chunks=self.metrics.chunks,
        )

    def _finish_done(self) -> None:
        self._enter_terminal(IteratorState.DONE, None)
        normalized_log_event(
            self._logger,
            "stream.end",
            self._ctx,
            phase="finalize",
            emitted=self.metrics.chunks > 0,
            tokens=self._merged.usage_metadata if self._merged is not None else None,
            chunks=self.metrics.chunks,
            time_to_first_chunk_ms=self.metrics.time_to_first_chunk_ms,
            total_duration_ms=self.metrics.total_duration_ms,
        )
        if self._history_sink is None or self._merged is None:
            return
        try:
            self._history_sink(list(self._merged.candidates))
        except Exception as exc:
            normalized_log_event(
                self._logger,
                "stream.history_error",
                self._ctx,
                phase="finalize",
                error_code=classify_exception(exc).value,
                emitted=True,
                level=logging.ERROR,
                error=str(exc) or exc.__class__.__name__,
            )

    def _enter_terminal(self, state: IteratorState, error: Optional[ProviderError]) -> None:
        self._state = state
        self._error = error
        self._error_tb = error.__traceback__ if error is not None else None
        self.metrics.finish()
        self._release_stream()

    def _release_stream(self) -> None:
        close_fn = getattr(self._stream, "close", None)
        if callable(close_fn):
            with suppress(Exception):
                close_fn()

    def _as_transport_error(self, exc: BaseException) -> ProviderError:
        if isinstance(exc, ProviderError):
            return exc
        code = classify_exception(exc)
        return TransportError(
            code=code,
            message=str(exc) or exc.__class__.__name__,
            provider=self._ctx.provider or "genai",
            model=self._ctx.model,
            retryable=code in RETRYABLE_CODES,
            raw=exc,
        )


__all__ = ["GenerateContentResponseIterator", "Decoder", "HistorySink"]
