"""Transport boundary consumed by the client and the response iterator.

A transport opens streaming calls and hands back a :class:`ChunkStream` of raw
wire chunks; it also owns the decoding of those chunks into the domain model,
so the rest of the package never sees wire types.
"""
from __future__ import annotations

from typing import Any, Iterator, List, Optional, Protocol, runtime_checkable

from ..base.cancellation import CancellationToken
from ..base.models import Content, CountTokensResponse, GenerateContentRequest, GenerateContentResponse


@runtime_checkable
class ChunkStream(Protocol):
    """Iterator of raw chunks for one call.

    ``__next__`` blocks until a chunk arrives, raises ``StopIteration`` at the
    clean end of the stream and any other exception on failure (including
    ``CancelledError`` once the call's token is cancelled). ``close`` aborts
    the call and is safe to invoke more than once.
    """

    def __iter__(self) -> Iterator[Any]: ...

    def __next__(self) -> Any: ...

    def close(self) -> None: ...


@runtime_checkable
class Transport(Protocol):
    """Opens calls against the inference service."""

    def stream_generate_content(
        self,
        request: GenerateContentRequest,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> ChunkStream: ...

    def decode_chunk(self, raw: Any) -> GenerateContentResponse: ...

    def count_tokens(self, model: str, contents: List[Content]) -> CountTokensResponse: ...

    def close(self) -> None: ...


__all__ = ["ChunkStream", "Transport"]
