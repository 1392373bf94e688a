"""In-memory stand-ins for the transport used across the test suite.

Chunks handed to :class:`FakeStream` are already domain responses, so the
identity decoder is enough; a chunk that is an exception instance is raised
from ``__next__`` instead of being returned.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from genai_stream.base.models import (
    Candidate,
    Citation,
    CitationMetadata,
    Content,
    CountTokensResponse,
    FinishReason,
    GenerateContentRequest,
    GenerateContentResponse,
    Text,
)


def text_chunk(
    text: str,
    *,
    index: int = 0,
    finish_reason: FinishReason = FinishReason.FINISH_REASON_UNSPECIFIED,
    citations: Optional[List[Citation]] = None,
) -> GenerateContentResponse:
    """Build a one-candidate response carrying a single text part."""
    return GenerateContentResponse(
        candidates=[
            Candidate(
                index=index,
                content=Content(role="model", parts=[Text(text)]),
                finish_reason=finish_reason,
                citation_metadata=CitationMetadata(list(citations)) if citations else None,
            )
        ]
    )


def identity_decoder(raw: Any) -> GenerateContentResponse:
    return raw


class FakeStream:
    """Iterator over scripted chunks that records pulls and close calls."""

    def __init__(self, chunks: Iterable[Any]) -> None:
        self._chunks = list(chunks)
        self.pulls = 0
        self.closed = False

    def __iter__(self) -> "FakeStream":
        return self

    def __next__(self) -> Any:
        self.pulls += 1
        if not self._chunks:
            raise StopIteration
        item = self._chunks.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


class FakeTransport:
    """Transport double; each ``stream_generate_content`` call consumes one script."""

    def __init__(
        self,
        *scripts: List[Any],
        open_error: Optional[BaseException] = None,
        total_tokens: int = 7,
    ) -> None:
        self._scripts = [list(s) for s in scripts]
        self.open_error = open_error
        self.total_tokens = total_tokens
        self.requests: List[GenerateContentRequest] = []
        self.streams: List[FakeStream] = []
        self.counted: List[List[Content]] = []
        self.closed = False

    def stream_generate_content(self, request: GenerateContentRequest, *, cancellation_token=None) -> FakeStream:
        self.requests.append(request)
        if self.open_error is not None:
            raise self.open_error
        stream = FakeStream(self._scripts.pop(0) if self._scripts else [])
        self.streams.append(stream)
        return stream

    def decode_chunk(self, raw: Any) -> GenerateContentResponse:
        return identity_decoder(raw)

    def count_tokens(self, model: str, contents: List[Content]) -> CountTokensResponse:
        self.counted.append(list(contents))
        return CountTokensResponse(total_tokens=self.total_tokens)

    def close(self) -> None:
        self.closed = True


def log_events(records: List[logging.LogRecord]) -> List[Dict[str, Any]]:
    """Decode the JSON payloads of captured records, skipping plain messages."""
    out: List[Dict[str, Any]] = []
    for r in records:
        try:
            out.append(json.loads(r.getMessage()))
        except ValueError:
            continue
    return out


__all__ = ["text_chunk", "identity_decoder", "log_events", "FakeStream", "FakeTransport"]
