"""Streaming package: chunk merge engine and response iterator."""

from .iterator_state import IteratorState
from .merge import (
    clone_response,
    join_candidate_lists,
    join_citation_metadata,
    join_content,
    join_parts,
    join_responses,
    merge_texts,
)
from .response_iterator import GenerateContentResponseIterator
from .stream_metrics import StreamMetrics

__all__ = [
    "IteratorState",
    "GenerateContentResponseIterator",
    "StreamMetrics",
    "clone_response",
    "join_candidate_lists",
    "join_citation_metadata",
    "join_content",
    "join_parts",
    "join_responses",
    "merge_texts",
]
