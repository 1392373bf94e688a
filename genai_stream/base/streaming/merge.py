"""Chunk merge engine.

Folds the partial responses of one streaming call into a single aggregate.
Every function here is pure: inputs are never mutated and the returned
aggregate shares only immutable values (parts, citations, safety ratings)
with its inputs.

Merge rules, per candidate ``index`` present in the destination:

- content parts are appended, then adjacent :class:`Text` parts are collapsed
  into one (never across a :class:`Blob` or :class:`FileData`);
- finish reason, finish message and safety ratings take the source's values;
- citations are appended in order, duplicates kept;
- token count takes the source's value when it reports one.

Destination candidates absent from the source are left alone. Candidates that
only the source carries are dropped unless ``insert_new`` is set. The
destination's prompt feedback is always kept as-is; usage metadata takes the
latest reported value.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from ..models import (
    Blob,
    Candidate,
    CitationMetadata,
    Content,
    FileData,
    GenerateContentResponse,
    Part,
    Text,
)


def merge_texts(parts: Sequence[Part]) -> List[Part]:
    """Collapse each maximal run of adjacent :class:`Text` parts into one.

    ``[Text("a"), Text("b"), Blob(x), Text("c")]`` becomes
    ``[Text("ab"), Blob(x), Text("c")]``.
    """
    out: List[Part] = []
    run: List[str] = []
    for part in parts:
        if isinstance(part, Text):
            run.append(part.text)
            continue
        if not isinstance(part, (Blob, FileData)):
            raise TypeError(f"unknown part type {type(part).__name__}")
        if run:
            out.append(Text("".join(run)))
            run = []
        out.append(part)
    if run:
        out.append(Text("".join(run)))
    return out


def join_parts(dest: Sequence[Part], src: Sequence[Part]) -> List[Part]:
    return merge_texts([*dest, *src])


def join_content(dest: Optional[Content], src: Optional[Content]) -> Optional[Content]:
    """Append ``src``'s parts to ``dest``'s; the destination role is kept."""
    if dest is None:
        return clone_content(src)
    if src is None:
        return dest
    return Content(role=dest.role, parts=join_parts(dest.parts, src.parts))


def join_citation_metadata(
    dest: Optional[CitationMetadata], src: Optional[CitationMetadata]
) -> Optional[CitationMetadata]:
    """Append ``src``'s citations after ``dest``'s, preserving order and duplicates."""
    if dest is None:
        return CitationMetadata(list(src.citations)) if src is not None else None
    if src is None:
        return dest
    return CitationMetadata([*dest.citations, *src.citations])


def _join_candidate(dest: Candidate, src: Candidate) -> Candidate:
    return replace(
        dest,
        content=join_content(dest.content, src.content),
        finish_reason=src.finish_reason,
        finish_message=src.finish_message,
        safety_ratings=list(src.safety_ratings),
        citation_metadata=join_citation_metadata(dest.citation_metadata, src.citation_metadata),
        token_count=src.token_count if src.token_count is not None else dest.token_count,
    )


def join_candidate_lists(
    dest: Sequence[Candidate],
    src: Sequence[Candidate],
    *,
    insert_new: bool = False,
) -> List[Candidate]:
    """Merge ``src`` candidates into ``dest`` by candidate index.

    The result keeps ``dest``'s order. With ``insert_new`` set, candidates whose
    index does not occur in ``dest`` are appended in ``src`` order, first
    occurrence only, so indices in the result stay unique.
    """
    by_index: Dict[int, Candidate] = {c.index: c for c in src}
    out: List[Candidate] = []
    for d in dest:
        s = by_index.get(d.index)
        out.append(_join_candidate(d, s) if s is not None else d)
    if insert_new:
        known = {d.index for d in dest}
        for s in src:
            if s.index in known:
                continue
            known.add(s.index)
            out.append(clone_candidate(s))
    return out


def join_responses(
    dest: Optional[GenerateContentResponse],
    src: GenerateContentResponse,
    *,
    insert_new: bool = False,
) -> GenerateContentResponse:
    """Merge the chunk ``src`` into the aggregate ``dest``.

    Returns ``src`` itself when ``dest`` is ``None`` (the first chunk seeds the
    aggregate); callers that go on handing ``src`` out should seed with
    :func:`clone_response` instead.
    """
    if dest is None:
        return src
    return GenerateContentResponse(
        candidates=join_candidate_lists(dest.candidates, src.candidates, insert_new=insert_new),
        prompt_feedback=dest.prompt_feedback,
        usage_metadata=src.usage_metadata if src.usage_metadata is not None else dest.usage_metadata,
    )


def clone_content(content: Optional[Content]) -> Optional[Content]:
    if content is None:
        return None
    return Content(role=content.role, parts=list(content.parts))


def clone_candidate(candidate: Candidate) -> Candidate:
    """Copy the mutable containers of ``candidate``; parts and ratings are shared."""
    cm = candidate.citation_metadata
    return replace(
        candidate,
        content=clone_content(candidate.content),
        safety_ratings=list(candidate.safety_ratings),
        citation_metadata=CitationMetadata(list(cm.citations)) if cm is not None else None,
    )


def clone_response(response: GenerateContentResponse) -> GenerateContentResponse:
    """Return a copy of ``response`` that shares no mutable container with it."""
    pf = response.prompt_feedback
    return GenerateContentResponse(
        candidates=[clone_candidate(c) for c in response.candidates],
        prompt_feedback=replace(pf, safety_ratings=list(pf.safety_ratings)) if pf is not None else None,
        usage_metadata=response.usage_metadata,
    )


__all__ = [
    "merge_texts",
    "join_parts",
    "join_content",
    "join_citation_metadata",
    "join_candidate_lists",
    "join_responses",
    "clone_content",
    "clone_candidate",
    "clone_response",
]
