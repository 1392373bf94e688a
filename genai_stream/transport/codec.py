"""Mapping between domain objects and ``google.ai.generativelanguage`` messages.

Enums are mapped by member name in both directions so neither side depends
on the other's numeric values. Unknown wire values decode to the nearest
catch-all member (``OTHER`` or ``UNSPECIFIED``); unknown part payloads are a
:class:`DecodeError`.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional, Type, TypeVar

from google.ai import generativelanguage as glm

from ..base.errors import DecodeError
from ..base.models import (
    Blob,
    BlockReason,
    Candidate,
    Citation,
    CitationMetadata,
    Content,
    CountTokensResponse,
    FileData,
    FinishReason,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    HarmBlockThreshold,
    HarmCategory,
    HarmProbability,
    Part,
    PromptFeedback,
    SafetyRating,
    SafetySetting,
    Text,
    UsageMetadata,
)

E = TypeVar("E", bound=Enum)

_HARM_CATEGORY_PREFIX = "HARM_CATEGORY_"
_HARM_PROBABILITY_PREFIX = "HARM_PROBABILITY_"
_THRESHOLD_UNSPECIFIED = "HARM_BLOCK_THRESHOLD_UNSPECIFIED"


# ---- encode ---------------------------------------------------------------

def part_to_proto(part: Part) -> glm.Part:
    if isinstance(part, Text):
        return glm.Part(text=part.text)
    if isinstance(part, Blob):
        return glm.Part(inline_data=glm.Blob(mime_type=part.mime_type, data=part.data))
    if isinstance(part, FileData):
        return glm.Part(file_data=glm.FileData(mime_type=part.mime_type, file_uri=part.file_uri))
    raise TypeError(f"unknown part type {type(part).__name__}")


def content_to_proto(content: Content) -> glm.Content:
    return glm.Content(role=content.role, parts=[part_to_proto(p) for p in content.parts])


def safety_setting_to_proto(setting: SafetySetting) -> glm.SafetySetting:
    threshold = setting.threshold.name
    if setting.threshold is HarmBlockThreshold.UNSPECIFIED:
        threshold = _THRESHOLD_UNSPECIFIED
    return glm.SafetySetting(
        category=glm.HarmCategory[_HARM_CATEGORY_PREFIX + setting.category.name],
        threshold=glm.SafetySetting.HarmBlockThreshold[threshold],
    )


def generation_config_to_proto(config: GenerationConfig) -> glm.GenerationConfig:
    return glm.GenerationConfig(**config.to_dict())


def request_to_proto(request: GenerateContentRequest) -> glm.GenerateContentRequest:
    return glm.GenerateContentRequest(
        model=request.model,
        contents=[content_to_proto(c) for c in request.contents],
        safety_settings=[safety_setting_to_proto(s) for s in request.safety_settings],
        generation_config=generation_config_to_proto(request.generation_config),
    )


def count_tokens_request_to_proto(model: str, contents: List[Content]) -> glm.CountTokensRequest:
    return glm.CountTokensRequest(model=model, contents=[content_to_proto(c) for c in contents])


# ---- decode ---------------------------------------------------------------

def _enum_from_proto(enum_cls: Type[E], value: Any, default: E, prefix: str = "") -> E:
    """Map a proto-plus enum member to ``enum_cls`` by name."""
    name = getattr(value, "name", None)
    if not isinstance(name, str):
        return default
    if prefix and name.startswith(prefix):
        name = name[len(prefix):]
    return enum_cls.__members__.get(name, default)


def part_from_proto(part: glm.Part) -> Part:
    kind = glm.Part.pb(part).WhichOneof("data")
    if kind == "text":
        return Text(part.text)
    if kind == "inline_data":
        return Blob(mime_type=part.inline_data.mime_type, data=bytes(part.inline_data.data))
    if kind == "file_data":
        return FileData(mime_type=part.file_data.mime_type, file_uri=part.file_data.file_uri)
    raise DecodeError(message=f"unsupported part payload {kind!r}")


def content_from_proto(content: glm.Content) -> Content:
    return Content(role=content.role or "model", parts=[part_from_proto(p) for p in content.parts])


def safety_rating_from_proto(rating: glm.SafetyRating) -> SafetyRating:
    return SafetyRating(
        category=_enum_from_proto(HarmCategory, rating.category, HarmCategory.UNSPECIFIED, _HARM_CATEGORY_PREFIX),
        probability=_enum_from_proto(
            HarmProbability, rating.probability, HarmProbability.UNSPECIFIED, _HARM_PROBABILITY_PREFIX
        ),
        blocked=bool(rating.blocked),
    )


def citation_metadata_from_proto(metadata: glm.CitationMetadata) -> CitationMetadata:
    return CitationMetadata(
        [
            Citation(
                start_index=src.start_index,
                end_index=src.end_index,
                uri=src.uri or None,
                license=src.license_ or None,
            )
            for src in metadata.citation_sources
        ]
    )


def candidate_from_proto(candidate: glm.Candidate) -> Candidate:
    finish = candidate.finish_reason
    finish_reason = (
        _enum_from_proto(FinishReason, finish, FinishReason.OTHER)
        if finish
        else FinishReason.FINISH_REASON_UNSPECIFIED
    )
    return Candidate(
        index=candidate.index,
        content=content_from_proto(candidate.content) if "content" in candidate else None,
        finish_reason=finish_reason,
        safety_ratings=[safety_rating_from_proto(r) for r in candidate.safety_ratings],
        citation_metadata=(
            citation_metadata_from_proto(candidate.citation_metadata)
            if "citation_metadata" in candidate
            else None
        ),
        token_count=candidate.token_count or None,
    )


def prompt_feedback_from_proto(
    feedback: glm.GenerateContentResponse.PromptFeedback,
) -> Optional[PromptFeedback]:
    """Return the feedback only when it carries a block reason.

    The service attaches prompt safety ratings to unblocked prompts as well;
    such feedback is informational and decodes to ``None``.
    """
    if not feedback.block_reason:
        return None
    reason = _enum_from_proto(BlockReason, feedback.block_reason, BlockReason.OTHER)
    return PromptFeedback(
        block_reason=reason,
        safety_ratings=[safety_rating_from_proto(r) for r in feedback.safety_ratings],
        block_reason_message=getattr(feedback, "block_reason_message", "") or "",
    )


def decode_response(raw: glm.GenerateContentResponse) -> GenerateContentResponse:
    """Decode one streamed chunk; wire-level surprises become :class:`DecodeError`."""
    if not isinstance(raw, glm.GenerateContentResponse):
        raise DecodeError(message=f"unexpected chunk type {type(raw).__name__}")
    feedback = prompt_feedback_from_proto(raw.prompt_feedback) if "prompt_feedback" in raw else None
    usage = None
    if "usage_metadata" in raw:
        um = raw.usage_metadata
        usage = UsageMetadata(
            prompt_token_count=um.prompt_token_count,
            candidates_token_count=um.candidates_token_count,
            total_token_count=um.total_token_count,
        )
    return GenerateContentResponse(
        candidates=[candidate_from_proto(c) for c in raw.candidates],
        prompt_feedback=feedback,
        usage_metadata=usage,
    )


def count_tokens_from_proto(raw: glm.CountTokensResponse) -> CountTokensResponse:
    return CountTokensResponse(total_tokens=raw.total_tokens)


__all__ = [
    "part_to_proto",
    "content_to_proto",
    "safety_setting_to_proto",
    "generation_config_to_proto",
    "request_to_proto",
    "count_tokens_request_to_proto",
    "part_from_proto",
    "content_from_proto",
    "safety_rating_from_proto",
    "citation_metadata_from_proto",
    "candidate_from_proto",
    "prompt_feedback_from_proto",
    "decode_response",
    "count_tokens_from_proto",
]
