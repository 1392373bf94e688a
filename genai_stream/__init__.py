"""genai_stream package

Client library facade over a streaming generative-model inference service.

Submit text and binary parts to a hosted model and get back either a single
merged response (``GenerativeModel.generate_content``) or an iterator over the
streamed chunks (``GenerativeModel.generate_content_stream``). The iterator
folds each chunk into a running aggregate: candidates are joined by index,
adjacent text parts are concatenated and citations accumulate.

Public API (re-exported):
    - Client surface: :class:`Client`, :class:`GenerativeModel`, :class:`ChatSession`
    - Streaming: :class:`GenerateContentResponseIterator`, :func:`join_responses`
    - Domain model: :class:`Content`, :class:`Text`, :class:`Blob`, :class:`FileData`,
      :class:`Candidate`, :class:`GenerateContentResponse`, ...
    - Errors: :class:`ProviderError`, :class:`TransportError`, :class:`DecodeError`,
      :class:`BlockedError`, :class:`ErrorCode`
    - Cancellation: :class:`CancellationToken`, :class:`CancelledError`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.errors import BlockedError, DecodeError, ErrorCode, ProviderError, TransportError
from .base.models import (
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
    image_data,
)
from .base.streaming import GenerateContentResponseIterator, IteratorState, join_responses
from .chat import ChatSession
from .client import Client, GenerativeModel

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Client",
    "GenerativeModel",
    "ChatSession",
    "GenerateContentResponseIterator",
    "IteratorState",
    "join_responses",
    "CancellationToken",
    "CancelledError",
    "ProviderError",
    "TransportError",
    "DecodeError",
    "BlockedError",
    "ErrorCode",
    "Blob",
    "BlockReason",
    "Candidate",
    "Citation",
    "CitationMetadata",
    "Content",
    "CountTokensResponse",
    "FileData",
    "FinishReason",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "GenerationConfig",
    "HarmBlockThreshold",
    "HarmCategory",
    "HarmProbability",
    "Part",
    "PromptFeedback",
    "SafetyRating",
    "SafetySetting",
    "Text",
    "UsageMetadata",
    "image_data",
]
