"""Domain model public surface.

Re-exports the one-type-per-file implementations under
``genai_stream.base.models_parts`` so callers import from a single place.
"""

from .models_parts.part import Text, Blob, FileData, Part, PART_TYPES, image_data, coerce_part
from .models_parts.content import Content, Role, ROLE_USER, ROLE_MODEL
from .models_parts.enums import BlockReason, FinishReason, HarmBlockThreshold, HarmCategory, HarmProbability
from .models_parts.safety import SafetyRating, SafetySetting
from .models_parts.citation import Citation, CitationMetadata
from .models_parts.candidate import Candidate
from .models_parts.prompt_feedback import PromptFeedback
from .models_parts.usage import UsageMetadata
from .models_parts.response import GenerateContentResponse
from .models_parts.generation_config import GenerationConfig
from .models_parts.count_tokens import CountTokensResponse
from .models_parts.request import GenerateContentRequest

__all__ = [
    "Text",
    "Blob",
    "FileData",
    "Part",
    "PART_TYPES",
    "image_data",
    "coerce_part",
    "Content",
    "Role",
    "ROLE_USER",
    "ROLE_MODEL",
    "BlockReason",
    "FinishReason",
    "HarmBlockThreshold",
    "HarmCategory",
    "HarmProbability",
    "SafetyRating",
    "SafetySetting",
    "Citation",
    "CitationMetadata",
    "Candidate",
    "PromptFeedback",
    "UsageMetadata",
    "GenerateContentResponse",
    "GenerationConfig",
    "CountTokensResponse",
    "GenerateContentRequest",
]
