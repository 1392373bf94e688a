"""Models parts package public surface.

Re-exports individual DTOs; `genai_stream.base.models` remains the primary
stable import path.
"""

from .part import Text, Blob, FileData, Part, PART_TYPES, image_data, coerce_part
from .content import Content, Role, ROLE_USER, ROLE_MODEL
from .enums import BlockReason, FinishReason, HarmBlockThreshold, HarmCategory, HarmProbability
from .safety import SafetyRating, SafetySetting
from .citation import Citation, CitationMetadata
from .candidate import Candidate
from .prompt_feedback import PromptFeedback
from .usage import UsageMetadata
from .response import GenerateContentResponse
from .generation_config import GenerationConfig
from .count_tokens import CountTokensResponse
from .request import GenerateContentRequest

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
