"""Shared constants for the genai_stream package.

Plain values only; no imports from sibling modules to avoid cycles.
"""

from __future__ import annotations

PROVIDER_NAME = "genai"

# Generation defaults applied to every new GenerativeModel.
DEFAULT_MAX_OUTPUT_TOKENS = 2048
DEFAULT_TOP_K = 3

# Resource name prefix for model identifiers without an explicit collection.
MODEL_RESOURCE_PREFIX = "models/"
