"""genai_stream.config.env
========================

Environment variable lookups for client settings.

Each setting has a canonical variable (``GENAI_STREAM_<FIELD>``); the API key
additionally accepts the names other Google tooling uses, canonical first.
Placeholder values (``changeme``, ``<placeholder>``, ...) are treated as unset
so a copied sample ``.env`` never leaks a fake key into real requests.
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple

from .defaults import ENV_PREFIX

ENV_FIELD_MAP: Dict[str, str] = {
    "model": "MODEL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
    "endpoint": "ENDPOINT",
    "insert_new_candidates": "INSERT_NEW_CANDIDATES",
    "log_level": "LOG_LEVEL",
}

ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "api_key": (f"{ENV_PREFIX}_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"),
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder or test token.

    Heuristics: contains 'placeholder', 'changeme' or 'example', or starts
    with 'test_'. Case-insensitive, surrounding spaces ignored.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "example" in v or v.startswith("test_")


def env_names(field: str) -> Tuple[str, ...]:
    """Return the environment variable names consulted for ``field``, in order."""
    if field in ENV_ALIASES:
        return ENV_ALIASES[field]
    suffix = ENV_FIELD_MAP.get(field)
    return (f"{ENV_PREFIX}_{suffix}",) if suffix else ()


def parse_bool(value: str) -> Optional[bool]:
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    return None


def env_overrides() -> Dict[str, object]:
    """Collect settings present in the environment, skipping placeholders."""
    out: Dict[str, object] = {}
    for field in ENV_FIELD_MAP:
        for name in env_names(field):
            raw = os.getenv(name)
            if raw is None or not raw.strip() or is_placeholder(raw):
                continue
            if field == "insert_new_candidates":
                parsed = parse_bool(raw)
                if parsed is None:
                    continue
                out[field] = parsed
            else:
                out[field] = raw.strip()
            break
    return out


__all__ = ["ENV_FIELD_MAP", "ENV_ALIASES", "is_placeholder", "env_names", "parse_bool", "env_overrides"]
