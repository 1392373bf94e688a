"""Configuration layer for the genai_stream client.

Sources are merged in a predictable order (later wins):

1. Built-in defaults (``config.defaults``)
2. Optional config file named by ``GENAI_STREAM_CONFIG_FILE`` (JSON, or YAML
   via PyYAML), read from its ``genai_stream`` section or its top level
3. Environment variables (``GENAI_STREAM_MODEL``, ``GENAI_STREAM_API_KEY``,
   ``GENAI_STREAM_ENDPOINT``, ...), after an optional ``.env`` file is loaded
4. Explicit overrides passed by the caller (``None`` values ignored)

Example file::

    genai_stream:
      model: gemini-pro
      endpoint: generativelanguage.googleapis.com:443
      insert_new_candidates: false

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* reset_config_cache() -- drop the cached file and ``.env`` state (tests)
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    CONFIG_FILE_ENV,
    DEFAULT_ENDPOINT,
    DEFAULT_INSERT_NEW_CANDIDATES,
    DEFAULT_MODEL,
)
from .env import env_overrides, is_placeholder

DEFAULTS: Dict[str, Any] = {
    "model": DEFAULT_MODEL,
    "endpoint": DEFAULT_ENDPOINT,
    "api_key": None,
    "insert_new_candidates": DEFAULT_INSERT_NEW_CANDIDATES,
    "log_level": None,
}

FILE_SECTION = "genai_stream"

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Load ``KEY=VALUE`` lines from ``.env`` (or ``DOTENV_FILE``) once.

    Existing variables win unless their current value is a placeholder.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv(CONFIG_FILE_ENV)
    if not path or not Path(path).is_file():
        _FILE_CACHE = {}
        return _FILE_CACHE
    text = Path(path).read_text(encoding="utf-8")
    if path.endswith(".json"):
        data = json.loads(text)
    else:
        data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    section = data.get(FILE_SECTION, data)
    _FILE_CACHE = dict(section) if isinstance(section, dict) else {}
    return _FILE_CACHE


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    Unknown keys from the file or overrides are kept so transports can read
    their own settings.
    """
    _load_dotenv_once()
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def reset_config_cache() -> None:
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


__all__ = ["DEFAULTS", "FILE_SECTION", "get_client_config", "reset_config_cache"]
