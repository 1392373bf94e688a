"""Tests for layered client configuration (defaults, file, env, overrides)."""
from __future__ import annotations

import json
import os

from genai_stream.config import DEFAULTS, get_client_config, reset_config_cache
from genai_stream.config.env import env_names, env_overrides, is_placeholder, parse_bool


def test_defaults_when_nothing_is_set():
    cfg = get_client_config()
    assert cfg["model"] == "gemini-pro"  # nosec B101
    assert cfg["api_key"] is None and cfg["insert_new_candidates"] is False  # nosec B101
    assert set(DEFAULTS) <= set(cfg)  # nosec B101


def test_env_overrides_defaults(monkeypatch):
    monkeypatch.setenv("GENAI_STREAM_MODEL", "gemini-ultra")
    monkeypatch.setenv("GENAI_STREAM_INSERT_NEW_CANDIDATES", "yes")
    cfg = get_client_config()
    assert cfg["model"] == "gemini-ultra" and cfg["insert_new_candidates"] is True  # nosec B101


def test_api_key_aliases_in_priority_order(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "google-key")
    assert env_overrides()["api_key"] == "google-key"  # nosec B101
    monkeypatch.setenv("GEMINI_API_KEY", "gemini-key")
    assert env_overrides()["api_key"] == "gemini-key"  # nosec B101
    monkeypatch.setenv("GENAI_STREAM_API_KEY", "own-key")
    assert env_overrides()["api_key"] == "own-key"  # nosec B101
    assert env_names("api_key")[0] == "GENAI_STREAM_API_KEY"  # nosec B101


def test_placeholder_values_are_ignored(monkeypatch):
    monkeypatch.setenv("GENAI_STREAM_API_KEY", "<placeholder>")
    monkeypatch.setenv("GENAI_STREAM_INSERT_NEW_CANDIDATES", "maybe")
    out = env_overrides()
    assert "api_key" not in out and "insert_new_candidates" not in out  # nosec B101
    assert is_placeholder("changeme") and is_placeholder("test_key")  # nosec B101
    assert not is_placeholder("real-value") and not is_placeholder(None)  # nosec B101


def test_parse_bool():
    assert parse_bool(" ON ") is True and parse_bool("0") is False  # nosec B101
    assert parse_bool("perhaps") is None  # nosec B101


def test_yaml_file_section_then_env_then_overrides(monkeypatch, tmp_path):
    path = tmp_path / "genai.yaml"
    path.write_text("genai_stream:\n  model: from-file\n  endpoint: file.host:443\n", encoding="utf-8")
    monkeypatch.setenv("GENAI_STREAM_CONFIG_FILE", str(path))
    reset_config_cache()
    cfg = get_client_config()
    assert cfg["model"] == "from-file" and cfg["endpoint"] == "file.host:443"  # nosec B101

    monkeypatch.setenv("GENAI_STREAM_MODEL", "from-env")
    assert get_client_config()["model"] == "from-env"  # nosec B101

    cfg = get_client_config({"model": "from-caller", "endpoint": None})
    assert cfg["model"] == "from-caller" and cfg["endpoint"] == "file.host:443"  # nosec B101


def test_json_file_top_level(monkeypatch, tmp_path):
    path = tmp_path / "genai.json"
    path.write_text(json.dumps({"model": "json-model", "insert_new_candidates": True}), encoding="utf-8")
    monkeypatch.setenv("GENAI_STREAM_CONFIG_FILE", str(path))
    reset_config_cache()
    cfg = get_client_config()
    assert cfg["model"] == "json-model" and cfg["insert_new_candidates"] is True  # nosec B101


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("# comment\nGENAI_STREAM_MODEL='dotenv-model'\n", encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(env_file))
    reset_config_cache()
    try:
        assert get_client_config()["model"] == "dotenv-model"  # nosec B101
    finally:
        # the loader writes straight into os.environ
        os.environ.pop("GENAI_STREAM_MODEL", None)
