"""Shared fixtures for the genai_stream unit tests."""
from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from genai_stream.base.logging import BASE_LOGGER_NAME, get_logger
from genai_stream.config import reset_config_cache


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Keep host environment, ``.env`` files and config caches out of tests."""
    for name in (
        "GENAI_STREAM_MODEL",
        "GENAI_STREAM_API_KEY",
        "GENAI_STREAM_ENDPOINT",
        "GENAI_STREAM_INSERT_NEW_CANDIDATES",
        "GENAI_STREAM_LOG_LEVEL",
        "GENAI_STREAM_CONFIG_FILE",
        "GEMINI_API_KEY",
        "GOOGLE_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def log_capture() -> Iterator[List[logging.LogRecord]]:
    """Collect records reaching the shared ``genai_stream`` logger at DEBUG."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = lambda record: records.append(record)  # type: ignore
    base = get_logger(BASE_LOGGER_NAME)
    previous = base.level
    base.setLevel(logging.DEBUG)
    base.addHandler(handler)
    try:
        yield records
    finally:
        base.removeHandler(handler)
        base.setLevel(previous)
