"""Client facade over the generative model service.

A :class:`Client` owns one transport and is safe to share between threads;
every call it makes gets its own :class:`GenerateContentResponseIterator` and
aggregate, so concurrent calls never share state.

Typical use::

    with Client(api_key="...") as client:
        model = client.generative_model("gemini-pro")
        model.generation_config.temperature = 0.2
        print(model.generate_content("Why is the sky blue?").text())
        for chunk in model.generate_content_stream("Tell me a story"):
            print(chunk.text(), end="")
"""
from __future__ import annotations

import time
import uuid
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Union

from .base.cancellation import CancellationToken
from .base.constants import MODEL_RESOURCE_PREFIX, PROVIDER_NAME
from .base.errors import RETRYABLE_CODES, ProviderError, TransportError, classify_exception
from .base.logging import LogContext, configure_logger, get_logger, normalized_log_event
from .base.models import (
    Content,
    CountTokensResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    GenerationConfig,
    Part,
    ROLE_USER,
    SafetySetting,
    coerce_part,
)
from .base.streaming import GenerateContentResponseIterator
from .base.streaming.response_iterator import HistorySink
from .config import get_client_config
from .transport import GrpcTransport, Transport

if TYPE_CHECKING:
    from .chat import ChatSession

PartLike = Union[Part, str]


def full_model_name(name: str) -> str:
    """Return the resource name for ``name`` (``models/<name>`` unless already qualified)."""
    return name if "/" in name else MODEL_RESOURCE_PREFIX + name


def new_user_content(parts: tuple) -> Content:
    return Content(role=ROLE_USER, parts=[coerce_part(p) for p in parts])


class Client:
    """Entry point: resolves configuration and owns the transport.

    Args:
        api_key: API key; falls back to configuration and the environment.
        endpoint: Service endpoint override.
        transport: Pre-built transport (tests, custom channels). When given,
            ``api_key`` and ``endpoint`` are only recorded in :attr:`config`.
        config_overrides: Extra settings merged last (see ``get_client_config``).
    """

    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        transport: Optional[Transport] = None,
        config_overrides: Optional[Dict[str, Any]] = None,
    ) -> None:
        overrides: Dict[str, Any] = dict(config_overrides or {})
        overrides.update({"api_key": api_key, "endpoint": endpoint})
        self._config = get_client_config(overrides)
        if self._config.get("log_level"):
            configure_logger(level=self._config["log_level"])
        self._logger = get_logger("client")
        self._transport: Transport = transport or GrpcTransport(
            api_key=self._config.get("api_key"),
            endpoint=self._config.get("endpoint"),
        )

    @property
    def config(self) -> Dict[str, Any]:
        """Resolved configuration with the API key masked."""
        cfg = dict(self._config)
        if cfg.get("api_key"):
            cfg["api_key"] = "***"
        return cfg

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def insert_new_candidates(self) -> bool:
        return bool(self._config.get("insert_new_candidates"))

    def generative_model(self, name: Optional[str] = None) -> "GenerativeModel":
        """Create a model handle; ``name`` defaults to the configured model."""
        return GenerativeModel(self, name or self._config["model"])

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class GenerativeModel:
    """A named model plus the request settings applied to every call.

    Configure it by assigning to :attr:`generation_config` (defaults:
    ``max_output_tokens=2048``, ``top_k=3``) and :attr:`safety_settings`.
    """

    def __init__(self, client: Client, name: str) -> None:
        self._client = client
        self._name = name
        self._full_name = full_model_name(name)
        self.generation_config = GenerationConfig()
        self.safety_settings: List[SafetySetting] = []
        self._logger = get_logger("model")

    @property
    def name(self) -> str:
        return self._name

    @property
    def full_name(self) -> str:
        return self._full_name

    def generate_content(
        self,
        *parts: PartLike,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> GenerateContentResponse:
        """Send one user turn and return the fully merged response.

        Raises:
            TransportError, DecodeError, BlockedError: first failure of the call.
        """
        return self._generate([new_user_content(parts)], cancellation_token=cancellation_token)

    def generate_content_stream(
        self,
        *parts: PartLike,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> GenerateContentResponseIterator:
        """Send one user turn and return an iterator over the streamed chunks."""
        return self.open_stream([new_user_content(parts)], cancellation_token=cancellation_token)

    def count_tokens(self, *parts: PartLike) -> CountTokensResponse:
        ctx = LogContext(model=self._full_name)
        try:
            result = self._client.transport.count_tokens(self._full_name, [new_user_content(parts)])
        except ProviderError:
            raise
        except Exception as exc:
            code = classify_exception(exc)
            normalized_log_event(
                self._logger, "count_tokens.error", ctx, phase="finalize", error_code=code.value, error=str(exc)
            )
            raise TransportError(
                code=code,
                message=str(exc),
                provider=PROVIDER_NAME,
                model=self._full_name,
                retryable=code in RETRYABLE_CODES,
                raw=exc,
            ) from exc
        normalized_log_event(
            self._logger, "count_tokens.end", ctx, phase="finalize", tokens={"total": result.total_tokens}
        )
        return result

    def start_chat(self, history: Optional[List[Content]] = None) -> "ChatSession":
        from .chat import ChatSession

        return ChatSession(self, history)

    # ---- internal helpers -------------------------------------------------
    def new_request(self, contents: List[Content]) -> GenerateContentRequest:
        return GenerateContentRequest(
            model=self._full_name,
            contents=list(contents),
            safety_settings=list(self.safety_settings),
            generation_config=self.generation_config,
        )

    def open_stream(
        self,
        contents: List[Content],
        *,
        cancellation_token: Optional[CancellationToken] = None,
        history_sink: Optional[HistorySink] = None,
    ) -> GenerateContentResponseIterator:
        """Open a streaming call over ``contents``.

        A failure while opening does not raise here; it is recorded on the
        returned iterator and raised by its first pull.
        """
        transport = self._client.transport
        ctx = LogContext(model=self._full_name, call_id=uuid.uuid4().hex[:12])
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            contents=len(contents),
            max_tokens=self.generation_config.max_output_tokens,
            temperature=self.generation_config.temperature,
        )
        request = self.new_request(contents)
        try:
            stream = transport.stream_generate_content(request, cancellation_token=cancellation_token)
        except Exception as exc:
            return GenerateContentResponseIterator(
                None, decoder=transport.decode_chunk, error=exc, ctx=ctx, logger=self._logger
            )
        return GenerateContentResponseIterator(
            stream,
            decoder=transport.decode_chunk,
            history_sink=history_sink,
            insert_new_candidates=self._client.insert_new_candidates,
            ctx=ctx,
            logger=self._logger,
        )

    def _generate(
        self,
        contents: List[Content],
        *,
        cancellation_token: Optional[CancellationToken] = None,
        history_sink: Optional[HistorySink] = None,
    ) -> GenerateContentResponse:
        t0 = time.perf_counter()
        it = self.open_stream(contents, cancellation_token=cancellation_token, history_sink=history_sink)
        response = it.drain()
        normalized_log_event(
            self._logger,
            "generate.end",
            LogContext(model=self._full_name),
            phase="finalize",
            emitted=bool(response.candidates),
            tokens=response.usage_metadata,
            latency_ms=(time.perf_counter() - t0) * 1000.0,
            chunks=it.metrics.chunks,
        )
        return response


__all__ = ["Client", "GenerativeModel", "full_model_name", "new_user_content"]
