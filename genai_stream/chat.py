"""Multi-turn conversations on top of :class:`GenerativeModel`.

A :class:`ChatSession` keeps the conversation history and replays it with
each new message. The user turn is appended before the request goes out; the
model turn is appended when the call's stream ends cleanly, taken from the
first merged candidate.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from .base.cancellation import CancellationToken
from .base.models import Candidate, Content, GenerateContentResponse, ROLE_MODEL
from .base.streaming import GenerateContentResponseIterator

if TYPE_CHECKING:
    from .client import GenerativeModel, PartLike


class ChatSession:
    """Conversation with a model.

    Attributes:
        history: Contents exchanged so far, oldest first. May be edited
            between calls, not while a stream is in flight.
    """

    def __init__(self, model: "GenerativeModel", history: Optional[List[Content]] = None) -> None:
        self._model = model
        self.history: List[Content] = list(history or [])

    @property
    def model(self) -> "GenerativeModel":
        return self._model

    def send_message(
        self,
        *parts: "PartLike",
        cancellation_token: Optional[CancellationToken] = None,
    ) -> GenerateContentResponse:
        """Send a user turn and return the merged model reply."""
        return self.send_message_stream(*parts, cancellation_token=cancellation_token).drain()

    def send_message_stream(
        self,
        *parts: "PartLike",
        cancellation_token: Optional[CancellationToken] = None,
    ) -> GenerateContentResponseIterator:
        """Send a user turn and stream the reply.

        The model turn joins :attr:`history` only once the returned iterator
        reaches the end of the stream.
        """
        from .client import new_user_content

        self.history.append(new_user_content(parts))
        return self._model.open_stream(
            list(self.history),
            cancellation_token=cancellation_token,
            history_sink=self._add_to_history,
        )

    def _add_to_history(self, candidates: List[Candidate]) -> None:
        if not candidates or candidates[0].content is None:
            return
        reply = candidates[0].content
        self.history.append(Content(role=ROLE_MODEL, parts=list(reply.parts)))


__all__ = ["ChatSession"]
