"""
Policy rejection of a prompt or of a generated candidate.

A :class:`BlockedError` carries the :class:`PromptFeedback` that rejected the
prompt, the :class:`Candidate` whose generation was safety-blocked, or both.
It is terminal and never retryable.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from .error_code import ErrorCode
from .provider_error import ProviderError

if TYPE_CHECKING:
    from ..models_parts.candidate import Candidate
    from ..models_parts.prompt_feedback import PromptFeedback


@dataclass
class BlockedError(ProviderError):
    """Indicates that the model's response was blocked.

    Attributes:
        candidate: The blocked candidate when a generation was stopped for safety.
            Consult its ``finish_reason`` and ``safety_ratings`` for details.
        prompt_feedback: Feedback describing why the prompt itself was rejected.
    """

    code: ErrorCode = field(default=ErrorCode.BLOCKED)
    message: str = ""
    provider: str = "genai"
    candidate: Optional["Candidate"] = None
    prompt_feedback: Optional["PromptFeedback"] = None

    def __post_init__(self) -> None:
        if self.candidate is None and self.prompt_feedback is None:
            raise ValueError("BlockedError requires a candidate or prompt_feedback")
        self.retryable = False
        if not self.message:
            self.message = self.describe()

    def describe(self) -> str:
        """Return ``blocked: candidate: <reason>, prompt: <reason> (<message>)``."""
        out = "blocked: "
        if self.candidate is not None:
            out += f"candidate: {self.candidate.finish_reason.name}"
        if self.prompt_feedback is not None:
            if self.candidate is not None:
                out += ", "
            fb = self.prompt_feedback
            out += f"prompt: {fb.block_reason.name} ({fb.block_reason_message})"
        return out

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


__all__ = ["BlockedError"]
