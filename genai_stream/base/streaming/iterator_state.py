"""Lifecycle states of a response iterator."""
from __future__ import annotations

from enum import Enum


class IteratorState(str, Enum):
    """``ACTIVE`` until the first terminal condition; every other state is final."""

    ACTIVE = "active"
    DONE = "done"
    FAILED = "failed"
    BLOCKED = "blocked"

    @property
    def terminal(self) -> bool:
        return self is not IteratorState.ACTIVE


__all__ = ["IteratorState"]
