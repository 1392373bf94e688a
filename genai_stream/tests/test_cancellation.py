"""Unit tests for cooperative cancellation primitives."""
from __future__ import annotations

import threading

import pytest

from genai_stream.base.cancellation import CancellationToken, CancelledError


def test_cancel_cascades_to_children_and_is_idempotent():
    parent = CancellationToken()
    child = parent.child()
    parent.cancel(reason="stop")
    parent.cancel(reason="ignored")
    assert parent.cancelled is True and parent.reason == "stop"  # nosec B101
    assert child.cancelled is True and child.reason == "stop"  # nosec B101


def test_late_child_is_cancelled_immediately():
    parent = CancellationToken()
    parent.cancel("done")
    assert CancellationToken(parent=parent).cancelled  # nosec B101


def test_raise_if_cancelled():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(CancelledError, match="terminate"):
        token.raise_if_cancelled()


def test_callbacks_run_once_and_failures_are_isolated():
    token = CancellationToken()
    seen = []

    def broken(_reason):
        raise RuntimeError("callback failure")

    token.add_callback(broken)
    token.add_callback(seen.append)
    token.cancel("why")
    token.cancel("again")
    assert seen == ["why"]  # nosec B101


def test_callback_added_after_cancel_runs_immediately():
    token = CancellationToken()
    token.cancel("late")
    seen = []
    token.add_callback(seen.append)
    assert seen == ["late"]  # nosec B101


def test_cancel_from_another_thread():
    token = CancellationToken()
    fired = threading.Event()
    token.add_callback(lambda _r: fired.set())
    worker = threading.Thread(target=token.cancel, args=("bg",))
    worker.start()
    worker.join(timeout=5)
    assert fired.is_set() and token.reason == "bg"  # nosec B101


def test_removed_callback_does_not_run():
    token = CancellationToken()
    seen = []
    token.add_callback(seen.append)
    token.remove_callback(seen.append)
    token.remove_callback(seen.append)
    assert token.callback_count == 0  # nosec B101
    token.cancel("x")
    assert seen == []  # nosec B101
