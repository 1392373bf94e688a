"""Behavioural tests for ``GenerateContentResponseIterator``.

Covers the end-to-end merge, memoized terminal outcomes, blocking signals,
transport/decode failures, cancellation, the history sink and log events.
"""
from __future__ import annotations

import pytest

from genai_stream.base.cancellation import CancelledError
from genai_stream.base.errors import BlockedError, DecodeError, ErrorCode, TransportError
from genai_stream.base.models import (
    BlockReason,
    FinishReason,
    GenerateContentResponse,
    PromptFeedback,
    Text,
    UsageMetadata,
)
from genai_stream.base.streaming import GenerateContentResponseIterator, IteratorState
from genai_stream.tests.fakes import FakeStream, identity_decoder, log_events, text_chunk


def _iterator(chunks, **kwargs):
    stream = FakeStream(chunks)
    return stream, GenerateContentResponseIterator(stream, decoder=identity_decoder, **kwargs)


def test_sky_is_blue_end_to_end():
    _, it = _iterator([text_chunk("The sky"), text_chunk(" is"), text_chunk(" blue.", finish_reason=FinishReason.STOP)])
    seen = [r.text() for r in it]
    assert seen == ["The sky", " is", " blue."]  # nosec B101
    assert it.state is IteratorState.DONE  # nosec B101
    assert it.merged.text() == "The sky is blue."  # nosec B101
    assert it.merged.candidates[0].content.parts == [Text("The sky is blue.")]  # nosec B101
    assert it.merged.candidates[0].finish_reason is FinishReason.STOP  # nosec B101


def test_returned_chunks_are_not_mutated_by_merging():
    _, it = _iterator([text_chunk("a"), text_chunk("b")])
    first = next(it)
    next(it)
    assert first.candidates[0].content.parts == [Text("a")]  # nosec B101


def test_done_is_replayed_without_touching_stream():
    stream, it = _iterator([text_chunk("x")])
    list(it)
    pulls = stream.pulls
    for _ in range(3):
        with pytest.raises(StopIteration):
            it.next_response()
    assert stream.pulls == pulls  # nosec B101


def test_empty_stream_drains_to_empty_response():
    _, it = _iterator([])
    out = it.drain()
    assert isinstance(out, GenerateContentResponse) and out.candidates == []  # nosec B101
    assert it.merged is None  # nosec B101


def test_drain_returns_aggregate_with_latest_usage():
    first = text_chunk("a")
    first.usage_metadata = UsageMetadata(prompt_token_count=2, total_token_count=3)
    last = text_chunk("b")
    last.usage_metadata = UsageMetadata(prompt_token_count=2, total_token_count=4)
    _, it = _iterator([first, last])
    out = it.drain()
    assert out.text() == "ab" and out.usage_metadata.total_token_count == 4  # nosec B101
    assert it.metrics.chunks == 2  # nosec B101


def test_prompt_feedback_blocks_immediately():
    blocked = GenerateContentResponse(prompt_feedback=PromptFeedback(block_reason=BlockReason.SAFETY))
    stream, it = _iterator([blocked, text_chunk("never")])
    with pytest.raises(BlockedError) as ei:
        next(it)
    err = ei.value
    assert err.prompt_feedback is not None and err.candidate is None  # nosec B101
    assert err.code is ErrorCode.BLOCKED and err.retryable is False  # nosec B101
    assert it.state is IteratorState.BLOCKED  # nosec B101
    assert it.merged is None  # nosec B101
    assert stream.closed  # nosec B101
    with pytest.raises(BlockedError) as again:
        next(it)
    assert again.value is err  # nosec B101
    assert stream.pulls == 1  # nosec B101


def test_safety_candidate_blocks_even_when_others_are_fine():
    chunk = text_chunk("fine")
    bad = text_chunk("bad", index=1, finish_reason=FinishReason.SAFETY).candidates[0]
    chunk.candidates.append(bad)
    _, it = _iterator([text_chunk("start"), chunk])
    next(it)
    with pytest.raises(BlockedError) as ei:
        next(it)
    assert ei.value.candidate is bad  # nosec B101
    assert "candidate: SAFETY" in ei.value.message  # nosec B101
    # aggregate still holds what was merged before the block
    assert it.merged.text() == "start"  # nosec B101


def test_transport_failure_is_wrapped_and_memoized():
    boom = ConnectionError("socket reset")
    stream, it = _iterator([text_chunk("a"), boom, text_chunk("never")])
    next(it)
    with pytest.raises(TransportError) as ei:
        next(it)
    err = ei.value
    assert err.raw is boom and err.__cause__ is boom  # nosec B101
    assert it.state is IteratorState.FAILED and it.error is err  # nosec B101
    with pytest.raises(TransportError) as again:
        next(it)
    assert again.value is err  # nosec B101
    assert stream.pulls == 2 and stream.closed  # nosec B101


def test_timeout_failure_is_retryable():
    _, it = _iterator([TimeoutError("deadline")])
    with pytest.raises(TransportError) as ei:
        next(it)
    assert ei.value.code is ErrorCode.TIMEOUT and ei.value.retryable  # nosec B101


def test_decode_failure_surfaces_as_decode_error():
    def decoder(raw):
        raise ValueError("bad bytes")

    it = GenerateContentResponseIterator(FakeStream(["garbage"]), decoder=decoder)
    with pytest.raises(DecodeError) as ei:
        next(it)
    assert isinstance(ei.value.raw, ValueError)  # nosec B101
    assert it.state is IteratorState.FAILED  # nosec B101


def test_decoder_raising_decode_error_is_passed_through():
    original = DecodeError(message="unsupported part payload")

    def decoder(raw):
        raise original

    it = GenerateContentResponseIterator(FakeStream(["x"]), decoder=decoder)
    with pytest.raises(DecodeError) as ei:
        next(it)
    assert ei.value is original  # nosec B101


def test_cancelled_stream_surfaces_cancelled_code():
    _, it = _iterator([CancelledError("user stop")])
    with pytest.raises(TransportError) as ei:
        next(it)
    assert ei.value.code is ErrorCode.CANCELLED and not ei.value.retryable  # nosec B101


def test_history_sink_called_once_on_clean_end():
    calls = []
    _, it = _iterator([text_chunk("a"), text_chunk("b")], history_sink=calls.append)
    list(it)
    with pytest.raises(StopIteration):
        next(it)
    assert len(calls) == 1  # nosec B101
    assert calls[0][0].text() == "ab"  # nosec B101


def test_history_sink_not_called_on_failure_or_empty_stream():
    calls = []
    _, failing = _iterator([text_chunk("a"), RuntimeError("x")], history_sink=calls.append)
    with pytest.raises(TransportError):
        failing.drain()
    _, empty = _iterator([], history_sink=calls.append)
    empty.drain()
    assert calls == []  # nosec B101


def test_prefailed_iterator_raises_on_first_pull():
    it = GenerateContentResponseIterator(None, decoder=identity_decoder, error=PermissionError("forbidden"))
    assert it.state is IteratorState.FAILED  # nosec B101
    with pytest.raises(TransportError) as ei:
        next(it)
    assert ei.value.code is ErrorCode.AUTH  # nosec B101


def test_requires_stream_or_error():
    with pytest.raises(ValueError):
        GenerateContentResponseIterator(None, decoder=identity_decoder)


def test_close_releases_stream_and_fails_later_pulls():
    stream, it = _iterator([text_chunk("a"), text_chunk("b")])
    next(it)
    it.close()
    assert stream.closed  # nosec B101
    with pytest.raises(TransportError) as ei:
        next(it)
    assert ei.value.code is ErrorCode.CANCELLED  # nosec B101
    it.close()  # idempotent


def test_log_events_cover_chunks_and_terminal_state(log_capture):
    _, it = _iterator([text_chunk("a"), text_chunk("b")])
    it.drain()
    payloads = log_events(log_capture)
    chunk_events = [p for p in payloads if p.get("event") == "stream.chunk"]
    end = [p for p in payloads if p.get("event") == "stream.end"]
    assert len(chunk_events) == 2  # nosec B101
    assert len(end) == 1 and end[0]["chunks"] == 2 and end[0]["phase"] == "finalize"  # nosec B101


def test_error_event_carries_error_code(log_capture):
    _, it = _iterator([RuntimeError("service unavailable")])
    with pytest.raises(TransportError):
        next(it)
    errors = [p for p in log_events(log_capture) if p.get("event") == "stream.error"]
    assert errors and errors[0]["error_code"] == ErrorCode.UNAVAILABLE.value  # nosec B101


def test_failing_history_sink_does_not_disturb_clean_end(log_capture):
    def sink(_candidates):
        raise RuntimeError("history store down")

    _, it = _iterator([text_chunk("a")], history_sink=sink)
    next(it)
    outcomes = []
    for _ in range(2):
        try:
            next(it)
        except StopIteration:
            outcomes.append("stop")
    assert outcomes == ["stop", "stop"]  # nosec B101
    assert it.state is IteratorState.DONE  # nosec B101
    errors = [p for p in log_events(log_capture) if p.get("event") == "stream.history_error"]
    assert len(errors) == 1 and errors[0]["error"] == "history store down"  # nosec B101


def _traceback_depth(exc):
    depth, tb = 0, exc.__traceback__
    while tb is not None:
        depth += 1
        tb = tb.tb_next
    return depth


def test_replayed_error_traceback_does_not_grow():
    _, it = _iterator([RuntimeError("gone")])
    depths = []
    for _ in range(4):
        with pytest.raises(TransportError) as ei:
            next(it)
        depths.append(_traceback_depth(ei.value))
    assert len(set(depths[1:])) == 1  # nosec B101


def test_blocked_error_from_stream_enters_blocked_state():
    err = BlockedError(prompt_feedback=PromptFeedback(block_reason=BlockReason.OTHER))
    stream, it = _iterator([err])
    with pytest.raises(BlockedError) as ei:
        next(it)
    assert ei.value is err  # nosec B101
    assert it.state is IteratorState.BLOCKED  # nosec B101
    assert stream.closed  # nosec B101


def test_stream_released_on_clean_end():
    stream, it = _iterator([text_chunk("a")])
    it.drain()
    assert stream.closed  # nosec B101
