"""Per-stream counters reported on the terminal log event."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StreamMetrics:
    """Chunk counters and timings for one streaming call.

    Attributes:
        chunks: Chunks successfully decoded and merged.
        time_to_first_chunk_ms: Latency from iterator creation to the first chunk.
        total_duration_ms: Latency from iterator creation to the terminal state.
    """

    chunks: int = 0
    time_to_first_chunk_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    started_at: float = field(default_factory=time.perf_counter)

    def record_chunk(self) -> None:
        self.chunks += 1
        if self.time_to_first_chunk_ms is None:
            self.time_to_first_chunk_ms = (time.perf_counter() - self.started_at) * 1000.0

    def finish(self) -> None:
        self.total_duration_ms = (time.perf_counter() - self.started_at) * 1000.0


__all__ = ["StreamMetrics"]
