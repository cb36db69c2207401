r"""
Timing utilities for cells.

    from pq_bench.runner.timing import Timer

    with Timer() as t:
        task.run(handle, rank)
    print(f"Elapsed: {t.elapsed_seconds}s")
"""

import time
from typing import Any

__all__ = ["Timer"]


class Timer:
    """Context manager for timing code blocks.

    The timer can be entered repeatedly; total_ns accumulates over every
    completed block while elapsed_ns covers the last one only.
    """

    def __init__(self) -> None:
        self._start: int = 0
        self._end: int = 0
        self._total: int = 0
        self._laps: int = 0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._end = time.perf_counter_ns()
        self._total += self._end - self._start
        self._laps += 1

    @property
    def elapsed_ns(self) -> int:
        """Elapsed time of the last block in nanoseconds."""
        return self._end - self._start

    @property
    def elapsed_seconds(self) -> float:
        """Elapsed time of the last block in seconds."""
        return self.elapsed_ns / 1_000_000_000

    @property
    def total_ns(self) -> int:
        """Accumulated time over all blocks in nanoseconds."""
        return self._total

    @property
    def total_seconds(self) -> float:
        """Accumulated time over all blocks in seconds."""
        return self._total / 1_000_000_000

    @property
    def laps(self) -> int:
        """Number of completed blocks."""
        return self._laps
