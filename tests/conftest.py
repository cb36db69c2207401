r"""
Shared pytest fixtures for pq-bench tests.
"""

import time
from typing import Any

import pytest

from pq_bench.backends.base import BaseBackend, QueueHandle
from pq_bench.tasks.base import BaseTask
from pq_bench.types import Result


class ListBackend(BaseBackend):
    """Unsorted list; extract_min scans. Good enough for tests."""

    def __init__(self, name: str = "Test.ListQueue") -> None:
        self._name = name
        self.created = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> str:
        return "1.0"

    def create(self) -> list[tuple[float, Any]]:
        self.created += 1
        return []

    def insert(self, queue: list[tuple[float, Any]], item: Any, priority: float) -> None:
        queue.append((priority, item))

    def extract_min(self, queue: list[tuple[float, Any]]) -> Any:
        entry = min(queue)
        queue.remove(entry)
        return entry[1]


class SlowBackend(ListBackend):
    """Sleeps for delay seconds every time a queue is created."""

    def __init__(self, name: str = "Test.SlowQueue", *, delay: float = 0.05) -> None:
        super().__init__(name)
        self._delay = delay

    def create(self) -> list[tuple[float, Any]]:
        time.sleep(self._delay)
        return super().create()


class BrokenBackend(ListBackend):
    """Raises on every insert."""

    def insert(self, queue: list[tuple[float, Any]], item: Any, priority: float) -> None:
        raise RuntimeError("insert exploded")


class RecordingTask(BaseTask):
    """Inserts rank items and records each run."""

    def __init__(self, name: str = "insert-only") -> None:
        super().__init__()
        self._name = name
        self.runs: list[int] = []
        self.setups = 0
        self.teardowns = 0

    @property
    def name(self) -> str:
        return self._name

    def setup(self, rank: int) -> None:
        super().setup(rank)
        self.setups += 1

    def run(self, handle: QueueHandle, rank: int) -> int:
        for item, priority in enumerate(self.priorities):
            handle.insert(item, priority)
        self.runs.append(rank)
        return rank

    def teardown(self) -> None:
        super().teardown()
        self.teardowns += 1


class BrokenTeardownTask(RecordingTask):
    """Runs normally but fails to clean up."""

    def teardown(self) -> None:
        super().teardown()
        raise RuntimeError("teardown exploded")


@pytest.fixture
def list_backend() -> ListBackend:
    return ListBackend("A")


@pytest.fixture
def other_backend() -> ListBackend:
    return ListBackend("B")


@pytest.fixture
def slow_backend() -> SlowBackend:
    return SlowBackend(delay=0.05)


@pytest.fixture
def broken_backend() -> BrokenBackend:
    return BrokenBackend("Test.BrokenQueue")


@pytest.fixture
def recording_task() -> RecordingTask:
    return RecordingTask()


@pytest.fixture
def sample_results() -> list[Result]:
    """Results for one task and two backends, B twice as fast as A."""
    return [
        Result(task="insert-only", backend="A", version="1.0", rank=10, iterations=100, seconds=2.0),
        Result(task="insert-only", backend="B", version="2.1", rank=10, iterations=100, seconds=1.0),
    ]
