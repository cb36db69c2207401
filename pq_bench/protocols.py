r"""
Protocol definitions for queue backends and benchmark tasks.

All backends must implement the QueueBackend protocol.
All tasks must implement the Task protocol.

    from pq_bench.protocols import QueueBackend, Task

    class MyBackend(QueueBackend):
        ...
"""

from typing import Any, Protocol, runtime_checkable

__all__ = [
    "QueueBackend",
    "Task",
]


@runtime_checkable
class QueueBackend(Protocol):
    """Protocol for priority-queue backends.

    Each library under test (heapq, sortedcontainers, pqdict, ...) is
    wrapped by one backend so tasks can drive it through one interface.
    """

    @property
    def name(self) -> str:
        """Stable backend identifier."""
        ...

    @property
    def version(self) -> str:
        """Version of the underlying library."""
        ...

    @property
    def supports_decrease_key(self) -> bool:
        """Whether decrease_key is implemented."""
        ...

    def create(self) -> Any:
        """Create an empty queue."""
        ...

    def insert(self, queue: Any, item: Any, priority: float) -> None:
        """Insert item with the given priority."""
        ...

    def extract_min(self, queue: Any) -> Any:
        """Remove and return the item with the lowest priority."""
        ...

    def decrease_key(self, queue: Any, item: Any, priority: float) -> None:
        """Lower the priority of an item already in the queue."""
        ...


@runtime_checkable
class Task(Protocol):
    """Protocol for benchmark tasks."""

    @property
    def name(self) -> str:
        """Task identifier."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description."""
        ...

    def setup(self, rank: int) -> None:
        """Prepare input data for a rank (not timed)."""
        ...

    def run(self, handle: Any, rank: int) -> int:
        """Perform one full operation sequence, return operations performed."""
        ...

    def teardown(self) -> None:
        """Release prepared data."""
        ...
