r"""
Standard-library priority queues.

No extra packages required. Versions report the running Python.

    from pq_bench.backends.stdlib import HeapqBackend

    backend = HeapqBackend()
    queue = backend.create()
    backend.insert(queue, "job", 3.0)
"""

import bisect
import heapq
import queue as queue_module
from typing import Any

from pq_bench.backends.base import BackendRegistry, BaseBackend

__all__ = ["BisectBackend", "HeapqBackend", "QueuePriorityQueueBackend"]


@BackendRegistry.register("heapq")
class HeapqBackend(BaseBackend):
    """Binary heap on a plain list of (priority, item) pairs."""

    @property
    def name(self) -> str:
        return "heapq"

    def create(self) -> list[tuple[float, Any]]:
        return []

    def insert(self, queue: list[tuple[float, Any]], item: Any, priority: float) -> None:
        heapq.heappush(queue, (priority, item))

    def extract_min(self, queue: list[tuple[float, Any]]) -> Any:
        return heapq.heappop(queue)[1]


@BackendRegistry.register("queue.PriorityQueue")
class QueuePriorityQueueBackend(BaseBackend):
    """Thread-safe queue.PriorityQueue, paying for its locking."""

    @property
    def name(self) -> str:
        return "queue.PriorityQueue"

    def create(self) -> queue_module.PriorityQueue:
        return queue_module.PriorityQueue()

    def insert(self, queue: queue_module.PriorityQueue, item: Any, priority: float) -> None:
        queue.put_nowait((priority, item))

    def extract_min(self, queue: queue_module.PriorityQueue) -> Any:
        return queue.get_nowait()[1]


def _descending(entry: tuple[float, Any]) -> float:
    return -entry[0]


@BackendRegistry.register("bisect.insort")
class BisectBackend(BaseBackend):
    """Sorted list kept in descending priority order with bisect.insort.

    Insertion is O(n) and the minimum sits at the end, so extraction is a
    plain list.pop(). This is the sorted-array baseline the heaps are
    measured against.
    """

    @property
    def name(self) -> str:
        return "bisect.insort"

    def create(self) -> list[tuple[float, Any]]:
        return []

    def insert(self, queue: list[tuple[float, Any]], item: Any, priority: float) -> None:
        bisect.insort(queue, (priority, item), key=_descending)

    def extract_min(self, queue: list[tuple[float, Any]]) -> Any:
        return queue.pop()[1]
