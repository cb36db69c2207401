r"""
HeapDict backend.

Requires: pip install HeapDict

A heapdict maps items to priorities, so decrease-key is a plain
assignment.

    from pq_bench.backends.heapdict import HeapDictBackend
"""

from typing import Any

from pq_bench.backends.base import BackendRegistry, BaseBackend

__all__ = ["HeapDictBackend"]


@BackendRegistry.register("heapdict.heapdict")
class HeapDictBackend(BaseBackend):
    """Binary heap with a dict interface (heapdict.heapdict)."""

    distribution = "HeapDict"

    @property
    def name(self) -> str:
        return "heapdict.heapdict"

    def create(self) -> Any:
        try:
            from heapdict import heapdict
        except ImportError as e:
            msg = "HeapDict package not installed. Install with: pip install HeapDict"
            raise ImportError(msg) from e

        return heapdict()

    def insert(self, queue: Any, item: Any, priority: float) -> None:
        queue[item] = priority

    def extract_min(self, queue: Any) -> Any:
        return queue.popitem()[0]

    def decrease_key(self, queue: Any, item: Any, priority: float) -> None:
        if priority < queue[item]:
            queue[item] = priority
