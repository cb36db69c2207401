r"""
sortedcontainers.SortedList backend.

Requires: pip install sortedcontainers

Decrease-key is emulated by removing the old entry and adding the new
one, which needs an item -> priority index next to the list.

    from pq_bench.backends.sortedcontainers import SortedListBackend

    backend = SortedListBackend()
    queue = backend.create()
"""

from typing import Any

from pq_bench.backends.base import BackendRegistry, BaseBackend

__all__ = ["SortedListBackend"]


class _IndexedSortedList:
    __slots__ = ("entries", "priorities")

    def __init__(self, entries: Any) -> None:
        self.entries = entries
        self.priorities: dict[Any, float] = {}


@BackendRegistry.register("sortedcontainers.SortedList")
class SortedListBackend(BaseBackend):
    """SortedList of (priority, item) pairs with an item index."""

    distribution = "sortedcontainers"

    @property
    def name(self) -> str:
        return "sortedcontainers.SortedList"

    def create(self) -> _IndexedSortedList:
        try:
            from sortedcontainers import SortedList
        except ImportError as e:
            msg = "sortedcontainers package not installed. Install with: pip install sortedcontainers"
            raise ImportError(msg) from e

        return _IndexedSortedList(SortedList())

    def insert(self, queue: _IndexedSortedList, item: Any, priority: float) -> None:
        queue.entries.add((priority, item))
        queue.priorities[item] = priority

    def extract_min(self, queue: _IndexedSortedList) -> Any:
        _, item = queue.entries.pop(0)
        del queue.priorities[item]
        return item

    def decrease_key(self, queue: _IndexedSortedList, item: Any, priority: float) -> None:
        current = queue.priorities[item]
        if priority >= current:
            return
        queue.entries.remove((current, item))
        queue.entries.add((priority, item))
        queue.priorities[item] = priority
