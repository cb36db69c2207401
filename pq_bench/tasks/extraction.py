r"""
Tasks that take items back out of the queue.

    from pq_bench.tasks.extraction import InsertExtractAllTask
"""

from pq_bench.backends.base import QueueHandle
from pq_bench.tasks.base import BaseTask, TaskRegistry

__all__ = [
    "DecreaseKeyTask",
    "InsertExtractAllTask",
    "InterleavedTask",
]


@TaskRegistry.register("insert-extract-all")
class InsertExtractAllTask(BaseTask):
    """Insert rank items with random priorities, then extract them all."""

    @property
    def name(self) -> str:
        return "insert-extract-all"

    def run(self, handle: QueueHandle, rank: int) -> int:
        insert = handle.insert
        extract_min = handle.extract_min
        for item, priority in enumerate(self._priorities):
            insert(item, priority)
        for _ in range(rank):
            extract_min()
        return 2 * rank


@TaskRegistry.register("interleaved")
class InterleavedTask(BaseTask):
    """Insert two items, extract one, until rank items went in; then drain.

    Keeps the queue size changing in both directions, which is closer to
    scheduler-style use than a bulk load.
    """

    @property
    def name(self) -> str:
        return "interleaved"

    def run(self, handle: QueueHandle, rank: int) -> int:
        insert = handle.insert
        extract_min = handle.extract_min
        size = 0
        extracted = 0
        for item, priority in enumerate(self._priorities):
            insert(item, priority)
            size += 1
            if item % 2 == 1:
                extract_min()
                size -= 1
                extracted += 1
        for _ in range(size):
            extract_min()
        return rank + extracted + size


@TaskRegistry.register("decrease-key")
class DecreaseKeyTask(BaseTask):
    """Insert rank random items, lower every priority, then extract them all."""

    needs_decrease_key = True

    @property
    def name(self) -> str:
        return "decrease-key"

    def run(self, handle: QueueHandle, rank: int) -> int:
        insert = handle.insert
        decrease_key = handle.decrease_key
        extract_min = handle.extract_min
        for item, priority in enumerate(self._priorities):
            insert(item, priority)
        # priorities are in [0, 1), so every new key is strictly lower
        for item, priority in enumerate(self._priorities):
            decrease_key(item, priority - 1.0)
        for _ in range(rank):
            extract_min()
        return 3 * rank
