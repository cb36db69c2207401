r"""
Insertion tasks.

Measure how fast a backend grows a queue from empty to rank items,
for random, ascending and descending priorities.

    from pq_bench.tasks.insertion import InsertOnlyTask

    task = InsertOnlyTask()
    task.setup(1000)
    task.run(handle, 1000)
"""

from pq_bench.backends.base import QueueHandle
from pq_bench.tasks.base import BaseTask, TaskRegistry

__all__ = [
    "InsertOnlyTask",
    "InsertOrderedTask",
    "InsertReverseTask",
]


@TaskRegistry.register("insert-only")
class InsertOnlyTask(BaseTask):
    """Insert rank items with random priorities."""

    @property
    def name(self) -> str:
        return "insert-only"

    def run(self, handle: QueueHandle, rank: int) -> int:
        insert = handle.insert
        for item, priority in enumerate(self._priorities):
            insert(item, priority)
        return rank


@TaskRegistry.register("insert-ordered")
class InsertOrderedTask(BaseTask):
    """Insert rank items in ascending priority order."""

    @property
    def name(self) -> str:
        return "insert-ordered"

    def setup(self, rank: int) -> None:
        self._priorities = [float(i) for i in range(rank)]

    def run(self, handle: QueueHandle, rank: int) -> int:
        insert = handle.insert
        for item, priority in enumerate(self._priorities):
            insert(item, priority)
        return rank


@TaskRegistry.register("insert-reverse")
class InsertReverseTask(BaseTask):
    """Insert rank items in descending priority order."""

    @property
    def name(self) -> str:
        return "insert-reverse"

    def setup(self, rank: int) -> None:
        self._priorities = [float(rank - i) for i in range(rank)]

    def run(self, handle: QueueHandle, rank: int) -> int:
        insert = handle.insert
        for item, priority in enumerate(self._priorities):
            insert(item, priority)
        return rank
