r"""
Task definitions for pq-bench.

Tasks are organized by what they do to the queue:
- insertion: grow a queue from empty (random, ascending, descending priorities)
- extraction: bulk load then drain, interleaved insert/extract, decrease-key

    from pq_bench.tasks import TaskRegistry

    task = TaskRegistry.create("insert-only")
"""

from pq_bench.tasks.base import BaseTask, TaskRegistry
from pq_bench.tasks.insertion import InsertOnlyTask, InsertOrderedTask, InsertReverseTask
from pq_bench.tasks.extraction import DecreaseKeyTask, InsertExtractAllTask, InterleavedTask

__all__ = [
    # Base
    "BaseTask",
    "TaskRegistry",
    # Insertion
    "InsertOnlyTask",
    "InsertOrderedTask",
    "InsertReverseTask",
    # Extraction
    "DecreaseKeyTask",
    "InsertExtractAllTask",
    "InterleavedTask",
]
