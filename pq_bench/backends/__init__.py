r"""
Priority-queue backends for pq-bench.

Each backend implements the QueueBackend protocol to provide a
consistent interface across queue libraries.

    from pq_bench.backends import BackendRegistry

    backend = BackendRegistry.create("heapq")
    queue = backend.create()
"""

from pq_bench.backends.base import BackendRegistry, BaseBackend, QueueHandle, UnsupportedOperation
from pq_bench.backends.heapdict import HeapDictBackend
from pq_bench.backends.pqdict import PQDictBackend
from pq_bench.backends.sortedcontainers import SortedListBackend
from pq_bench.backends.stdlib import BisectBackend, HeapqBackend, QueuePriorityQueueBackend

__all__ = [
    "BackendRegistry",
    "BaseBackend",
    "BisectBackend",
    "HeapDictBackend",
    "HeapqBackend",
    "PQDictBackend",
    "QueueHandle",
    "QueuePriorityQueueBackend",
    "SortedListBackend",
    "UnsupportedOperation",
]
