r"""
pqdict backend.

Requires: pip install pqdict

    from pq_bench.backends.pqdict import PQDictBackend
"""

from typing import Any

from pq_bench.backends.base import BackendRegistry, BaseBackend

__all__ = ["PQDictBackend"]


@BackendRegistry.register("pqdict.pqdict")
class PQDictBackend(BaseBackend):
    """Indexed min-heap (pqdict.pqdict)."""

    distribution = "pqdict"

    @property
    def name(self) -> str:
        return "pqdict.pqdict"

    def create(self) -> Any:
        try:
            from pqdict import pqdict
        except ImportError as e:
            msg = "pqdict package not installed. Install with: pip install pqdict"
            raise ImportError(msg) from e

        return pqdict()

    def insert(self, queue: Any, item: Any, priority: float) -> None:
        queue.additem(item, priority)

    def extract_min(self, queue: Any) -> Any:
        return queue.popitem()[0]

    def decrease_key(self, queue: Any, item: Any, priority: float) -> None:
        if priority < queue[item]:
            queue.updateitem(item, priority)
