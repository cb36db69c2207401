r"""
Base task implementation.

A task is a fixed sequence of queue operations parameterized by rank.
Input data is generated in setup() so the timed region only contains
queue operations.

    from pq_bench.tasks.base import BaseTask

    class MyTask(BaseTask):
        ...
"""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import Any

from pq_bench.backends.base import QueueHandle

__all__ = ["BaseTask", "TaskRegistry"]


class TaskRegistry:
    """Registry for benchmark tasks."""

    _tasks: dict[str, type[BaseTask]] = {}

    @classmethod
    def register(cls, name: str) -> Any:
        """Decorator to register a task class."""

        def decorator(task_cls: type[BaseTask]) -> type[BaseTask]:
            cls._tasks[name] = task_cls
            return task_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type[BaseTask] | None:
        """Get task class by name."""
        return cls._tasks.get(name)

    @classmethod
    def list(cls) -> list[str]:
        """List registered task names."""
        return list(cls._tasks.keys())

    @classmethod
    def create(cls, name: str) -> BaseTask:
        """Create task instance by name."""
        task_cls = cls.get(name)
        if task_cls is None:
            valid = ", ".join(cls.list()) or "none"
            msg = f"Unknown task '{name}'. Registered: {valid}"
            raise ValueError(msg)
        return task_cls()


class BaseTask(ABC):
    """Base class for task implementations."""

    #: Whether the task needs QueueHandle.decrease_key.
    needs_decrease_key: bool = False

    def __init__(self) -> None:
        self._priorities: list[float] = []

    @property
    @abstractmethod
    def name(self) -> str:
        """Task identifier."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description."""
        return (self.__class__.__doc__ or self.name).strip().splitlines()[0]

    @property
    def priorities(self) -> list[float]:
        """Priorities prepared by setup(), one per item."""
        return self._priorities

    def setup(self, rank: int) -> None:
        """Generate random priorities for rank items, seeded by rank."""
        rng = random.Random(rank)
        self._priorities = [rng.random() for _ in range(rank)]

    @abstractmethod
    def run(self, handle: QueueHandle, rank: int) -> int:
        """Run one operation sequence, return the number of operations."""
        ...

    def teardown(self) -> None:
        """Drop prepared data."""
        self._priorities = []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"
