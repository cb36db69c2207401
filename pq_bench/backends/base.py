r"""
Base backend implementation with common functionality.

Provides the registry, the default decrease-key behaviour and the
handle tasks use to drive a queue.

    from pq_bench.backends.base import BaseBackend

    class MyBackend(BaseBackend):
        def create(self) -> Any:
            ...
"""

import platform
from abc import ABC, abstractmethod
from importlib import metadata
from typing import Any

__all__ = ["BaseBackend", "BackendRegistry", "QueueHandle", "UnsupportedOperation"]


class UnsupportedOperation(NotImplementedError):
    """Backend does not implement the requested queue operation."""


class BackendRegistry:
    """Registry for queue backends."""

    _backends: dict[str, type["BaseBackend"]] = {}

    @classmethod
    def register(cls, name: str) -> Any:
        """Decorator to register a backend class."""

        def decorator(backend_cls: type["BaseBackend"]) -> type["BaseBackend"]:
            cls._backends[name] = backend_cls
            return backend_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type["BaseBackend"] | None:
        """Get backend class by name."""
        return cls._backends.get(name)

    @classmethod
    def list(cls) -> list[str]:
        """List registered backend names."""
        return list(cls._backends.keys())

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> "BaseBackend":
        """Create backend instance by name."""
        backend_cls = cls.get(name)
        if backend_cls is None:
            valid = ", ".join(cls.list()) or "none"
            msg = f"Unknown backend '{name}'. Registered: {valid}"
            raise ValueError(msg)
        return backend_cls(**kwargs)


class BaseBackend(ABC):
    """Base class for priority-queue backends.

    Subclasses wrap one library's insert/extract API. Backends are
    stateless: every queue lives in the object returned by create().
    """

    #: Distribution name used to look up the version (None = stdlib).
    distribution: str | None = None

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable backend identifier."""
        ...

    @property
    def version(self) -> str:
        """Version of the library under test."""
        if self.distribution is None:
            return platform.python_version()
        try:
            return metadata.version(self.distribution)
        except metadata.PackageNotFoundError:
            return "unknown"

    @property
    def supports_decrease_key(self) -> bool:
        """Whether decrease_key is overridden by this backend."""
        return type(self).decrease_key is not BaseBackend.decrease_key

    @abstractmethod
    def create(self) -> Any:
        """Create an empty queue."""
        ...

    @abstractmethod
    def insert(self, queue: Any, item: Any, priority: float) -> None:
        """Insert item with the given priority."""
        ...

    @abstractmethod
    def extract_min(self, queue: Any) -> Any:
        """Remove and return the item with the lowest priority."""
        ...

    def decrease_key(self, queue: Any, item: Any, priority: float) -> None:
        """Lower the priority of an item already in the queue.

        Raises:
            UnsupportedOperation: Unless overridden.
        """
        msg = f"{self.name} does not support decrease-key"
        raise UnsupportedOperation(msg)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name}, version={self.version})"


class QueueHandle:
    """A live queue bound to the backend that created it.

    Tasks only ever see handles, so they stay independent of the
    library behind them.
    """

    __slots__ = ("backend", "queue")

    def __init__(self, backend: BaseBackend, queue: Any) -> None:
        self.backend = backend
        self.queue = queue

    def insert(self, item: Any, priority: float) -> None:
        self.backend.insert(self.queue, item, priority)

    def extract_min(self) -> Any:
        return self.backend.extract_min(self.queue)

    def decrease_key(self, item: Any, priority: float) -> None:
        self.backend.decrease_key(self.queue, item, priority)
