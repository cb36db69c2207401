r"""
Core types for priority-queue benchmarks.

    from pq_bench.types import Result, Status

    outcome = run_cell(task, backend, rank=1000, iterations=10)
    if outcome.ok:
        print(f"{outcome.result.rate:.1f} iterations/s")
"""

from dataclasses import dataclass
from enum import IntEnum, auto

__all__ = [
    "Status",
    "Result",
    "CellOutcome",
    "WorkloadPlan",
]


class Status(IntEnum):
    """Outcome status of a single cell."""

    SUCCESS = auto()
    FAILED = auto()
    TIMEOUT = auto()


@dataclass(frozen=True, slots=True)
class Result:
    """Timing of one successfully completed (task, backend, rank) cell.

    Attributes:
        task: Task identifier.
        backend: Backend identifier.
        version: Version string of the backend's library.
        rank: Input size the task ran with.
        iterations: Number of iterations actually executed.
        seconds: Total elapsed wall-clock seconds over all iterations.
    """

    task: str
    backend: str
    version: str
    rank: int
    iterations: int
    seconds: float

    @property
    def rate(self) -> float:
        """Iterations per second."""
        if self.seconds <= 0:
            return float("inf")
        return self.iterations / self.seconds


@dataclass(frozen=True, slots=True)
class CellOutcome:
    """What the timed runner reports for one cell.

    Only a SUCCESS outcome carries a Result.
    """

    task: str
    backend: str
    rank: int
    status: Status
    result: Result | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """True if the cell completed and produced a Result."""
        return self.status == Status.SUCCESS


@dataclass(frozen=True, slots=True)
class WorkloadPlan:
    """Resolved matrix the orchestrator is about to execute."""

    tasks: tuple[str, ...]
    backends: tuple[str, ...]
    ranks: tuple[int, ...]
    iterations: int
    timeout: float | None = None

    @property
    def cell_count(self) -> int:
        """Number of cells in the matrix."""
        return len(self.tasks) * len(self.backends) * len(self.ranks)
