r"""
Workload orchestrator for driving the (task x backend x rank) matrix.

    from pq_bench.runner import WorkloadOrchestrator

    orchestrator = WorkloadOrchestrator()
    outcome = orchestrator.run([100, 1000], tasks=["insert-only"])

Cells run strictly one after another: tasks outermost, then backends,
then ranks. Ranks vary fastest so a backend that times out on one task
only loses its own cells.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pq_bench.backends.base import BackendRegistry, BaseBackend
from pq_bench.config import DEFAULT_ITERATIONS, ConfigurationError, OrchestratorConfig
from pq_bench.runner.cell import run_cell
from pq_bench.tasks.base import BaseTask, TaskRegistry
from pq_bench.types import CellOutcome, Result, Status, WorkloadPlan

if TYPE_CHECKING:
    from pq_bench.reporting.formats import BaseFormatter

__all__ = [
    "GatherCallback",
    "OrchestratorResult",
    "ProgressCallback",
    "WorkloadOrchestrator",
    "run_workloads",
]

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str, int], None]
GatherCallback = Callable[[str, list[Result]], None]


@dataclass
class OrchestratorResult:
    """Results from an orchestrator run.

    Attributes:
        results: Successful results in production order.
        outcomes: Every cell outcome, including timeouts and failures.
        started_at: Timestamp when the run started.
        completed_at: Timestamp when the run completed.
        plan: The resolved matrix.
    """

    results: list[Result] = field(default_factory=list)
    outcomes: list[CellOutcome] = field(default_factory=list)
    started_at: float = 0.0
    completed_at: float = 0.0
    plan: WorkloadPlan | None = None

    @property
    def duration_seconds(self) -> float:
        """Total duration in seconds."""
        return self.completed_at - self.started_at

    @property
    def timeout_count(self) -> int:
        """Number of cells that ran out of time."""
        return sum(1 for o in self.outcomes if o.status == Status.TIMEOUT)

    @property
    def failure_count(self) -> int:
        """Number of cells that raised."""
        return sum(1 for o in self.outcomes if o.status == Status.FAILED)


class WorkloadOrchestrator:
    """Runs every cell of the matrix and hands results to callbacks."""

    def __init__(self, *, config: OrchestratorConfig | None = None) -> None:
        self._config = config or OrchestratorConfig()
        self._progress_callback: ProgressCallback | None = None
        self._gather_callback: GatherCallback | None = None

    def set_progress_callback(self, callback: ProgressCallback) -> None:
        """Set callback invoked before each cell runs."""
        self._progress_callback = callback

    def set_gather_callback(self, callback: GatherCallback) -> None:
        """Set callback invoked with each task's results once the task is done."""
        self._gather_callback = callback

    def resolve_tasks(self, tasks: Sequence[str | BaseTask] | None) -> list[BaseTask]:
        """Resolve task names or instances; None means every registered task."""
        if tasks is None:
            tasks = TaskRegistry.list()

        resolved: list[BaseTask] = []
        for task in tasks:
            if isinstance(task, str):
                try:
                    task = TaskRegistry.create(task)
                except ValueError as e:
                    raise ConfigurationError(str(e)) from None
            if any(t.name == task.name for t in resolved):
                continue
            resolved.append(task)
        if not resolved:
            raise ConfigurationError("No tasks selected")
        return resolved

    def resolve_backends(self, backends: Sequence[str | BaseBackend] | None) -> list[BaseBackend]:
        """Resolve backend names or instances; None means every registered backend."""
        if backends is None:
            backends = BackendRegistry.list()

        resolved: list[BaseBackend] = []
        for backend in backends:
            if isinstance(backend, str):
                try:
                    backend = BackendRegistry.create(backend)
                except ValueError as e:
                    raise ConfigurationError(str(e)) from None
            if any(b.name == backend.name for b in resolved):
                continue
            resolved.append(backend)
        if not resolved:
            raise ConfigurationError("No backends selected")
        return resolved

    def resolve_ranks(self, ranks: Iterable[int]) -> list[int]:
        """Validate ranks and drop duplicates, keeping the first occurrence."""
        resolved: list[int] = []
        for rank in ranks:
            if isinstance(rank, bool) or not isinstance(rank, int) or rank <= 0:
                msg = f"Invalid rank {rank!r}. Ranks must be positive integers"
                raise ConfigurationError(msg)
            if rank not in resolved:
                resolved.append(rank)
        if not resolved:
            raise ConfigurationError("At least one rank is required")
        return resolved

    def run(
        self,
        ranks: Iterable[int],
        *,
        tasks: Sequence[str | BaseTask] | None = None,
        backends: Sequence[str | BaseBackend] | None = None,
        formatter: BaseFormatter | None = None,
    ) -> OrchestratorResult:
        """Run the full matrix.

        Everything is resolved and validated before the first cell runs,
        so a bad task or backend name never leaves a half-finished run.

        Args:
            ranks: Input sizes, each a positive integer.
            tasks: Task names or instances (None = all registered).
            backends: Backend names or instances (None = all registered).
            formatter: Optional formatter receiving start/progress/gather/finish.

        Returns:
            OrchestratorResult with all successful results and every outcome.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        self._config.validate()
        rank_list = self.resolve_ranks(ranks)
        task_list = self.resolve_tasks(tasks)
        backend_list = self.resolve_backends(backends)

        plan = WorkloadPlan(
            tasks=tuple(t.name for t in task_list),
            backends=tuple(b.name for b in backend_list),
            ranks=tuple(rank_list),
            iterations=self._config.iterations,
            timeout=self._config.timeout,
        )
        if formatter is not None:
            formatter.on_start(plan)

        result = OrchestratorResult(plan=plan)
        result.started_at = time.time()

        for task in task_list:
            task_results = self._run_task(task, backend_list, rank_list, result, formatter)
            if self._gather_callback:
                self._gather_callback(task.name, task_results)
            if formatter is not None:
                formatter.on_gather(task.name, task_results)

        result.completed_at = time.time()
        if formatter is not None:
            formatter.on_finish(result.results)
        return result

    def _run_task(
        self,
        task: BaseTask,
        backends: list[BaseBackend],
        ranks: list[int],
        result: OrchestratorResult,
        formatter: BaseFormatter | None,
    ) -> list[Result]:
        """Run all backends and ranks for a single task."""
        task_results: list[Result] = []

        for backend in backends:
            for rank in ranks:
                if self._progress_callback:
                    self._progress_callback(task.name, backend.name, rank)
                if formatter is not None:
                    formatter.on_progress(task.name, backend.name, rank)

                outcome = run_cell(
                    task,
                    backend,
                    rank,
                    iterations=self._config.iterations,
                    timeout=self._config.timeout,
                )
                result.outcomes.append(outcome)
                self._log_outcome(outcome)

                if outcome.result is not None:
                    task_results.append(outcome.result)
                    result.results.append(outcome.result)

        return task_results

    def _log_outcome(self, outcome: CellOutcome) -> None:
        if outcome.status == Status.SUCCESS and outcome.result is not None:
            logger.info(
                "%s / %s @ %d: %d iterations in %.6fs",
                outcome.task,
                outcome.backend,
                outcome.rank,
                outcome.result.iterations,
                outcome.result.seconds,
            )
        elif outcome.status == Status.TIMEOUT:
            logger.warning("%s / %s @ %d timed out: %s", outcome.task, outcome.backend, outcome.rank, outcome.error)
        else:
            logger.warning("%s / %s @ %d failed: %s", outcome.task, outcome.backend, outcome.rank, outcome.error)


def run_workloads(
    ranks: Iterable[int],
    *,
    tasks: Sequence[str | BaseTask] | None = None,
    backends: Sequence[str | BaseBackend] | None = None,
    iterations: int = DEFAULT_ITERATIONS,
    timeout: float | None = None,
    progress_callback: ProgressCallback | None = None,
    gather_callback: GatherCallback | None = None,
) -> list[Result]:
    """Run the matrix and return every successful Result in production order.

    Convenience wrapper around WorkloadOrchestrator for callers that only
    need callbacks.
    """
    orchestrator = WorkloadOrchestrator(config=OrchestratorConfig(iterations=iterations, timeout=timeout))
    if progress_callback is not None:
        orchestrator.set_progress_callback(progress_callback)
    if gather_callback is not None:
        orchestrator.set_gather_callback(gather_callback)
    return orchestrator.run(ranks, tasks=tasks, backends=backends).results
