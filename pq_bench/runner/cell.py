r"""
Timed execution of a single (task, backend, rank) cell.

    from pq_bench.runner.cell import run_cell

    outcome = run_cell(task, backend, 1000, iterations=-2, timeout=30)

Iterations are either a fixed positive count or, when negative, a floor
in seconds: the task is repeated until abs(iterations) seconds of timed
work have accumulated.

The timeout is soft. It is checked between iterations, so an iteration
in progress always completes and a cell can overrun its budget by at
most one iteration.
"""

import logging

from pq_bench.backends.base import BaseBackend, QueueHandle
from pq_bench.config import ConfigurationError
from pq_bench.runner.timing import Timer
from pq_bench.tasks.base import BaseTask
from pq_bench.types import CellOutcome, Result, Status

__all__ = ["run_cell"]

logger = logging.getLogger(__name__)


def _failed(task: BaseTask, backend: BaseBackend, rank: int, error: Exception) -> CellOutcome:
    return CellOutcome(
        task=task.name,
        backend=backend.name,
        rank=rank,
        status=Status.FAILED,
        error=f"{type(error).__name__}: {error}",
    )


def _keep_going(timer: Timer, iterations: int) -> bool:
    if iterations > 0:
        return timer.laps < iterations
    return timer.total_seconds < -iterations


def run_cell(
    task: BaseTask,
    backend: BaseBackend,
    rank: int,
    *,
    iterations: int,
    timeout: float | None = None,
) -> CellOutcome:
    """Run one cell and time it.

    Every iteration builds a fresh queue; construction is inside the
    timed region since some backends have a real setup cost that shows
    at small ranks. task.setup() and task.teardown() are not timed.

    Args:
        task: Task to execute.
        backend: Backend providing the queue.
        rank: Input size, must be positive.
        iterations: Fixed count if positive, seconds floor if negative.
        timeout: Soft per-cell budget in seconds (None = unlimited).

    Returns:
        SUCCESS outcome with a Result, or a TIMEOUT/FAILED outcome without one.

    Raises:
        ConfigurationError: If rank or iterations is invalid.
    """
    if rank <= 0:
        msg = f"rank must be positive, got {rank}"
        raise ConfigurationError(msg)
    if iterations == 0:
        raise ConfigurationError("iterations must be non-zero")

    timer = Timer()
    outcome: CellOutcome | None = None
    try:
        task.setup(rank)
        while _keep_going(timer, iterations):
            with timer:
                handle = QueueHandle(backend, backend.create())
                task.run(handle, rank)
            if timeout is not None and timer.total_seconds > timeout:
                outcome = CellOutcome(
                    task=task.name,
                    backend=backend.name,
                    rank=rank,
                    status=Status.TIMEOUT,
                    error=f"Cell exceeded {timeout}s after {timer.laps} iteration(s)",
                )
                break
    except Exception as e:
        outcome = _failed(task, backend, rank, e)

    try:
        task.teardown()
    except Exception as e:
        if outcome is None:
            outcome = _failed(task, backend, rank, e)
        else:
            logger.warning("Teardown of %s on %s also failed: %s", task.name, backend.name, e)

    if outcome is not None:
        return outcome

    result = Result(
        task=task.name,
        backend=backend.name,
        version=backend.version,
        rank=rank,
        iterations=timer.laps,
        seconds=timer.total_seconds,
    )
    return CellOutcome(
        task=task.name,
        backend=backend.name,
        rank=rank,
        status=Status.SUCCESS,
        result=result,
    )
