r"""
pq-bench: benchmark suite for priority-queue implementations.

Runs every task against every backend at every rank (input size) and
reports raw timings as CSV or pairwise comparison charts.

    from pq_bench.runner import run_workloads

    results = run_workloads(
        [1000],
        tasks=["insert-extract-all"],
        backends=["heapq", "pqdict.pqdict"],
        iterations=-1,
    )
"""

from pq_bench.config import ConfigurationError, OrchestratorConfig, default_ranks
from pq_bench.types import CellOutcome, Result, Status, WorkloadPlan

__all__ = [
    "CellOutcome",
    "ConfigurationError",
    "OrchestratorConfig",
    "Result",
    "Status",
    "WorkloadPlan",
    "default_ranks",
]

__version__ = "0.1.0"
