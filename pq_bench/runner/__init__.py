r"""
Workload runner and orchestration.

Coordinates cell execution, timing, soft timeouts
and result collection across tasks, backends and ranks.

    from pq_bench.runner import WorkloadOrchestrator

    orchestrator = WorkloadOrchestrator()
    results = orchestrator.run([1000], backends=["heapq", "pqdict.pqdict"])
"""

from pq_bench.runner.cell import run_cell
from pq_bench.runner.orchestrator import OrchestratorResult, WorkloadOrchestrator, run_workloads
from pq_bench.runner.timing import Timer

__all__ = [
    "OrchestratorResult",
    "Timer",
    "WorkloadOrchestrator",
    "run_cell",
    "run_workloads",
]
