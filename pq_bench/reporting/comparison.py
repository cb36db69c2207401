r"""
Pairwise rate comparison for one task.

Renders a chart with one row per backend, slowest first. The columns
are the backend's rate and, for every other backend, how much faster
(or slower) the row is than the column:

                 Rate     b.i       h
    b.i       120/s      --    -88%
    h        1000/s    733%      --

    from pq_bench.reporting.comparison import build_chart, render_chart
"""

from collections.abc import Sequence
from dataclasses import dataclass

from pq_bench.types import Result

__all__ = ["ComparisonChart", "build_chart", "format_rate", "render_chart"]


@dataclass(frozen=True, slots=True)
class ComparisonChart:
    """Comparison chart for a single task.

    Attributes:
        task: Task identifier.
        labels: Backend labels, ordered by ascending rate.
        rates: Iterations per second, aligned with labels.
    """

    task: str
    labels: tuple[str, ...]
    rates: tuple[float, ...]

    def percent(self, row: int, column: int) -> float | None:
        """How much faster row is than column, in percent (None if undefined)."""
        column_rate = self.rates[column]
        row_rate = self.rates[row]
        if column_rate <= 0 or column_rate == float("inf") or row_rate == float("inf"):
            return None
        return (row_rate / column_rate - 1) * 100


def build_chart(task: str, results: Sequence[Result], labels: dict[str, str]) -> ComparisonChart:
    """Aggregate a task's results per backend and sort by rate.

    Results of the same backend are pooled (total iterations over total
    seconds). Backends missing from labels fall back to their identifier.
    """
    iterations: dict[str, int] = {}
    seconds: dict[str, float] = {}
    for result in results:
        iterations[result.backend] = iterations.get(result.backend, 0) + result.iterations
        seconds[result.backend] = seconds.get(result.backend, 0.0) + result.seconds

    rates = {
        backend: (iterations[backend] / seconds[backend]) if seconds[backend] > 0 else float("inf")
        for backend in iterations
    }
    ordered = sorted(rates, key=lambda backend: rates[backend])

    return ComparisonChart(
        task=task,
        labels=tuple(labels.get(backend, backend) for backend in ordered),
        rates=tuple(rates[backend] for backend in ordered),
    )


def format_rate(rate: float) -> str:
    """Format iterations per second with precision matched to magnitude."""
    if rate == float("inf"):
        return "inf/s"
    if rate >= 100:
        return f"{rate:.0f}/s"
    if rate >= 10:
        return f"{rate:.1f}/s"
    return f"{rate:.2f}/s"


def render_chart(chart: ComparisonChart) -> list[str]:
    """Render the chart as right-aligned text lines."""
    header = ["", "Rate", *chart.labels]
    rows = [header]
    for i, label in enumerate(chart.labels):
        row = [label, format_rate(chart.rates[i])]
        for j in range(len(chart.labels)):
            if i == j:
                row.append("--")
                continue
            pct = chart.percent(i, j)
            row.append("n/a" if pct is None else f"{pct:.0f}%")
        rows.append(row)

    widths = [max(len(row[col]) for row in rows) for col in range(len(header))]
    lines = []
    for row in rows:
        cells = [row[0].ljust(widths[0])]
        cells.extend(cell.rjust(widths[col]) for col, cell in enumerate(row) if col > 0)
        lines.append("  ".join(cells).rstrip())
    return lines
