r"""
Output formatters for benchmark results.

A formatter is driven by the orchestrator through four hooks:
on_start(plan), on_progress(task, backend, rank), on_gather(task, results)
and on_finish(results).

    from pq_bench.reporting.formats import OutputFormat, create_formatter

    formatter = create_formatter(OutputFormat.CSV, stream=sys.stdout)
    orchestrator.run(ranks, formatter=formatter)
"""

import sys
from abc import ABC
from enum import Enum
from typing import Any, TextIO

import typer

from pq_bench.config import ConfigurationError
from pq_bench.reporting.comparison import build_chart, render_chart
from pq_bench.reporting.labels import abbreviate_all
from pq_bench.types import Result, WorkloadPlan

__all__ = [
    "BaseFormatter",
    "CompareFormatter",
    "CsvFormatter",
    "OutputFormat",
    "create_formatter",
]

CSV_HEADER = ("Task", "Backend", "Version", "Rank", "Iterations", "Seconds")


class OutputFormat(str, Enum):
    """Available output formats."""

    CSV = "csv"
    COMPARE = "compare"


class BaseFormatter(ABC):
    """Base class for formatters.

    Results go to stream. Progress is advisory and only written when
    verbose, to the diagnostic stream (stderr by default). A progress
    line is started for every (task, backend) pair and each rank is
    appended to it as the cell starts.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        verbose: bool = False,
        diagnostics: TextIO | None = None,
    ) -> None:
        self._stream = stream
        self._diagnostics = diagnostics
        self._verbose = verbose
        self._plan: WorkloadPlan | None = None
        self._progress_key: tuple[str, str] | None = None

    @property
    def plan(self) -> WorkloadPlan | None:
        """Plan received in on_start."""
        return self._plan

    def on_start(self, plan: WorkloadPlan) -> None:
        """Called once, after validation and before any cell runs."""
        self._plan = plan
        self._progress_key = None

    def on_progress(self, task: str, backend: str, rank: int) -> None:
        """Called before each cell runs."""
        if not self._verbose:
            return
        if self._progress_key != (task, backend):
            self._end_progress_line()
            self._diag(f"{task} / {backend}:")
            self._progress_key = (task, backend)
        self._diag(f" {rank}")

    def on_gather(self, task: str, results: list[Result]) -> None:
        """Called with one task's results once all its cells ran."""

    def on_finish(self, results: list[Result]) -> None:
        """Called with every result at the end of the run."""
        self._end_progress_line()

    def _end_progress_line(self) -> None:
        if self._progress_key is not None:
            self._diag("\n")
            self._progress_key = None

    def _diag(self, text: str) -> None:
        if self._diagnostics is None:
            typer.echo(text, err=True, nl=False)
        else:
            typer.echo(text, file=self._diagnostics, nl=False)

    def _write(self, text: str) -> None:
        typer.echo(text, file=self._stream or sys.stdout, nl=False)


class CsvFormatter(BaseFormatter):
    """Write every result as one delimited row when the run finishes."""

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        field_separator: str = ",",
        line_separator: str = "\n",
        **kwargs: Any,
    ) -> None:
        super().__init__(stream, **kwargs)
        self._field_separator = field_separator
        self._line_separator = line_separator

    def on_finish(self, results: list[Result]) -> None:
        super().on_finish(results)
        self._write(self.to_string(results))

    def to_string(self, results: list[Result]) -> str:
        """Render header plus one row per result, in the given order."""
        lines = [self._field_separator.join(CSV_HEADER)]
        for result in results:
            lines.append(
                self._field_separator.join([
                    result.task,
                    result.backend,
                    result.version,
                    str(result.rank),
                    str(result.iterations),
                    repr(result.seconds),
                ])
            )
        return "".join(line + self._line_separator for line in lines)


class CompareFormatter(BaseFormatter):
    """Print a pairwise rate chart per task as soon as the task finishes.

    Only one rank per run: comparing across ranks and backends at once
    does not fit this chart.
    """

    def __init__(self, stream: TextIO | None = None, **kwargs: Any) -> None:
        super().__init__(stream, **kwargs)
        self._labels: dict[str, str] = {}

    @property
    def labels(self) -> dict[str, str]:
        """Backend identifier -> display label, fixed in on_start."""
        return dict(self._labels)

    def on_start(self, plan: WorkloadPlan) -> None:
        if len(plan.ranks) > 1:
            ranks = ", ".join(str(rank) for rank in plan.ranks)
            msg = f"The compare format supports exactly one rank, got {len(plan.ranks)} ({ranks})"
            raise ConfigurationError(msg)
        super().on_start(plan)
        self._labels = abbreviate_all(plan.backends)

    def on_gather(self, task: str, results: list[Result]) -> None:
        self._end_progress_line()
        self._write(self.to_string(task, results))

    def to_string(self, task: str, results: list[Result]) -> str:
        """Render the comparison section for one task."""
        rank = self._plan.ranks[0] if self._plan else None
        title = f"{task} (rank {rank}):" if rank is not None else f"{task}:"
        if not results:
            return f"{title}\n  no results\n\n"
        chart = build_chart(task, results, self._labels)
        body = "\n".join(f"  {line}" for line in render_chart(chart))
        return f"{title}\n{body}\n\n"


def create_formatter(fmt: OutputFormat | str, stream: TextIO | None = None, **kwargs: Any) -> BaseFormatter:
    """Create the formatter for an output format.

    Raises:
        ConfigurationError: If the format is unknown.
    """
    try:
        fmt = OutputFormat(fmt)
    except ValueError:
        valid = ", ".join(f.value for f in OutputFormat)
        msg = f"Unknown format '{fmt}'. Valid formats: {valid}"
        raise ConfigurationError(msg) from None

    if fmt is OutputFormat.CSV:
        return CsvFormatter(stream, **kwargs)
    kwargs.pop("field_separator", None)
    kwargs.pop("line_separator", None)
    return CompareFormatter(stream, **kwargs)
