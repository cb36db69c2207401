r"""
Command-line interface for pq-bench.

    pq-bench run -t insert-only -b heapq,pqdict.pqdict -r 1000
    pq-bench run -m 5 -i -2 --timeout 30 -o results.csv
    pq-bench backends
"""

import logging
import sys
from pathlib import Path
from typing import Annotated, TextIO

import typer

from pq_bench.backends import BackendRegistry
from pq_bench.config import (
    ConfigurationError,
    OrchestratorConfig,
    default_ranks,
    max_rank_exponent,
    parse_names,
    parse_ranks,
)
from pq_bench.reporting import OutputFormat, create_formatter
from pq_bench.runner import WorkloadOrchestrator
from pq_bench.tasks import TaskRegistry

__all__ = ["app", "main"]

USAGE_ERROR = 2
IO_ERROR = 1

app = typer.Typer(
    name="pq-bench",
    help="Benchmark priority-queue implementations across tasks and input sizes.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _fail(message: str, code: int) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code)


def _close_output(stream: TextIO | None, path: Path | None) -> None:
    if stream is None:
        return
    try:
        stream.close()
    except OSError as e:
        raise _fail(f"Could not close {path}: {e}", IO_ERROR) from e


def _decode_separator(text: str, option: str) -> str:
    """Expand backslash escapes such as \\t while keeping non-ASCII text."""
    try:
        return text.encode("latin-1", "backslashreplace").decode("unicode_escape")
    except UnicodeDecodeError as e:
        msg = f"Invalid escape in {option}: {text!r}"
        raise ConfigurationError(msg) from e


@app.command()
def run(
    tasks: Annotated[str | None, typer.Option("-t", "--tasks", help="Tasks to run (comma-separated)")] = None,
    backends: Annotated[
        str | None, typer.Option("-b", "--backends", help="Backends to benchmark (comma-separated)")
    ] = None,
    ranks: Annotated[str | None, typer.Option("-r", "--ranks", help="Explicit ranks (comma-separated)")] = None,
    max_rank: Annotated[
        int | None, typer.Option("-m", "--max-rank", help="Run ranks 10^1 .. 10^N")
    ] = None,
    iterations: Annotated[
        int | None,
        typer.Option("-i", "--iterations", help="Iterations per cell; negative = run at least that many seconds"),
    ] = None,
    timeout: Annotated[
        float | None, typer.Option("--timeout", help="Soft timeout in seconds per cell")
    ] = None,
    output: Annotated[Path | None, typer.Option("-o", "--output", help="Write results to this file")] = None,
    format_: Annotated[
        OutputFormat | None,
        typer.Option("-f", "--format", help="Output format (default: csv with --output, compare otherwise)"),
    ] = None,
    field_separator: Annotated[
        str, typer.Option("--field-separator", help="CSV field separator (escapes like \\t allowed)")
    ] = ",",
    line_separator: Annotated[
        str, typer.Option("--line-separator", help="CSV line separator (escapes like \\r\\n allowed)")
    ] = "\\n",
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Show progress and per-cell log lines")] = False,
) -> None:
    """Run the task x backend x rank matrix."""
    _configure_logging(verbose)

    fmt = format_ or (OutputFormat.CSV if output is not None else OutputFormat.COMPARE)

    try:
        if ranks is not None:
            rank_list = parse_ranks(ranks)
        else:
            rank_list = default_ranks(max_rank if max_rank is not None else max_rank_exponent())
            if fmt is OutputFormat.COMPARE:
                # one rank only for charts, use the largest
                rank_list = rank_list[-1:]

        config = OrchestratorConfig.from_env()
        if iterations is not None:
            config.iterations = iterations
        if timeout is not None:
            config.timeout = timeout
        config.validate()

        separators = {
            "field_separator": _decode_separator(field_separator, "--field-separator"),
            "line_separator": _decode_separator(line_separator, "--line-separator"),
        }

        orchestrator = WorkloadOrchestrator(config=config)
        task_list = orchestrator.resolve_tasks(parse_names(tasks))
        backend_list = orchestrator.resolve_backends(parse_names(backends))
        rank_list = orchestrator.resolve_ranks(rank_list)

        if fmt is OutputFormat.COMPARE and len(rank_list) > 1:
            msg = f"The compare format supports exactly one rank, got {len(rank_list)}"
            raise ConfigurationError(msg)
    except ConfigurationError as e:
        raise _fail(str(e), USAGE_ERROR) from e

    if verbose:
        typer.echo(f"Tasks: {', '.join(t.name for t in task_list)}", err=True)
        typer.echo(f"Backends: {', '.join(b.name for b in backend_list)}", err=True)
        typer.echo(f"Ranks: {', '.join(str(r) for r in rank_list)}", err=True)
        typer.echo(f"Output: {output or 'stdout'} ({fmt.value})", err=True)

    stream: TextIO | None = None
    if output is not None:
        try:
            stream = open(output, "w", encoding="utf-8", newline="")
        except OSError as e:
            raise _fail(f"Could not open {output}: {e}", IO_ERROR) from e

    try:
        formatter = create_formatter(fmt, stream, verbose=verbose, **separators)
        result = orchestrator.run(rank_list, tasks=task_list, backends=backend_list, formatter=formatter)
    except ConfigurationError as e:
        raise _fail(str(e), USAGE_ERROR) from e
    except OSError as e:
        raise _fail(f"Could not write to {output or 'stdout'}: {e}", IO_ERROR) from e
    finally:
        _close_output(stream, output)

    if verbose:
        typer.echo(
            f"\nCompleted: {len(result.results)} successful, {result.timeout_count} timed out, "
            f"{result.failure_count} failed in {result.duration_seconds:.2f}s",
            err=True,
        )


@app.command("tasks")
def list_tasks() -> None:
    """List registered tasks."""
    typer.echo("Available tasks:")
    for name in TaskRegistry.list():
        task = TaskRegistry.create(name)
        requires = " (requires decrease-key)" if task.needs_decrease_key else ""
        typer.echo(f"  - {name}: {task.description}{requires}")


@app.command("backends")
def list_backends() -> None:
    """List registered backends with their versions."""
    typer.echo("Available backends:")
    for name in BackendRegistry.list():
        backend = BackendRegistry.create(name)
        decrease_key = "yes" if backend.supports_decrease_key else "no"
        typer.echo(f"  - {name} (version: {backend.version}, decrease-key: {decrease_key})")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
