r"""
Tests for pq_bench.reporting module.
"""

import io

import pytest

from pq_bench.config import ConfigurationError, OrchestratorConfig
from pq_bench.reporting import (
    CompareFormatter,
    CsvFormatter,
    OutputFormat,
    abbreviate,
    abbreviate_all,
    build_chart,
    create_formatter,
    render_chart,
)
from pq_bench.reporting.comparison import format_rate
from pq_bench.runner import WorkloadOrchestrator
from pq_bench.types import Result, WorkloadPlan

from tests.conftest import RecordingTask


def _plan(backends=("A", "B"), ranks=(10,)) -> WorkloadPlan:
    return WorkloadPlan(tasks=("insert-only",), backends=tuple(backends), ranks=tuple(ranks), iterations=1)


class TestAbbreviate:
    @pytest.mark.parametrize(
        ("identifier", "label"),
        [
            ("heapq", "h"),
            ("queue.PriorityQueue", "q.PQ"),
            ("sortedcontainers.SortedList", "s.SL"),
            ("List::PriorityQueue", "L.PQ"),
            ("POE::Queue::Array", "POE.Q.A"),
            ("Heap2.Binary3Heap", "H.BH"),
        ],
    )
    def test_abbreviate(self, identifier, label):
        assert abbreviate(identifier) == label

    def test_custom_separator(self):
        assert abbreviate("List::PriorityQueue", separator=":") == "L:PQ"

    def test_nothing_left_falls_back(self):
        assert abbreviate("...") == "..."


class TestAbbreviateAll:
    def test_unique_labels_untouched(self):
        labels = abbreviate_all(["heapq", "queue.PriorityQueue"])
        assert labels == {"heapq": "h", "queue.PriorityQueue": "q.PQ"}

    def test_collisions_get_suffixes_in_order(self):
        labels = abbreviate_all(["heapq", "heapdict", "hashq"])
        assert labels == {"heapq": "h", "heapdict": "h-2", "hashq": "h-3"}

    def test_suffix_never_steals_existing_label(self):
        labels = abbreviate_all(["h-2", "heapq", "heapdict"])
        assert labels["h-2"] == "h-2"
        assert labels["heapq"] == "h"
        assert labels["heapdict"] == "h-3"

    def test_injective(self):
        identifiers = [
            "heapq",
            "heapdict.heapdict",
            "hash.heap",
            "Heap.Simple",
            "Heap.Simple.XS",
            "Hash.PriorityQueue",
            "Hash.PairQueue",
            "bisect.insort",
        ]
        labels = abbreviate_all(identifiers)
        assert len(set(labels.values())) == len(identifiers)

    def test_duplicates_map_once(self):
        labels = abbreviate_all(["heapq", "heapq", "heapdict"])
        assert labels == {"heapq": "h", "heapdict": "h-2"}

    def test_no_shared_state_between_calls(self):
        abbreviate_all(["heapq"])
        assert abbreviate_all(["heapdict"]) == {"heapdict": "h"}


class TestComparison:
    def test_build_chart_sorts_by_rate(self, sample_results):
        chart = build_chart("insert-only", sample_results, {"A": "a", "B": "b"})
        assert chart.labels == ("a", "b")
        assert chart.rates == (50.0, 100.0)

    def test_percent(self, sample_results):
        chart = build_chart("insert-only", sample_results, {})
        assert chart.percent(1, 0) == pytest.approx(100.0)
        assert chart.percent(0, 1) == pytest.approx(-50.0)

    def test_render_chart(self, sample_results):
        lines = render_chart(build_chart("insert-only", sample_results, {"A": "a", "B": "b"}))

        assert len(lines) == 3
        assert lines[0].split() == ["Rate", "a", "b"]
        assert lines[1].split() == ["a", "50.0/s", "--", "-50%"]
        assert lines[2].split() == ["b", "100/s", "100%", "--"]

    def test_pools_multiple_results_per_backend(self):
        results = [
            Result(task="t", backend="A", version="1", rank=10, iterations=10, seconds=1.0),
            Result(task="t", backend="A", version="1", rank=10, iterations=30, seconds=1.0),
        ]
        chart = build_chart("t", results, {})
        assert chart.rates == (20.0,)

    @pytest.mark.parametrize(("rate", "text"), [(1234.4, "1234/s"), (12.34, "12.3/s"), (1.234, "1.23/s")])
    def test_format_rate(self, rate, text):
        assert format_rate(rate) == text


class TestCsvFormatter:
    def test_header_and_rows(self, sample_results):
        stream = io.StringIO()
        formatter = CsvFormatter(stream)
        formatter.on_start(_plan())
        formatter.on_gather("insert-only", sample_results)
        assert stream.getvalue() == ""

        formatter.on_finish(sample_results)

        lines = stream.getvalue().splitlines()
        assert lines[0] == "Task,Backend,Version,Rank,Iterations,Seconds"
        assert lines[1] == "insert-only,A,1.0,10,100,2.0"
        assert lines[2] == "insert-only,B,2.1,10,100,1.0"
        assert len(lines) == 3

    def test_custom_separators(self, sample_results):
        formatter = CsvFormatter(field_separator="\t", line_separator="\r\n")
        output = formatter.to_string(sample_results[:1])
        assert output == "Task\tBackend\tVersion\tRank\tIterations\tSeconds\r\ninsert-only\tA\t1.0\t10\t100\t2.0\r\n"

    def test_progress_grouped_by_task_and_backend(self):
        diagnostics = io.StringIO()
        formatter = CsvFormatter(io.StringIO(), verbose=True, diagnostics=diagnostics)
        formatter.on_start(_plan(ranks=(10, 100)))
        for backend in ("A", "B"):
            for rank in (10, 100):
                formatter.on_progress("insert-only", backend, rank)
        formatter.on_finish([])

        assert diagnostics.getvalue() == "insert-only / A: 10 100\ninsert-only / B: 10 100\n"

    def test_progress_silent_unless_verbose(self):
        diagnostics = io.StringIO()
        formatter = CsvFormatter(io.StringIO(), diagnostics=diagnostics)
        formatter.on_start(_plan())
        formatter.on_progress("insert-only", "A", 10)
        formatter.on_finish([])
        assert diagnostics.getvalue() == ""

    def test_rows_follow_orchestrator_order(self, list_backend, other_backend):
        stream = io.StringIO()
        orchestrator = WorkloadOrchestrator(config=OrchestratorConfig(iterations=1))
        orchestrator.run([10], tasks=[RecordingTask()], backends=[list_backend, other_backend], formatter=CsvFormatter(stream))

        lines = stream.getvalue().splitlines()
        assert len(lines) == 3
        assert [line.split(",")[1] for line in lines[1:]] == ["A", "B"]


class TestCompareFormatter:
    def test_rejects_multiple_ranks(self):
        formatter = CompareFormatter(io.StringIO())
        with pytest.raises(ConfigurationError, match="exactly one rank"):
            formatter.on_start(_plan(ranks=(10, 100)))

    def test_rejected_before_any_cell_runs(self, list_backend):
        progress = []
        orchestrator = WorkloadOrchestrator(config=OrchestratorConfig(iterations=1))
        orchestrator.set_progress_callback(lambda *args: progress.append(args))

        with pytest.raises(ConfigurationError):
            orchestrator.run([10, 100], tasks=[RecordingTask()], backends=[list_backend], formatter=CompareFormatter(io.StringIO()))
        assert progress == []

    def test_labels_fixed_at_start(self):
        formatter = CompareFormatter(io.StringIO())
        formatter.on_start(_plan(backends=("heapq", "heapdict.heapdict", "queue.PriorityQueue")))
        assert formatter.labels == {"heapq": "h", "heapdict.heapdict": "h.h", "queue.PriorityQueue": "q.PQ"}

    def test_section_per_task(self, sample_results):
        stream = io.StringIO()
        formatter = CompareFormatter(stream)
        formatter.on_start(_plan())
        formatter.on_gather("insert-only", sample_results)

        output = stream.getvalue()
        assert output.startswith("insert-only (rank 10):\n")
        assert "100%" in output
        assert "-50%" in output

        formatter.on_finish(sample_results)
        assert stream.getvalue() == output

    def test_empty_task(self):
        stream = io.StringIO()
        formatter = CompareFormatter(stream)
        formatter.on_start(_plan())
        formatter.on_gather("insert-only", [])
        assert "no results" in stream.getvalue()


class TestCreateFormatter:
    def test_csv(self):
        assert isinstance(create_formatter(OutputFormat.CSV), CsvFormatter)

    def test_compare_from_string(self):
        assert isinstance(create_formatter("compare", field_separator=";"), CompareFormatter)

    def test_unknown(self):
        with pytest.raises(ConfigurationError, match="Unknown format"):
            create_formatter("xml")
