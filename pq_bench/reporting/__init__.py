r"""
Result formatting and reporting.

Formats benchmark results as CSV rows or as per-task
pairwise comparison charts.

    from pq_bench.reporting import OutputFormat, create_formatter

    formatter = create_formatter(OutputFormat.COMPARE)
    orchestrator.run([1000], formatter=formatter)
"""

from pq_bench.reporting.comparison import ComparisonChart, build_chart, render_chart
from pq_bench.reporting.formats import BaseFormatter, CompareFormatter, CsvFormatter, OutputFormat, create_formatter
from pq_bench.reporting.labels import abbreviate, abbreviate_all

__all__ = [
    "BaseFormatter",
    "CompareFormatter",
    "ComparisonChart",
    "CsvFormatter",
    "OutputFormat",
    "abbreviate",
    "abbreviate_all",
    "build_chart",
    "create_formatter",
    "render_chart",
]
