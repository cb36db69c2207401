r"""
Command-line interface for pq-bench.

    pq-bench run -t insert-only -r 1000
    pq-bench run -m 4 -o results.csv
"""

from pq_bench.cli.main import app, main

__all__ = [
    "app",
    "main",
]
