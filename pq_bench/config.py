r"""
Benchmark configuration and defaults.

Ranks default to powers of ten, 10^1 .. 10^N. Defaults can be overridden
through environment variables (or a .env file):

    - PQ_BENCH_MAX_RANK: max rank exponent N (default 4)
    - PQ_BENCH_ITERATIONS: iterations per cell, negative for a seconds floor
    - PQ_BENCH_TIMEOUT: per-cell soft timeout in seconds

    from pq_bench.config import default_ranks, parse_ranks

    ranks = default_ranks(3)  # [10, 100, 1000]
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Look for .env in current dir or the project root
env_file = Path(".env")
if not env_file.exists():
    env_file = Path(__file__).parent.parent / ".env"
if env_file.exists():
    load_dotenv(env_file)

__all__ = [
    "ConfigurationError",
    "OrchestratorConfig",
    "DEFAULT_ITERATIONS",
    "DEFAULT_MAX_RANK_EXPONENT",
    "DEFAULT_TIMEOUT",
    "ENV_PREFIX",
    "default_ranks",
    "get_env",
    "parse_names",
    "parse_ranks",
]

ENV_PREFIX = "PQ_BENCH_"

DEFAULT_MAX_RANK_EXPONENT = 4
DEFAULT_ITERATIONS = 10
DEFAULT_TIMEOUT: float | None = None


class ConfigurationError(ValueError):
    """Invalid benchmark configuration, detected before anything runs."""


def get_env(key: str, *, default: str | None = None) -> str | None:
    """Get environment variable with PQ_BENCH_ prefix.

    Args:
        key: Variable name without prefix (e.g., "ITERATIONS").
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(f"{ENV_PREFIX}{key}", default)


def _env_int(key: str, default: int) -> int:
    value = get_env(key)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        msg = f"{ENV_PREFIX}{key} must be an integer, got '{value}'"
        raise ConfigurationError(msg) from None


def _env_float(key: str, default: float | None) -> float | None:
    value = get_env(key)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        msg = f"{ENV_PREFIX}{key} must be a number, got '{value}'"
        raise ConfigurationError(msg) from None


@dataclass
class OrchestratorConfig:
    """Configuration for workload orchestration.

    Attributes:
        iterations: Iterations per cell. Negative means run for at least
            abs(iterations) seconds.
        timeout: Per-cell soft timeout in seconds (None = no timeout).
    """

    iterations: int = DEFAULT_ITERATIONS
    timeout: float | None = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "OrchestratorConfig":
        """Build a config from PQ_BENCH_* environment variables."""
        return cls(
            iterations=_env_int("ITERATIONS", DEFAULT_ITERATIONS),
            timeout=_env_float("TIMEOUT", DEFAULT_TIMEOUT),
        )

    def validate(self) -> None:
        """Raise ConfigurationError if the config cannot drive a run."""
        if self.iterations == 0:
            raise ConfigurationError("iterations must be non-zero")
        if self.timeout is not None and self.timeout <= 0:
            msg = f"timeout must be positive, got {self.timeout}"
            raise ConfigurationError(msg)


def max_rank_exponent() -> int:
    """Max rank exponent from PQ_BENCH_MAX_RANK or the default."""
    return _env_int("MAX_RANK", DEFAULT_MAX_RANK_EXPONENT)


def default_ranks(exponent: int | None = None) -> list[int]:
    """Powers of ten from 10^1 up to 10^exponent.

    Raises:
        ConfigurationError: If exponent is less than 1.
    """
    if exponent is None:
        exponent = max_rank_exponent()
    if exponent < 1:
        msg = f"max rank exponent must be at least 1, got {exponent}"
        raise ConfigurationError(msg)
    return [10**n for n in range(1, exponent + 1)]


def parse_ranks(text: str) -> list[int]:
    """Parse a comma-separated list of positive ranks.

    Duplicates are dropped, keeping the first occurrence.

    Raises:
        ConfigurationError: If an entry is not a positive integer.
    """
    ranks: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            rank = int(part)
        except ValueError:
            msg = f"Invalid rank '{part}'. Ranks must be positive integers"
            raise ConfigurationError(msg) from None
        if rank <= 0:
            msg = f"Invalid rank {rank}. Ranks must be positive integers"
            raise ConfigurationError(msg)
        if rank not in ranks:
            ranks.append(rank)
    if not ranks:
        raise ConfigurationError("No ranks given")
    return ranks


def parse_names(text: str | None) -> list[str] | None:
    """Split a comma-separated name list; None or blank means all."""
    if text is None:
        return None
    names = [name.strip() for name in text.split(",") if name.strip()]
    return names or None
