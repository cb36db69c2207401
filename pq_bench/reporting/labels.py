r"""
Short display labels for backend identifiers.

Comparison charts put one column per backend, so identifiers such as
"sortedcontainers.SortedList" are collapsed to "s.SL". Each capitalized
word, or a lowercase segment, keeps only its first letter.

    from pq_bench.reporting.labels import abbreviate_all

    labels = abbreviate_all(["heapq", "queue.PriorityQueue"])
    # {"heapq": "h", "queue.PriorityQueue": "q.PQ"}

The label map is a plain dict returned to the caller, built once per run
before anything is printed.
"""

import re
from collections.abc import Iterable

__all__ = ["abbreviate", "abbreviate_all"]

_NAMESPACE = re.compile(r"::|\.")
_WORD = re.compile(r"([A-Za-z])[a-z0-9]+")


def abbreviate(identifier: str, *, separator: str = ".") -> str:
    """Collapse a namespaced identifier to its word initials.

    Args:
        identifier: Dotted or "::"-separated backend identifier.
        separator: Joins the abbreviated segments.

    Returns:
        The abbreviation, or the identifier itself if nothing is left.
    """
    segments = [segment for segment in _NAMESPACE.split(identifier) if segment]
    label = separator.join(_WORD.sub(r"\1", segment) for segment in segments)
    return label or identifier


def abbreviate_all(identifiers: Iterable[str], *, separator: str = ".") -> dict[str, str]:
    """Map every identifier to a unique label.

    The first identifier to claim a label keeps it; later ones get
    "-2", "-3", ... in the order they are given.

    Args:
        identifiers: Backend identifiers in processing order.
        separator: Joins the abbreviated segments.

    Returns:
        Dict from identifier to label, injective over the input.
    """
    labels: dict[str, str] = {}
    taken: set[str] = set()

    for identifier in identifiers:
        if identifier in labels:
            continue
        base = abbreviate(identifier, separator=separator)
        label = base
        suffix = 1
        while label in taken:
            suffix += 1
            label = f"{base}-{suffix}"
        labels[identifier] = label
        taken.add(label)

    return labels
