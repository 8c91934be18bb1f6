"""Graph algorithms for ordering applications by their dependencies."""

import logging
from collections.abc import Hashable, Iterable, Sequence

logger = logging.getLogger(__name__)

type Pair[T] = tuple[T, T]


class CycleError(ValueError):
    """No topological order exists for the given pairs.

    Attributes:
        pairs: The pairs left over when no further node could be peeled off.
            Every node in them is blocked by another node in them.

    """

    def __init__(self, pairs: Sequence[Pair[Hashable]]) -> None:
        self.pairs = list(pairs)
        super().__init__(f"Cycle detected in dependency graph: {format_cycle(self.pairs)}")


def topological_sort[T: Hashable](pairs: Iterable[Pair[T]], nodes: Iterable[T] | None = None) -> list[T]:
    """Sort nodes topologically (dependencies before dependents).

    Each round peels off every node that appears on the left of a remaining
    pair and never on the right, then drops the pairs starting at those
    nodes. Nodes are taken in the order they are scanned, so identical input
    always gives identical output.

    Args:
        pairs: ``(dependency, dependent)`` tuples. ``(a, b)`` means "b depends on a".
        nodes: Extra nodes to include in the result even if no pair mentions them.

    Returns:
        List of nodes in topological order, each node once.

    Raises:
        CycleError: If the pairs contain a cycle. The error carries the
            remaining pairs at the point the sort stalled.

    Example:
        >>> topological_sort([("a", "b"), ("b", "c")])
        ['a', 'b', 'c']

    """
    remaining = list(pairs)
    every = [lhs for lhs, _ in remaining] + [rhs for _, rhs in remaining]
    order: list[T] = []

    while remaining:
        blocked = {rhs for _, rhs in remaining}
        ready = [lhs for lhs, _ in remaining if lhs not in blocked]
        if not ready:
            raise CycleError(remaining)

        logger.debug(f"Peeled {ready} ({len(remaining)} pairs left)")
        order.extend(ready)
        peeled = set(ready)
        remaining = [pair for pair in remaining if pair[0] not in peeled]

    seen = set(order)
    order.extend(node for node in every if node not in seen)
    order = _remove_duplicates(order)

    # Extra nodes not mentioned by any pair go last, in the order given
    known = set(order)
    order.extend(node for node in dict.fromkeys(() if nodes is None else nodes) if node not in known)
    return order


def _remove_duplicates[T: Hashable](items: list[T]) -> list[T]:
    """Remove duplicates, keeping the last occurrence of each item."""
    return list(reversed(dict.fromkeys(reversed(items))))


def format_cycle(pairs: Sequence[Pair[Hashable]]) -> str:
    """Render the pairs of a cycle as a chain of dependents.

    Each pair ``(dependency, dependent)`` is printed as ``dependent -> dependency``.

    Example:
        >>> format_cycle([("app2", "app1"), ("app1", "app2")])
        'app1 -> app2 -> app2 -> app1'

    """
    return " -> ".join(f"{dependent} -> {dependency}" for dependency, dependent in pairs)
