"""Graph module providing the dependency ordering algorithm.

This module contains:
- topological_sort: Algorithm for ordering nodes given (dependency, dependent) pairs
- format_cycle: Rendering of the pairs left over by a cycle
- CycleError: Raised when no order exists
"""

from ._algorithms import CycleError, Pair, format_cycle, topological_sort

__all__ = ["CycleError", "Pair", "format_cycle", "topological_sort"]
