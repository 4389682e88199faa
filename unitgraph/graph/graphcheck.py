"""Structural checks over a built conversion graph.

Nothing here modifies the graph. The resolver follows the shortest-hop path
and never compares alternate routes, so a fact set whose cycles do not
multiply out to 1 gives route-dependent answers. ``check_consistency``
surfaces those facts so callers can decide what to do with them.
"""

import math
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Set

from unitgraph.graph.conversiongraph import ConversionGraph


@dataclass(frozen=True)
class Inconsistency:
    """An edge whose stated rate disagrees with the rate implied by other facts."""

    unit_a: str
    unit_b: str
    stated_rate: float
    implied_rate: float

    @property
    def relative_error(self) -> float:
        return abs(self.stated_rate - self.implied_rate) / self.implied_rate


def _component_factors(graph: ConversionGraph, root: str) -> Dict[str, float]:
    """BFS from root: ``1 root = factors[u] u`` for every reachable u."""
    factors = {root: 1.0}
    queue = deque([root])
    while queue:
        unit = queue.popleft()
        for neighbor, rate in graph.neighbors(unit):
            if neighbor not in factors:
                factors[neighbor] = factors[unit] * rate
                queue.append(neighbor)
    return factors


def connected_components(graph: ConversionGraph) -> List[List[str]]:
    """Group units that can be converted into one another.

    Components are listed in order of their first unit's appearance, and units
    within a component in BFS order from that unit.

    Examples:
        >>> graph = build_graph([("m", "ft", 3.28), ("hr", "min", 60)])
        >>> connected_components(graph)
        [['m', 'ft'], ['hr', 'min']]
    """
    seen: Set[str] = set()
    components = []
    for unit in graph.units():
        if unit in seen:
            continue
        component = list(_component_factors(graph, unit))
        seen.update(component)
        components.append(component)
    return components


def check_consistency(
    graph: ConversionGraph,
    rel_tol: float = 1e-9,
) -> List[Inconsistency]:
    """Find facts that contradict the rest of their component.

    For each component a BFS tree fixes one factor per unit. Every edge not
    agreeing with the ratio of its endpoints' factors (within rel_tol) closes
    a cycle whose product is not 1 and is reported once per unit pair.

    Args:
        graph: Graph to check
        rel_tol: Relative tolerance for rate comparison (default: 1e-9)

    Returns:
        List of Inconsistency records (empty for a consistent fact set)

    Examples:
        >>> graph = build_graph([("a", "b", 2), ("b", "c", 3), ("c", "a", 1 / 6)])
        >>> check_consistency(graph)
        []

        >>> graph = build_graph([("a", "b", 2), ("b", "c", 3), ("a", "c", 5)])
        >>> [(i.unit_a, i.unit_b) for i in check_consistency(graph)]
        [('b', 'c')]
    """
    issues = []
    reported: Set[frozenset] = set()
    seen: Set[str] = set()

    for root in graph.units():
        if root in seen:
            continue
        factors = _component_factors(graph, root)
        seen.update(factors)

        for unit in factors:
            for neighbor, rate in graph.neighbors(unit):
                pair = frozenset((unit, neighbor))
                if pair in reported:
                    continue
                implied = factors[neighbor] / factors[unit]
                if not math.isclose(rate, implied, rel_tol=rel_tol):
                    reported.add(pair)
                    issues.append(Inconsistency(unit, neighbor, rate, implied))

    return issues


__all__ = [
    "Inconsistency",
    "connected_components",
    "check_consistency",
]
