"""Breadth-first path resolution over a conversion graph.

The search treats the graph as unweighted when choosing a path (fewest hops)
and multiplies edge weights along the way. Each unit is visited at most once,
so cyclic fact sets terminate in O(units + edges).
"""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Dict, List, NamedTuple, Optional, Tuple

from unitgraph.graph.conversiongraph import ConversionGraph
from unitgraph.graph.grapherrors import (
    InvalidQuantityError,
    NotConvertibleError,
    Query,
    UnknownUnitError,
)
from unitgraph.utils.suggest import suggest_units

logger = logging.getLogger(__name__)


class Hop(NamedTuple):
    """One traversed edge: ``1 source = rate target``."""

    source: str
    target: str
    rate: float


def _bfs(
    graph: ConversionGraph,
    source: str,
    target: Optional[str],
) -> Optional[Dict[str, Tuple[Optional[str], float, float]]]:
    """Search from source until target is discovered.

    Returns:
        Mapping of discovered unit -> (parent, edge rate, accumulated factor), or
        None if target is unreachable. With target=None the whole component
        is explored and returned. All state is local to the call.
    """
    visited: Dict[str, Tuple[Optional[str], float, float]] = {source: (None, 1.0, 1.0)}
    if source == target:
        return visited

    queue = deque([source])
    while queue:
        unit = queue.popleft()
        factor = visited[unit][2]
        for neighbor, rate in graph.neighbors(unit):
            if neighbor in visited:
                continue
            visited[neighbor] = (unit, rate, factor * rate)
            if neighbor == target:
                return visited
            queue.append(neighbor)

    return visited if target is None else None


def _check_known(graph: ConversionGraph, query: Query) -> None:
    for unit in (query.source, query.target):
        if not graph.has_unit(unit):
            raise UnknownUnitError(
                unit, query, suggestions=suggest_units(unit, graph.units())
            )


def _factor(graph: ConversionGraph, query: Query) -> float:
    _check_known(graph, query)
    visited = _bfs(graph, query.source, query.target)
    if visited is None:
        logger.debug(f"{query.source} -> {query.target}: not convertible")
        raise NotConvertibleError(query)
    return visited[query.target][2]


def _check_quantity(quantity, query: Query) -> float:
    if isinstance(quantity, bool):
        raise InvalidQuantityError(f"Quantity must be a real number, got {quantity!r}", query)
    try:
        value = float(quantity)
    except (TypeError, ValueError):
        raise InvalidQuantityError(
            f"Quantity must be a real number, got {quantity!r}", query
        ) from None
    if not math.isfinite(value):
        raise InvalidQuantityError(f"Quantity must be finite, got {quantity!r}", query)
    return value


def find_path(graph: ConversionGraph, source: str, target: str) -> List[Hop]:
    """Shortest-hop chain of facts leading from source to target.

    Returns:
        List of hops (empty when source == target)

    Raises:
        UnknownUnitError: If source or target is not in the graph (and they differ)
        NotConvertibleError: If no chain connects them

    Examples:
        >>> graph = build_graph([("m", "ft", 3.28), ("ft", "in", 12)])
        >>> find_path(graph, "m", "in")
        [Hop(source='m', target='ft', rate=3.28), Hop(source='ft', target='in', rate=12.0)]
    """
    query = Query(source, 1.0, target)
    if source == target:
        return []

    _check_known(graph, query)
    visited = _bfs(graph, source, target)
    if visited is None:
        raise NotConvertibleError(query)

    path = []
    unit = target
    while unit != source:
        parent, rate, _ = visited[unit]
        path.append(Hop(parent, unit, rate))
        unit = parent
    path.reverse()
    return path


def conversion_factor(graph: ConversionGraph, source: str, target: str) -> float:
    """Multiplier taking quantities in source to quantities in target.

    Raises:
        UnknownUnitError: If source or target is not in the graph (and they differ)
        NotConvertibleError: If no chain connects them
    """
    if source == target:
        return 1.0

    return _factor(graph, Query(source, 1.0, target))


def factors_from(graph: ConversionGraph, source: str) -> Dict[str, float]:
    """Conversion factor from source to every unit reachable from it.

    Raises:
        UnknownUnitError: If source is not in the graph
    """
    if not graph.has_unit(source):
        raise UnknownUnitError(
            source, Query(source, 1.0, source), suggestions=suggest_units(source, graph.units())
        )
    return {unit: entry[2] for unit, entry in _bfs(graph, source, None).items()}


def resolve(graph: ConversionGraph, source: str, quantity: float, target: str) -> float:
    """Convert ``quantity`` of ``source`` into ``target``.

    A unit always converts to itself: when source == target the quantity is
    returned unchanged, even if the graph has never seen the unit.

    Args:
        graph: Conversion graph (read only)
        source: Unit the quantity is expressed in
        quantity: Finite real number (negative and zero are fine)
        target: Unit to convert into

    Returns:
        quantity * conversion factor

    Raises:
        InvalidQuantityError: If quantity is not a finite real number
        UnknownUnitError: If source or target is unknown (source checked first)
        NotConvertibleError: If both are known but not connected
    """
    query = Query(source, quantity, target)
    value = _check_quantity(quantity, query)

    if source == target:
        return value

    result = value * _factor(graph, query)
    logger.debug(f"{value} {source} -> {result} {target}")
    return result


__all__ = [
    "Hop",
    "find_path",
    "conversion_factor",
    "factors_from",
    "resolve",
]
