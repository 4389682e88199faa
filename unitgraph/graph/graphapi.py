"""Public API for building conversion graphs.

Usage:
    from unitgraph.graph import build_graph

    graph = build_graph([
        ("m", "ft", 3.28),
        ("ft", "in", 12),
        ("hr", "min", 60),
        ("min", "sec", 60),
    ])
"""

import logging
from typing import Iterable, Sequence, Union

from unitgraph.graph.conversiongraph import ConversionGraph
from unitgraph.graph.grapherrors import Fact, FactError, RejectedFact

logger = logging.getLogger(__name__)

FactLike = Union[Fact, Sequence]


def build_graph(
    facts: Iterable[FactLike],
    *,
    strict: bool = True,
    freeze: bool = True,
) -> ConversionGraph:
    """Build a conversion graph from an ordered batch of facts.

    Facts are inserted one at a time in the given order, so later facts win
    any conflicts. Each insertion is atomic: a rejected fact leaves the graph
    exactly as it was.

    Args:
        facts: Iterable of ``(unit_a, unit_b, rate)`` triples or ``Fact`` tuples
        strict: If True (default), the first bad fact raises. If False, bad
            facts are logged, recorded in ``graph.rejected`` and skipped.
        freeze: If True (default), the returned graph is read-only and safe to
            share between threads.

    Returns:
        ConversionGraph with every accepted fact. Conflicts (later facts that
        changed an earlier rate) are listed in ``graph.conflicts``.

    Raises:
        FactError: On the first invalid fact when strict=True

    Examples:
        >>> graph = build_graph([("m", "ft", 3.28), ("ft", "in", 12)])
        >>> graph.units()
        ['m', 'ft', 'in']

        >>> graph = build_graph([("m", "ft", -1), ("ft", "in", 12)], strict=False)
        >>> [r.fact for r in graph.rejected]
        [Fact(unit_a='m', unit_b='ft', rate=-1)]
    """
    graph = ConversionGraph()

    for item in facts:
        try:
            unit_a, unit_b, rate = item
        except (TypeError, ValueError):
            error = FactError(f"Fact must be a (unit_a, unit_b, rate) triple, got {item!r}")
            if strict:
                raise error from None
            logger.warning(f"Skipping fact: {error}")
            graph.rejected.append(RejectedFact(item, error))
            continue

        try:
            graph.add_fact(unit_a, unit_b, rate)
        except FactError as e:
            if strict:
                raise
            logger.warning(f"Skipping fact: {e}")
            graph.rejected.append(RejectedFact(Fact(unit_a, unit_b, rate), e))

    logger.info(
        f"Built conversion graph: {len(graph)} units, {len(graph.facts())} facts, "
        f"{len(graph.conflicts)} conflicts, {len(graph.rejected)} rejected"
    )

    if freeze:
        graph.freeze()
    return graph


__all__ = [
    "build_graph",
]
