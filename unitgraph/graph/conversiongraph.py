"""Weighted, symmetric conversion graph over unit identifiers.

Units are plain strings. The graph is a mapping from unit to an ordered
mapping of neighbor -> weight, so cycles in the facts never turn into
reference cycles between objects.

Every accepted fact ``1 a = r b`` stores two directed edges:

    a -> b  weighted r
    b -> a  weighted 1/r

Both edges are written together or not at all.
"""

import logging
import math
from typing import Dict, Iterator, List, Optional, Tuple

from unitgraph.graph.grapherrors import (
    Fact,
    FactConflict,
    GraphFrozenError,
    InconsistentSelfRateError,
    InvalidRateError,
    InvalidUnitError,
    RejectedFact,
)

logger = logging.getLogger(__name__)

# Relative tolerance used to decide whether a repeated fact changes a rate
CONFLICT_REL_TOL = 1e-9


def _check_unit(unit, fact: Fact) -> str:
    if not isinstance(unit, str) or not unit.strip():
        raise InvalidUnitError(
            f"Unit must be a non-empty string, got {unit!r}", fact
        )
    return unit


def _check_rate(rate, fact: Fact) -> float:
    # bool is an int subclass; "1 m = True ft" is not a fact
    if isinstance(rate, bool):
        raise InvalidRateError(f"Rate must be a real number, got {rate!r}", fact)
    try:
        value = float(rate)
    except (TypeError, ValueError):
        raise InvalidRateError(
            f"Rate must be a real number, got {rate!r}", fact
        ) from None

    if not math.isfinite(value) or value <= 0:
        raise InvalidRateError(
            f"Rate must be positive and finite, got {rate!r}", fact
        )
    # Subnormal rates overflow on the reciprocal edge
    if not math.isfinite(1.0 / value):
        raise InvalidRateError(f"Rate too small to invert: {rate!r}", fact)
    return value


class ConversionGraph:
    """Units and the conversion rates between them.

    Examples:
        >>> graph = ConversionGraph()
        >>> graph.add_fact("m", "ft", 3.28)
        >>> graph.add_fact("ft", "in", 12)
        >>> list(graph.neighbors("ft"))
        [('m', 0.3048780487804878), ('in', 12.0)]
        >>> graph.has_unit("hr")
        False
    """

    def __init__(self):
        self._edges: Dict[str, Dict[str, float]] = {}
        # Keyed by the orientation in which a pair was first seen
        self._facts: Dict[Tuple[str, str], Fact] = {}
        self._frozen = False
        self.conflicts: List[FactConflict] = []
        self.rejected: List[RejectedFact] = []

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_fact(self, unit_a: str, unit_b: str, rate: float) -> Optional[FactConflict]:
        """Insert ``1 unit_a = rate unit_b`` and its reciprocal.

        Args:
            unit_a: Source unit of the fact
            unit_b: Destination unit of the fact
            rate: Positive finite multiplier

        Returns:
            A ``FactConflict`` if the pair already had a different rate (the new
            rate wins), otherwise None.

        Raises:
            InvalidUnitError: If either unit is not a non-empty string
            InvalidRateError: If rate is non-positive, non-finite or not numeric
            InconsistentSelfRateError: If unit_a == unit_b and rate != 1
            GraphFrozenError: If the graph has been frozen
        """
        fact = Fact(unit_a, unit_b, rate)
        if self._frozen:
            raise GraphFrozenError(f"Cannot add {fact}: graph is frozen")

        _check_unit(unit_a, fact)
        _check_unit(unit_b, fact)
        value = _check_rate(rate, fact)
        fact = Fact(unit_a, unit_b, value)

        if unit_a == unit_b and value != 1.0:
            raise InconsistentSelfRateError(
                f"Self-referential fact must have rate 1, got 1 {unit_a} = {rate!r} {unit_b}",
                fact,
            )

        conflict = None
        old = self._edges.get(unit_a, {}).get(unit_b)
        if old is not None and not math.isclose(old, value, rel_tol=CONFLICT_REL_TOL):
            conflict = FactConflict(unit_a, unit_b, old, value)
            self.conflicts.append(conflict)
            logger.warning(str(conflict))

        # Validation is complete; both directions are written below
        self._edges.setdefault(unit_a, {})[unit_b] = value
        self._edges.setdefault(unit_b, {})[unit_a] = 1.0 / value

        if (unit_b, unit_a) in self._facts:
            self._facts[(unit_b, unit_a)] = fact
        else:
            self._facts[(unit_a, unit_b)] = fact

        return conflict

    def freeze(self) -> "ConversionGraph":
        """Make the graph read-only. Returns self for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "ConversionGraph":
        """Unfrozen copy, for building an updated graph off to the side."""
        other = ConversionGraph()
        other._edges = {unit: dict(adj) for unit, adj in self._edges.items()}
        other._facts = dict(self._facts)
        other.conflicts = list(self.conflicts)
        other.rejected = list(self.rejected)
        return other

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def has_unit(self, unit: str) -> bool:
        return unit in self._edges

    def neighbors(self, unit: str) -> Iterator[Tuple[str, float]]:
        """Yield ``(neighbor, rate)`` for every edge leaving ``unit``.

        Order is the order in which facts first mentioned each pair. Unknown
        units yield nothing.
        """
        for neighbor, rate in self._edges.get(unit, {}).items():
            yield neighbor, rate

    def units(self) -> List[str]:
        """Known units in order of first appearance."""
        return list(self._edges)

    def facts(self) -> List[Fact]:
        """Accepted facts in insertion order, with their latest rates."""
        return list(self._facts.values())

    def edge_count(self) -> int:
        return sum(len(adj) for adj in self._edges.values())

    def __len__(self) -> int:
        return len(self._edges)

    def __contains__(self, unit) -> bool:
        return unit in self._edges

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._edges))

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "mutable"
        return (
            f"ConversionGraph(units={len(self._edges)}, "
            f"facts={len(self._facts)}, {state})"
        )


__all__ = [
    "ConversionGraph",
    "CONFLICT_REL_TOL",
]
