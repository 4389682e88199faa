"""Graph module: units, facts and the conversion edges between them.

Public API:
    build_graph(facts, *, strict=True, freeze=True) -> ConversionGraph
        Build a graph from an ordered batch of (unit_a, unit_b, rate) facts

    ConversionGraph
        add_fact(unit_a, unit_b, rate), has_unit(unit), neighbors(unit)

    check_consistency(graph) -> list[Inconsistency]
        Report facts that disagree with the rest of their component

Conflict Policy:
    A later fact that changes an existing pair's rate wins. The change is
    returned as a FactConflict, appended to graph.conflicts and logged.

Examples:
    >>> from unitgraph.graph import build_graph
    >>>
    >>> graph = build_graph([("m", "ft", 3.28), ("ft", "in", 12)])
    >>> graph.has_unit("ft")
    True
    >>> list(graph.neighbors("in"))
    [('ft', 0.08333333333333333)]
"""

from unitgraph.graph.conversiongraph import ConversionGraph
from unitgraph.graph.grapherrors import (
    Fact,
    FactConflict,
    FactError,
    GraphFrozenError,
    InconsistentSelfRateError,
    InvalidRateError,
    InvalidUnitError,
    RejectedFact,
)
from unitgraph.graph.graphapi import build_graph
from unitgraph.graph.graphcheck import (
    Inconsistency,
    check_consistency,
    connected_components,
)

__all__ = [
    "ConversionGraph",
    "build_graph",
    "check_consistency",
    "connected_components",
    "Inconsistency",
    "Fact",
    "FactConflict",
    "RejectedFact",
    "FactError",
    "InvalidRateError",
    "InconsistentSelfRateError",
    "InvalidUnitError",
    "GraphFrozenError",
]
