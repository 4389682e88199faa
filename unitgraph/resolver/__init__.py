"""Resolver module for answering conversion queries.

Public API:
    convert(graph, source, quantity, target) -> float
        Convert a quantity between units by chaining facts

    format_conversion(graph, source, quantity, target) -> str
        "answer = 78.72", "not convertible!" or "invalid quantity!"

    describe_conversion(graph, source, quantity, target) -> dict
        Result with the path of hops, never raises for unanswerable queries

    conversion_table(graph, units=None) -> DataFrame
        Pairwise conversion factors

Examples:
    >>> from unitgraph.graph import build_graph
    >>> from unitgraph.resolver import convert, format_conversion
    >>>
    >>> graph = build_graph([("m", "ft", 3.28), ("ft", "in", 12), ("hr", "min", 60)])
    >>> format_conversion(graph, "m", 2, "in")
    'answer = 78.72'
    >>> convert(graph, "in", 13, "hr")
    Traceback (most recent call last):
    ...
    unitgraph.graph.grapherrors.NotConvertibleError: Cannot convert 'in' to 'hr': not convertible
"""

from unitgraph.resolver.conversionresolver import (
    Hop,
    conversion_factor,
    factors_from,
    find_path,
    resolve,
)
from unitgraph.resolver.resolverapi import (
    INVALID_QUANTITY,
    NOT_CONVERTIBLE,
    conversion_table,
    convert,
    describe_conversion,
    format_conversion,
)

__all__ = [
    "convert",
    "format_conversion",
    "describe_conversion",
    "conversion_table",
    "resolve",
    "find_path",
    "conversion_factor",
    "factors_from",
    "Hop",
    "NOT_CONVERTIBLE",
    "INVALID_QUANTITY",
]
