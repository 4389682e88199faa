"""Public API for answering conversion queries.

This module is the query-time entry point. It wraps the breadth-first
resolver with the call shapes a harness needs: a bare number, a printable
answer line, a structured result dict, and a full conversion table.
"""

from typing import Any, Dict, List, Optional

import pandas as pd

from unitgraph.graph.conversiongraph import ConversionGraph
from unitgraph.graph.grapherrors import (
    ConversionError,
    InvalidQuantityError,
    UnknownUnitError,
)
from unitgraph.resolver.conversionresolver import factors_from, find_path, resolve

NOT_CONVERTIBLE = "not convertible!"
INVALID_QUANTITY = "invalid quantity!"


def convert(graph: ConversionGraph, source: str, quantity: float, target: str) -> float:
    """Convert a quantity from one unit to another.

    Args:
        graph: Graph built with ``build_graph``
        source: Unit the quantity is expressed in (e.g., "m")
        quantity: Finite real number
        target: Unit to convert into (e.g., "in")

    Returns:
        Converted quantity

    Raises:
        UnknownUnitError: If either unit never appeared in an accepted fact
        NotConvertibleError: If the units are in disconnected parts of the graph
        InvalidQuantityError: If quantity is not a finite real number

    Examples:
        >>> graph = build_graph([("m", "ft", 3.28), ("ft", "in", 12)])
        >>> round(convert(graph, "m", 2, "in"), 6)
        78.72
        >>> round(convert(graph, "in", 13, "m"), 6)
        0.330285
    """
    return resolve(graph, source, quantity, target)


def format_conversion(
    graph: ConversionGraph,
    source: str,
    quantity: float,
    target: str,
    precision: int = 6,
) -> str:
    """Render a query result as a single answer line.

    Args:
        graph: Conversion graph
        source: Source unit
        quantity: Quantity in source units
        target: Target unit
        precision: Significant digits in the answer (default: 6)

    Returns:
        ``"answer = <value>"``, ``"not convertible!"`` (unknown or disconnected
        units) or ``"invalid quantity!"`` (quantity not a finite real number)

    Examples:
        >>> format_conversion(graph, "m", 2, "in")
        'answer = 78.72'
        >>> format_conversion(graph, "in", 13, "hr")
        'not convertible!'
        >>> format_conversion(graph, "m", float("nan"), "in")
        'invalid quantity!'
    """
    try:
        value = resolve(graph, source, quantity, target)
    except InvalidQuantityError:
        return INVALID_QUANTITY
    except ConversionError:
        return NOT_CONVERTIBLE
    return f"answer = {value:.{precision}g}"


def describe_conversion(
    graph: ConversionGraph,
    source: str,
    quantity: float,
    target: str,
) -> Dict[str, Any]:
    """Resolve a query and report how the answer was reached.

    Never raises for an unanswerable query; the reason is returned in
    ``warning`` and the raw query is always preserved.

    Returns:
        {
            "raw": {"value": quantity, "unit": source, "target": target},
            "norm": {"value": float, "unit": target} or None,
            "path": [{"from": str, "to": str, "rate": float}, ...],
            "factor": float or None,
            "warning": Optional[str]
        }

    Examples:
        >>> result = describe_conversion(graph, "m", 2, "in")
        >>> round(result["norm"]["value"], 6), result["norm"]["unit"]
        (78.72, 'in')
        >>> [hop["to"] for hop in result["path"]]
        ['ft', 'in']

        >>> describe_conversion(graph, "in", 13, "hr")["warning"]
        "Cannot convert 'in' to 'hr': not convertible"
    """
    raw = {"value": quantity, "unit": source, "target": target}
    try:
        value = resolve(graph, source, quantity, target)
        path = find_path(graph, source, target)
    except ConversionError as e:
        return {
            "raw": raw,
            "norm": None,
            "path": [],
            "factor": None,
            "warning": str(e),
        }

    factor = 1.0
    for hop in path:
        factor *= hop.rate

    return {
        "raw": raw,
        "norm": {"value": value, "unit": target},
        "path": [{"from": hop.source, "to": hop.target, "rate": hop.rate} for hop in path],
        "factor": factor,
        "warning": None,
    }


def conversion_table(
    graph: ConversionGraph,
    units: Optional[List[str]] = None,
) -> pd.DataFrame:
    """Square table of conversion factors between units.

    Cell ``[row, col]`` holds the factor f in ``1 row = f col``. Pairs that are
    not convertible are NaN; the diagonal is 1.

    Args:
        graph: Conversion graph
        units: Units to include, in order (default: all known units)

    Returns:
        DataFrame indexed and columned by unit

    Raises:
        UnknownUnitError: If a requested unit is not in the graph

    Examples:
        >>> table = conversion_table(graph, ["m", "ft", "in"])
        >>> round(table.loc["m", "in"], 6)
        39.36
    """
    if units is None:
        units = graph.units()

    for unit in units:
        if not graph.has_unit(unit):
            raise UnknownUnitError(unit)

    rows = {}
    for unit in units:
        reachable = factors_from(graph, unit)
        rows[unit] = [reachable.get(other, float("nan")) for other in units]

    table = pd.DataFrame.from_dict(rows, orient="index", columns=list(units))
    table.index.name = "from"
    table.columns.name = "to"
    return table


__all__ = [
    "NOT_CONVERTIBLE",
    "INVALID_QUANTITY",
    "convert",
    "format_conversion",
    "describe_conversion",
    "conversion_table",
]
