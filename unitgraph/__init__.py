"""unitgraph - Unit conversion over a graph of runtime facts

Public API for building a conversion graph from facts such as "1 m = 3.28 ft"
and answering queries between units that are only related through other units.

Usage:
    from unitgraph import build_graph, convert

    graph = build_graph([
        ("m", "ft", 3.28),
        ("ft", "in", 12),
        ("hr", "min", 60),
        ("min", "sec", 60),
    ])

    convert(graph, "m", 2, "in")      # Returns: 78.72
    convert(graph, "in", 13, "m")     # Returns: 0.3302845...
    convert(graph, "in", 13, "hr")    # Raises: NotConvertibleError

    # Harness-style answer lines
    format_conversion(graph, "in", 13, "hr")   # Returns: 'not convertible!'

Graphs are plain values: build as many as you need, none is global.
"""

__version__ = "0.1.0"

# ============================================================================
# Graph API
# ============================================================================

from .graph.graphapi import (
    build_graph,             # Primary API - build a graph from ordered facts
)
from .graph.conversiongraph import (
    ConversionGraph,         # add_fact / has_unit / neighbors
)
from .graph.graphcheck import (
    check_consistency,       # Find facts that contradict their component
    connected_components,    # Groups of mutually convertible units
)

# ============================================================================
# Resolver API
# ============================================================================

from .resolver.resolverapi import (
    convert,                 # Primary API - convert a quantity between units
    format_conversion,       # "answer = ..." or "not convertible!"
    describe_conversion,     # Result dict with path and warning
    conversion_table,        # Pairwise factors as a DataFrame
)
from .resolver.conversionresolver import (
    find_path,               # Shortest-hop chain of facts
    conversion_factor,       # Multiplier between two units
)

# ============================================================================
# Facts API
# ============================================================================

from .facts.factapi import (
    load_facts,              # Load facts from file or URL
    load_default_facts,      # UNITGRAPH_FACTS_PATH or bundled demo facts
    build_default_graph,     # Fresh graph from the default facts
)
from .facts.factnormalize import (
    parse_fact,              # "m = 3.28 ft" -> Fact
    parse_query,             # "2 m = ? in" -> Query
)

# ============================================================================
# Types and Errors
# ============================================================================

from .graph.grapherrors import (
    Fact,
    Query,
    FactConflict,
    RejectedFact,
    UnitGraphError,
    FactError,
    InvalidRateError,
    InconsistentSelfRateError,
    InvalidUnitError,
    FactParseError,
    GraphFrozenError,
    ConversionError,
    UnknownUnitError,
    NotConvertibleError,
    InvalidQuantityError,
    QueryParseError,
)

__all__ = [
    # Version
    "__version__",

    # ========================================================================
    # PRIMARY APIS - Start here!
    # ========================================================================
    "build_graph",          # Facts -> ConversionGraph
    "convert",              # Graph + query -> number

    # ========================================================================
    # Graph
    # ========================================================================
    "ConversionGraph",
    "check_consistency",
    "connected_components",

    # ========================================================================
    # Resolver
    # ========================================================================
    "format_conversion",
    "describe_conversion",
    "conversion_table",
    "find_path",
    "conversion_factor",

    # ========================================================================
    # Facts
    # ========================================================================
    "load_facts",
    "load_default_facts",
    "build_default_graph",
    "parse_fact",
    "parse_query",

    # ========================================================================
    # Types and Errors
    # ========================================================================
    "Fact",
    "Query",
    "FactConflict",
    "RejectedFact",
    "UnitGraphError",
    "FactError",
    "InvalidRateError",
    "InconsistentSelfRateError",
    "InvalidUnitError",
    "FactParseError",
    "GraphFrozenError",
    "ConversionError",
    "UnknownUnitError",
    "NotConvertibleError",
    "InvalidQuantityError",
    "QueryParseError",
]
