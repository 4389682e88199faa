"""Error types and advisory records for the unit conversion graph.

Fact errors are raised while inserting facts; conversion errors are raised
while resolving queries. Conflicts are not errors: a later fact overwrites
the earlier rate and a ``FactConflict`` record is handed back to the caller.
"""

from dataclasses import dataclass
from typing import Any, NamedTuple, Optional, Sequence


class Fact(NamedTuple):
    """``1 unit_a = rate unit_b``."""

    unit_a: str
    unit_b: str
    rate: float


class Query(NamedTuple):
    """``quantity source = ? target``."""

    source: str
    quantity: float
    target: str


class UnitGraphError(Exception):
    """Base class for all unitgraph errors."""


# ============================================================================
# Fact Errors (graph construction)
# ============================================================================

class FactError(UnitGraphError, ValueError):
    """A fact was rejected and not inserted."""

    def __init__(self, message: str, fact: Optional[Fact] = None):
        super().__init__(message)
        self.fact = fact


class InvalidRateError(FactError):
    """Rate is non-positive, non-finite or not a number."""


class InconsistentSelfRateError(FactError):
    """A unit claims ``1 u = r u`` with ``r != 1``."""


class InvalidUnitError(FactError):
    """Unit identifier is not a non-empty string."""


class FactParseError(FactError):
    """Fact text could not be parsed."""


class GraphFrozenError(UnitGraphError, RuntimeError):
    """Insertion attempted on a frozen graph."""


@dataclass(frozen=True)
class FactConflict:
    """Advisory notice: a later fact redefined an existing pair's rate.

    The graph keeps ``new_rate`` (last write wins). Rates are expressed in the
    direction of the incoming fact, ``1 unit_a = rate unit_b``.
    """

    unit_a: str
    unit_b: str
    old_rate: float
    new_rate: float

    def __str__(self) -> str:
        return (
            f"Conflicting fact for {self.unit_a} -> {self.unit_b}: "
            f"{self.old_rate!r} replaced by {self.new_rate!r}"
        )


@dataclass(frozen=True)
class RejectedFact:
    """A fact skipped during a lenient build, with the reason.

    ``fact`` is the raw item when it could not even be unpacked as a triple.
    """

    fact: Any
    error: FactError


# ============================================================================
# Conversion Errors (query time)
# ============================================================================

class ConversionError(UnitGraphError, LookupError):
    """A query could not be answered."""

    def __init__(self, message: str, query: Optional[Query] = None):
        super().__init__(message)
        self.query = query


class UnknownUnitError(ConversionError):
    """Query references a unit never seen in any accepted fact."""

    def __init__(
        self,
        unit: str,
        query: Optional[Query] = None,
        suggestions: Sequence[str] = (),
    ):
        message = f"Unknown unit: {unit!r}"
        if suggestions:
            message += f" (did you mean: {', '.join(suggestions)}?)"
        super().__init__(message, query)
        self.unit = unit
        self.suggestions = list(suggestions)


class NotConvertibleError(ConversionError):
    """Both units are known but no chain of facts connects them."""

    def __init__(self, query: Query):
        super().__init__(
            f"Cannot convert {query.source!r} to {query.target!r}: not convertible",
            query,
        )


class InvalidQuantityError(ConversionError, ValueError):
    """Quantity is not a finite real number."""


class QueryParseError(UnitGraphError, ValueError):
    """Query text could not be parsed."""


__all__ = [
    "Fact",
    "Query",
    "UnitGraphError",
    "FactError",
    "InvalidRateError",
    "InconsistentSelfRateError",
    "InvalidUnitError",
    "FactParseError",
    "GraphFrozenError",
    "FactConflict",
    "RejectedFact",
    "ConversionError",
    "UnknownUnitError",
    "NotConvertibleError",
    "InvalidQuantityError",
    "QueryParseError",
]
