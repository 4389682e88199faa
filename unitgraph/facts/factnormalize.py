"""Parsing of fact and query text.

Facts and queries use the notation of the classic conversion exercise:

    m = 3.28 ft          # fact: 1 m = 3.28 ft
    1 ft = 12 in         # fact with an explicit left-hand quantity
    2 m = ? in           # query: how many in are 2 m?

Unit tokens are taken verbatim (case-sensitive, no normalization). Rates are
not range-checked here; the graph rejects bad rates when the fact is added.
"""

import re
from typing import Any, Iterable, List, Mapping

from unitgraph.graph.grapherrors import Fact, FactParseError, Query, QueryParseError

_NUMBER = r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
# Units may contain digits but cannot start like a number
_UNIT = r"[^\s=?#\d.+\-][^\s=?#]*"

FACT_RE = re.compile(
    rf"^\s*(?:(?P<lhs>{_NUMBER})\s*)?(?P<unit_a>{_UNIT})\s*=\s*"
    rf"(?P<rhs>{_NUMBER})\s*(?P<unit_b>{_UNIT})\s*$"
)
QUERY_RE = re.compile(
    rf"^\s*(?P<quantity>{_NUMBER})\s*(?P<source>{_UNIT})\s*=\s*\?\s*(?P<target>{_UNIT})\s*$"
)

# Key spellings accepted for fact mappings in YAML/JSON-like sources
_FROM_KEYS = ("from", "unit_a", "source")
_TO_KEYS = ("to", "unit_b", "target")


def _strip_comment(line: str) -> str:
    return line.split("#", 1)[0].strip()


def parse_fact(text: str) -> Fact:
    """Parse one fact line.

    A left-hand quantity other than 1 is folded into the rate
    ("2 m = 6.56 ft" gives rate 3.28).

    Raises:
        FactParseError: If the text is not a fact

    Examples:
        >>> parse_fact("m = 3.28 ft")
        Fact(unit_a='m', unit_b='ft', rate=3.28)
        >>> parse_fact("1 hr = 60 min")
        Fact(unit_a='hr', unit_b='min', rate=60.0)
    """
    if not isinstance(text, str):
        raise FactParseError(f"Fact text must be a string, got {text!r}")

    match = FACT_RE.match(_strip_comment(text))
    if not match:
        raise FactParseError(f"Cannot parse fact: {text!r} (expected e.g. 'm = 3.28 ft')")

    rate = float(match.group("rhs"))
    lhs = match.group("lhs")
    if lhs is not None:
        lhs_value = float(lhs)
        if lhs_value == 0:
            raise FactParseError(f"Cannot parse fact: {text!r} (left-hand quantity is 0)")
        rate = rate / lhs_value

    return Fact(match.group("unit_a"), match.group("unit_b"), rate)


def parse_query(text: str) -> Query:
    """Parse one query line such as ``"2 m = ? in"``.

    Raises:
        QueryParseError: If the text is not a query

    Examples:
        >>> parse_query("13 in = ? m")
        Query(source='in', quantity=13.0, target='m')
    """
    if not isinstance(text, str):
        raise QueryParseError(f"Query text must be a string, got {text!r}")

    match = QUERY_RE.match(_strip_comment(text))
    if not match:
        raise QueryParseError(f"Cannot parse query: {text!r} (expected e.g. '2 m = ? in')")

    return Query(match.group("source"), float(match.group("quantity")), match.group("target"))


def parse_fact_lines(lines: Iterable[str]) -> List[Fact]:
    """Parse facts from text lines, skipping blanks and ``#`` comments.

    Raises:
        FactParseError: On the first malformed line (message carries the line number)
    """
    facts = []
    for lineno, line in enumerate(lines, 1):
        if not _strip_comment(line):
            continue
        try:
            facts.append(parse_fact(line))
        except FactParseError as e:
            raise FactParseError(f"Line {lineno}: {e}") from None
    return facts


def _first_key(item: Mapping[str, Any], keys) -> Any:
    for key in keys:
        if key in item:
            return item[key]
    raise FactParseError(f"Fact mapping needs one of {list(keys)}: {dict(item)!r}")


def fact_from_item(item: Any) -> Fact:
    """Coerce a loosely structured fact into a ``Fact``.

    Accepts a fact string, a ``(unit_a, unit_b, rate)`` sequence, or a mapping
    with ``from``/``to``/``rate`` keys (``unit_a``/``unit_b`` also work).

    Examples:
        >>> fact_from_item({"from": "ft", "to": "in", "rate": 12})
        Fact(unit_a='ft', unit_b='in', rate=12)
        >>> fact_from_item("min = 60 sec")
        Fact(unit_a='min', unit_b='sec', rate=60.0)
    """
    if isinstance(item, str):
        return parse_fact(item)
    if isinstance(item, Mapping):
        if "rate" not in item:
            raise FactParseError(f"Fact mapping needs a 'rate': {dict(item)!r}")
        return Fact(_first_key(item, _FROM_KEYS), _first_key(item, _TO_KEYS), item["rate"])
    if isinstance(item, (list, tuple)) and len(item) == 3:
        return Fact(*item)
    raise FactParseError(f"Cannot interpret fact: {item!r}")


__all__ = [
    "FACT_RE",
    "QUERY_RE",
    "parse_fact",
    "parse_query",
    "parse_fact_lines",
    "fact_from_item",
]
