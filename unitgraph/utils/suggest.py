"""Fuzzy "did you mean" suggestions for unknown units.

Units are opaque and case-sensitive, so suggestions never change how a query
resolves. They only make the error message for a typo ("fet") point at the
unit the caller probably meant ("ft").
"""

from __future__ import annotations
from typing import Iterable

try:
    from rapidfuzz import fuzz
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e


def score_unit(query: str, unit: str) -> float:
    """Fuzzy similarity (0-100) between a queried unit and a known unit.

    Case is ignored for scoring only; an exact case-insensitive match scores 100.

    Examples:
        >>> score_unit("FT", "ft")
        100.0
    """
    if not query or not unit:
        return 0.0
    return fuzz.WRatio(query.lower(), unit.lower())


def suggest_units(
    query: str,
    units: Iterable[str],
    k: int = 3,
    threshold: int = 70,
) -> list[str]:
    """Return up to k known units that look like the queried unit.

    Args:
        query: Unit that was not found
        units: Known units to choose from
        k: Maximum number of suggestions (default: 3)
        threshold: Minimum WRatio score (0-100, default: 70)

    Returns:
        Units ordered by descending score (ties keep the input order)

    Examples:
        >>> suggest_units("fet", ["m", "ft", "in", "hr"])
        ['ft']
        >>> suggest_units("parsec", ["m", "ft"])
        []
    """
    if not isinstance(query, str) or not query:
        return []

    scored = []
    for unit in units:
        if unit == query:
            continue
        score = score_unit(query, unit)
        if score >= threshold:
            scored.append((unit, score))

    # Sort by score descending, take top-K
    scored.sort(key=lambda x: x[1], reverse=True)
    return [unit for unit, _ in scored[:k]]


__all__ = [
    "score_unit",
    "suggest_units",
]
