"""Shared test fixtures and utilities for unitgraph tests."""

import pytest

from unitgraph.facts.factapi import load_default_facts
from unitgraph.graph.graphapi import build_graph


@pytest.fixture
def demo_facts():
    """Fixture providing the classic length/time fact set.

    Length (m, ft, in) and time (hr, min, sec) are disjoint.
    """
    return [
        ("m", "ft", 3.28),
        ("ft", "in", 12),
        ("hr", "min", 60),
        ("min", "sec", 60),
    ]


@pytest.fixture
def demo_graph(demo_facts):
    """Fixture providing a frozen graph built from demo_facts."""
    return build_graph(demo_facts)


@pytest.fixture
def cyclic_facts():
    """Fixture providing a consistent three-unit cycle (2 * 3 * 1/6 == 1)."""
    return [
        ("a", "b", 2),
        ("b", "c", 3),
        ("c", "a", 1 / 6),
    ]


@pytest.fixture
def clear_default_facts():
    """Fixture that resets the cached default facts around a test.

    Use it in tests that change UNITGRAPH_FACTS_PATH.
    """
    load_default_facts.cache_clear()
    yield
    load_default_facts.cache_clear()
