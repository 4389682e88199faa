"""Tests for conversion resolution.

These tests cover the breadth-first resolver and its public API:
- Chaining through intermediate units, both directions
- Identity, unknown units and disconnected components
- Cycles, shortest-hop path choice and deterministic tie breaking
- Answer formatting, result dicts and conversion tables

Run with: pytest tests/test_resolver.py -v
"""

import math
import threading

import pytest

from unitgraph.graph import ConversionGraph, build_graph
from unitgraph.graph.grapherrors import (
    ConversionError,
    InvalidQuantityError,
    NotConvertibleError,
    Query,
    UnknownUnitError,
)
from unitgraph.resolver import (
    Hop,
    conversion_factor,
    conversion_table,
    convert,
    describe_conversion,
    factors_from,
    find_path,
    format_conversion,
    resolve,
)


class CountingGraph(ConversionGraph):
    """Graph that records which units the resolver expands."""

    def __init__(self):
        super().__init__()
        self.expanded = []

    def neighbors(self, unit):
        self.expanded.append(unit)
        return super().neighbors(unit)


# ============================================================================
# Core Properties
# ============================================================================

class TestChaining:
    """Test conversions through intermediate units"""

    def test_m_to_in(self, demo_graph):
        """2 m = ? in -> 78.72"""
        assert convert(demo_graph, "m", 2, "in") == pytest.approx(78.72)

    def test_in_to_m(self, demo_graph):
        """13 in = ? m uses exact reciprocals: 13 / (3.28 * 12)"""
        result = convert(demo_graph, "in", 13, "m")
        assert result == pytest.approx(13 / (3.28 * 12), rel=1e-9)
        assert result == pytest.approx(0.33028455, rel=1e-6)

    def test_sec_to_hr(self, demo_graph):
        """3600 sec = ? hr -> 1"""
        assert convert(demo_graph, "sec", 3600, "hr") == pytest.approx(1.0)

    def test_direct_fact(self, demo_graph):
        """Single-hop conversion in the fact direction"""
        assert convert(demo_graph, "hr", 1.5, "min") == pytest.approx(90.0)

    def test_symmetry(self, demo_facts, demo_graph):
        """Every fact converts both ways"""
        for unit_a, unit_b, rate in demo_facts:
            assert resolve(demo_graph, unit_a, 1, unit_b) == pytest.approx(rate, rel=1e-9)
            assert resolve(demo_graph, unit_b, 1, unit_a) == pytest.approx(1 / rate, rel=1e-9)

    @pytest.mark.parametrize("quantity,expected", [(0, 0.0), (-1, -3.28), (0.5, 1.64)])
    def test_zero_and_negative_quantities(self, demo_graph, quantity, expected):
        """Quantities are plain scalings, sign included"""
        assert convert(demo_graph, "m", quantity, "ft") == pytest.approx(expected)


class TestIdentity:
    """Test same-unit queries"""

    def test_known_unit(self, demo_graph):
        """A known unit converts to itself unchanged"""
        assert convert(demo_graph, "m", -2.5, "m") == -2.5

    def test_unknown_unit(self, demo_graph):
        """An unknown unit still converts to itself"""
        assert convert(demo_graph, "parsec", 7, "parsec") == 7

    def test_identity_does_not_touch_graph(self):
        """The identity short-circuit never expands a node"""
        graph = CountingGraph()
        graph.add_fact("m", "ft", 3.28)

        assert resolve(graph, "m", 4, "m") == 4
        assert graph.expanded == []


class TestFailures:
    """Test unanswerable queries"""

    def test_disjoint_components(self, demo_graph):
        """Length and time do not convert"""
        with pytest.raises(NotConvertibleError) as exc_info:
            convert(demo_graph, "in", 13, "hr")

        assert exc_info.value.query == Query("in", 13, "hr")
        assert "not convertible" in str(exc_info.value)

    def test_unknown_source(self, demo_graph):
        """A never-seen source unit is reported by name"""
        with pytest.raises(UnknownUnitError) as exc_info:
            convert(demo_graph, "parsec", 1, "m")

        assert exc_info.value.unit == "parsec"
        assert exc_info.value.query == Query("parsec", 1, "m")

    def test_unknown_target(self, demo_graph):
        """A never-seen target unit is reported by name"""
        with pytest.raises(UnknownUnitError) as exc_info:
            convert(demo_graph, "m", 1, "parsec")

        assert exc_info.value.unit == "parsec"

    def test_source_checked_first(self, demo_graph):
        """With both units unknown the source is reported"""
        with pytest.raises(UnknownUnitError) as exc_info:
            convert(demo_graph, "foo", 1, "bar")

        assert exc_info.value.unit == "foo"

    def test_unknown_unit_suggestions(self, demo_graph):
        """Typos get did-you-mean suggestions"""
        with pytest.raises(UnknownUnitError) as exc_info:
            convert(demo_graph, "fet", 1, "m")

        assert "ft" in exc_info.value.suggestions
        assert "did you mean" in str(exc_info.value)

    def test_case_sensitive(self, demo_graph):
        """Units differing only in case are different"""
        with pytest.raises(UnknownUnitError) as exc_info:
            convert(demo_graph, "M", 1, "ft")

        assert exc_info.value.unit == "M"

    @pytest.mark.parametrize("quantity", [float("nan"), float("inf"), "abc", None, True])
    def test_invalid_quantity(self, demo_graph, quantity):
        """Quantities must be finite real numbers"""
        with pytest.raises(InvalidQuantityError):
            convert(demo_graph, "m", quantity, "ft")

    def test_all_errors_are_conversion_errors(self, demo_graph):
        """Callers can catch a single base class"""
        for args in [("in", 13, "hr"), ("parsec", 1, "m"), ("m", float("nan"), "ft")]:
            with pytest.raises(ConversionError):
                convert(demo_graph, *args)

    def test_empty_graph(self):
        """Nothing is known in an empty graph"""
        with pytest.raises(UnknownUnitError):
            convert(build_graph([]), "m", 1, "ft")


# ============================================================================
# Search Behaviour
# ============================================================================

class TestSearch:
    """Test BFS path choice and termination"""

    def test_cycle_terminates(self, cyclic_facts):
        """A cyclic fact set resolves without revisiting units"""
        graph = CountingGraph()
        for fact in cyclic_facts:
            graph.add_fact(*fact)

        assert resolve(graph, "a", 1, "c") == pytest.approx(6.0)
        assert len(graph.expanded) == len(set(graph.expanded))

    def test_cycle_unreachable_terminates(self, cyclic_facts):
        """Exhausting a cyclic component visits each unit once"""
        graph = CountingGraph()
        for fact in cyclic_facts:
            graph.add_fact(*fact)
        graph.add_fact("x", "y", 2)

        with pytest.raises(NotConvertibleError):
            resolve(graph, "a", 1, "x")

        assert sorted(graph.expanded) == ["a", "b", "c"]

    def test_fewest_hops_wins(self):
        """A direct fact beats a longer chain, even if they disagree"""
        graph = build_graph([("a", "b", 2), ("b", "c", 3), ("a", "c", 5)])

        assert resolve(graph, "a", 1, "c") == pytest.approx(5.0)
        assert len(find_path(graph, "a", "c")) == 1

    def test_tie_broken_by_insertion_order(self):
        """Among equal-length paths the first-inserted route is used"""
        graph = build_graph([
            ("x", "y1", 2),
            ("y1", "z", 3),
            ("x", "y2", 4),
            ("y2", "z", 5),
        ])

        assert resolve(graph, "x", 1, "z") == pytest.approx(6.0)
        assert [hop.target for hop in find_path(graph, "x", "z")] == ["y1", "z"]

    def test_long_chain(self):
        """A long chain of doublings composes correctly"""
        facts = [(f"u{i}", f"u{i + 1}", 2) for i in range(50)]
        graph = build_graph(facts)

        assert resolve(graph, "u0", 1, "u50") == pytest.approx(2.0 ** 50)
        assert resolve(graph, "u50", 1, "u0") == pytest.approx(2.0 ** -50)

    def test_idempotent_rebuild(self, demo_facts):
        """Two graphs from the same facts answer every query identically"""
        one = build_graph(demo_facts)
        two = build_graph(demo_facts)

        for source in one.units():
            for target in one.units():
                try:
                    expected = resolve(one, source, 3.5, target)
                except NotConvertibleError:
                    with pytest.raises(NotConvertibleError):
                        resolve(two, source, 3.5, target)
                    continue
                assert resolve(two, source, 3.5, target) == expected

    def test_concurrent_reads(self, demo_graph):
        """A frozen graph answers queries from many threads"""
        results = []

        def worker():
            for _ in range(200):
                results.append(resolve(demo_graph, "m", 2, "in"))

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 800
        assert all(r == results[0] for r in results)


class TestPathAndFactor:
    """Test find_path, conversion_factor and factors_from"""

    def test_find_path(self, demo_graph):
        """The path lists each hop with its rate"""
        path = find_path(demo_graph, "m", "in")

        assert path == [Hop("m", "ft", 3.28), Hop("ft", "in", 12.0)]

    def test_find_path_identity(self, demo_graph):
        """Same unit needs no hops"""
        assert find_path(demo_graph, "m", "m") == []

    def test_find_path_not_convertible(self, demo_graph):
        """No path raises NotConvertibleError"""
        with pytest.raises(NotConvertibleError):
            find_path(demo_graph, "m", "sec")

    def test_conversion_factor(self, demo_graph):
        """Factor between two units"""
        assert conversion_factor(demo_graph, "hr", "sec") == pytest.approx(3600.0)
        assert conversion_factor(demo_graph, "hr", "hr") == 1.0

    def test_factors_from(self, demo_graph):
        """Factors to every reachable unit"""
        factors = factors_from(demo_graph, "ft")

        assert set(factors) == {"m", "ft", "in"}
        assert factors["ft"] == 1.0
        assert factors["in"] == pytest.approx(12.0)

    def test_factors_from_unknown(self, demo_graph):
        """Unknown source raises UnknownUnitError"""
        with pytest.raises(UnknownUnitError):
            factors_from(demo_graph, "parsec")


# ============================================================================
# Presentation
# ============================================================================

class TestFormatConversion:
    """Test answer lines"""

    def test_answer(self, demo_graph):
        """Answers are printed with 6 significant digits"""
        assert format_conversion(demo_graph, "m", 2, "in") == "answer = 78.72"
        assert format_conversion(demo_graph, "in", 13, "m") == "answer = 0.330285"
        assert format_conversion(demo_graph, "sec", 3600, "hr") == "answer = 1"

    def test_not_convertible(self, demo_graph):
        """Disconnected units print the classic message"""
        assert format_conversion(demo_graph, "in", 13, "hr") == "not convertible!"

    def test_unknown_is_not_convertible(self, demo_graph):
        """Unknown units print the same message"""
        assert format_conversion(demo_graph, "parsec", 1, "m") == "not convertible!"

    @pytest.mark.parametrize("quantity", [float("nan"), float("inf"), "abc", True])
    def test_invalid_quantity(self, demo_graph, quantity):
        """Bad quantities get their own message, even between connected units"""
        assert format_conversion(demo_graph, "m", quantity, "in") == "invalid quantity!"

    def test_precision(self, demo_graph):
        """Precision controls significant digits"""
        assert format_conversion(demo_graph, "in", 13, "m", precision=3) == "answer = 0.33"


class TestDescribeConversion:
    """Test structured results"""

    def test_success(self, demo_graph):
        """Successful results carry the path and no warning"""
        result = describe_conversion(demo_graph, "m", 2, "in")

        assert result["raw"] == {"value": 2, "unit": "m", "target": "in"}
        assert result["norm"]["value"] == pytest.approx(78.72)
        assert result["norm"]["unit"] == "in"
        assert result["factor"] == pytest.approx(39.36)
        assert result["path"] == [
            {"from": "m", "to": "ft", "rate": 3.28},
            {"from": "ft", "to": "in", "rate": 12.0},
        ]
        assert result["warning"] is None

    def test_failure(self, demo_graph):
        """Failures keep the raw query and explain why"""
        result = describe_conversion(demo_graph, "in", 13, "hr")

        assert result["raw"]["value"] == 13
        assert result["norm"] is None
        assert result["path"] == []
        assert "not convertible" in result["warning"]

    def test_unknown_unit_warning(self, demo_graph):
        """Unknown units are named in the warning"""
        result = describe_conversion(demo_graph, "parsec", 1, "m")
        assert "parsec" in result["warning"]


class TestConversionTable:
    """Test pairwise factor tables"""

    def test_table(self, demo_graph):
        """Factors for every pair, NaN across components"""
        table = conversion_table(demo_graph)

        assert list(table.index) == ["m", "ft", "in", "hr", "min", "sec"]
        assert list(table.columns) == list(table.index)
        assert table.loc["m", "in"] == pytest.approx(39.36)
        assert table.loc["in", "m"] == pytest.approx(1 / 39.36)
        assert math.isnan(table.loc["m", "hr"])
        for unit in table.index:
            assert table.loc[unit, unit] == 1.0

    def test_subset(self, demo_graph):
        """A unit subset controls rows and columns"""
        table = conversion_table(demo_graph, ["hr", "sec"])

        assert table.shape == (2, 2)
        assert table.loc["hr", "sec"] == pytest.approx(3600.0)

    def test_unknown_unit(self, demo_graph):
        """Requesting an unknown unit raises"""
        with pytest.raises(UnknownUnitError):
            conversion_table(demo_graph, ["m", "parsec"])
