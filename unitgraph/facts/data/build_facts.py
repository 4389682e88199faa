#!/usr/bin/env python3
"""
Build facts.parquet from the YAML fact set.

This script:
1. Loads facts.yaml (entries as {from, to, rate} mappings or fact strings)
2. Coerces each entry to a unit_a, unit_b, rate row, keeping file order
3. Validates the set by building a lenient graph: rejected facts, conflicting
   facts and cycles whose rates do not multiply out to 1 are reported
4. Writes facts.parquet next to this script (or to --output)

Usage:
    python -m unitgraph.facts.data.build_facts
    python -m unitgraph.facts.data.build_facts --input my_facts.yaml --output /tmp/facts.parquet
"""

import argparse
import sys
from pathlib import Path
from typing import Any, List

import pandas as pd

from unitgraph.facts.factapi import frame_to_facts
from unitgraph.facts.factnormalize import fact_from_item
from unitgraph.graph.graphapi import build_graph
from unitgraph.graph.graphcheck import check_consistency, connected_components
from unitgraph.utils.build_framework import (
    BuildConfig,
    build_table,
    validate_required_fields,
)

DATA_DIR = Path(__file__).parent
DEFAULT_INPUT = DATA_DIR / "facts.yaml"
DEFAULT_OUTPUT = DATA_DIR / "facts.parquet"


def process_fact(entry: Any) -> dict:
    """Convert one YAML entry to a table row."""
    fact = fact_from_item(entry)
    return {"unit_a": fact.unit_a, "unit_b": fact.unit_b, "rate": fact.rate}


def validate_facts(df: pd.DataFrame) -> List[str]:
    """Validate the fact table; returns human-readable issues."""
    issues = validate_required_fields(df, ["unit_a", "unit_b", "rate"])
    if issues:
        return issues

    graph = build_graph(frame_to_facts(df), strict=False)

    for rejected in graph.rejected:
        issues.append(f"Rejected {tuple(rejected.fact)}: {rejected.error}")

    for conflict in graph.conflicts:
        issues.append(str(conflict))

    for issue in check_consistency(graph):
        issues.append(
            f"Inconsistent cycle at {issue.unit_a} -> {issue.unit_b}: "
            f"stated {issue.stated_rate:g}, implied {issue.implied_rate:g}"
        )

    return issues


def generate_fact_summary(df: pd.DataFrame) -> None:
    """Print unit and component statistics."""
    if df.empty:
        return

    graph = build_graph(frame_to_facts(df), strict=False)
    components = connected_components(graph)

    print(f"Units: {len(graph)}")
    print(f"Directed edges: {graph.edge_count()}")
    print(f"Convertible groups: {len(components)}")
    for component in components:
        print(f"  - {', '.join(component)}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Build facts.parquet from a YAML fact set")
    parser.add_argument("--input", type=Path, default=DEFAULT_INPUT, help="YAML fact file")
    parser.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Parquet output path")
    args = parser.parse_args(argv)

    config = BuildConfig(
        input_yaml=args.input,
        output_parquet=args.output,
        process_entry=process_fact,
        validate_data=validate_facts,
        generate_summary=generate_fact_summary,
        entity_plural="facts",
        yaml_key="facts",
    )
    return build_table(config)


if __name__ == "__main__":
    sys.exit(main())
