"""Facts module for loading and parsing conversion facts.

Public API:
    load_facts(source) -> list[Fact]
        Load facts from a YAML, CSV, Parquet or text file, or an http(s) URL

    load_default_facts() -> tuple[Fact, ...]
        Facts from UNITGRAPH_FACTS_PATH or the bundled demo set

    parse_fact(text) / parse_query(text)
        "m = 3.28 ft" -> Fact, "2 m = ? in" -> Query
"""

from unitgraph.facts.factapi import (
    FACTS_ENV_VAR,
    build_default_graph,
    facts_to_frame,
    frame_to_facts,
    load_default_facts,
    load_facts,
)
from unitgraph.facts.factnormalize import (
    fact_from_item,
    parse_fact,
    parse_fact_lines,
    parse_query,
)

__all__ = [
    "FACTS_ENV_VAR",
    "load_facts",
    "load_default_facts",
    "build_default_graph",
    "facts_to_frame",
    "frame_to_facts",
    "parse_fact",
    "parse_query",
    "parse_fact_lines",
    "fact_from_item",
]
