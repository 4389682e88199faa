#!/usr/bin/env python3
"""Answer unit conversion queries from the command line.

Builds a conversion graph from a fact file once, then answers each query with
"answer = <value>" or "not convertible!".

Usage:
    # Queries as arguments (bundled demo facts)
    python scripts/convert_units.py "2 m = ? in" "13 in = ? hr"

    # Queries on stdin, facts from a file or URL
    echo "13 in = ? m" | python scripts/convert_units.py --facts my_facts.yaml

    # Skip bad facts instead of stopping at the first one
    python scripts/convert_units.py --facts messy.txt --lenient "1 a = ? b"

Environment Variables:
    UNITGRAPH_FACTS_PATH: Default fact file or URL (default: bundled facts.yaml)
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from unitgraph.facts.factapi import load_default_facts, load_facts
from unitgraph.facts.factnormalize import parse_query
from unitgraph.graph.grapherrors import QueryParseError
from unitgraph.graph.graphapi import build_graph
from unitgraph.resolver.resolverapi import format_conversion


def answer_queries(graph, lines, out=None, err=None) -> int:
    """Answer each query line; returns the number of lines that failed to parse."""
    out = out or sys.stdout
    err = err or sys.stderr
    failures = 0
    for line in lines:
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        try:
            query = parse_query(line)
        except QueryParseError as e:
            print(f"error: {e}", file=err)
            failures += 1
            continue
        print(format_conversion(graph, query.source, query.quantity, query.target), file=out)
    return failures


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='Answer unit conversion queries such as "2 m = ? in"',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        'queries',
        nargs='*',
        help='Queries like "2 m = ? in" (read from stdin when omitted)'
    )
    parser.add_argument(
        '--facts', '-f',
        help='Fact file or URL (default: UNITGRAPH_FACTS_PATH or bundled demo facts)'
    )
    parser.add_argument(
        '--lenient',
        action='store_true',
        help='Skip invalid facts instead of stopping at the first one'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        facts = load_facts(args.facts) if args.facts else load_default_facts()
        graph = build_graph(facts, strict=not args.lenient)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    lines = args.queries if args.queries else sys.stdin
    failures = answer_queries(graph, lines)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
