#!/usr/bin/env python3
"""Command-line driver for derived unit conversion.

Builds a conversion graph from the configured reference facts (or from a
fact table) and answers one query.

Usage:
    # Reference facts: 1 m = 3.28 ft, 1 ft = 12 in, 1 hr = 60 min, 1 min = 60 sec
    python scripts/convert_units.py m in 2
    answer = 78.72

    python scripts/convert_units.py in hr 13
    not convertible!

    # Show the unit chain used
    python scripts/convert_units.py sec hr 3600 --explain

    # Facts from a table with from,to,rate columns
    python scripts/convert_units.py m in 2 --facts facts.csv

    # Print every pairwise multiplier instead of answering a query
    python scripts/convert_units.py --table

Exit status:
    0 converted, 1 not convertible, 2 invalid input

Environment Variables:
    UNITGRAPH_CONFIG_PATH: YAML config with vocabulary and facts
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from unitgraph.conversions.conversionapi import (
    conversion_table,
    load_conversion_config,
    load_facts,
)
from unitgraph.conversions.conversiongraph import ConversionGraph
from unitgraph.conversions.conversionunits import InvalidUnitError, UnitConversion
from unitgraph.graph.weightedgraph import STRATEGIES


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a value between units using known conversion facts",
    )
    parser.add_argument("from_unit", nargs="?", help="Unit to convert from (e.g. m)")
    parser.add_argument("to_unit", nargs="?", help="Unit to convert to (e.g. in)")
    parser.add_argument("value", nargs="?", type=float, help="Amount of from_unit")
    parser.add_argument("--facts", type=Path, help="Fact table (.csv/.parquet) with from,to,rate columns")
    parser.add_argument("--config", type=Path, help="YAML config with vocabulary and facts")
    parser.add_argument("--strategy", choices=STRATEGIES, default="bfs", help="Path search order")
    parser.add_argument("--explain", action="store_true", help="Print the unit chain used")
    parser.add_argument("--table", action="store_true", help="Print all pairwise multipliers")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.table and (args.from_unit is None or args.to_unit is None or args.value is None):
        parser.error("from_unit, to_unit and value are required unless --table is given")

    try:
        config = load_conversion_config(args.config)
        vocabulary = config["vocabulary"]

        if args.facts:
            facts = load_facts(args.facts, vocabulary)
        else:
            facts = [
                UnitConversion.from_tokens(f, t, rate, vocabulary)
                for f, t, rate in config["facts"]
            ]
        graph = ConversionGraph(facts, vocabulary=vocabulary, strategy=args.strategy)

        if args.table:
            print(conversion_table(graph).to_string())
            return 0

        query = UnitConversion.from_tokens(args.from_unit, args.to_unit, args.value, vocabulary)
    except (InvalidUnitError, FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    result = graph.convert(query)
    print(result.format(config["precision"]))

    if args.explain and result.is_convertible:
        print(" -> ".join(graph.explain(query)))

    return 0 if result.is_convertible else 1


if __name__ == "__main__":
    sys.exit(main())
