"""Unit Graph - derived unit conversion from pairwise facts

Public API for building conversion graphs and answering conversion queries.

Usage:
    from unitgraph import build_conversion_graph, convert_units

    # Build a graph from known facts: 1 m = 3.28 ft, 1 ft = 12 in
    graph = build_conversion_graph([("m", "ft", 3.28), ("ft", "in", 12.0)])

    # Derived conversion through the ft hop
    result = convert_units(graph, "m", "in", 2.0)  # answer = 78.72

    # Units in unconnected groups are not convertible
    result = convert_units(graph, "m", "sec", 1.0)  # not convertible!

See unitgraph/conversions/__init__.py for full documentation.
"""

__version__ = "0.1.0"

# ============================================================================
# Conversion API
# ============================================================================
# Primary interface: unitgraph.conversions.conversionapi
# Domain types: unitgraph.conversions.conversionunits

from .conversions.conversionapi import (
    build_conversion_graph,  # Primary API - validate facts and build a graph
    convert_units,           # Convert a value between two unit tokens
    load_example_graph,      # Reference graph from the packaged config
    load_conversion_config,  # Vocabulary, facts and precision
    load_facts,              # Facts from a .csv/.parquet table
    conversion_table,        # Pairwise multiplier DataFrame
)
from .conversions.conversiongraph import ConversionGraph
from .conversions.conversionunits import (
    InvalidUnitError,
    Unit,
    UnitConversion,
    ConversionResult,
)

# ============================================================================
# Graph API
# ============================================================================

from .graph.weightedgraph import Graph

__all__ = [
    "__version__",
    "build_conversion_graph",
    "convert_units",
    "load_example_graph",
    "load_conversion_config",
    "load_facts",
    "conversion_table",
    "ConversionGraph",
    "InvalidUnitError",
    "Unit",
    "UnitConversion",
    "ConversionResult",
    "Graph",
]
