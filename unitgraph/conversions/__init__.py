"""Conversions module for derived unit conversion.

This module answers "convert X units of A to units of B" from a small set
of known pairwise facts, including conversions never stated directly
(e.g. m -> in through ft).

Public API:
    build_conversion_graph(triples, vocabulary=None) -> ConversionGraph
        Validate raw (from, to, rate) triples and build a graph

    convert_units(graph, from_token, to_token, value) -> ConversionResult
        Convert a value, "not convertible" when no path exists

    load_conversion_config(path=None) -> dict
        Vocabulary, reference facts and display precision

    load_facts(path, vocabulary=None) -> list[UnitConversion]
        Read facts from a .csv or .parquet table

    conversion_table(graph, units=None) -> pd.DataFrame
        Pairwise multipliers between units

Key Principles:
1. Unknown unit tokens are rejected with InvalidUnitError
2. Missing paths are a normal, absent result
3. Graphs are immutable once built

Examples:
    >>> from unitgraph.conversions import load_example_graph, convert_units
    >>>
    >>> graph = load_example_graph()
    >>> str(convert_units(graph, "m", "in", 2.0))
    'answer = 78.72'
    >>> str(convert_units(graph, "in", "hr", 13.0))
    'not convertible!'
"""

from .conversionunits import (
    DEFAULT_VOCABULARY,
    NOT_CONVERTIBLE,
    InvalidUnitError,
    Unit,
    UnitConversion,
    ConversionResult,
    validate_unit,
)
from .conversiongraph import ConversionGraph
from .conversionapi import (
    load_conversion_config,
    clear_cache,
    build_conversion_graph,
    load_example_graph,
    convert_units,
    facts_from_frame,
    load_facts,
    conversion_table,
)

__all__ = [
    "DEFAULT_VOCABULARY",
    "NOT_CONVERTIBLE",
    "InvalidUnitError",
    "Unit",
    "UnitConversion",
    "ConversionResult",
    "validate_unit",
    "ConversionGraph",
    "load_conversion_config",
    "clear_cache",
    "build_conversion_graph",
    "load_example_graph",
    "convert_units",
    "facts_from_frame",
    "load_facts",
    "conversion_table",
]
