"""Public API for unit conversion.

This module provides the main entry points: loading the conversion
configuration, building a conversion graph from raw (from, to, rate)
triples or fact tables, and answering conversion queries.

Key Design Principles:
1. The vocabulary is configuration, passed explicitly to validation
2. Graphs are built explicitly by the caller, never shared implicitly
3. Unknown units are rejected at the boundary with InvalidUnitError
4. "Not convertible" is a normal result, never an exception
"""

import logging
import math
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Collection, Dict, Iterable, List, Optional, Sequence, Tuple, Union

import pandas as pd
import yaml

from unitgraph.conversions.conversiongraph import ConversionGraph
from unitgraph.conversions.conversionunits import (
    ConversionResult,
    UnitConversion,
)
from unitgraph.utils.dataloader import (
    find_data_file,
    format_not_found_error,
    load_parquet_or_csv,
    load_yaml_file,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "UNITGRAPH_CONFIG_PATH"
CONFIG_FILENAME = "conversionconfig.yaml"
DEFAULT_PRECISION = 10

FACT_COLUMNS = ["from", "to", "rate"]


# ============================================================================
# Configuration
# ============================================================================

def _parse_facts(entries: Any, path: Path) -> Tuple[Tuple[str, str, float], ...]:
    """Turn YAML fact entries into (from, to, rate) triples.

    Raises:
        ValueError: If an entry is not a mapping or lacks from/to/rate
    """
    facts = []
    for i, entry in enumerate(entries or []):
        if not isinstance(entry, dict):
            raise ValueError(f"Fact {i} in {path} must be a mapping with keys {FACT_COLUMNS}")

        missing = [key for key in FACT_COLUMNS if key not in entry]
        if missing:
            raise ValueError(f"Fact {i} in {path} missing keys: {missing}")

        facts.append((str(entry["from"]), str(entry["to"]), float(entry["rate"])))
    return tuple(facts)


@lru_cache(maxsize=8)
def _load_config_file(path: Path) -> Dict[str, Any]:
    try:
        config = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ValueError(f"Conversion config {path} is not valid YAML: {e}") from e

    if not isinstance(config, dict) or not config.get("vocabulary"):
        raise ValueError(f"Conversion config {path} must define a non-empty 'vocabulary'")

    facts = _parse_facts(config.get("facts"), path)

    logger.info(
        f"Loaded conversion config from {path}: "
        f"{len(config['vocabulary'])} units, {len(facts)} facts"
    )
    return {
        "vocabulary": frozenset(str(token) for token in config["vocabulary"]),
        "facts": facts,
        "precision": int(config.get("precision", DEFAULT_PRECISION)),
    }


def load_conversion_config(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """Load the unit vocabulary and reference facts.

    Resolution order:
    1. Explicit `path`
    2. UNITGRAPH_CONFIG_PATH environment variable
    3. Packaged unitgraph/conversions/data/conversionconfig.yaml

    Results are cached per file; call clear_cache() after editing a file.
    Each call returns a fresh dict around the immutable cached values.

    Args:
        path: Optional path to a YAML config file

    Returns:
        {
            "vocabulary": frozenset[str],
            "facts": tuple[tuple[str, str, float], ...],
            "precision": int
        }

    Raises:
        FileNotFoundError: If no config file can be found
        ValueError: If the config is not valid YAML, has no vocabulary,
            or has a fact entry without from/to/rate

    Examples:
        >>> config = load_conversion_config()
        >>> sorted(config["vocabulary"])
        ['ft', 'hr', 'in', 'm', 'min', 'sec']
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)

    if path is None:
        found_path = find_data_file(__file__, [CONFIG_FILENAME])

        if found_path is None:
            error_msg = format_not_found_error(
                what="conversion config",
                searched_locations=[
                    ("Module-local data", Path(__file__).parent / "data"),
                ],
                fix_instructions=[
                    f"Set {CONFIG_ENV_VAR} to a YAML file with 'vocabulary' and 'facts'.",
                    "Reinstall unitgraph to restore the packaged config.",
                ],
            )
            raise FileNotFoundError(error_msg)

        path = found_path

    return dict(_load_config_file(Path(path).resolve()))


def clear_cache() -> None:
    """Clear cached configuration files."""
    _load_config_file.cache_clear()
    logger.info("Cleared conversion config cache")


# ============================================================================
# Building graphs
# ============================================================================

def build_conversion_graph(
    triples: Iterable[Tuple[str, str, float]],
    vocabulary: Optional[Collection[str]] = None,
    strategy: str = "bfs",
) -> ConversionGraph:
    """Build a conversion graph from raw (from, to, rate) triples.

    Every token is validated before the graph is built; one bad token
    rejects the whole fact list.

    Args:
        triples: Iterable of (from_token, to_token, rate)
        vocabulary: Recognized unit tokens. If None, uses the configured vocabulary
        strategy: Path search order, "bfs" or "dfs"

    Returns:
        ConversionGraph ready for queries

    Raises:
        InvalidUnitError: If any token is outside the vocabulary

    Examples:
        >>> graph = build_conversion_graph([("hr", "min", 60.0), ("min", "sec", 60.0)])
        >>> graph.convert_tokens("sec", "hr", 3600.0).value
        1.0
    """
    if vocabulary is None:
        vocabulary = load_conversion_config()["vocabulary"]

    facts = [
        UnitConversion.from_tokens(from_token, to_token, rate, vocabulary)
        for from_token, to_token, rate in triples
    ]
    return ConversionGraph(facts, vocabulary=vocabulary, strategy=strategy)


def load_example_graph(
    config_path: Optional[Union[str, Path]] = None,
    strategy: str = "bfs",
) -> ConversionGraph:
    """Build the reference graph from the configured facts.

    With the packaged config: 1 m = 3.28 ft, 1 ft = 12 in,
    1 hr = 60 min, 1 min = 60 sec.
    """
    config = load_conversion_config(config_path)
    return build_conversion_graph(config["facts"], config["vocabulary"], strategy=strategy)


def convert_units(
    graph: ConversionGraph,
    from_token: str,
    to_token: str,
    value: float,
) -> ConversionResult:
    """Convert `value` units of `from_token` to `to_token` using `graph`.

    Raises:
        InvalidUnitError: If either token is outside the graph's vocabulary

    Examples:
        >>> graph = load_example_graph()
        >>> str(convert_units(graph, "m", "in", 2.0))
        'answer = 78.72'
        >>> str(convert_units(graph, "in", "hr", 13.0))
        'not convertible!'
    """
    return graph.convert_tokens(from_token, to_token, value)


# ============================================================================
# Fact tables
# ============================================================================

def facts_from_frame(
    df: pd.DataFrame,
    vocabulary: Optional[Collection[str]] = None,
) -> List[UnitConversion]:
    """Turn a DataFrame with from/to/rate columns into validated facts.

    Raises:
        ValueError: If a required column is missing
        InvalidUnitError: If any token is outside the vocabulary
    """
    missing = [col for col in FACT_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    if vocabulary is None:
        vocabulary = load_conversion_config()["vocabulary"]

    return [
        UnitConversion.from_tokens(str(row["from"]), str(row["to"]), float(row["rate"]), vocabulary)
        for _, row in df[FACT_COLUMNS].iterrows()
    ]


def load_facts(
    path: Union[str, Path],
    vocabulary: Optional[Collection[str]] = None,
) -> List[UnitConversion]:
    """Load conversion facts from a .csv or .parquet table.

    The table needs `from`, `to` and `rate` columns; each row reads
    "1 <from> = <rate> <to>".

    Examples:
        >>> facts = load_facts("facts.csv")
        >>> graph = ConversionGraph(facts)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    facts = facts_from_frame(load_parquet_or_csv(path), vocabulary)
    logger.info(f"Loaded {len(facts)} facts from {path}")
    return facts


def conversion_table(
    graph: ConversionGraph,
    units: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Square table of multipliers: 1 <row unit> = table.loc[row, col] <col unit>.

    Cells are NaN where the two units are not convertible.

    Args:
        graph: Conversion graph to query
        units: Unit tokens to include (default: every unit in the graph)

    Returns:
        DataFrame indexed and columned by unit token

    Examples:
        >>> table = conversion_table(load_example_graph(), ["m", "ft", "sec"])
        >>> round(table.loc["m", "ft"], 2)
        3.28
    """
    if units is None:
        units = graph.units

    rows = []
    for row_unit in units:
        values = []
        for col_unit in units:
            result = graph.convert_tokens(row_unit, col_unit, 1.0)
            values.append(result.value if result.is_convertible else math.nan)
        rows.append(values)

    return pd.DataFrame(rows, index=list(units), columns=list(units), dtype=float)


__all__ = [
    "CONFIG_ENV_VAR",
    "load_conversion_config",
    "clear_cache",
    "build_conversion_graph",
    "load_example_graph",
    "convert_units",
    "facts_from_frame",
    "load_facts",
    "conversion_table",
]
