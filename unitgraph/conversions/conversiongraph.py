"""Conversion graph: unit facts in, derived conversions out.

Wraps the generic weighted graph with the unit vocabulary. Facts are
validated when they are created (see conversionunits) and checked again
against the graph's own vocabulary, as is every query.
"""

from __future__ import annotations

import logging
from typing import Collection, Iterable, List, Optional

from unitgraph.conversions.conversionunits import (
    DEFAULT_VOCABULARY,
    ConversionResult,
    InvalidUnitError,
    Unit,
    UnitConversion,
)
from unitgraph.graph.weightedgraph import STRATEGIES, Graph

logger = logging.getLogger(__name__)


class ConversionGraph:
    """Answers "convert X units of A to units of B" from pairwise facts.

    Built once from the full fact list, read-only afterwards.

    Examples:
        >>> graph = ConversionGraph([
        ...     UnitConversion.from_tokens("m", "ft", 3.28),
        ...     UnitConversion.from_tokens("ft", "in", 12.0),
        ... ])
        >>> str(graph.convert_tokens("m", "in", 2.0))
        'answer = 78.72'
        >>> str(graph.convert_tokens("m", "sec", 2.0))
        'not convertible!'
    """

    def __init__(
        self,
        facts: Iterable[UnitConversion],
        vocabulary: Optional[Collection[str]] = None,
        strategy: str = "bfs",
    ):
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy: {strategy}. Use 'bfs' or 'dfs'")

        self.vocabulary = frozenset(vocabulary) if vocabulary is not None else DEFAULT_VOCABULARY
        self.strategy = strategy
        facts = list(facts)
        for fact in facts:
            self._check_units(fact)

        self.graph: Graph[Unit] = Graph(fact.as_connection() for fact in facts)
        logger.debug(f"Conversion graph covers units: {sorted(self.units)}")

    def __repr__(self) -> str:
        return f"ConversionGraph(units={sorted(self.units)})"

    def _check_units(self, conversion: UnitConversion) -> None:
        """Raise InvalidUnitError unless both units are in this graph's vocabulary."""
        for unit in (conversion.from_unit, conversion.to_unit):
            if unit.token not in self.vocabulary:
                raise InvalidUnitError(unit.token, self.vocabulary)

    @property
    def units(self) -> List[str]:
        """Tokens of every unit appearing in at least one fact."""
        return [unit.token for unit in self.graph.values]

    def convert(self, query: UnitConversion) -> ConversionResult:
        """Convert `query.value` units of `query.from_unit` to `query.to_unit`.

        Raises:
            InvalidUnitError: If either unit is not in this graph's vocabulary
        """
        self._check_units(query)
        return ConversionResult(
            self.graph.fold_path(query.from_unit, query.to_unit, query.value, strategy=self.strategy)
        )

    def convert_tokens(self, from_token: str, to_token: str, value: float) -> ConversionResult:
        """Validate raw tokens against this graph's vocabulary, then convert.

        Raises:
            InvalidUnitError: If either token is not in the vocabulary
        """
        return self.convert(UnitConversion.from_tokens(from_token, to_token, value, self.vocabulary))

    def is_convertible(self, from_token: str, to_token: str) -> bool:
        return self.convert_tokens(from_token, to_token, 1.0).is_convertible

    def explain(self, query: UnitConversion) -> Optional[List[str]]:
        """Return the unit tokens along the path used for `query`, or None."""
        self._check_units(query)
        path = self.graph.find_path(query.from_unit, query.to_unit, strategy=self.strategy)
        if path is None:
            return None
        return [unit.token for unit in self.graph.path_values(query.from_unit, path)]

    def components(self) -> List[List[str]]:
        """Groups of mutually convertible unit tokens."""
        return [sorted(unit.token for unit in group) for group in self.graph.components()]


__all__ = [
    "ConversionGraph",
]
