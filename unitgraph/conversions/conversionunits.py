"""Unit tokens, conversion facts and conversion results.

A Unit is only ever created through vocabulary validation: the vocabulary
is passed in explicitly, there is no process-wide unit registry.

Key Principles:
1. An unknown token is an input error, raised at construction
2. A missing conversion path is a normal result, never an error
3. All value objects are immutable
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Optional

# ---- Optional imports with helpful error messages ----
try:
    from rapidfuzz import fuzz, process
except ImportError as e:
    raise ImportError("rapidfuzz not installed. pip install rapidfuzz") from e

from unitgraph.utils.normalize import normalize_token

# Fallback vocabulary, matching the packaged conversionconfig.yaml
DEFAULT_VOCABULARY = frozenset({"m", "in", "ft", "hr", "min", "sec"})

# Minimum WRatio score for a "did you mean" suggestion
SUGGESTION_THRESHOLD = 60

NOT_CONVERTIBLE = "not convertible!"


class InvalidUnitError(ValueError):
    """Raised when a unit token is not part of the recognized vocabulary."""

    def __init__(self, token: str, vocabulary: Collection[str]):
        self.token = token
        self.vocabulary = frozenset(vocabulary)
        self.suggestion = suggest_unit(token, self.vocabulary)

        message = f"Received invalid unit value {token!r}. Valid: {sorted(self.vocabulary)}"
        if self.suggestion:
            message += f". Did you mean {self.suggestion!r}?"
        super().__init__(message)


def suggest_unit(token: str, vocabulary: Collection[str]) -> Optional[str]:
    """Return the closest vocabulary token to `token`, or None.

    Examples:
        >>> suggest_unit("secs", {"m", "sec", "hr"})
        'sec'
    """
    if not token or not vocabulary:
        return None

    match = process.extractOne(
        token,
        list(vocabulary),
        scorer=fuzz.WRatio,
        score_cutoff=SUGGESTION_THRESHOLD,
    )
    return match[0] if match else None


def validate_unit(token: str, vocabulary: Collection[str] = DEFAULT_VOCABULARY) -> str:
    """Normalize `token` and check it against `vocabulary`.

    Returns:
        The normalized token

    Raises:
        InvalidUnitError: If the normalized token is not in the vocabulary
    """
    if not isinstance(token, str):
        raise InvalidUnitError(repr(token), vocabulary)

    normalized = normalize_token(token)
    if normalized not in vocabulary:
        raise InvalidUnitError(token, vocabulary)
    return normalized


@dataclass(frozen=True)
class Unit:
    """A validated unit token. Equality and hashing are by token.

    Build with Unit.from_token(); a ConversionGraph also rejects any unit
    outside its own vocabulary.
    """

    token: str

    @classmethod
    def from_token(cls, token: str, vocabulary: Collection[str] = DEFAULT_VOCABULARY) -> "Unit":
        return cls(validate_unit(token, vocabulary))

    def __str__(self) -> str:
        return self.token


@dataclass(frozen=True)
class UnitConversion:
    """A conversion fact or query: 1 `from_unit` equals `value` `to_unit`.

    As a query, `value` is the amount of `from_unit` to convert.
    """

    from_unit: Unit
    to_unit: Unit
    value: float

    @classmethod
    def from_tokens(
        cls,
        from_token: str,
        to_token: str,
        value: float,
        vocabulary: Collection[str] = DEFAULT_VOCABULARY,
    ) -> "UnitConversion":
        """Build from raw tokens, validating both against `vocabulary`.

        Raises:
            InvalidUnitError: If either token is not in the vocabulary

        Examples:
            >>> UnitConversion.from_tokens("m", "ft", 3.28)
            UnitConversion(from_unit=Unit(token='m'), to_unit=Unit(token='ft'), value=3.28)
        """
        return cls(
            Unit.from_token(from_token, vocabulary),
            Unit.from_token(to_token, vocabulary),
            float(value),
        )

    def as_connection(self):
        """(origin, destination, weight) triple for graph construction."""
        return (self.from_unit, self.to_unit, self.value)


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a conversion query: a value, or None if not convertible."""

    value: Optional[float] = None

    @property
    def is_convertible(self) -> bool:
        return self.value is not None

    def __bool__(self) -> bool:
        return self.is_convertible

    def format(self, precision: int = 10) -> str:
        """Render as 'answer = <value>' or 'not convertible!'.

        The value is rounded to `precision` significant digits, so float
        noise is hidden without flattening tiny answers to zero.

        Examples:
            >>> ConversionResult(78.71999999999999).format()
            'answer = 78.72'
            >>> ConversionResult(2.777777777777778e-07).format(6)
            'answer = 2.77778e-07'
            >>> ConversionResult(None).format()
            'not convertible!'
        """
        if self.value is None:
            return NOT_CONVERTIBLE
        return f"answer = {float(f'{self.value:.{precision}g}')}"

    def __str__(self) -> str:
        return self.format()


__all__ = [
    "DEFAULT_VOCABULARY",
    "NOT_CONVERTIBLE",
    "InvalidUnitError",
    "suggest_unit",
    "validate_unit",
    "Unit",
    "UnitConversion",
    "ConversionResult",
]
