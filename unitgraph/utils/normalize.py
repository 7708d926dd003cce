"""Shared text normalization utilities for unit tokens."""

import unicodedata


def normalize_token(s: str) -> str:
    """Normalize a raw unit token before vocabulary lookup.

    Transformations:
      1. Unicode normalization (NFKC), so full-width or compatibility
         characters compare equal to their plain forms
      2. Trim surrounding whitespace

    Case is preserved: vocabularies are case-sensitive ("m" and "M" may
    name different units).

    Examples:
        >>> normalize_token("  ft ")
        'ft'

        >>> normalize_token("ｍ")
        'm'
    """
    if not s:
        return ""

    return unicodedata.normalize("NFKC", s).strip()


__all__ = [
    "normalize_token",
]
