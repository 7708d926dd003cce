"""Shared test fixtures and utilities for unitgraph tests."""

import pytest

from unitgraph.conversions.conversionapi import build_conversion_graph, clear_cache


REFERENCE_VOCABULARY = frozenset({"m", "in", "ft", "hr", "min", "sec"})

REFERENCE_FACTS = [
    ("m", "ft", 3.28),
    ("ft", "in", 12.0),
    ("hr", "min", 60.0),
    ("min", "sec", 60.0),
]


@pytest.fixture
def reference_facts():
    """Fixture providing the reference (from, to, rate) triples.

    1 m = 3.28 ft, 1 ft = 12 in, 1 hr = 60 min, 1 min = 60 sec
    """
    return list(REFERENCE_FACTS)


@pytest.fixture
def reference_vocabulary():
    """Fixture providing the reference unit vocabulary."""
    return REFERENCE_VOCABULARY


@pytest.fixture
def reference_graph():
    """Fixture providing a ConversionGraph built from the reference facts.

    Built explicitly per test rather than shared as module state.
    """
    return build_conversion_graph(REFERENCE_FACTS, REFERENCE_VOCABULARY)


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate tests from UNITGRAPH_CONFIG_PATH and the config cache."""
    monkeypatch.delenv("UNITGRAPH_CONFIG_PATH", raising=False)
    clear_cache()
    yield
    clear_cache()
