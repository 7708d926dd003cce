"""Tests for the conversion API: config, fact tables and conversion tables.

Run with: pytest tests/test_conversionapi.py -v
"""

import math

import pandas as pd
import pytest

from unitgraph.conversions.conversionapi import (
    build_conversion_graph,
    clear_cache,
    conversion_table,
    convert_units,
    facts_from_frame,
    load_conversion_config,
    load_example_graph,
    load_facts,
)
from unitgraph.conversions.conversionunits import InvalidUnitError, Unit


CUSTOM_CONFIG = """
vocabulary: [kg, lb, oz]
facts:
  - {from: kg, to: lb, rate: 2.20462}
  - {from: lb, to: oz, rate: 16}
precision: 3
"""


# ============================================================================
# Configuration
# ============================================================================

class TestLoadConversionConfig:
    """Test YAML configuration loading"""

    def test_packaged_config(self):
        config = load_conversion_config()
        assert config["vocabulary"] == frozenset({"m", "in", "ft", "hr", "min", "sec"})
        assert ("m", "ft", 3.28) in config["facts"]
        assert len(config["facts"]) == 4
        assert config["precision"] == 10

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "mass.yaml"
        path.write_text(CUSTOM_CONFIG)
        config = load_conversion_config(path)
        assert config["vocabulary"] == frozenset({"kg", "lb", "oz"})
        assert config["facts"][1] == ("lb", "oz", 16.0)
        assert config["precision"] == 3

    def test_env_var(self, tmp_path, monkeypatch):
        path = tmp_path / "mass.yaml"
        path.write_text(CUSTOM_CONFIG)
        monkeypatch.setenv("UNITGRAPH_CONFIG_PATH", str(path))
        assert "kg" in load_conversion_config()["vocabulary"]

    def test_config_is_cached(self, tmp_path):
        path = tmp_path / "mass.yaml"
        path.write_text(CUSTOM_CONFIG)
        first = load_conversion_config(path)
        path.write_text(CUSTOM_CONFIG.replace("oz]", "oz, g]"))
        assert load_conversion_config(path) == first
        assert "g" not in load_conversion_config(path)["vocabulary"]

        clear_cache()
        assert "g" in load_conversion_config(path)["vocabulary"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_conversion_config(tmp_path / "missing.yaml")

    def test_missing_vocabulary(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("facts: []\n")
        with pytest.raises(ValueError, match="vocabulary"):
            load_conversion_config(path)

    def test_fact_missing_key(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("vocabulary: [a, b]\nfacts:\n  - {from: a, to: b}\n")
        with pytest.raises(ValueError, match=r"Fact 0 .* missing keys: \['rate'\]"):
            load_conversion_config(path)

    def test_fact_not_a_mapping(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("vocabulary: [a, b]\nfacts:\n  - [a, b, 2]\n")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_conversion_config(path)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("vocabulary: [a, b\nfacts: {\n")
        with pytest.raises(ValueError, match="not valid YAML"):
            load_conversion_config(path)

    def test_cached_config_cannot_be_mutated(self):
        """Callers get immutable facts and a fresh dict each time"""
        config = load_conversion_config()
        assert isinstance(config["facts"], tuple)
        with pytest.raises(AttributeError):
            config["facts"].append(("m", "in", 39.36))

        config["facts"] = ()
        assert len(load_conversion_config()["facts"]) == 4

    def test_vocabulary_without_facts(self, tmp_path):
        path = tmp_path / "vocab.yaml"
        path.write_text("vocabulary: [a, b]\n")
        config = load_conversion_config(path)
        assert config["facts"] == ()
        assert config["precision"] == 10


# ============================================================================
# Building and querying
# ============================================================================

class TestBuildConversionGraph:
    """Test building graphs from raw triples"""

    def test_reference_example_graph(self):
        graph = load_example_graph()
        assert str(convert_units(graph, "m", "in", 2.0)) == "answer = 78.72"
        assert convert_units(graph, "in", "m", 13.0).value == pytest.approx(0.3302846, rel=1e-6)
        assert convert_units(graph, "sec", "hr", 3600.0).value == pytest.approx(1.0)
        assert str(convert_units(graph, "in", "hr", 13.0)) == "not convertible!"

    def test_uses_configured_vocabulary_by_default(self):
        graph = build_conversion_graph([("hr", "min", 60.0)])
        assert graph.vocabulary == load_conversion_config()["vocabulary"]

    def test_invalid_fact_token_rejects_whole_build(self, reference_vocabulary):
        with pytest.raises(InvalidUnitError) as exc_info:
            build_conversion_graph(
                [("m", "ft", 3.28), ("ft", "yd", 1 / 3.0)],
                reference_vocabulary,
            )
        assert exc_info.value.token == "yd"

    def test_custom_config_graph(self, tmp_path):
        path = tmp_path / "mass.yaml"
        path.write_text(CUSTOM_CONFIG)
        graph = load_example_graph(path)
        assert convert_units(graph, "kg", "oz", 1.0).value == pytest.approx(35.27392)
        with pytest.raises(InvalidUnitError):
            convert_units(graph, "m", "kg", 1.0)


# ============================================================================
# Fact tables
# ============================================================================

class TestFactTables:
    """Test loading facts from pandas-readable tables"""

    def test_facts_from_frame(self, reference_vocabulary):
        df = pd.DataFrame({"from": ["m", "hr"], "to": ["ft", "min"], "rate": [3.28, 60]})
        facts = facts_from_frame(df, reference_vocabulary)
        assert len(facts) == 2
        assert facts[0].from_unit == Unit("m")
        assert facts[1].value == 60.0

    def test_missing_columns(self, reference_vocabulary):
        df = pd.DataFrame({"from": ["m"], "to": ["ft"]})
        with pytest.raises(ValueError, match="Missing required columns"):
            facts_from_frame(df, reference_vocabulary)

    def test_invalid_token_in_table(self, reference_vocabulary):
        df = pd.DataFrame({"from": ["m"], "to": ["parsec"], "rate": [1.0]})
        with pytest.raises(InvalidUnitError):
            facts_from_frame(df, reference_vocabulary)

    def test_load_csv(self, tmp_path, reference_vocabulary):
        path = tmp_path / "facts.csv"
        path.write_text("from,to,rate\nm,ft,3.28\nft,in,12\n")
        facts = load_facts(path, reference_vocabulary)
        graph = build_conversion_graph(
            [(f.from_unit.token, f.to_unit.token, f.value) for f in facts],
            reference_vocabulary,
        )
        assert graph.convert_tokens("m", "in", 2.0).value == pytest.approx(78.72)

    def test_load_parquet(self, tmp_path, reference_vocabulary):
        path = tmp_path / "facts.parquet"
        pd.DataFrame({"from": ["hr"], "to": ["min"], "rate": [60.0]}).to_parquet(path)
        facts = load_facts(path, reference_vocabulary)
        assert facts[0].to_unit == Unit("min")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "facts.json"
        path.write_text("[]")
        with pytest.raises(ValueError, match="Unsupported file format"):
            load_facts(path)

    def test_missing_table(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_facts(tmp_path / "nope.csv")


# ============================================================================
# Conversion tables
# ============================================================================

class TestConversionTable:
    """Test pairwise multiplier tables"""

    def test_full_table(self, reference_graph):
        table = conversion_table(reference_graph)
        assert table.shape == (6, 6)
        assert table.loc["m", "in"] == pytest.approx(39.36)
        assert table.loc["hr", "sec"] == pytest.approx(3600.0)
        assert math.isnan(table.loc["m", "sec"])

    def test_diagonal_is_one(self, reference_graph):
        table = conversion_table(reference_graph)
        for unit in table.index:
            assert table.loc[unit, unit] == 1.0

    def test_selected_units(self, reference_graph):
        table = conversion_table(reference_graph, ["ft", "in"])
        assert list(table.index) == ["ft", "in"]
        assert table.loc["in", "ft"] == pytest.approx(1 / 12.0)
