"""Shared utilities for the unitgraph package."""

from unitgraph.utils.dataloader import (
    find_data_file,
    load_yaml_file,
    load_parquet_or_csv,
    format_not_found_error,
)
from unitgraph.utils.normalize import (
    normalize_token,
)

__all__ = [
    # Data loading
    "find_data_file",
    "load_yaml_file",
    "load_parquet_or_csv",
    "format_not_found_error",
    # Normalization
    "normalize_token",
]
