"""Shared data loading utilities for configuration and fact tables.

This module provides the loading patterns used by the conversions module:
locating packaged data files, reading YAML configuration, and reading
tabular fact files in parquet or CSV form.
"""

from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd


def find_data_file(
    module_file: str,
    filenames: List[str],
    extra_dirs: Optional[List[Path]] = None,
) -> Optional[Path]:
    """Find data file by searching standard locations.

    Search priority:
    1. Module-local data: {module_dir}/data/
    2. Any extra directories, in the order given

    Args:
        module_file: __file__ from the calling module (e.g., __file__)
        filenames: List of candidate filenames to search for (e.g., ['conversionconfig.yaml'])
        extra_dirs: Additional directories to search after module-local data

    Returns:
        Path to found file, or None if not found

    Examples:
        >>> # From conversions/conversionapi.py
        >>> path = find_data_file(__file__, ['conversionconfig.yaml'])
    """
    search_dirs = [Path(module_file).parent / "data"]
    search_dirs.extend(Path(d) for d in (extra_dirs or []))

    for data_dir in search_dirs:
        for filename in filenames:
            p = data_dir / filename
            if p.exists():
                return p

    return None


def load_yaml_file(path: Path) -> dict:
    """Load and parse YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML data as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file does not exist
    """
    import yaml

    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def load_parquet_or_csv(file_path: Path) -> pd.DataFrame:
    """Load DataFrame from parquet or CSV file based on extension.

    Args:
        file_path: Path to parquet or CSV file

    Returns:
        Loaded DataFrame

    Raises:
        ValueError: If file extension is not .parquet or .csv
    """
    if file_path.suffix == ".parquet":
        return pd.read_parquet(file_path)
    elif file_path.suffix == ".csv":
        return pd.read_csv(file_path)
    else:
        raise ValueError(f"Unsupported file format: {file_path.suffix}. Use .parquet or .csv")


def format_not_found_error(
    what: str,
    searched_locations: List[Tuple[str, Path]],
    fix_instructions: List[str],
) -> str:
    """Format a helpful FileNotFoundError message.

    Args:
        what: Name of the missing data (e.g., 'conversion config')
        searched_locations: List of (description, path) tuples for locations searched
        fix_instructions: List of commands/instructions to fix the issue

    Returns:
        Formatted error message string
    """
    lines = [f"No {what} found in standard locations.\n"]

    lines.append("Searched:")
    for i, (desc, path) in enumerate(searched_locations, 1):
        lines.append(f"  {i}. {desc}: {path}")

    lines.append("\nTo fix:")
    for instruction in fix_instructions:
        lines.append(f"  • {instruction}")

    return "\n".join(lines)


__all__ = [
    "find_data_file",
    "load_yaml_file",
    "load_parquet_or_csv",
    "format_not_found_error",
]
