"""Shared data loading utilities for fact tables.

This module locates fact files beside the calling module (or in directories
the caller names) and loads tabular fact data with pandas.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pandas as pd


def find_data_file(
    module_file: str,
    filenames: List[str],
    search_dirs: Iterable[Path] = (),
) -> Optional[Path]:
    """Find data file by searching standard locations.

    Search priority:
    1. Module-local data: {module_dir}/data/
    2. Each of search_dirs, in order

    Within each location, filenames are tried in the given order.

    Args:
        module_file: __file__ from the calling module
        filenames: Candidate filenames (e.g., ['facts.parquet', 'facts.yaml'])
        search_dirs: Extra directories to try after the module data directory

    Returns:
        Path to found file, or None if not found

    Examples:
        >>> # From facts/factapi.py (bundled facts live in facts/data/)
        >>> path = find_data_file(__file__, ['facts.parquet', 'facts.yaml'])
    """
    candidates = [Path(module_file).parent / "data"]
    candidates.extend(Path(d) for d in search_dirs)

    for data_dir in candidates:
        for filename in filenames:
            p = data_dir / filename
            if p.exists():
                return p

    return None


def load_parquet_or_csv(file_path: Path, **csv_options) -> pd.DataFrame:
    """Load DataFrame from parquet or CSV file based on extension.

    Extra keyword arguments are passed to ``pd.read_csv`` for CSV files.

    Raises:
        ValueError: If file extension is not .parquet or .csv
    """
    if file_path.suffix == ".parquet":
        return pd.read_parquet(file_path)
    elif file_path.suffix == ".csv":
        return pd.read_csv(file_path, **csv_options)
    else:
        raise ValueError(f"Unsupported file format: {file_path.suffix}. Use .parquet or .csv")


def format_not_found_error(
    subdirectory: str,
    searched_locations: List[Tuple[str, Path]],
    fix_instructions: List[str],
) -> str:
    """Format a helpful FileNotFoundError message.

    Args:
        subdirectory: Data subdirectory name (e.g., 'facts')
        searched_locations: List of (description, path) tuples for locations searched
        fix_instructions: List of commands/instructions to fix the issue

    Returns:
        Formatted error message string
    """
    lines = [f"No {subdirectory} data found in standard locations.\n"]

    lines.append("Searched:")
    for i, (desc, path) in enumerate(searched_locations, 1):
        lines.append(f"  {i}. {desc}: {path}")

    lines.append("\nTo fix:")
    for instruction in fix_instructions:
        lines.append(f"  • {instruction}")

    return "\n".join(lines)


__all__ = [
    "find_data_file",
    "load_parquet_or_csv",
    "format_not_found_error",
]
