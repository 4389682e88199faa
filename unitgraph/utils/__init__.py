"""Shared utilities for unitgraph package."""

from unitgraph.utils.dataloader import (
    find_data_file,
    load_parquet_or_csv,
    format_not_found_error,
)
from unitgraph.utils.suggest import (
    score_unit,
    suggest_units,
)
from unitgraph.utils.build_utils import (
    load_yaml_file,
    yaml_facts,
)

__all__ = [
    # Data loading
    "find_data_file",
    "load_parquet_or_csv",
    "format_not_found_error",
    # Suggestions
    "score_unit",
    "suggest_units",
    # Build utilities
    "load_yaml_file",
    "yaml_facts",
]
