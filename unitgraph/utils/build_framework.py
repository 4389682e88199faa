"""
Shared framework for building fact tables from YAML files.

Loads entries from a YAML list, turns each into a row, validates the table
and writes it to Parquet, reporting progress on stdout as it goes.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional

import pandas as pd

from unitgraph.utils.build_utils import load_yaml_file, yaml_facts


@dataclass
class BuildConfig:
    """Configuration for building a table."""

    # Input source (one of these required)
    input_yaml: Optional[Path] = None  # YAML document with a list under yaml_key
    input_data: Optional[List[Any]] = None  # Entries supplied directly

    # Output (required)
    output_parquet: Path = None

    # Callbacks (required)
    process_entry: Callable[[Any], dict] = None  # Convert one entry to a DataFrame row
    validate_data: Callable[[pd.DataFrame], List[str]] = None  # Return validation issues
    generate_summary: Callable[[pd.DataFrame], None] = None  # Print summary stats

    # Metadata
    entity_plural: str = "entries"
    yaml_key: str = "facts"


def build_table(config: BuildConfig) -> int:
    """
    Generic build process for YAML-sourced tables.

    Row order of the input is preserved in the output.

    Returns:
        0 on success, 1 if validation issues found
    """
    if config.input_data is not None:
        print(f"Building {config.entity_plural} table from direct data")
        entries = list(config.input_data)
    elif config.input_yaml is not None:
        print(f"Building {config.entity_plural} table from {config.input_yaml}")
        entries = yaml_facts(load_yaml_file(config.input_yaml), config.yaml_key)
    else:
        raise ValueError("Either input_yaml or input_data must be provided")

    print(f"Processing {len(entries)} {config.entity_plural}...")
    df = pd.DataFrame([config.process_entry(entry) for entry in entries])

    print("\nValidating data...")
    issues = config.validate_data(df)

    if issues:
        print("\n⚠️  Validation issues found:")
        for issue in issues:
            print(f"  - {issue}")
        print()
    else:
        print("✅ All validations passed")

    config.output_parquet.parent.mkdir(parents=True, exist_ok=True)
    print(f"\nWriting {len(df)} {config.entity_plural} to {config.output_parquet}")
    df.to_parquet(config.output_parquet, index=False, engine='pyarrow')

    print("\n" + "=" * 60)
    print("BUILD SUMMARY")
    print("=" * 60)
    print(f"Total {config.entity_plural}: {len(df)}")
    print(f"Output file: {config.output_parquet}")
    print(f"File size: {config.output_parquet.stat().st_size / 1024:.1f} KB")

    config.generate_summary(df)

    if issues:
        print(f"\n⚠️  Build completed with {len(issues)} validation issues")
        return 1
    else:
        print("\n✅ Build completed successfully")
        return 0


def validate_required_fields(df: pd.DataFrame, required_fields: List[str]) -> List[str]:
    """Check for missing or empty required fields."""
    issues = []
    for field in required_fields:
        if field not in df.columns:
            issues.append(f"Missing column: {field}")
            continue
        missing = df[df[field].isna() | (df[field].astype(str).str.strip() == "")]
        if not missing.empty:
            issues.append(f"Missing {field} in rows: {missing.index.tolist()}")
    return issues


__all__ = [
    "BuildConfig",
    "build_table",
    "validate_required_fields",
]
