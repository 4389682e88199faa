"""Fact loading API.

Loads conversion facts from YAML, CSV, Parquet or plain-text fact files,
locally or over HTTP, and exposes the bundled demo fact set.

Environment Variables:
    UNITGRAPH_FACTS_PATH: Path or http(s) URL of the default fact file
        (default: bundled unitgraph/facts/data/facts.yaml)
"""

import io
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Iterable, List, Tuple, Union
from urllib.parse import urlparse

import pandas as pd
import requests
import yaml

from unitgraph.facts.factnormalize import fact_from_item, parse_fact_lines
from unitgraph.graph.conversiongraph import ConversionGraph
from unitgraph.graph.grapherrors import Fact, FactParseError
from unitgraph.graph.graphapi import build_graph
from unitgraph.utils.build_utils import load_yaml_file, yaml_facts
from unitgraph.utils.dataloader import (
    find_data_file,
    format_not_found_error,
    load_parquet_or_csv,
)

logger = logging.getLogger(__name__)

FACTS_ENV_VAR = "UNITGRAPH_FACTS_PATH"
FACT_COLUMNS = ["unit_a", "unit_b", "rate"]
DEFAULT_FACT_FILES = ["facts.parquet", "facts.yaml"]

_YAML_SUFFIXES = (".yaml", ".yml")
_TABLE_SUFFIXES = (".csv", ".parquet")

# Unit cells are read verbatim: "NA" or "null" are units, blank cells stay blank
CSV_READ_OPTIONS = {"dtype": {"unit_a": str, "unit_b": str}, "keep_default_na": False}


# ============================================================================
# DataFrame conversion
# ============================================================================

def facts_to_frame(facts: Iterable) -> pd.DataFrame:
    """Tabulate facts as a DataFrame with unit_a, unit_b, rate columns.

    Examples:
        >>> facts_to_frame([("m", "ft", 3.28)])
          unit_a unit_b  rate
        0      m     ft  3.28
    """
    rows = [tuple(fact_from_item(item)) for item in facts]
    return pd.DataFrame(rows, columns=FACT_COLUMNS)


def frame_to_facts(df: pd.DataFrame) -> List[Fact]:
    """Read facts out of a DataFrame in row order.

    Raises:
        ValueError: If a required column is missing
        FactParseError: If a unit cell is blank or missing
    """
    missing = [col for col in FACT_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(
            f"Fact table is missing columns: {', '.join(missing)}. "
            f"Expected: {', '.join(FACT_COLUMNS)}"
        )

    facts = []
    rows = df[FACT_COLUMNS].itertuples(index=False, name=None)
    for row, (unit_a, unit_b, rate) in enumerate(rows):
        for column, unit in (("unit_a", unit_a), ("unit_b", unit_b)):
            if isinstance(unit, str):
                blank = not unit.strip()
            else:
                blank = pd.api.types.is_scalar(unit) and pd.isna(unit)
            if blank:
                raise FactParseError(f"Row {row}: {column} is blank (got {unit!r})")
        facts.append(Fact(unit_a, unit_b, rate))
    return facts


# ============================================================================
# Loading
# ============================================================================

def _is_url(source) -> bool:
    return isinstance(source, str) and urlparse(source).scheme in ("http", "https")


def _parse_yaml_text(text: str, source) -> List[Fact]:
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise FactParseError(f"Invalid YAML in {source}: {e}") from e
    return [fact_from_item(item) for item in yaml_facts(data)]


def _load_url(url: str) -> List[Fact]:
    """Download a fact file and parse it according to the URL's suffix."""
    try:
        response = requests.get(url, timeout=30)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.warning(f"Failed to download facts from {url}: {e}")
        raise

    suffix = Path(urlparse(url).path).suffix.lower()
    if suffix in _YAML_SUFFIXES:
        return _parse_yaml_text(response.text, url)
    if suffix == ".csv":
        return frame_to_facts(pd.read_csv(io.StringIO(response.text), **CSV_READ_OPTIONS))
    if suffix == ".parquet":
        return frame_to_facts(pd.read_parquet(io.BytesIO(response.content)))
    return parse_fact_lines(response.text.splitlines())


def _load_path(path: Path) -> List[Fact]:
    if not path.exists():
        raise FileNotFoundError(f"Fact file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in _YAML_SUFFIXES:
        try:
            data = load_yaml_file(path)
        except yaml.YAMLError as e:
            raise FactParseError(f"Invalid YAML in {path}: {e}") from e
        return [fact_from_item(item) for item in yaml_facts(data)]
    if suffix in _TABLE_SUFFIXES:
        return frame_to_facts(load_parquet_or_csv(path, **CSV_READ_OPTIONS))
    with open(path, "r", encoding="utf-8") as f:
        return parse_fact_lines(f)


def load_facts(source: Union[str, Path]) -> List[Fact]:
    """Load an ordered list of facts from a file or URL.

    Supported formats (chosen by suffix):
      - .yaml/.yml: ``facts:`` list of {from, to, rate} mappings or fact strings
      - .csv/.parquet: columns unit_a, unit_b, rate
      - anything else: one fact per line ("m = 3.28 ft"), ``#`` comments allowed

    Facts are parsed but not validated; ``build_graph`` decides what to accept.

    Args:
        source: Local path or http(s) URL

    Returns:
        List of Fact tuples in file order

    Raises:
        FileNotFoundError: If a local file does not exist
        requests.exceptions.RequestException: If a download fails
        FactParseError: If a fact entry cannot be interpreted or the YAML is malformed
        ValueError: If a table lacks the required columns
    """
    if _is_url(source):
        facts = _load_url(source)
    else:
        facts = _load_path(Path(source))

    logger.info(f"Loaded {len(facts)} facts from {source}")
    return facts


def _default_fact_source() -> Union[str, Path]:
    env_path = os.environ.get(FACTS_ENV_VAR)
    if env_path:
        return env_path

    found = find_data_file(module_file=__file__, filenames=DEFAULT_FACT_FILES)
    if found is None:
        raise FileNotFoundError(
            format_not_found_error(
                "facts",
                [
                    ("Environment variable", os.environ.get(FACTS_ENV_VAR, "Not set")),
                    ("Module data", Path(__file__).parent / "data"),
                ],
                [
                    f"Set {FACTS_ENV_VAR} to a fact file or URL",
                    "Reinstall unitgraph to restore the bundled facts.yaml",
                ],
            )
        )
    return found


@lru_cache(maxsize=1)
def load_default_facts() -> Tuple[Fact, ...]:
    """Load the default fact set once and reuse it.

    Uses UNITGRAPH_FACTS_PATH when set, otherwise the bundled demo facts
    (m, ft, in, hr, min, sec). Call ``load_default_facts.cache_clear()`` after
    changing the environment variable.

    Returns:
        Tuple of facts (immutable, so the cached value cannot drift)
    """
    return tuple(load_facts(_default_fact_source()))


def build_default_graph(**kwargs) -> ConversionGraph:
    """Build a fresh graph from the default fact set.

    Keyword arguments are passed to ``build_graph`` (strict, freeze).
    """
    return build_graph(load_default_facts(), **kwargs)


__all__ = [
    "FACTS_ENV_VAR",
    "FACT_COLUMNS",
    "facts_to_frame",
    "frame_to_facts",
    "load_facts",
    "load_default_facts",
    "build_default_graph",
]
