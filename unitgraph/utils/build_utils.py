"""
Build Utility Functions
-----------------------

Helpers shared by the fact loader and the fact table build script.

Functions:
  - load_yaml_file: Load and parse YAML file
  - yaml_facts: Pull the fact list out of a parsed YAML document
"""

from pathlib import Path
from typing import Any, List


def load_yaml_file(path: Path) -> dict:
    """
    Load and parse YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML data (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file does not exist

    Examples:
        >>> data = load_yaml_file(Path("unitgraph/facts/data/facts.yaml"))
        >>> data['facts'][0]
        {'from': 'm', 'to': 'ft', 'rate': 3.28}
    """
    import yaml

    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def yaml_facts(data: Any, key: str = "facts") -> List[Any]:
    """
    Return the list of fact entries from a parsed YAML document.

    The document is either a mapping with a ``facts`` list or a bare list.

    Raises:
        ValueError: If no fact list can be found
    """
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get(key, []), list):
        return data.get(key, [])
    raise ValueError(f"Expected a '{key}' list in YAML document, got {type(data).__name__}")


__all__ = [
    "load_yaml_file",
    "yaml_facts",
]
