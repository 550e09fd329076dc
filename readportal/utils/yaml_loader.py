"""
YAML loader utility for ReadPortal.

Loads YAML documents (catalog, configuration) from disk.
"""

from pathlib import Path
from typing import Any

import yaml


# Default data directory (relative to project root)
DATA_DIR = Path(__file__).parent.parent.parent / "data"


def load_yaml(path: Path) -> Any:
    """
    Load a YAML document.

    Args:
        path: Path to the .yaml file

    Returns:
        Parsed YAML content (None for an empty file)

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)
