"""ReadPortal utilities."""

from .yaml_loader import DATA_DIR, load_yaml
from .log_setup import LOG_FORMAT, configure_logging

__all__ = [
    "DATA_DIR",
    "load_yaml",
    "LOG_FORMAT",
    "configure_logging",
]
