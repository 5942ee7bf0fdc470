"""Configuration and progress helpers shared across titan_fs."""

from .loader import TreeConfig, load_config, load_logging_config, load_tree_config
from .utils import Progress

__all__ = [
    "Progress",
    "TreeConfig",
    "load_config",
    "load_logging_config",
    "load_tree_config",
]
