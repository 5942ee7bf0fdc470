"""Low-level shared utilities for Titan FS."""

from .fs import ensure_dir, ensure_parent
from .logging import get_logger, setup_logging, TitanLogger

__all__ = [
    "ensure_dir",
    "ensure_parent",
    "get_logger",
    "setup_logging",
    "TitanLogger",
]
