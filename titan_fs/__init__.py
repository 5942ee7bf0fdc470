"""
Titan FS — recursive filesystem operations for Titan automation tools
---------------------------------------------------------------------

Subpackages:
  base    : logging setup, path helpers, YAML file I/O
  shared  : configuration loader, progress bars
  tree    : copy / move / remove / list / hash / substitute / batch rename
"""

from titan_fs.base.fs import ensure_dir as mkdir
from titan_fs.tree import *  # noqa: F401,F403
from titan_fs.tree import __all__ as _tree_all

__version__ = "1.0.0"

__all__ = ["mkdir", *_tree_all]
