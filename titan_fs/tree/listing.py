"""
titan_fs.tree.listing

Directory listings. Names come back in directory-listing order, which the
platform does not guarantee to be sorted.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple

from titan_fs.base.logging import get_logger
from titan_fs.shared.loader import load_tree_config

from .entries import NameFilter, compile_filter

log = get_logger(__name__)

EntryPredicate = Callable[[str, os.stat_result], bool]


def ls(location: Path | str, name_filter: NameFilter = None) -> List[str]:
    """Return the names of the immediate children of ``location``."""
    predicate = compile_filter(name_filter)
    names = os.listdir(location)
    if predicate is None:
        return names
    return [name for name in names if predicate(name)]


def lsdir(location: Path | str, name_filter: NameFilter = None) -> List[str]:
    """Like ``ls`` but keep only directories (symlinks to directories count)."""
    base = Path(location)
    return [name for name in ls(base, name_filter) if (base / name).is_dir()]


def lsfile(location: Path | str, name_filter: NameFilter = None) -> List[str]:
    """Like ``ls`` but keep only non-directory entries."""
    base = Path(location)
    return [name for name in ls(base, name_filter) if not (base / name).is_dir()]


def _stat(path: Path, follow_symlinks: bool) -> os.stat_result:
    if follow_symlinks:
        try:
            return os.stat(path)
        except FileNotFoundError:
            # Dangling link: report the link itself.
            pass
    return os.lstat(path)


def _lsall(
    location: Path,
    follow_symlinks: bool,
    predicate: Optional[EntryPredicate],
    active: Set[Tuple[int, int]],
    out: List[Path],
) -> None:
    for name in os.listdir(location):
        entry = location / name
        st = _stat(entry, follow_symlinks)
        if predicate is not None and not predicate(name, st):
            continue
        out.append(entry)
        if not stat.S_ISDIR(st.st_mode):
            continue

        key = (st.st_dev, st.st_ino)
        if key in active:
            log.warning(f"⚠️ Symlink loop detected, not descending: {entry}")
            continue
        active.add(key)
        try:
            _lsall(entry, follow_symlinks, predicate, active, out)
        finally:
            active.discard(key)


def lsall(
    location: Path | str,
    follow_symlinks: Optional[bool] = None,
    predicate: Optional[EntryPredicate] = None,
) -> List[Path]:
    """
    Return every descendant path of ``location``, depth-first (pre-order).

    Args:
        location: Directory to walk.
        follow_symlinks: Descend into symlinked directories and report the
            stat of the link target. Loops are detected and not re-entered.
            Defaults to the configured ``tree.follow_symlinks``.
        predicate: Optional ``(name, stat_result) -> bool``; an entry failing it
            is dropped together with its subtree.
    """
    if follow_symlinks is None:
        follow_symlinks = load_tree_config().follow_symlinks
    root = Path(location)
    root_stat = os.stat(root)
    out: List[Path] = []
    _lsall(root, follow_symlinks, predicate, {(root_stat.st_dev, root_stat.st_ino)}, out)
    return out
