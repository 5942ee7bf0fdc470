"""
titan_fs.tree.inspection

Read-only checks on paths and trees.
"""

from __future__ import annotations

import os
import stat
from datetime import datetime
from pathlib import Path
from typing import Set, Tuple, Union

from titan_fs.base.logging import get_logger

from .entries import NameFilter, compile_filter

log = get_logger(__name__)

Timestamp = Union[int, float, datetime]


def can_execute(path: Path | str) -> bool:
    """Return True if the owner-execute bit is set; False if ``path`` cannot be stat'ed."""
    try:
        st = os.stat(path)
    except OSError:
        return False
    return bool(st.st_mode & stat.S_IXUSR)


def _as_epoch(timestamp: Timestamp) -> float:
    if isinstance(timestamp, datetime):
        return timestamp.timestamp()
    return float(timestamp)


def newer_than(location: Path | str, timestamp: Timestamp, name_filter: NameFilter = None) -> bool:
    """
    Return True if any matching file under ``location`` was modified after ``timestamp``.

    Symlinks are followed (dangling ones are judged by the link itself).
    Directories are always descended; the filter only selects the files whose
    mtime is compared. The walk stops at the first hit.
    """
    threshold = _as_epoch(timestamp)
    predicate = compile_filter(name_filter)
    root = Path(location)

    st = os.stat(root)
    if not stat.S_ISDIR(st.st_mode):
        return st.st_mtime > threshold and (predicate is None or bool(predicate(root.name)))

    active: Set[Tuple[int, int]] = {(st.st_dev, st.st_ino)}

    def _walk(directory: Path) -> bool:
        for name in os.listdir(directory):
            path = directory / name
            try:
                child = os.stat(path)
            except FileNotFoundError:
                child = os.lstat(path)

            if stat.S_ISDIR(child.st_mode):
                key = (child.st_dev, child.st_ino)
                if key in active:
                    log.warning(f"⚠️ Symlink loop detected, not descending: {path}")
                    continue
                active.add(key)
                try:
                    if _walk(path):
                        return True
                finally:
                    active.discard(key)
                continue

            if predicate is not None and not predicate(name):
                continue
            if child.st_mtime > threshold:
                log.debug(f"Newer file found: {path}")
                return True
        return False

    return _walk(root)
