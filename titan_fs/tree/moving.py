"""
titan_fs.tree.moving

Move files or directory contents, renaming when possible and falling back to
copy + delete when the rename is refused (e.g. across devices).

The source directory itself is never renamed: its children are moved one by
one into ``dest`` and the emptied source is removed afterwards. When a filter
keeps some children behind, the source directory stays in place.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from titan_fs.base.fs import ensure_dir, ensure_parent
from titan_fs.base.logging import get_logger
from titan_fs.shared.loader import load_tree_config

from .copying import copy, ensure_distinct
from .entries import Entry, NameFilter, iter_entries, name_matches, scan_entry
from .removal import remove

log = get_logger(__name__)


def _relocate(src: Path, dest: Path, buffer_size: int) -> None:
    try:
        os.rename(src, dest)
        log.debug(f"Moved {src} → {dest}")
        return
    except OSError as exc:
        log.debug(f"Rename refused for {src} ({exc}); copying instead")

    copy(src, dest, buffer_size=buffer_size)
    remove(src)
    log.debug(f"Moved {src} → {dest} (copy + delete)")


def _move_dir(entry: Entry, dest: Path, name_filter: NameFilter, buffer_size: int) -> bool:
    ensure_dir(dest)
    emptied = True

    for child in iter_entries(entry.path):
        if not name_matches(name_filter, child.name):
            emptied = False
            continue
        target = dest / child.name
        if child.is_dir and name_filter is not None:
            # Recurse so the filter also applies below this level.
            emptied = _move_dir(child, target, name_filter, buffer_size) and emptied
        else:
            _relocate(child.path, target, buffer_size)

    if emptied:
        os.rmdir(entry.path)
        log.debug(f"Removed emptied source directory: {entry.path}")
    else:
        log.debug(f"Source directory kept (filtered entries remain): {entry.path}")
    return emptied


def move(
    src: Path | str,
    dest: Path | str,
    name_filter: NameFilter = None,
    *,
    buffer_size: Optional[int] = None,
) -> bool:
    """
    Move a file, a symlink or the content of a directory.

    Args:
        src: Entry to move. Must exist.
        dest: Destination file, or destination directory when ``src`` is one.
            An existing destination directory receives the content (merge).
        name_filter: Regex, compiled pattern or predicate on entry names;
            children failing it are left in the source.
        buffer_size: Chunk size used by the copy fallback; defaults to the
            configured ``tree.buffer_size``.

    Returns:
        True when ``src`` was fully relocated, False when filtered entries
        kept the source directory alive.

    Raises:
        ValueError: ``src`` is a directory and ``dest`` is it or lies inside it.
    """
    entry = scan_entry(src)
    dest = Path(dest)
    if buffer_size is None:
        buffer_size = load_tree_config().buffer_size

    if entry.is_dir:
        ensure_distinct(entry.path, dest)
        return _move_dir(entry, dest, name_filter, buffer_size)

    ensure_parent(dest)
    _relocate(entry.path, dest, buffer_size)
    return True
