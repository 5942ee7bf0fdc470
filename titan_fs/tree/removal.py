"""
titan_fs.tree.removal

Deletion helpers. A missing target is never an error here; every other
failure propagates to the caller.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from titan_fs.base.logging import get_logger

from .entries import Entry, EntryKind, iter_entries, scan_entry

log = get_logger(__name__)


def _lstat_or_none(path: Path | str) -> Entry | None:
    try:
        return scan_entry(path)
    except FileNotFoundError:
        return None


def remove(path: Path | str) -> bool:
    """
    Delete a file, a symlink (never its target) or a whole directory tree.

    Returns:
        True if something was removed, False if ``path`` did not exist.
    """
    entry = _lstat_or_none(path)
    if entry is None:
        log.debug(f"Path not found (skip delete): {path}")
        return False

    try:
        if entry.is_dir:
            shutil.rmtree(entry.path)
        else:
            os.unlink(entry.path)
    except FileNotFoundError:
        log.debug(f"Path vanished before delete: {entry.path}")
        return False

    log.debug(f"🗑️ Deleted {entry.kind.value}: {entry.path}")
    return True


def _remove_kind(entry: Entry, kind: EntryKind) -> int:
    if entry.kind is kind:
        try:
            os.unlink(entry.path)
        except FileNotFoundError:
            return 0
        log.debug(f"🗑️ Deleted {kind.value}: {entry.path}")
        return 1

    if not entry.is_dir:
        return 0

    removed = 0
    for child in iter_entries(entry.path):
        removed += _remove_kind(child, kind)
    return removed


def remove_symlinks(path: Path | str) -> int:
    """Recursively delete only the symlinks under ``path``; returns how many."""
    entry = _lstat_or_none(path)
    return _remove_kind(entry, EntryKind.SYMLINK) if entry else 0


def remove_files(path: Path | str) -> int:
    """
    Recursively delete only the regular files under ``path``.

    Directories, symlinks and special files stay in place. Returns how many
    files were removed.
    """
    entry = _lstat_or_none(path)
    return _remove_kind(entry, EntryKind.REGULAR) if entry else 0
