"""
titan_fs.tree.hashing

SHA-256 content hash of a file tree.

The digest is fed with the bytes of every matching file, and with the target
string of every symlink, walking siblings in sorted name order so that two
trees with the same content hash the same regardless of how each filesystem
lists them. The hash object is threaded through the recursion explicitly.
"""

from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Optional

from titan_fs.base.logging import get_logger
from titan_fs.shared.loader import load_tree_config

from .entries import Entry, EntryKind, NameFilter, name_matches, scan_entry

log = get_logger(__name__)


def _feed_file(path: Path, digest: Any, buffer_size: int) -> None:
    with open(path, "rb") as handle:
        for chunk in iter(lambda: handle.read(buffer_size), b""):
            digest.update(chunk)


def _feed_entry(entry: Entry, digest: Any, name_filter: NameFilter, buffer_size: int) -> None:
    if entry.kind is EntryKind.DIRECTORY:
        for name in sorted(os.listdir(entry.path)):
            _feed_entry(scan_entry(entry.path / name), digest, name_filter, buffer_size)
        return

    if not name_matches(name_filter, entry.name):
        return
    if entry.kind is EntryKind.SYMLINK:
        digest.update(os.fsencode(os.readlink(entry.path)))
    elif entry.kind is EntryKind.REGULAR:
        _feed_file(entry.path, digest, buffer_size)
    else:
        log.debug(f"Special file ignored by content hash: {entry.path}")


def update_content_hash(
    location: Path | str,
    digest: Any,
    name_filter: NameFilter = None,
    *,
    buffer_size: Optional[int] = None,
) -> Any:
    """Feed the content of ``location`` into an existing ``hashlib`` object and return it."""
    if buffer_size is None:
        buffer_size = load_tree_config().buffer_size
    _feed_entry(scan_entry(location), digest, name_filter, buffer_size)
    return digest


def content_hash(
    location: Path | str,
    name_filter: NameFilter = None,
    *,
    buffer_size: Optional[int] = None,
) -> str:
    """Return the hex SHA-256 of every matching file (or symlink target) under ``location``."""
    digest = update_content_hash(location, hashlib.sha256(), name_filter, buffer_size=buffer_size)
    result = digest.hexdigest()
    log.debug(f"Content hash of {location}: {result}")
    return result
