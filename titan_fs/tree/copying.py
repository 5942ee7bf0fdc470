"""
titan_fs.tree.copying

Recursive copy preserving permission bits and symlink targets.

Examples:
    copy("indir/infile", "outdir/outfile")
        The file is copied under its new name; parents are created as needed.
    copy("indir", "outdir")
        The content of ``indir`` is merged into ``outdir``. Existing entries
        at the destination are replaced, unrelated ones are left alone.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Optional

from titan_fs.base.fs import ensure_dir, ensure_parent, human_size
from titan_fs.base.logging import get_logger
from titan_fs.shared.loader import load_tree_config

from .entries import Entry, EntryKind, NameFilter, iter_entries, scan_entry

log = get_logger(__name__)


def copy_symlink(src: Path | str, dest: Path | str) -> Path:
    """Recreate the symlink ``src`` at ``dest`` with the same target string."""
    src, dest = Path(src), Path(dest)
    target = os.readlink(src)
    ensure_parent(dest)
    try:
        os.unlink(dest)
    except FileNotFoundError:
        pass
    os.symlink(target, dest)
    log.debug(f"Linked {dest} → {target}")
    return dest


def copy_file(src: Path | str, dest: Path | str, *, buffer_size: Optional[int] = None) -> Path:
    """
    Copy a single file or symlink.

    Regular files are streamed through a fixed-size buffer and get the source
    mode bits. Symlinks are recreated, not dereferenced. Copying a file onto
    itself (same path, a link back to it or a hard link) raises
    ``shutil.SameFileError``.
    """
    entry = scan_entry(src)
    if entry.is_symlink:
        return copy_symlink(entry.path, dest)
    if entry.is_dir:
        raise IsADirectoryError(f"Expected a file, got a directory: {entry.path}")
    if entry.kind is EntryKind.OTHER:
        raise ValueError(f"Not a regular file: {entry.path}")
    if buffer_size is None:
        buffer_size = load_tree_config().buffer_size
    return _copy_regular(entry, Path(dest), buffer_size)


def ensure_distinct(src: Path, dest: Path) -> None:
    """Raise ``ValueError`` when ``dest`` is ``src`` or lies somewhere below it."""
    source = src.resolve()
    target = dest.resolve()
    if target == source or source in target.parents:
        raise ValueError(f"Destination {dest} is inside the source directory {src}")


def _same_file(entry: Entry, dest: Path) -> bool:
    try:
        dest_stat = os.stat(dest)
    except FileNotFoundError:
        return False
    return (dest_stat.st_dev, dest_stat.st_ino) == (entry.stat.st_dev, entry.stat.st_ino)


def _copy_regular(entry: Entry, dest: Path, buffer_size: int) -> Path:
    ensure_parent(dest)
    if _same_file(entry, dest):
        raise shutil.SameFileError(f"{entry.path} and {dest} are the same file")
    buf = bytearray(buffer_size)
    view = memoryview(buf)
    copied = 0
    with open(entry.path, "rb") as reader, open(dest, "wb") as writer:
        while True:
            count = reader.readinto(buf)
            if not count:
                break
            writer.write(view[:count])
            copied += count
    os.chmod(dest, entry.mode)
    log.debug(f"Copied {entry.path} → {dest} ({human_size(copied)})")
    return dest


def _copy_entry(entry: Entry, dest: Path, name_filter: NameFilter, buffer_size: int) -> None:
    if entry.kind is EntryKind.SYMLINK:
        copy_symlink(entry.path, dest)
    elif entry.kind is EntryKind.REGULAR:
        _copy_regular(entry, dest, buffer_size)
    elif entry.kind is EntryKind.DIRECTORY:
        ensure_dir(dest)
        for child in iter_entries(entry.path, name_filter):
            _copy_entry(child, dest / child.name, name_filter, buffer_size)
    else:
        log.warning(f"⚠️ Skipping special file (not copied): {entry.path}")


def copy(
    src: Path | str,
    dest: Path | str,
    name_filter: NameFilter = None,
    *,
    buffer_size: Optional[int] = None,
) -> Path:
    """
    Copy a file, a symlink or the content of a directory.

    Args:
        src: Entry to copy. Must exist.
        dest: Destination file, or destination directory when ``src`` is one.
        name_filter: Regex, compiled pattern or predicate on the entry name;
            directory children failing it are skipped at every depth.
        buffer_size: Chunk size for byte copies; defaults to the configured
            ``tree.buffer_size``.

    Returns:
        The destination path.

    Raises:
        ValueError: ``src`` is a directory and ``dest`` is it or lies inside it.
        shutil.SameFileError: ``dest`` already is the file ``src``.
    """
    entry = scan_entry(src)
    dest = Path(dest)
    if entry.is_dir:
        ensure_distinct(entry.path, dest)
    if buffer_size is None:
        buffer_size = load_tree_config().buffer_size
    _copy_entry(entry, dest, name_filter, buffer_size)
    return dest
