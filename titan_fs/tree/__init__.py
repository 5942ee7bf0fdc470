"""Recursive tree operations: copy, move, remove, list, hash and substitute."""

from .batch import batch_copy, batch_move, batch_rename, regex_renamer  # noqa: F401
from .copying import copy, copy_file, copy_symlink  # noqa: F401
from .entries import Entry, EntryKind, iter_entries, scan_entry  # noqa: F401
from .hashing import content_hash, update_content_hash  # noqa: F401
from .inspection import can_execute, newer_than  # noqa: F401
from .listing import ls, lsall, lsdir, lsfile  # noqa: F401
from .moving import move  # noqa: F401
from .removal import remove, remove_files, remove_symlinks  # noqa: F401
from .substitution import is_binary_file, substitute_in_file  # noqa: F401

__all__ = [
    "Entry",
    "EntryKind",
    "batch_copy",
    "batch_move",
    "batch_rename",
    "can_execute",
    "content_hash",
    "copy",
    "copy_file",
    "copy_symlink",
    "is_binary_file",
    "iter_entries",
    "ls",
    "lsall",
    "lsdir",
    "lsfile",
    "move",
    "newer_than",
    "regex_renamer",
    "remove",
    "remove_files",
    "remove_symlinks",
    "scan_entry",
    "substitute_in_file",
    "update_content_hash",
]
