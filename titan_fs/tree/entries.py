"""
titan_fs.tree.entries

Entry model shared by the tree operations: a single ``lstat`` snapshot of a
directory child, tagged with its kind, plus the name-filter helpers used by
every recursive walk.
"""

from __future__ import annotations

import os
import re
import stat
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterator, Optional, Pattern, Union

NameFilter = Union[None, str, Pattern[str], Callable[[str], bool]]


class EntryKind(str, Enum):
    REGULAR = "regular"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"


def kind_of(st: os.stat_result) -> EntryKind:
    if stat.S_ISLNK(st.st_mode):
        return EntryKind.SYMLINK
    if stat.S_ISDIR(st.st_mode):
        return EntryKind.DIRECTORY
    if stat.S_ISREG(st.st_mode):
        return EntryKind.REGULAR
    return EntryKind.OTHER


@dataclass(frozen=True)
class Entry:
    path: Path
    kind: EntryKind
    stat: os.stat_result

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def mode(self) -> int:
        return stat.S_IMODE(self.stat.st_mode)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY

    @property
    def is_symlink(self) -> bool:
        return self.kind is EntryKind.SYMLINK


def scan_entry(path: Path | str) -> Entry:
    """lstat ``path``; raises FileNotFoundError when it does not exist."""
    p = Path(path)
    st = os.lstat(p)
    return Entry(path=p, kind=kind_of(st), stat=st)


def iter_entries(location: Path | str, name_filter: NameFilter = None) -> Iterator[Entry]:
    """Yield the children of ``location`` in directory-listing order."""
    base = Path(location)
    for name in os.listdir(base):
        if not name_matches(name_filter, name):
            continue
        yield scan_entry(base / name)


def compile_filter(name_filter: NameFilter) -> Optional[Callable[[str], bool]]:
    if name_filter is None:
        return None
    if isinstance(name_filter, str):
        name_filter = re.compile(name_filter)
    if isinstance(name_filter, re.Pattern):
        pattern = name_filter
        return lambda name: pattern.search(name) is not None
    if callable(name_filter):
        return name_filter
    raise TypeError(f"Unsupported name filter: {name_filter!r}")


def name_matches(name_filter: NameFilter, name: str) -> bool:
    """Return True when ``name`` passes the filter (always True without one)."""
    predicate = compile_filter(name_filter)
    return predicate is None or bool(predicate(name))
