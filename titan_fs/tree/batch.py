"""
titan_fs.tree.batch

Batch renaming driven by a naming callback.

The renamer receives ``(directory, name)`` for every non-directory entry and
returns the new name, or None to leave the entry alone. Directories are always
descended, never renamed.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Pattern, Tuple, Union

from titan_fs.base.logging import get_logger
from titan_fs.shared.utils import Progress

from .copying import copy
from .entries import Entry, iter_entries
from .moving import move

log = get_logger(__name__)

Renamer = Callable[[Path, str], Optional[str]]

ACTIONS = {"cp": copy, "mv": move}


def regex_renamer(old: Union[str, Pattern[str]], new: str) -> Renamer:
    """
    Build a renamer from a pattern and a replacement.

    A compiled pattern renames every matching name through ``re.sub`` (first
    occurrence only). A plain string selects the entry with exactly that name
    and renames it to ``new``.
    """
    if isinstance(old, re.Pattern):
        pattern = old

        def _rename(directory: Path, name: str) -> Optional[str]:
            if not pattern.search(name):
                return None
            return pattern.sub(new, name, count=1)

        return _rename

    def _rename_exact(directory: Path, name: str) -> Optional[str]:
        return new if name == old else None

    return _rename_exact


def _walk_files(location: Path) -> Iterable[Entry]:
    # Snapshot each directory first so freshly created names are not revisited.
    for entry in list(iter_entries(location)):
        if entry.is_dir:
            yield from _walk_files(entry.path)
        else:
            yield entry


def batch_rename(
    renamer: Renamer,
    location: Path | str,
    action: str = "mv",
    *,
    dry_run: bool = False,
    show_progress: bool = False,
) -> List[Tuple[Path, Path]]:
    """
    Recursively copy or move files under ``location`` to the names chosen by ``renamer``.

    Args:
        renamer: ``(directory, name) -> new name | None``.
        location: Directory to walk.
        action: ``"mv"`` to rename, ``"cp"`` to keep the original next to the copy.
        dry_run: Log the planned operations without touching the filesystem.
        show_progress: Display a progress bar while walking.

    Returns:
        ``(source, destination)`` pairs, in walk order.
    """
    if action not in ACTIONS:
        raise ValueError(f"Unknown batch action '{action}'. Expected one of: {', '.join(sorted(ACTIONS))}")
    operation = ACTIONS[action]

    entries: Iterable[Entry] = _walk_files(Path(location))
    iterable = Progress(entries, desc="Renaming") if show_progress else entries

    done: List[Tuple[Path, Path]] = []
    for entry in iterable:
        directory = entry.path.parent
        new_name = renamer(directory, entry.name)
        if not new_name or new_name == entry.name:
            continue

        target = directory / new_name
        if dry_run:
            log.info(f"[DRY-RUN] Would {action} {entry.path} → {target}")
        else:
            operation(entry.path, target)
        done.append((entry.path, target))

    verb = "Planned" if dry_run else "Applied"
    log.info(f"📂 {verb} {len(done)} {action} operation(s) under {location}")
    return done


def batch_copy(renamer: Renamer, location: Path | str, **kwargs) -> List[Tuple[Path, Path]]:
    return batch_rename(renamer, location, "cp", **kwargs)


def batch_move(renamer: Renamer, location: Path | str, **kwargs) -> List[Tuple[Path, Path]]:
    return batch_rename(renamer, location, "mv", **kwargs)
