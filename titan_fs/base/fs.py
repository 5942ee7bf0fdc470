"""Filesystem helper utilities shared across titan_fs modules."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

DEFAULT_BUFFER_SIZE = 64 * 1024
DEFAULT_BINARY_SAMPLE_SIZE = 8192
DEFAULT_BINARY_THRESHOLD = 0.3


def ensure_dir(path: Path | str) -> Path:
    """
    Create ``path`` and every missing parent (a la ``mkdir -p``).

    An existing directory is accepted as-is. A component that already exists
    as something other than a directory raises ``NotADirectoryError``.
    """
    p = Path(path).expanduser()
    try:
        p.mkdir(parents=True, exist_ok=True)
    except (FileExistsError, NotADirectoryError) as exc:
        raise NotADirectoryError(f"Path component is not a directory: {exc.filename or p}") from exc
    return p


def ensure_parent(path: Path | str) -> Path:
    return ensure_dir(Path(path).expanduser().parent)


def human_size(num: float, suffix: str = "B") -> str:
    units: Iterable[str] = ["", "K", "M", "G", "T", "P", "E", "Z"]
    value = float(num)
    for unit in units:
        if abs(value) < 1024.0:
            return f"{value:3.1f}{unit}{suffix}"
        value /= 1024.0
    return f"{value:.1f}Y{suffix}"
