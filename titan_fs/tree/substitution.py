"""
titan_fs.tree.substitution

In-place regex substitution for text files (a tiny ``sed``).
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Optional, Pattern, Union

from titan_fs.base.file_io import open_file, read_bytes, write_bytes
from titan_fs.base.logging import get_logger
from titan_fs.base.fs import DEFAULT_BINARY_SAMPLE_SIZE, DEFAULT_BINARY_THRESHOLD
from titan_fs.shared.loader import load_tree_config

log = get_logger(__name__)

Replacement = Union[str, Callable[["re.Match[str]"], str]]

# BEL, BS, TAB, LF, FF, CR, ESC plus every byte from space upwards.
_TEXT_CHARS = frozenset({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)))


def looks_binary(
    data: bytes,
    sample_size: int = DEFAULT_BINARY_SAMPLE_SIZE,
    threshold: float = DEFAULT_BINARY_THRESHOLD,
) -> bool:
    """
    Detect if data appears to be binary.

    Args:
        data: Bytes to check.
        sample_size: Number of leading bytes to sample.
        threshold: Ratio of non-text bytes above which the data is binary.

    Returns:
        True if data appears binary.
    """
    sample = data[:sample_size]
    if not sample:
        return False
    if b"\x00" in sample:
        return True
    non_text = sum(1 for byte in sample if byte not in _TEXT_CHARS)
    return non_text / len(sample) > threshold


def is_binary_file(
    path: Path | str,
    sample_size: Optional[int] = None,
    threshold: Optional[float] = None,
) -> bool:
    """
    Heuristically decide whether ``path`` holds binary content.

    Only NUL bytes and control characters count against the sample; bytes
    from 0x80 up are text, so Latin-1 or other non-UTF-8 text is not binary.
    Unset arguments come from the ``tree`` config section.
    """
    if sample_size is None or threshold is None:
        config = load_tree_config()
        sample_size = config.binary_sample_size if sample_size is None else sample_size
        threshold = config.binary_threshold if threshold is None else threshold
    with open_file(path, "rb") as handle:
        sample = handle.read(sample_size)
    return looks_binary(sample, sample_size, threshold)


def substitute_in_file(
    path: Path | str,
    pattern: Union[str, Pattern[str]],
    replacement: Replacement,
    *,
    count: int = 0,
    sample_size: Optional[int] = None,
    threshold: Optional[float] = None,
) -> bool:
    """
    Replace ``pattern`` by ``replacement`` in a text file, rewriting it in place.

    Args:
        path: File to edit.
        pattern: Regex string or compiled pattern.
        replacement: Replacement template (``\\1`` backrefs) or callable.
        count: Maximum substitutions. The default 0 is a global substitution
            that replaces every occurrence, not just the first one; pass
            ``count=1`` to stop after the first match.
        sample_size: Bytes sampled by the binary detector (config default).
        threshold: Non-text ratio above which the file counts as binary
            (config default).

    Returns:
        False when the file looks binary or nothing matches (file untouched),
        True once the substituted content has been written.
    """
    if is_binary_file(path, sample_size, threshold):
        log.debug(f"Binary file skipped by substitution: {path}")
        return False

    regex = re.compile(pattern) if isinstance(pattern, str) else pattern
    # surrogateescape round-trips bytes that are not valid UTF-8 untouched.
    text = read_bytes(path).decode("utf-8", errors="surrogateescape")
    if not regex.search(text):
        return False

    updated = regex.sub(replacement, text, count=count)
    write_bytes(path, updated.encode("utf-8", errors="surrogateescape"))
    log.debug(f"Substituted /{regex.pattern}/ in {path}")
    return True
