from __future__ import annotations

from pathlib import Path

import pytest

import titan_fs
from titan_fs.base.fs import ensure_dir, ensure_parent


def test_mkdir_creates_nested_directories_idempotently(tmp_path: Path) -> None:
    target = tmp_path / "x" / "y" / "z"

    assert titan_fs.mkdir(target) == target
    assert target.is_dir()
    assert titan_fs.mkdir(target) == target


def test_ensure_dir_rejects_file_component(tmp_path: Path) -> None:
    blocker = tmp_path / "x"
    blocker.write_text("file", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        ensure_dir(blocker)
    with pytest.raises(NotADirectoryError):
        ensure_dir(blocker / "y" / "z")


def test_ensure_parent(tmp_path: Path) -> None:
    parent = ensure_parent(tmp_path / "a" / "b" / "file.txt")

    assert parent == tmp_path / "a" / "b"
    assert parent.is_dir()


def test_package_exports_tree_operations() -> None:
    for name in ("copy", "move", "remove", "ls", "lsall", "content_hash", "substitute_in_file", "batch_rename"):
        assert callable(getattr(titan_fs, name))
