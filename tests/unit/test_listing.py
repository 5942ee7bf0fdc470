from __future__ import annotations

import os
import re
import stat
from pathlib import Path

from titan_fs.base.file_io import write_yaml
from titan_fs.shared import loader
from titan_fs.tree.listing import ls, lsall, lsdir, lsfile


def _make_tree(root: Path) -> Path:
    base = root / "tree"
    (base / "d1" / "d2").mkdir(parents=True)
    (base / "a.txt").write_text("a", encoding="utf-8")
    (base / "b.md").write_text("b", encoding="utf-8")
    (base / "d1" / "c.txt").write_text("c", encoding="utf-8")
    (base / "d1" / "d2" / "e.txt").write_text("e", encoding="utf-8")
    return base


def test_ls_returns_immediate_children(tmp_path: Path) -> None:
    base = _make_tree(tmp_path)

    assert sorted(ls(base)) == ["a.txt", "b.md", "d1"]
    assert sorted(ls(base, r"\.txt$")) == ["a.txt"]
    assert sorted(ls(base, re.compile(r"^[ab]"))) == ["a.txt", "b.md"]


def test_lsdir_and_lsfile(tmp_path: Path) -> None:
    base = _make_tree(tmp_path)
    os.symlink("d1", base / "dirlink")

    assert sorted(lsdir(base)) == ["d1", "dirlink"]
    assert sorted(lsfile(base)) == ["a.txt", "b.md"]
    assert lsfile(base, r"\.md$") == ["b.md"]


def test_lsall_lists_every_descendant(tmp_path: Path) -> None:
    base = _make_tree(tmp_path)

    found = lsall(base)

    assert sorted(p.relative_to(base).as_posix() for p in found) == [
        "a.txt",
        "b.md",
        "d1",
        "d1/c.txt",
        "d1/d2",
        "d1/d2/e.txt",
    ]
    # Pre-order: a directory always precedes its children.
    assert found.index(base / "d1") < found.index(base / "d1" / "c.txt")


def test_lsall_predicate_prunes_subtrees(tmp_path: Path) -> None:
    base = _make_tree(tmp_path)

    found = lsall(base, predicate=lambda name, st: name != "d2")

    assert base / "d1" / "d2" not in found
    assert base / "d1" / "d2" / "e.txt" not in found
    assert base / "d1" / "c.txt" in found


def test_lsall_predicate_receives_stat(tmp_path: Path) -> None:
    base = _make_tree(tmp_path)

    found = lsall(base, predicate=lambda name, st: stat.S_ISDIR(st.st_mode) or name.endswith(".txt"))

    assert base / "b.md" not in found
    assert base / "d1" / "d2" / "e.txt" in found


def test_lsall_does_not_follow_symlinks_by_default(tmp_path: Path) -> None:
    base = _make_tree(tmp_path)
    os.symlink("d1", base / "alias")

    found = lsall(base)

    assert base / "alias" in found
    assert base / "alias" / "c.txt" not in found


def test_lsall_follow_symlinks_survives_loops(tmp_path: Path) -> None:
    base = _make_tree(tmp_path)
    os.symlink("..", base / "d1" / "up")

    found = lsall(base, follow_symlinks=True)

    assert base / "d1" / "up" in found
    assert base / "d1" / "up" / "a.txt" not in found
    assert base / "d1" / "d2" / "e.txt" in found


def test_lsall_follows_symlinks_when_configured(tmp_path: Path, monkeypatch) -> None:
    configs = tmp_path / "configs"
    configs.mkdir()
    write_yaml(configs / "config.yaml", {"tree": {"follow_symlinks": "yes"}})
    monkeypatch.setattr(loader, "CONFIGS_DIR", configs)
    base = _make_tree(tmp_path)
    os.symlink("d1", base / "alias")

    assert base / "alias" / "c.txt" in lsall(base)
    assert base / "alias" / "c.txt" not in lsall(base, follow_symlinks=False)
