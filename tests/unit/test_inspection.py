from __future__ import annotations

import os
import time
from datetime import datetime
from pathlib import Path

from titan_fs.tree.inspection import can_execute, newer_than


def test_can_execute(tmp_path: Path) -> None:
    script = tmp_path / "run.sh"
    script.write_text("#!/bin/sh\n", encoding="utf-8")
    os.chmod(script, 0o744)
    plain = tmp_path / "data.txt"
    plain.write_text("x", encoding="utf-8")
    os.chmod(plain, 0o644)
    group_only = tmp_path / "group.sh"
    group_only.write_text("x", encoding="utf-8")
    os.chmod(group_only, 0o654)

    assert can_execute(script) is True
    assert can_execute(plain) is False
    assert can_execute(group_only) is False
    assert can_execute(tmp_path / "missing") is False


def _touch(path: Path, mtime: float) -> None:
    path.write_text("x", encoding="utf-8")
    os.utime(path, (mtime, mtime))


def test_newer_than_finds_nested_files(tmp_path: Path) -> None:
    now = time.time()
    (tmp_path / "sub" / "deep").mkdir(parents=True)
    _touch(tmp_path / "old.txt", now - 1000)
    _touch(tmp_path / "sub" / "deep" / "fresh.js", now)

    assert newer_than(tmp_path, now - 500) is True
    assert newer_than(tmp_path, now + 10) is False


def test_newer_than_applies_filter_to_files(tmp_path: Path) -> None:
    now = time.time()
    (tmp_path / "sub").mkdir()
    _touch(tmp_path / "sub" / "fresh.js", now)
    _touch(tmp_path / "old.txt", now - 1000)

    assert newer_than(tmp_path, now - 500, r"\.txt$") is False
    assert newer_than(tmp_path, now - 500, r"\.js$") is True


def test_newer_than_accepts_datetime(tmp_path: Path) -> None:
    now = time.time()
    _touch(tmp_path / "file.txt", now)

    assert newer_than(tmp_path, datetime.fromtimestamp(now - 60)) is True


def test_newer_than_tolerates_symlink_loops(tmp_path: Path) -> None:
    now = time.time()
    (tmp_path / "sub").mkdir()
    _touch(tmp_path / "sub" / "old.txt", now - 1000)
    os.symlink("..", tmp_path / "sub" / "loop")

    assert newer_than(tmp_path, now) is False
