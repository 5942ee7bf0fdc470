from __future__ import annotations

from pathlib import Path

import pytest

from titan_fs.base.file_io import write_yaml
from titan_fs.base.fs import DEFAULT_BUFFER_SIZE
from titan_fs.shared.loader import (
    TreeConfig,
    load_config,
    load_logging_config,
    load_tree_config,
)


def test_load_config_without_path_is_empty() -> None:
    assert load_config(None) == {}


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "absent.yaml")


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    cfg = tmp_path / "list.yaml"
    write_yaml(cfg, ["a", "b"])

    with pytest.raises(ValueError):
        load_config(cfg)


def test_load_tree_config_coerces_values(tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    write_yaml(
        cfg,
        {
            "tree": {
                "buffer_size": "4096",
                "binary_threshold": 0.5,
                "follow_symlinks": "yes",
            }
        },
    )

    config = load_tree_config(cfg)

    assert config == TreeConfig(buffer_size=4096, binary_threshold=0.5, follow_symlinks=True)


def test_load_tree_config_defaults_when_section_missing(tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    write_yaml(cfg, {"logging": {"level": "DEBUG"}})

    config = load_tree_config(cfg)

    assert config.buffer_size == DEFAULT_BUFFER_SIZE
    assert config.follow_symlinks is False


@pytest.mark.parametrize(
    "section",
    [
        {"buffer_size": "big"},
        {"buffer_size": 0},
        {"binary_threshold": 2},
        {"follow_symlinks": "maybe"},
        {"unknown": 1},
    ],
)
def test_load_tree_config_rejects_invalid_values(tmp_path: Path, section: dict) -> None:
    cfg = tmp_path / "config.yaml"
    write_yaml(cfg, {"tree": section})

    with pytest.raises(ValueError):
        load_tree_config(cfg)


def test_load_logging_config_anchors_relative_log_dir(tmp_path: Path) -> None:
    cfg_dir = tmp_path / "configs"
    cfg_dir.mkdir()
    cfg = cfg_dir / "config.yaml"
    write_yaml(cfg, {"logging": {"level": "DEBUG", "log_dir": "../logs"}})

    section = load_logging_config(cfg)

    assert section["level"] == "DEBUG"
    assert section["log_dir"] == str((tmp_path / "logs").resolve())


def test_load_logging_config_rejects_unknown_keys(tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    write_yaml(cfg, {"logging": {"colour": True}})

    with pytest.raises(ValueError):
        load_logging_config(cfg)


def test_repository_default_config_loads() -> None:
    config = load_tree_config()

    assert config.buffer_size == DEFAULT_BUFFER_SIZE
