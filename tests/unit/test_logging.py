from __future__ import annotations

import logging
from pathlib import Path

from titan_fs.base.file_io import write_yaml
from titan_fs.base.logging import TitanRichHandler, get_logger, normalize_level, setup_logging


def _reset(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger._initialized = False  # type: ignore[attr-defined]


def test_get_logger_returns_titan_child() -> None:
    log = get_logger("titan_fs.tree.copying")

    assert log.name == "titan.titan_fs.tree.copying"
    assert log.parent is not None


def test_normalize_level() -> None:
    assert normalize_level("debug") == "DEBUG"
    assert normalize_level(logging.WARNING) == "WARNING"
    assert normalize_level("nonsense") == "INFO"
    assert normalize_level(None) == "INFO"


def test_setup_logging_writes_log_file(tmp_path: Path) -> None:
    logger = setup_logging(level="DEBUG", use_rich=False, log_dir=tmp_path, file_prefix="unit")
    try:
        get_logger("titan_fs.tests").info("hello from the tree")
        for handler in logger.handlers:
            handler.flush()

        assert logger.log_file is not None
        assert logger.log_file.parent == tmp_path
        assert logger.log_file.name.startswith("unit_")
        assert "hello from the tree" in logger.log_file.read_text(encoding="utf-8")
        assert logger.rich_enabled is False
    finally:
        _reset(logger)


def test_setup_logging_uses_config_defaults(tmp_path: Path) -> None:
    cfg = tmp_path / "config.yaml"
    write_yaml(cfg, {"logging": {"level": "WARNING", "use_rich": "on", "log_dir": "logs", "file_prefix": "cfg"}})

    logger = setup_logging(config_path=cfg)
    try:
        assert logger.level == logging.WARNING
        assert logger.rich_enabled is True
        assert any(isinstance(h, TitanRichHandler) for h in logger.handlers)
        assert logger.log_file is not None
        assert logger.log_file.parent == (tmp_path / "logs").resolve()
        assert logger.log_file.name.startswith("cfg_")
    finally:
        _reset(logger)


def test_setup_logging_twice_does_not_stack_handlers(tmp_path: Path) -> None:
    setup_logging(use_rich=False, log_dir=tmp_path)
    logger = setup_logging(use_rich=False, log_dir=tmp_path)
    try:
        assert len(logger.handlers) == 2
    finally:
        _reset(logger)
