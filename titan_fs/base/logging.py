"""
titan_fs.base.logging

Typed logging for Titan FS.

Features:
 - TitanLogger subclass carrying the Rich flag and the active log file
 - Unified setup for Rich + standard logging
 - Per-run log file next to the console handler
 - Colorized, emoji-enhanced level output
 - Config-driven defaults (level, Rich toggle, log directory, file prefix)
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, cast

from rich.logging import RichHandler
from rich.text import Text

ROOT_LOGGER_NAME = "titan"

# ----------------------------------------------------------------------
# LEVEL STYLE METADATA
# ----------------------------------------------------------------------

ANSI_RESET = "\033[0m"

LEVEL_STYLES: Dict[int, Dict[str, str]] = {
    logging.DEBUG: {"emoji": "🐛", "ansi": "\033[36m", "rich": "bright_cyan"},
    logging.INFO: {"emoji": "ℹ️", "ansi": "\033[32m", "rich": "green"},
    logging.WARNING: {"emoji": "⚠️", "ansi": "\033[33m", "rich": "yellow"},
    logging.ERROR: {"emoji": "❌", "ansi": "\033[31m", "rich": "red"},
    logging.CRITICAL: {"emoji": "💥", "ansi": "\033[95m", "rich": "bold magenta"},
}
DEFAULT_STYLE = LEVEL_STYLES[logging.INFO]


def _level_style(levelno: int) -> Dict[str, str]:
    return LEVEL_STYLES.get(levelno, DEFAULT_STYLE)


# ----------------------------------------------------------------------
# FORMATTERS
# ----------------------------------------------------------------------

class ColorEmojiFormatter(logging.Formatter):
    """Console formatter that injects colored level names and emojis."""

    def format(self, record: logging.LogRecord) -> str:
        style = _level_style(record.levelno)
        emoji = style.get("emoji", "")
        ansi_color = style.get("ansi", "")

        display = f"{emoji} {record.levelname}" if emoji else record.levelname
        if ansi_color:
            display = f"{ansi_color}{display}{ANSI_RESET}"

        original_display = getattr(record, "level_display", None)
        record.level_display = display  # type: ignore[attr-defined]
        try:
            return super().format(record)
        finally:
            if original_display is None:
                delattr(record, "level_display")
            else:
                record.level_display = original_display  # type: ignore[attr-defined]


class EmojiFormatter(logging.Formatter):
    """File formatter that prefixes log lines with the level emoji."""

    def format(self, record: logging.LogRecord) -> str:
        record.level_emoji = _level_style(record.levelno).get("emoji", "")  # type: ignore[attr-defined]
        return super().format(record)


class TitanRichHandler(RichHandler):
    """Rich console handler with emoji-enhanced level column."""

    def get_level_text(self, record: logging.LogRecord) -> Text:  # type: ignore[override]
        style = _level_style(record.levelno)
        emoji = style.get("emoji", "")
        style_name = style.get("rich", "") or None

        text = Text()
        if emoji:
            text.append(f"{emoji} ", style=style_name)
        text.append(record.levelname, style=style_name)
        return text


# ----------------------------------------------------------------------
# LOGGER CLASS
# ----------------------------------------------------------------------

class TitanLogger(logging.Logger):
    """Custom logger with Rich support flag and optional log file."""

    rich_enabled: bool = False
    log_file: Optional[Path] = None


# ----------------------------------------------------------------------
# CONFIG-DRIVEN DEFAULTS
# ----------------------------------------------------------------------

def normalize_level(value: Any) -> str:
    if isinstance(value, str):
        candidate = value.strip().upper()
        if isinstance(logging.getLevelName(candidate), int):
            return candidate
    elif isinstance(value, int) and not isinstance(value, bool):
        label = logging.getLevelName(value)
        if isinstance(label, str) and not label.startswith("Level "):
            return label
    return "INFO"


def normalize_use_rich(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    return None


def _load_default_logging_settings(config_path: Optional[Path | str]) -> Dict[str, Any]:
    # Local import: the loader logs through this module.
    from titan_fs.shared.loader import load_logging_config

    try:
        raw = load_logging_config(config_path)
    except (OSError, ValueError):
        raw = {}

    return {
        "level": normalize_level(raw.get("level")),
        "use_rich": normalize_use_rich(raw.get("use_rich")),
        "log_dir": raw.get("log_dir"),
        "file_prefix": raw.get("file_prefix"),
    }


def _teardown_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# ----------------------------------------------------------------------
# BASE LOGGER SETUP
# ----------------------------------------------------------------------

def setup_logging(
    level: str | int | None = None,
    use_rich: Optional[bool] = None,
    log_dir: Optional[Path | str] = None,
    file_prefix: Optional[str] = None,
    config_path: Optional[Path | str] = None,
) -> TitanLogger:
    """
    Configure and return the shared ``titan`` logger.

    Args:
        level: Desired logging level. Defaults to the config value (INFO if unset).
        use_rich: Force-enable or disable the Rich handler. None honors config (Rich on).
        log_dir: Directory to store log files. Defaults to the config value or ./logs.
        file_prefix: Prefix for generated log filenames.
        config_path: YAML file supplying the defaults (configs/config.yaml when omitted).
    """
    defaults = _load_default_logging_settings(config_path)
    resolved_level = normalize_level(level if level is not None else defaults["level"])
    resolved_use_rich = use_rich if use_rich is not None else defaults["use_rich"]
    if resolved_use_rich is None:
        resolved_use_rich = True
    resolved_log_dir = Path(log_dir or defaults["log_dir"] or "./logs").expanduser()
    resolved_file_prefix = file_prefix or defaults["file_prefix"] or "titan_fs"

    logging.setLoggerClass(TitanLogger)
    logger = cast(TitanLogger, logging.getLogger(ROOT_LOGGER_NAME))
    logger.setLevel(resolved_level)

    # Rebuild from scratch so repeated calls never stack handlers.
    _teardown_handlers(logger)

    # ------------------------------------------------------------------
    # Console Handler (Rich or ANSI)
    # ------------------------------------------------------------------
    console_handler: logging.Handler
    if resolved_use_rich:
        console_handler = TitanRichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=True,
            show_level=True,
            show_path=False,
            log_time_format="[%X]",
        )
        logger.rich_enabled = True
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            ColorEmojiFormatter(
                fmt="%(asctime)s %(level_display)s %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        logger.rich_enabled = False
    console_handler.setLevel(logging.NOTSET)
    logger.addHandler(console_handler)

    # ------------------------------------------------------------------
    # File Handler
    # ------------------------------------------------------------------
    resolved_log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    log_file_path = resolved_log_dir / f"{resolved_file_prefix}_{timestamp}.log"

    file_handler = logging.FileHandler(log_file_path, mode="a", encoding="utf-8")
    file_handler.setFormatter(
        EmojiFormatter(
            fmt="%(asctime)s %(level_emoji)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    file_handler.setLevel(logging.NOTSET)
    logger.addHandler(file_handler)
    logger.log_file = log_file_path

    logger.propagate = False
    logger._initialized = True  # type: ignore[attr-defined]
    logger.debug(
        "Logger initialized at level %s (Rich=%s)",
        resolved_level,
        "ON" if logger.rich_enabled else "OFF",
    )
    logger.info("📄 Log file created at: %s", log_file_path.resolve())
    return logger


# ----------------------------------------------------------------------
# UTILITY ACCESSOR
# ----------------------------------------------------------------------

def get_logger(name: str = ROOT_LOGGER_NAME) -> TitanLogger:
    """Retrieve a namespaced Titan logger (configured later via setup_logging)."""

    logging.setLoggerClass(TitanLogger)
    base = cast(TitanLogger, logging.getLogger(ROOT_LOGGER_NAME))

    if not getattr(base, "_initialized", False) and not base.handlers:
        base.addHandler(logging.NullHandler())

    if not name or name == ROOT_LOGGER_NAME:
        return base

    return cast(TitanLogger, base.getChild(name))
