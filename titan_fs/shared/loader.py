"""
Shared configuration loading and validation helpers.

Provides:
 - `load_config`: basic YAML loader
 - `load_logging_config`: validated `logging` section
 - `load_tree_config`: typed `tree` section feeding the tree operations
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from titan_fs.base.file_io import read_yaml
from titan_fs.base.fs import DEFAULT_BINARY_SAMPLE_SIZE, DEFAULT_BINARY_THRESHOLD, DEFAULT_BUFFER_SIZE


ConfigDict = Dict[str, Any]

DEFAULT_CONFIG_FILENAME = "config.yaml"
LOGGING_SECTION_KEY = "logging"
TREE_SECTION_KEY = "tree"
CONFIGS_DIR = Path(__file__).resolve().parents[2] / "configs"

LOGGING_ALLOWED_KEYS = {"level", "use_rich", "log_dir", "file_prefix"}
TREE_INTEGER_FIELDS = {"buffer_size", "binary_sample_size"}
TREE_FLOAT_FIELDS = {"binary_threshold"}
TREE_BOOLEAN_FIELDS = {"follow_symlinks"}
TREE_ALLOWED_KEYS = TREE_INTEGER_FIELDS | TREE_FLOAT_FIELDS | TREE_BOOLEAN_FIELDS

YES_VALUES = {"1", "true", "yes", "y", "on"}
NO_VALUES = {"0", "false", "no", "n", "off"}


@dataclass(frozen=True)
class TreeConfig:
    buffer_size: int = DEFAULT_BUFFER_SIZE
    binary_sample_size: int = DEFAULT_BINARY_SAMPLE_SIZE
    binary_threshold: float = DEFAULT_BINARY_THRESHOLD
    follow_symlinks: bool = False


def default_config_path() -> Optional[Path]:
    candidate = CONFIGS_DIR / DEFAULT_CONFIG_FILENAME
    return candidate if candidate.exists() else None


def load_config(path: str | Path | None) -> Mapping[str, Any] | Dict[str, Any]:
    if not path:
        return {}

    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {cfg_path}")

    data = read_yaml(cfg_path)
    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration root must be a mapping in {cfg_path}")

    return data


def _resolve_config_path(config_path: str | Path | None) -> Optional[Path]:
    if config_path:
        return Path(config_path).expanduser()
    return default_config_path()


def _extract_section(root: Mapping[str, Any], key: str, config_path: Optional[Path]) -> ConfigDict:
    section = root.get(key)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ValueError(f"'{key}' section must be a mapping in {config_path}")
    return dict(section)


def _reject_unknown_keys(section: Mapping[str, Any], allowed: set, key: str, config_path: Optional[Path]) -> None:
    invalid = [name for name in section if name not in allowed]
    if invalid:
        invalid_keys = ", ".join(sorted(invalid))
        raise ValueError(f"'{key}' section contains unsupported keys in {config_path}: {invalid_keys}")


def _coerce_int(value: Any, field: str, config_path: Optional[Path]) -> int:
    if isinstance(value, bool):
        raise ValueError(f"Configuration '{config_path}' field '{field}' must be an integer.")
    try:
        result = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Configuration '{config_path}' field '{field}' must be an integer."
        ) from exc
    if result <= 0:
        raise ValueError(f"Configuration '{config_path}' field '{field}' must be positive.")
    return result


def _coerce_float(value: Any, field: str, config_path: Optional[Path]) -> float:
    if isinstance(value, bool):
        raise ValueError(f"Configuration '{config_path}' field '{field}' must be a number.")
    try:
        result = float(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Configuration '{config_path}' field '{field}' must be a number.") from exc
    if not 0.0 <= result <= 1.0:
        raise ValueError(f"Configuration '{config_path}' field '{field}' must be between 0 and 1.")
    return result


def _coerce_bool(value: Any, field: str, config_path: Optional[Path]) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip().lower()
    if text in YES_VALUES:
        return True
    if text in NO_VALUES:
        return False
    raise ValueError(f"Configuration '{config_path}' field '{field}' must be a boolean.")


def load_logging_config(config_path: str | Path | None = None) -> Dict[str, Any]:
    """Return the ``logging`` section (empty when no config file is available)."""
    resolved = _resolve_config_path(config_path)
    root = load_config(resolved)
    section = _extract_section(root, LOGGING_SECTION_KEY, resolved)
    _reject_unknown_keys(section, LOGGING_ALLOWED_KEYS, LOGGING_SECTION_KEY, resolved)

    log_dir = section.get("log_dir")
    if log_dir and resolved is not None:
        candidate = Path(str(log_dir)).expanduser()
        if not candidate.is_absolute():
            # Relative log dirs are anchored on the directory holding the config.
            candidate = resolved.parent / candidate
        section["log_dir"] = str(candidate.resolve())
    return section


def load_tree_config(config_path: str | Path | None = None) -> TreeConfig:
    """
    Build a TreeConfig from the ``tree`` section.

    Missing keys fall back to the engine defaults; an absent file yields the
    defaults outright.
    """
    resolved = _resolve_config_path(config_path)
    root = load_config(resolved)
    section = _extract_section(root, TREE_SECTION_KEY, resolved)
    _reject_unknown_keys(section, TREE_ALLOWED_KEYS, TREE_SECTION_KEY, resolved)

    values: Dict[str, Any] = {}
    for key, value in section.items():
        if value is None or value == "":
            continue
        if key in TREE_INTEGER_FIELDS:
            values[key] = _coerce_int(value, key, resolved)
        elif key in TREE_FLOAT_FIELDS:
            values[key] = _coerce_float(value, key, resolved)
        elif key in TREE_BOOLEAN_FIELDS:
            values[key] = _coerce_bool(value, key, resolved)
    return TreeConfig(**values)
