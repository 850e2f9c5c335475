# rawed - a minimal raw-mode terminal text editor
# License: MIT

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import toml

from rawed.keys import ESC, KeyCode, ctrl, parse_key_name

logger = logging.getLogger(__name__)

DEFAULT_KEY_BINDINGS: Dict[str, Tuple[KeyCode, ...]] = {
    "quit": (ctrl("q"),),
    "save": (ctrl("s"),),
    "refresh": (ctrl("l"), ESC),
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    pass


@dataclass
class EditorConfig:
    tab_stop: int = 8
    quit_times: int = 3
    message_timeout: float = 5.0
    key_bindings: Dict[str, Tuple[KeyCode, ...]] = field(
        default_factory=lambda: dict(DEFAULT_KEY_BINDINGS))
    log_file: Optional[str] = None
    log_level: str = "WARNING"


def default_config_path() -> str:
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return os.path.join(base, "rawed", "config.toml")


def _positive_int(section: str, key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"[{section}] {key} must be a positive integer, got {value!r}")
    return value


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table, got {section!r}")
    return section


def _parse_bindings(keys: Dict[str, Any]) -> Dict[str, Tuple[KeyCode, ...]]:
    bindings = dict(DEFAULT_KEY_BINDINGS)
    for action, names in keys.items():
        if action not in DEFAULT_KEY_BINDINGS:
            raise ConfigError(f"[keys] unknown action {action!r}")
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, list) or not names or not all(isinstance(n, str) for n in names):
            raise ConfigError(f"[keys] {action} must be a key name or a non-empty list of key names, got {names!r}")
        try:
            bindings[action] = tuple(parse_key_name(name) for name in names)
        except ValueError as e:
            raise ConfigError(f"[keys] {action}: {e}") from e
    return bindings


def config_from_dict(data: Dict[str, Any]) -> EditorConfig:
    config = EditorConfig()
    editor = _section(data, "editor")
    if "tab_stop" in editor:
        config.tab_stop = _positive_int("editor", "tab_stop", editor["tab_stop"])
    if "quit_times" in editor:
        config.quit_times = _positive_int("editor", "quit_times", editor["quit_times"])
    if "message_timeout" in editor:
        timeout = editor["message_timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout < 0:
            raise ConfigError(f"[editor] message_timeout must be a non-negative number, got {timeout!r}")
        config.message_timeout = float(timeout)

    config.key_bindings = _parse_bindings(_section(data, "keys"))

    logging_section = _section(data, "logging")
    log_file = logging_section.get("file")
    if log_file is not None and not isinstance(log_file, str):
        raise ConfigError(f"[logging] file must be a path string, got {log_file!r}")
    config.log_file = log_file
    level = str(logging_section.get("level", config.log_level)).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"[logging] level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    config.log_level = level
    return config


def load_config(path: Optional[str] = None) -> EditorConfig:
    """Read the TOML config; a missing default file just means defaults."""
    explicit = path is not None
    if path is None:
        path = default_config_path()
    try:
        with open(path, encoding="utf-8") as f:
            data = toml.load(f)
    except FileNotFoundError as e:
        if explicit:
            raise ConfigError(f"config file not found: {path}") from e
        return EditorConfig()
    except toml.TomlDecodeError as e:
        raise ConfigError(f"TOML parse error in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    logger.debug("Loaded config from %s", path)
    return config_from_dict(data)
