# tedit/utils/utils.py
"""
tedit.utils.utils
=================

Configuration helpers for the tedit editor.

- Built-in defaults: `DEFAULT_CONFIG` is always loaded first, so the editor can
  start without any file on disk.
- User overrides: `~/.config/tedit/config.toml` is parsed with `toml` and
  deep-merged over the defaults.
- Colour helpers: conversion of `#RRGGBB` palette entries to xterm-256 indices.

Unlike most of the editor, a malformed user config is not silently ignored:
it raises `ConfigError`, which aborts startup with a readable message.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from tedit.core.Errors import ConfigError

logger = logging.getLogger("tedit")

# --- Constants ---
WHITE_FG_IDX = 255
CONFIG_DIR = Path.home() / ".config" / "tedit"

DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {
        "tab_size": 4,
        "paragraph_size": 47,
        "use_system_clipboard": False,
    },
    "colors": {
        "default": "#C9D1D9",
        "keyword": "#FF7B72",
        "type": "#F2CC60",
        "operator": "#FF7B72",
        "integer": "#79C0FF",
        "string": "#A5D6FF",
        "line_number": "#817248",
        "status": "#C9D1D9",
        "message": "#C9D1D9",
        "eof": "#8B949E",
    },
    "syntax": {
        "python": {
            "types": ["int", "float", "str", "bytes", "bool", "list", "dict", "set", "tuple", "None"],
        },
        "rust": {
            "types": ["i8", "i16", "i32", "i64", "u8", "u16", "u32", "u64", "usize", "isize",
                      "f32", "f64", "bool", "char", "str", "String", "Vec", "Option", "Result"],
        },
    },
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
}


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges the user's TOML file over them.

    Args:
        path: Explicit config file. Defaults to `~/.config/tedit/config.toml`.

    Raises:
        ConfigError: The user file exists but cannot be read or parsed.
    """
    final_config = copy.deepcopy(DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    user_config_path = path or CONFIG_DIR / "config.toml"
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
        except (toml.TomlDecodeError, OSError) as e:
            raise ConfigError(f"Could not parse config '{user_config_path}': {e}") from e
        final_config = deep_merge(final_config, user_config)
        logger.info(f"Successfully loaded and merged user config from {user_config_path}")

    return final_config


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Recursively merges the `override` dictionary into the `base` dictionary.
    """
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def hex_to_xterm(hex_color: str) -> int:
    """
    Converts a `#RRGGBB` string to the nearest xterm-256 colour index.

    Raises:
        ConfigError: The value is not a six-digit hex colour.
    """
    if not isinstance(hex_color, str):
        raise ConfigError(f"Colour must be a string, got {hex_color!r}")
    digits = hex_color.lstrip("#")
    if len(digits) != 6:
        raise ConfigError(f"Invalid colour {hex_color!r}: expected #RRGGBB")
    try:
        r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError as e:
        raise ConfigError(f"Invalid colour {hex_color!r}: {e}") from e

    if r == g == b:
        if r < 8: return 16
        if r > 248: return 231
        return round(((r - 8) / 247) * 24) + 232

    return int(
        16
        + (36 * round(r / 255 * 5))
        + (6 * round(g / 255 * 5))
        + round(b / 255 * 5)
    )
