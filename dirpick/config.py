"""Persistent JSON config helpers.

Stores the UI theme, cursor marker, fixed viewport height, and key overrides.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "dirpick"
CONFIG_FILENAME = "config.json"
CONFIG_ENV_VAR = "DIRPICK_CONFIG"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


def config_path() -> Path:
    """Return the active config path, honoring ``DIRPICK_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser()
    return CONFIG_PATH


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    path = config_path()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored so a read-only config
    directory never breaks a picker session.
    """
    path = config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.debug("could not write config %s: %s", path, exc)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)


def load_cursor_marker() -> str | None:
    value = load_config().get("cursor")
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def load_height() -> int | None:
    """Load a fixed viewport height; booleans and non-positive values are ignored."""
    value = load_config().get("height")
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_key_overrides() -> dict[str, object]:
    """Load ``{key-token: action-name}`` overrides with string keys only."""
    value = load_config().get("keys")
    if not isinstance(value, dict):
        return {}
    return {key: action for key, action in value.items() if isinstance(key, str) and key}


__all__ = [
    "APP_NAME",
    "CONFIG_ENV_VAR",
    "CONFIG_PATH",
    "DEFAULT_CONFIG_PATH",
    "config_path",
    "load_config",
    "save_config",
    "load_theme_name",
    "save_theme_name",
    "load_cursor_marker",
    "load_height",
    "load_key_overrides",
]
