"""Traversal configuration plus persisted user defaults.

``TraversalConfig`` is the immutable option set handed to the walker and the
renderers. User defaults live in a JSON file under the platform config
directory; all access is defensive, so a missing or malformed file simply
means built-in defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "etree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

BOOLEAN_DEFAULT_KEYS = ("show_hidden", "show_size", "show_permissions", "no_color", "ascii")


@dataclass(frozen=True)
class TraversalConfig:
    """Read-only options for one run, built once from CLI input."""

    root: Path = Path(".")
    max_depth: int = 0
    show_hidden: bool = False
    directories_only: bool = False
    exclude_pattern: str = ""
    show_size: bool = False
    show_permissions: bool = False
    color_enabled: bool = False
    export_path: Path | None = None
    follow_symlinks: bool = False
    ascii: bool = False
    theme: str | None = None

    @property
    def export_mode(self) -> bool:
        return self.export_path is not None


@dataclass(frozen=True)
class UserDefaults:
    """Defaults read from the user config file; flags can only switch these on."""

    show_hidden: bool = False
    show_size: bool = False
    show_permissions: bool = False
    no_color: bool = False
    ascii: bool = False
    theme: str | None = None


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def _load_theme_name(data: dict[str, object]) -> str | None:
    value = data.get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_user_defaults() -> UserDefaults:
    """Read user defaults; only explicit booleans are honoured for flags."""
    data = load_config()
    flags = {key: data[key] for key in BOOLEAN_DEFAULT_KEYS if isinstance(data.get(key), bool)}
    return UserDefaults(theme=_load_theme_name(data), **flags)


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "TraversalConfig",
    "UserDefaults",
    "load_config",
    "load_user_defaults",
]
