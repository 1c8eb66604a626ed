"""
Persisted TUI preferences.

Lives in ~/.config/findpeople/ui_config.json. Only the theme is stored today;
unknown keys are kept so newer versions can add preferences without losing
older ones.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from . import constants

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "theme": "findpeople-dark",
}


def get_ui_config_path() -> Path:
    """Location of the preferences file; creates the config directory."""
    constants.FINDPEOPLE_CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return constants.FINDPEOPLE_CONFIG_DIR / "ui_config.json"


def load_ui_config() -> dict[str, Any]:
    """Stored preferences layered over DEFAULT_CONFIG.

    A missing or unreadable file yields a copy of the defaults.
    """
    path = get_ui_config_path()
    if not path.exists():
        return dict(DEFAULT_CONFIG)

    try:
        stored = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable UI config %s: %s", path, e)
        return dict(DEFAULT_CONFIG)

    if not isinstance(stored, dict):
        logger.warning("Ignoring UI config %s: expected an object", path)
        return dict(DEFAULT_CONFIG)
    return {**DEFAULT_CONFIG, **stored}


def save_ui_config(config: dict[str, Any]) -> None:
    """Write preferences; failures are logged, never raised."""
    path = get_ui_config_path()
    try:
        path.write_text(json.dumps(config, indent=2, sort_keys=True) + "\n")
    except OSError as e:
        logger.warning("Could not save UI config %s: %s", path, e)


def get_theme() -> str:
    return str(load_ui_config().get("theme") or DEFAULT_CONFIG["theme"])


def set_theme(theme_name: str) -> None:
    """Remember theme_name for the next launch."""
    save_ui_config({**load_ui_config(), "theme": theme_name})
