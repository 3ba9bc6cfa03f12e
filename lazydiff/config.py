"""Persistent JSON config helpers.

Reads the theme choice, Pygments style override, base branch, and pager
command. All access is defensive: malformed or missing config falls back to
defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .ui_theme import AUTO_THEME_NAME, normalize_theme_name

APP_NAME = "lazydiff"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_BASE_BRANCH = "main"
DEFAULT_PAGER = "less -RFX"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Resolved startup settings; CLI flags are applied on top of these."""

    theme: str = AUTO_THEME_NAME
    style: str | None = None
    base_branch: str = DEFAULT_BASE_BRANCH
    pager: str = DEFAULT_PAGER


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _string_value(data: dict[str, object], key: str) -> str | None:
    """Return a stripped non-empty string value or ``None``."""
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_settings() -> Settings:
    """Build ``Settings`` from the persisted config with per-key fallbacks."""
    data = load_config()
    return Settings(
        theme=normalize_theme_name(_string_value(data, "theme")),
        style=_string_value(data, "style"),
        base_branch=_string_value(data, "base_branch") or DEFAULT_BASE_BRANCH,
        pager=_string_value(data, "pager") or DEFAULT_PAGER,
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_BASE_BRANCH",
    "DEFAULT_PAGER",
    "Settings",
    "load_config",
    "load_settings",
]
