"""Read-only JSON config.

Holds the theme name, hidden-file visibility, and the double-click window.
Nothing is written back. All access is defensive: a missing or malformed
config, or a field of the wrong type, falls back to the default.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .input.bindings import DEFAULT_DOUBLE_CLICK_SECONDS

logger = logging.getLogger(__name__)

APP_NAME = "quickopen"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


@dataclass(frozen=True)
class QuickOpenConfig:
    theme: str | None = None
    show_hidden: bool = True
    double_click_seconds: float = DEFAULT_DOUBLE_CLICK_SECONDS


def load_config_data(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception as exc:
        logger.warning("ignoring config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _theme_name(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _double_click_seconds(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_DOUBLE_CLICK_SECONDS
    if value <= 0:
        return DEFAULT_DOUBLE_CLICK_SECONDS
    return float(value)


def load_config(path: Path | None = None) -> QuickOpenConfig:
    """Load and validate the config, field by field."""
    data = load_config_data(path)
    show_hidden = data.get("show_hidden")
    return QuickOpenConfig(
        theme=_theme_name(data.get("theme")),
        show_hidden=show_hidden if isinstance(show_hidden, bool) else True,
        double_click_seconds=_double_click_seconds(data.get("double_click_seconds")),
    )
