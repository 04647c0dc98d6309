from __future__ import annotations

import logging
from enum import Enum
from typing import Dict

from textual.theme import Theme as TextualTheme

from .config import CONFIG_PATH, load_config, save_config

logger = logging.getLogger("news_search")


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def parse(cls, value: object, default: "Theme" | None = None) -> "Theme":
        try:
            return cls(value)
        except ValueError:
            return default or cls.LIGHT

    @property
    def textual_name(self) -> str:
        return f"news-{self.value}"

    def toggled(self) -> "Theme":
        return Theme.DARK if self is Theme.LIGHT else Theme.LIGHT


# --- Theme Configuration ---
THEME_DEFINITIONS: Dict[Theme, dict] = {
    Theme.LIGHT: {
        "primary": "#2563eb",
        "secondary": "#64748b",
        "accent": "#0ea5e9",
        "foreground": "#1e293b",
        "background": "#f8fafc",
        "surface": "#ffffff",
        "panel": "#e2e8f0",
        "success": "#16a34a",
        "warning": "#d97706",
        "error": "#dc2626",
        "dark": False,
    },
    Theme.DARK: {
        "primary": "#3b82f6",
        "secondary": "#94a3b8",
        "accent": "#38bdf8",
        "foreground": "#e2e8f0",
        "background": "#0f172a",
        "surface": "#1e293b",
        "panel": "#334155",
        "success": "#22c55e",
        "warning": "#f59e0b",
        "error": "#f87171",
        "dark": True,
    },
}


def load_themes() -> Dict[str, TextualTheme]:
    """Build the Textual themes the app registers, keyed by Textual theme name."""
    return {
        theme.textual_name: TextualTheme(name=theme.textual_name, **definition)
        for theme, definition in THEME_DEFINITIONS.items()
    }


class ThemeStore:
    """Persists the light/dark preference under the ``theme`` key of the config file."""

    def __init__(self, config_path: str = CONFIG_PATH):
        self.config_path = config_path

    def load(self) -> Theme:
        value = load_config(self.config_path).get("theme")
        theme = Theme.parse(value)
        if value is not None and value != theme.value:
            logger.warning("Unknown theme %r in config, using %s", value, theme.value)
        return theme

    def set(self, theme: Theme) -> Theme:
        config = load_config(self.config_path)
        config["theme"] = theme.value
        save_config(config, self.config_path)
        return theme
