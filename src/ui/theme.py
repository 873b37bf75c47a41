"""Light/dark theme toggle persisted in durable browser-bound storage."""

import logging
from collections.abc import Callable, MutableMapping
from typing import Any

from src.models.schemas import Theme

logger = logging.getLogger(__name__)

THEME_STORAGE_KEY = "theme"


class ThemeController:
    """Applies and persists the page theme.

    Args:
        storage: Durable key-value store (NiceGUI's ``app.storage.user``).
        apply: Callback that makes a theme visible.
    """

    def __init__(
        self,
        storage: MutableMapping[str, Any],
        apply: Callable[[Theme], None],
    ) -> None:
        self._storage = storage
        self._apply = apply
        self.theme = Theme.LIGHT

    def initialize(self, prefers_dark: bool | None = None) -> Theme:
        """Apply the stored theme, else the environment's preference, else light.

        Args:
            prefers_dark: Browser ``prefers-color-scheme`` result, None if unknown.

        Returns:
            The applied theme.
        """
        stored = self._load()
        if stored is not None:
            theme = stored
        elif prefers_dark:
            theme = Theme.DARK
        else:
            theme = Theme.LIGHT
        self._set(theme)
        return theme

    def toggle(self) -> Theme:
        theme = Theme.LIGHT if self.theme is Theme.DARK else Theme.DARK
        self._set(theme)
        try:
            self._storage[THEME_STORAGE_KEY] = theme.value
        except Exception as e:
            logger.warning(f"Could not persist theme preference: {e}")
        return theme

    def _load(self) -> Theme | None:
        try:
            value = self._storage.get(THEME_STORAGE_KEY)
        except Exception as e:
            logger.warning(f"Theme storage unavailable, using default: {e}")
            return None
        if value is None:
            return None
        try:
            return Theme(value)
        except ValueError:
            logger.warning(f"Ignoring unknown stored theme {value!r}")
            return None

    def _set(self, theme: Theme) -> None:
        self.theme = theme
        self._apply(theme)
