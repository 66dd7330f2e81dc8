"""
Theme Preference.

The user's light/dark/system choice, stored under its own key on the same
key-value substrate as the notes.
"""

from enum import Enum
from typing import Literal

from examnotes.backend.core.exceptions import StorageError, StorageWriteError
from examnotes.backend.core.logging import get_logger, log_with_source
from examnotes.storage.kv import KeyValueStore

logger = get_logger(__name__)

DEFAULT_THEME_KEY = "@exam_notes_theme"

EffectiveTheme = Literal["light", "dark"]


class ThemeMode(str, Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


def resolve_effective_theme(mode: ThemeMode, system_scheme: str | None) -> EffectiveTheme:
    """Map a preference to the theme to render; "system" follows system_scheme."""
    if mode is ThemeMode.SYSTEM:
        return "dark" if system_scheme == "dark" else "light"
    return mode.value


class ThemePreferenceStore:
    """Reads and writes the theme preference. Unset or invalid values read as SYSTEM."""

    def __init__(self, kv: KeyValueStore, key: str = DEFAULT_THEME_KEY) -> None:
        self._kv = kv
        self._key = key

    async def get_mode(self) -> ThemeMode:
        try:
            raw = await self._kv.get_item(self._key)
        except (OSError, ValueError, StorageError) as e:
            log_with_source(
                logger, "store", "warning", "Failed to read theme preference",
                key=self._key, error=str(e),
            )
            return ThemeMode.SYSTEM

        try:
            return ThemeMode(raw) if raw is not None else ThemeMode.SYSTEM
        except ValueError:
            log_with_source(
                logger, "store", "warning", "Ignoring unknown theme preference",
                value=raw,
            )
            return ThemeMode.SYSTEM

    async def set_mode(self, mode: ThemeMode) -> None:
        """
        Persist the preference.

        Raises:
            StorageWriteError: The preference could not be written
        """
        try:
            await self._kv.set_item(self._key, mode.value)
        except (OSError, ValueError, StorageError) as e:
            log_with_source(
                logger, "store", "error", "Failed to save theme preference",
                key=self._key, error=str(e),
            )
            raise StorageWriteError(f"Failed to save theme: {e}") from e
