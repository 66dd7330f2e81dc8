"""Unit tests for the theme preference store."""

import pytest

from examnotes.backend.core.exceptions import StorageWriteError
from examnotes.storage.kv import MemoryKeyValueStore
from examnotes.storage.theme import (
    DEFAULT_THEME_KEY,
    ThemeMode,
    ThemePreferenceStore,
    resolve_effective_theme,
)


class TestThemePreferenceStore:
    @pytest.mark.asyncio
    async def test_defaults_to_system(self, memory_kv):
        assert await ThemePreferenceStore(memory_kv).get_mode() is ThemeMode.SYSTEM

    @pytest.mark.asyncio
    async def test_set_then_get(self, memory_kv):
        store = ThemePreferenceStore(memory_kv)

        await store.set_mode(ThemeMode.DARK)

        assert await store.get_mode() is ThemeMode.DARK
        assert await memory_kv.get_item(DEFAULT_THEME_KEY) == "dark"

    @pytest.mark.asyncio
    async def test_invalid_stored_value_reads_as_system(self):
        kv = MemoryKeyValueStore({DEFAULT_THEME_KEY: "sepia"})
        assert await ThemePreferenceStore(kv).get_mode() is ThemeMode.SYSTEM

    @pytest.mark.asyncio
    async def test_read_failure_reads_as_system(self, failing_kv):
        assert await ThemePreferenceStore(failing_kv).get_mode() is ThemeMode.SYSTEM

    @pytest.mark.asyncio
    async def test_write_failure_raises(self, failing_kv):
        with pytest.raises(StorageWriteError):
            await ThemePreferenceStore(failing_kv).set_mode(ThemeMode.LIGHT)

    @pytest.mark.asyncio
    async def test_does_not_touch_notes_key(self, memory_kv):
        await ThemePreferenceStore(memory_kv, key="theme").set_mode(ThemeMode.LIGHT)
        assert await memory_kv.get_item("@exam_notes_saved") is None


class TestResolveEffectiveTheme:
    @pytest.mark.parametrize("scheme", ["dark", "light", None])
    def test_explicit_modes_ignore_system(self, scheme):
        assert resolve_effective_theme(ThemeMode.LIGHT, scheme) == "light"
        assert resolve_effective_theme(ThemeMode.DARK, scheme) == "dark"

    def test_system_follows_dark(self):
        assert resolve_effective_theme(ThemeMode.SYSTEM, "dark") == "dark"

    @pytest.mark.parametrize("scheme", ["light", None, "unknown"])
    def test_system_falls_back_to_light(self, scheme):
        assert resolve_effective_theme(ThemeMode.SYSTEM, scheme) == "light"
