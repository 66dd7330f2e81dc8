"""
Key-Value Storage.

The persistence substrate beneath the note store and the theme preference:
string keys mapping to string values, read and written whole.

Backends:
    FileKeyValueStore   - one file per key under a directory; writes are
                          atomic (temp file + os.replace)
    MemoryKeyValueStore - process-local dict, for ephemeral sessions and tests

Blocking file access runs in the shared I/O pool so the event loop and
structlog context are preserved.
"""

import asyncio
import functools
import os
import re
import tempfile
from concurrent.futures import Executor
from pathlib import Path
from typing import Any, Callable, Protocol

from examnotes.backend.core.concurrency import get_io_pool

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class KeyValueStore(Protocol):
    """Async string-to-string storage."""

    async def get_item(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""
        ...

    async def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    async def remove_item(self, key: str) -> None:
        """Delete key. Removing a missing key is not an error."""
        ...


class MemoryKeyValueStore:
    """In-process store backed by a dict."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    async def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileKeyValueStore:
    """
    Directory of files, one per key.

    Keys are mapped to file names by replacing characters outside
    [A-Za-z0-9._-] with underscores ("@exam_notes_saved" becomes
    "exam_notes_saved"). The directory is created on first write.
    """

    def __init__(self, root: Path, executor: Executor | None = None) -> None:
        self.root = Path(root)
        self._executor = executor

    def path_for(self, key: str) -> Path:
        """Return the file that holds key."""
        name = _UNSAFE_KEY_CHARS.sub("_", key).strip("._")
        if not name:
            raise ValueError(f"Key cannot be mapped to a file name: {key!r}")
        return self.root / name

    async def get_item(self, key: str) -> str | None:
        return await self._run(self._read, self.path_for(key))

    async def set_item(self, key: str, value: str) -> None:
        await self._run(self._write, self.path_for(key), value)

    async def remove_item(self, key: str) -> None:
        await self._run(self._remove, self.path_for(key))

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        executor = self._executor or get_io_pool()
        return await loop.run_in_executor(executor, functools.partial(fn, *args))

    @staticmethod
    def _read(path: Path) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    @staticmethod
    def _write(path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @staticmethod
    def _remove(path: Path) -> None:
        path.unlink(missing_ok=True)
