"""
Concurrency Infrastructure.

Shared thread pool for blocking I/O and named semaphores for limiting
concurrent calls to external services. Both are created lazily on first
access and released by shutdown_pools().

Usage:
    from examnotes.backend.core.concurrency import get_io_pool, get_semaphore

    # Run blocking file access in the pool (preserves structlog context)
    data = await loop.run_in_executor(get_io_pool(), path.read_text)

    # Limit concurrent calls to the language model
    async with get_semaphore("llm"):
        result = await agent.run(prompt)
"""

import asyncio
import contextvars
from concurrent.futures import ThreadPoolExecutor

from examnotes.backend.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_SEMAPHORE_CAPACITY = 20

_io_pool: ThreadPoolExecutor | None = None
_semaphores: dict[str, asyncio.Semaphore] = {}


class TracedThreadPoolExecutor(ThreadPoolExecutor):
    """ThreadPoolExecutor that runs each task inside a copy of the caller's context.

    Keeps structlog context variables (request_id, source) visible to log
    calls made from worker threads.
    """

    def submit(self, fn, /, *args, **kwargs):
        ctx = contextvars.copy_context()
        return super().submit(ctx.run, fn, *args, **kwargs)


def get_io_pool() -> TracedThreadPoolExecutor:
    """Get the shared thread pool for blocking I/O, sized from concurrency.yaml."""
    global _io_pool
    if _io_pool is None:
        from examnotes.backend.core.config import get_app_config
        max_workers = get_app_config().concurrency.thread_pool.max_workers
        _io_pool = TracedThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="examnotes-io",
        )
        logger.debug("Thread pool created", extra={"max_workers": max_workers})
    return _io_pool


def get_semaphore(name: str) -> asyncio.Semaphore:
    """Get a named semaphore.

    Capacity is read from concurrency.yaml under `semaphores.<name>`;
    names that are not configured get DEFAULT_SEMAPHORE_CAPACITY.
    """
    if name not in _semaphores:
        from examnotes.backend.core.config import get_app_config
        semaphore_config = get_app_config().concurrency.semaphores
        capacity = getattr(semaphore_config, name, DEFAULT_SEMAPHORE_CAPACITY)
        _semaphores[name] = asyncio.Semaphore(capacity)
        logger.debug("Semaphore created", extra={"name": name, "capacity": capacity})
    return _semaphores[name]


async def shutdown_pools() -> None:
    """Shut down the thread pool and forget all semaphores."""
    global _io_pool

    if _io_pool is not None:
        await asyncio.to_thread(_io_pool.shutdown, wait=True)
        logger.debug("Thread pool shut down")
        _io_pool = None

    _semaphores.clear()
