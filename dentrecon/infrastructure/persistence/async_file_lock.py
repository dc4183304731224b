"""Async-safe file lock wrapper.

Wraps filelock.FileLock so waiting for the lock does not block the event loop.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from filelock import FileLock


@asynccontextmanager
async def async_file_lock(lock_path: Path) -> AsyncIterator[None]:
    """Hold an exclusive lock on ``lock_path`` for the duration of the block.

    Usage:
        async with async_file_lock(case_dir / ".lock"):
            await allocate_next_version()
    """
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    # acquire and release run on different worker threads
    lock = FileLock(lock_path, thread_local=False)
    await asyncio.to_thread(lock.acquire)
    try:
        yield
    finally:
        await asyncio.to_thread(lock.release)
