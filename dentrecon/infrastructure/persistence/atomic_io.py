from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path
from typing import Any

import aiofiles
from loguru import logger


async def write_new_file(path: Path, content: str) -> None:
    """Publish ``content`` at ``path`` in one step, never replacing a file.

    The content is written and flushed to a hidden temp file in the target
    directory, then hard-linked into place. Linking fails with
    FileExistsError when ``path`` is already taken, so readers see either
    no file or the complete one.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=str(path.parent), prefix=".tmp_", suffix=path.suffix)
    temp_path = Path(temp_name)

    try:
        async with aiofiles.open(fd, mode="w", encoding="utf-8", closefd=True) as f:
            await f.write(content)
            await f.flush()
        await asyncio.to_thread(os.link, temp_path, path)
        logger.debug("Published {}", path)
    finally:
        await asyncio.to_thread(temp_path.unlink, missing_ok=True)


async def read_json(path: Path) -> Any | None:
    """Parsed JSON content of ``path``, or None if it does not exist."""
    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            content = await f.read()
    except FileNotFoundError:
        return None
    return json.loads(content)
