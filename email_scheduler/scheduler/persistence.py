"""
JSON-file persistence for scheduled emails.

The whole collection lives in one JSON array. Reads return a full snapshot,
writes replace the full collection atomically (temp file + rename), so a
reader never observes a half-written file.

Callers hold ``EmailStore.lock`` around every load (and load-modify-save)
sequence, so the HTTP handlers and the dispatcher tick never interleave.
The store itself does not take the lock.
"""

import asyncio
import json
import logging
import uuid
from pathlib import Path
from typing import Iterable

import aiofiles
import aiofiles.os

from .entities import EmailJob
from .errors import StorageError


logger = logging.getLogger(__name__)


class EmailStore:
    """
    File-backed store for the EmailJob collection.

    - Does NOT contain business logic
    - Does NOT validate beyond record shape
    - Preserves insertion order
    """

    def __init__(self, path: str | Path):
        """
        Initialize the store.

        Args:
            path: Path to the JSON file. Created on first load if missing.
        """
        self.path = Path(path)
        self.lock = asyncio.Lock()

    async def _ensure_data_dir(self) -> None:
        await aiofiles.os.makedirs(self.path.parent, exist_ok=True)

    async def load_all(self) -> list[EmailJob]:
        """
        Load every stored email in insertion order.

        Returns an empty list (and writes an empty collection) when no file
        exists yet.

        Raises:
            StorageError: If the file exists but cannot be read or parsed
        """
        try:
            await self._ensure_data_dir()

            if not await aiofiles.os.path.exists(self.path):
                logger.info(f"[Store] No data file at {self.path}, initializing empty collection")
                await self._write([])
                return []

            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
        except OSError as e:
            raise StorageError(str(self.path), str(e)) from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise StorageError(str(self.path), f"invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise StorageError(str(self.path), "expected a JSON array")

        try:
            return [EmailJob.from_dict(item) for item in data]
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise StorageError(str(self.path), f"malformed email record: {e}") from e

    async def save_all(self, jobs: Iterable[EmailJob]) -> None:
        """
        Replace the entire stored collection with ``jobs``.

        Raises:
            StorageError: If the collection cannot be written
        """
        try:
            await self._ensure_data_dir()
            await self._write([job.to_dict() for job in jobs])
        except OSError as e:
            raise StorageError(str(self.path), str(e)) from e

    async def _write(self, records: list[dict]) -> None:
        """Write records to a temp file next to the target, then rename over it."""
        tmp_path = self.path.with_name(f".{self.path.name}.{uuid.uuid4().hex}.tmp")
        payload = json.dumps(records, indent=2, ensure_ascii=False)

        try:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
            await aiofiles.os.replace(tmp_path, self.path)
        except OSError:
            if await aiofiles.os.path.exists(tmp_path):
                await aiofiles.os.remove(tmp_path)
            raise

        logger.debug(f"[Store] Saved {len(records)} emails to {self.path}")
