"""Concrete implementation of the FileSystem interface for the local disk.

Uses `aiofiles` so stat and read calls do not block the event loop.
"""

import logging
from pathlib import Path

import aiofiles
import aiofiles.os

# Domain Layer Imports
from postalcodes.domain.interfaces.filesystem import FileSystem
from postalcodes.domain.models.common import FilePath

logger = logging.getLogger(__name__)

class LocalFileSystem(FileSystem):
    """Implementation of FileSystem for the local disk."""

    def __init__(self, encoding: str = "utf-8"):
        """Initializes the LocalFileSystem adapter."""
        self.encoding = encoding
        logger.debug(f"LocalFileSystem initialized (encoding={encoding}).")

    async def read_file(self, file_path: FilePath) -> str:
        """Reads file content asynchronously."""
        path = Path(file_path)
        logger.debug(f"Attempting to read file: {path}")
        async with aiofiles.open(path, mode='r', encoding=self.encoding) as f:
            content = await f.read()
        logger.debug(f"Successfully read {len(content)} characters from {path}")
        return content

    async def get_mtime_ns(self, file_path: FilePath) -> int:
        """Stats the file asynchronously and returns st_mtime_ns."""
        stat_result = await aiofiles.os.stat(file_path)
        return stat_result.st_mtime_ns
