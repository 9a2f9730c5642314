"""Interface for the file content cache.

Defines the contract for serving parsed file contents while avoiding
redundant disk reads, plus explicit invalidation.
"""

import abc
from typing import Any

from ..models.common import DirectoryPath
from ..models.regions import CacheStats

class FileCache(abc.ABC):
    """Abstract Base Class for a parsed-file cache."""

    @abc.abstractmethod
    async def get_file_contents(self, directory: DirectoryPath, file_name: str) -> Any:
        """Returns the parsed JSON content of `directory/file_name`.

        Content is re-read only when the file changed since it was cached.

        Raises:
            OSError: If the file cannot be stat'ed or read.
            DataAccessError: If the file content is not valid JSON or is nested
                too deeply to parse.
        """
        pass

    @abc.abstractmethod
    def invalidate_entry(self, file_path: str) -> bool:
        """Drops one cached file. Returns True if an entry was removed."""
        pass

    @abc.abstractmethod
    def clear_cache(self) -> None:
        """Drops every cached file."""
        pass

    @abc.abstractmethod
    def stats(self) -> CacheStats:
        """Returns a snapshot of the cache counters."""
        pass
