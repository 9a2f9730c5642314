"""Interface for interacting with the file system.

Defines the read-only contract the cache layer needs, allowing it to be
tested without touching the disk.
"""

import abc

# Import relevant domain models
from ..models.common import FilePath

class FileSystem(abc.ABC):
    """Abstract Base Class for file system operations."""

    @abc.abstractmethod
    async def read_file(self, file_path: FilePath) -> str:
        """Reads the entire content of a file asynchronously.

        Args:
            file_path: The path to the file to read.

        Returns:
            The content of the file as a string.

        Raises:
            FileNotFoundError: If the file does not exist.
            PermissionError: If read permissions are denied.
            OSError: For other file system errors.
        """
        pass

    @abc.abstractmethod
    async def get_mtime_ns(self, file_path: FilePath) -> int:
        """Returns the file's modification time in nanoseconds.

        Args:
            file_path: The path to stat.

        Raises:
            OSError: If the file cannot be stat'ed (missing, permission denied).
        """
        pass
