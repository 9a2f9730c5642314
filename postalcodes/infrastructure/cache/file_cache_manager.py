"""Size-bounded, modification-time aware cache of parsed JSON files.

Entries are keyed by the normalized file path and kept in insertion order.
A cached entry is served as long as its recorded mtime is not older than
the file's current mtime; otherwise the file is re-read, re-parsed and the
entry replaced in place. When the summed entry sizes exceed `max_size`,
the oldest entries are evicted first.
"""

import json
import logging
import os
import threading
from typing import Any, Dict, Optional

# Domain Layer Imports
from postalcodes.domain.errors import ConfigurationError, DataAccessError
from postalcodes.domain.interfaces.cache import FileCache
from postalcodes.domain.interfaces.filesystem import FileSystem
from postalcodes.domain.models.common import CacheKey, DirectoryPath, FilePath
from postalcodes.domain.models.regions import CacheEntry, CacheStats

logger = logging.getLogger(__name__)

DEFAULT_MAX_CACHE_SIZE = 100 * 1024 * 1024  # 100 MiB


def serialized_size(data: Any) -> int:
    """Byte length of the compact UTF-8 JSON form of `data`."""
    return len(json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))


class FileCacheManager(FileCache):
    """In-memory FileCache with insertion-order eviction."""

    def __init__(
        self,
        file_system: Optional[FileSystem] = None,
        max_size: int = DEFAULT_MAX_CACHE_SIZE,
    ):
        """Initializes the cache.

        Args:
            file_system: Adapter used for stat/read. Defaults to LocalFileSystem.
            max_size: Capacity in bytes of serialized cached data.
        """
        if max_size <= 0:
            raise ConfigurationError(f"Cache max_size must be positive, got {max_size}.")
        if file_system is None:
            from postalcodes.infrastructure.filesystem.local_fs import LocalFileSystem
            file_system = LocalFileSystem()

        self.file_system = file_system
        self.max_size = max_size
        self._cache: Dict[CacheKey, CacheEntry] = {}
        self._current_size = 0
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        # Guards _cache and the counters; never held across an await.
        self._lock = threading.Lock()
        logger.debug(f"FileCacheManager initialized (max_size={max_size} bytes).")

    @staticmethod
    def make_key(file_path: str) -> CacheKey:
        return CacheKey(os.path.normpath(file_path))

    @property
    def current_size(self) -> int:
        return self._current_size

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, file_path: object) -> bool:
        return isinstance(file_path, str) and self.make_key(file_path) in self._cache

    # --- FileCache Interface Implementation ---

    async def get_file_contents(self, directory: DirectoryPath, file_name: str) -> Any:
        """Returns parsed JSON for `directory/file_name`, re-reading only when stale."""
        key = self.make_key(os.path.join(directory, file_name))

        try:
            mtime_ns = await self.file_system.get_mtime_ns(FilePath(key))
        except OSError as e:
            logger.debug(f"Error accessing file: {key}: {e}")
            raise

        cached = self._cache.get(key)
        if cached is not None and cached.mtime_ns >= mtime_ns:
            with self._lock:
                self._hits += 1
            logger.debug(f"Cache hit: {key}")
            return cached.data

        logger.debug(f"Cache {'stale' if cached is not None else 'miss'}: {key}")
        try:
            raw = await self.file_system.read_file(FilePath(key))
        except OSError as e:
            logger.debug(f"Error reading file: {key}: {e}")
            raise

        try:
            data = json.loads(raw)
            size = serialized_size(data)
        except json.JSONDecodeError as e:
            logger.debug(f"Malformed JSON in {key}: {e}")
            raise DataAccessError(f"Malformed JSON in {key}: {e}", path=key) from e
        except RecursionError as e:
            # Nesting deeper than the interpreter recursion limit.
            logger.debug(f"JSON in {key} is nested too deeply: {e}")
            raise DataAccessError(f"JSON in {key} is nested too deeply", path=key) from e

        entry = CacheEntry(path=key, mtime_ns=mtime_ns, data=data, size=size)
        self._store(key, entry)
        return data

    def _store(self, key: CacheKey, entry: CacheEntry) -> None:
        """Upserts an entry, then evicts oldest entries while over capacity."""
        with self._lock:
            self._misses += 1
            previous = self._cache.pop(key, None)
            if previous is not None:
                self._current_size -= previous.size

            self._current_size += entry.size
            self._cache[key] = entry

            while self._current_size > self.max_size:
                oldest_key = next(iter(self._cache))
                if oldest_key == key:
                    # Only the fresh entry is left; keep it even though it's oversized.
                    logger.warning(
                        f"Cache entry {key} ({entry.size} bytes) exceeds capacity "
                        f"({self.max_size} bytes); keeping it alone."
                    )
                    break
                evicted = self._cache.pop(oldest_key)
                self._current_size -= evicted.size
                self._evictions += 1
                logger.debug(f"Evicted {oldest_key} ({evicted.size} bytes) from cache.")

    def invalidate_entry(self, file_path: str) -> bool:
        """Removes one entry by path. No-op if it is not cached."""
        key = self.make_key(file_path)
        with self._lock:
            removed = self._cache.pop(key, None)
            if removed is None:
                return False
            self._current_size -= removed.size
        logger.debug(f"Invalidated cache entry: {key}")
        return True

    def clear_cache(self) -> None:
        """Empties the cache and resets all counters."""
        with self._lock:
            self._cache.clear()
            self._current_size = 0
            self._hits = 0
            self._misses = 0
            self._evictions = 0
        logger.info("Cleared file cache.")

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                entries=len(self._cache),
                current_size=self._current_size,
                max_size=self.max_size,
            )
