"""A least-recently-used cache of file contents in front of the filesystem."""

from __future__ import annotations

import threading
from collections import OrderedDict

from fenris import file_operations
from fenris.file_operations import FileOperationError
from fenris.log import DEFAULT_LOGGER_NAME, get_logger

__all__ = ["CacheManager"]


class CacheManager:
    """Caches file contents, evicting the least recently used entry when full."""

    def __init__(self, max_cache_size: int, logger_name: str = DEFAULT_LOGGER_NAME) -> None:
        self._max_cache_size = max_cache_size
        self._logger = get_logger(logger_name)
        self._entries: OrderedDict[str, bytes] = OrderedDict()
        self._lock = threading.Lock()
        self._logger.info("cache manager initialized with max size: %s", max_cache_size)

    def _store(self, filename: str, content: bytes) -> None:
        if filename not in self._entries and len(self._entries) >= self._max_cache_size:
            if self._entries:
                evicted, _ = self._entries.popitem(last=False)
                self._logger.debug("removing LRU cache entry: %s", evicted)
        self._entries[filename] = content
        self._entries.move_to_end(filename)

    def read_file(self, filename: str) -> bytes:
        """Return a file's contents from the cache or disk; empty bytes on failure."""
        with self._lock:
            cached = self._entries.get(filename)
            if cached is not None:
                self._logger.debug("cache hit for file: %s", filename)
                self._entries.move_to_end(filename)
                return cached

        self._logger.debug("cache miss for file: %s", filename)
        try:
            data = file_operations.read_file(filename)
        except FileOperationError as exc:
            self._logger.warning("failed to read file: %s, error: %s", filename, exc.result)
            return b""

        if data:
            with self._lock:
                self._store(filename, data)
        self._logger.debug("file cached: %s (%d bytes)", filename, len(data))
        return data

    def write_file(self, filename: str, content: bytes) -> bool:
        """Write a file to disk and cache its new contents; False on failure."""
        payload = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        try:
            file_operations.write_file(filename, payload)
        except FileOperationError as exc:
            self._logger.warning("failed to write file: %s, error: %s", filename, exc.result)
            return False

        self._logger.debug("updating cache for file: %s", filename)
        with self._lock:
            self._store(filename, payload)
        return True

    def invalidate(self, filename: str) -> None:
        """Drop a file from the cache if it is there."""
        with self._lock:
            if self._entries.pop(filename, None) is not None:
                self._logger.debug("invalidated cache entry: %s", filename)

    def clear_cache(self) -> None:
        """Remove every cached entry."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        self._logger.info("cache cleared, %d entries removed", count)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)