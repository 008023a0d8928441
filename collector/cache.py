"""
AQHI Lab - TTL File Cache
One file per key in a temp directory; freshness is judged by file mtime.
"""

from __future__ import annotations

import hashlib
import logging
import time
from pathlib import Path
from typing import Optional

from config import CACHE_DIR, CACHE_FILE_PREFIX

logger = logging.getLogger("aqhi_cache")


class FileCache:
    """
    Best-effort key -> bytes cache.

    Reads and writes are not locked; concurrent writers race and the last
    one wins. Entries are never deleted here, cleanup is left to the OS.
    """

    def __init__(self, directory: str | Path = CACHE_DIR, prefix: str = CACHE_FILE_PREFIX):
        self.directory = Path(directory)
        self.prefix = prefix

    def path_for(self, key: str) -> Path:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return self.directory / f"{self.prefix}{digest}"

    def get(self, key: str, ttl_seconds: float) -> Optional[bytes]:
        """Return the cached payload if it is younger than `ttl_seconds`, else None."""
        path = self.path_for(key)
        try:
            age = time.time() - path.stat().st_mtime
            if age >= ttl_seconds:
                return None
            return path.read_bytes()
        except OSError as e:
            if not isinstance(e, FileNotFoundError):
                logger.debug(f"Cache read failed for {path.name}: {e}")
            return None

    def set(self, key: str, payload: bytes) -> None:
        path = self.path_for(key)
        try:
            path.write_bytes(payload)
        except OSError as e:
            logger.debug(f"Cache write failed for {path.name}: {e}")


_default_cache: Optional[FileCache] = None


def get_default_cache() -> FileCache:
    global _default_cache
    if _default_cache is None:
        _default_cache = FileCache()
    return _default_cache
