# src/radheat_core/cache/service.py
"""
Provides the kernel cache shared by the evaluator and the sweep driver for one run.
"""
import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Union

import numpy as np

from .exceptions import CacheFormatError, CachePreloadFailure, CacheWriteFailure
from .keys import KernelCacheKey
from .storage import read_cache_file, write_cache_file

logger = logging.getLogger(__name__)


class KernelCache:
    """
    The in-memory store of previously computed kernel values for a single run.

    Lifecycle: created empty, then filled by zero or more `preload` merges, then
    grown by `put` on cache misses during the sweep, then optionally serialized
    once by `write_back`.

    Entries are never overwritten. During preload the first source to provide a
    key wins, so sources listed earlier take precedence. Stored arrays are
    read-only copies.

    The cache is owned by one run and is not safe for concurrent use.
    """

    def __init__(self):
        self._entries: Dict[KernelCacheKey, np.ndarray] = {}
        self.preload_failures: List[CachePreloadFailure] = []
        self.write_failures: List[CacheWriteFailure] = []
        self.clear_stats()
        logger.debug("KernelCache instance created.")

    # --- Lookup / Insert ---

    def get(self, key: KernelCacheKey) -> Optional[np.ndarray]:
        """Returns the cached value for `key`, or `None` on a miss."""
        value = self._entries.get(key)
        if value is not None:
            self._stats['hits'] += 1
            logger.debug(f"Cache HIT for key: {key.to_token()[:150]}")
            return value

        self._stats['misses'] += 1
        logger.debug(f"Cache MISS for key: {key.to_token()[:150]}")
        return None

    def put(self, key: KernelCacheKey, value) -> bool:
        """
        Stores `value` under `key` unless the key is already present.

        Returns:
            True if the value was inserted, False if an entry already existed.

        Raises:
            TypeError: if the value is not numeric (cache files cannot hold objects).
        """
        if key in self._entries:
            logger.debug(f"Cache key already present, keeping existing value: {key.to_token()[:150]}")
            return False
        self._entries[key] = self._freeze(value)
        self._stats['inserts'] += 1
        return True

    def get_or_compute(self, key: KernelCacheKey, compute: Callable[[], np.ndarray]) -> np.ndarray:
        """Returns the cached value for `key`, calling `compute` and storing its result on a miss."""
        value = self.get(key)
        if value is None:
            self.put(key, compute())
            value = self._entries[key]
        return value

    @staticmethod
    def _freeze(value) -> np.ndarray:
        array = np.array(value, copy=True)
        if array.dtype == object:
            raise TypeError("Kernel cache values must be numeric arrays, not Python objects.")
        array.setflags(write=False)
        return array

    def __contains__(self, key: KernelCacheKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> Iterator[KernelCacheKey]:
        return iter(self._entries.keys())

    # --- Preload / Write-back ---

    def preload(self, source: Union[str, Path]) -> bool:
        """
        Merges the entries of a cache file into this cache. Keys that are already
        present are skipped, so preloading the same file twice changes nothing.

        A missing or corrupt file is logged and recorded in `preload_failures`;
        it never aborts the run.

        Returns:
            True if the file was read, False if it could not be preloaded.
        """
        path = Path(source)
        try:
            loaded = read_cache_file(path)
        except (OSError, CacheFormatError) as e:
            failure = CachePreloadFailure(source=path, details=str(e))
            self.preload_failures.append(failure)
            logger.warning(f"{failure} Continuing without it.")
            return False

        added = 0
        for key, value in loaded.items():
            if key not in self._entries:
                self._entries[key] = self._freeze(value)
                added += 1
        self._stats['preloaded'] += added
        logger.info(f"Preloaded cache '{path}': {added} new entries ({len(loaded) - added} already present).")
        return True

    def preload_all(self, sources: Iterable[Union[str, Path]]) -> int:
        """Preloads every source in order; returns how many could be read."""
        return sum(1 for source in sources if self.preload(source))

    def write_back(self, destination: Optional[Union[str, Path]]) -> bool:
        """
        Serializes the whole store (preloaded and new entries) to `destination`.
        With no destination nothing is written.

        A write error is logged and recorded in `write_failures`; results of the run
        are not affected.

        Returns:
            True if the file was written.
        """
        if destination is None:
            logger.debug("No cache write-back destination configured.")
            return False
        path = Path(destination)
        try:
            write_cache_file(path, self._entries)
        except OSError as e:
            failure = CacheWriteFailure(destination=path, details=str(e))
            self.write_failures.append(failure)
            logger.error(str(failure))
            return False
        logger.info(f"Wrote {len(self._entries)} cache entries to '{path}'.")
        return True

    # --- Statistics ---

    def get_stats(self) -> Dict[str, int]:
        """Returns a copy of the hit/miss/insert/preload counters."""
        return dict(self._stats)

    def clear_stats(self):
        """Resets the counters."""
        self._stats = {'hits': 0, 'misses': 0, 'inserts': 0, 'preloaded': 0}
