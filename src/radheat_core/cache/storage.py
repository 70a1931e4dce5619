# src/radheat_core/cache/storage.py
"""
Reads and writes kernel cache files.

A cache file is a compressed NumPy archive with three kinds of members:
`__format__` (format tag and version), `__keys__` (one serialized
`KernelCacheKey` per entry) and `entry_<n>` (the value of the n-th key).
Files are loaded with `allow_pickle=False`, so values must be numeric arrays.
"""
import logging
import os
from pathlib import Path
from typing import Dict, Mapping

import numpy as np

from .exceptions import CacheFormatError
from .keys import KernelCacheKey

logger = logging.getLogger(__name__)

CACHE_FORMAT_TAG = "radheat-kernel-cache"
CACHE_FORMAT_VERSION = 1


def read_cache_file(path: Path) -> Dict[KernelCacheKey, np.ndarray]:
    """
    Loads every entry of a cache file, preserving the stored order.

    Raises:
        OSError: if the file cannot be opened.
        CacheFormatError: if the file is not a kernel cache of a supported version.
    """
    try:
        with np.load(path, allow_pickle=False) as data:
            if not hasattr(data, "files"):
                raise CacheFormatError("File is a bare NumPy array, not a cache archive.")
            if "__format__" not in data.files or "__keys__" not in data.files:
                raise CacheFormatError("Archive has no '__format__'/'__keys__' members.")
            tag, version = (str(x) for x in data["__format__"])
            if tag != CACHE_FORMAT_TAG or int(version) != CACHE_FORMAT_VERSION:
                raise CacheFormatError(f"Unsupported cache format '{tag}' version {version}.")

            entries: Dict[KernelCacheKey, np.ndarray] = {}
            for index, token in enumerate(data["__keys__"]):
                member = f"entry_{index}"
                if member not in data.files:
                    raise CacheFormatError(f"Archive lists key #{index} but has no '{member}' member.")
                entries[KernelCacheKey.from_token(str(token))] = data[member]
            return entries
    except CacheFormatError:
        raise
    except OSError:
        raise
    except Exception as e:
        # np.load reports damaged archives through several unrelated exception types.
        raise CacheFormatError(f"{type(e).__name__}: {e}") from e


def write_cache_file(path: Path, entries: Mapping[KernelCacheKey, np.ndarray]) -> None:
    """
    Writes all entries to `path`, replacing any existing file atomically.

    Raises:
        OSError: if the file cannot be written.
    """
    path = Path(path)
    arrays = {
        "__format__": np.array([CACHE_FORMAT_TAG, str(CACHE_FORMAT_VERSION)]),
        "__keys__": np.array([key.to_token() for key in entries], dtype=str),
    }
    for index, value in enumerate(entries.values()):
        arrays[f"entry_{index}"] = np.asarray(value)

    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with tmp_path.open("wb") as f:
            np.savez_compressed(f, **arrays)
        os.replace(tmp_path, path)
    except OSError:
        if tmp_path.exists():
            tmp_path.unlink()
        raise
    logger.debug(f"Wrote {len(entries)} cache entries to {path}.")
