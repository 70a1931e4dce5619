# src/radheat_core/cache/exceptions.py
"""
Diagnosable failures of the kernel cache.

Caches only save work; they never change results. Neither of these errors
aborts a run. They are logged and kept on the `KernelCache` for reporting.
"""
from dataclasses import dataclass
from pathlib import Path

from ..errors import DiagnosableError, format_diagnostic_report


class CacheFormatError(ValueError):
    """Raised by the cache file reader when a file is not a kernel cache archive."""
    pass


@dataclass()
class CachePreloadFailure(DiagnosableError):
    """A cache source could not be preloaded; the run continues without its entries."""
    source: Path
    details: str

    def __str__(self):
        return f"Could not preload cache '{self.source}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Cache Preload Failure",
            details=self.details,
            suggestion="The run continues without entries from this file. Delete or regenerate the cache file if it is corrupt.",
            context={'source_file': self.source}
        )


@dataclass()
class CacheWriteFailure(DiagnosableError):
    """The cache could not be written back; results of the run are unaffected."""
    destination: Path
    details: str

    def __str__(self):
        return f"Could not write cache '{self.destination}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Cache Write Failure",
            details=self.details,
            suggestion="Check that the destination directory exists and is writable.",
            context={'source_file': self.destination}
        )
