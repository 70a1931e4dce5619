# src/radheat_core/config/run_config.py
"""
Defines `RunConfig`, the immutable record of every option a run was started with.

The command line and the option file both end up here. No other part of the
package reads process-wide option state: the validator, the frequency builder,
the cache and the sweep engine all receive this object explicitly.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from ..constants import (
    BY_OMEGA_SUFFIX,
    DEFAULT_EVALUATOR_NAME,
    OUTPUT_SUFFIX,
)
from ..log_config import DEFAULT_LOG_FILE
from .exceptions import OptionValueError
from .values import parse_frequency_value

logger = logging.getLogger(__name__)


def _as_path(value: Any) -> Optional[Path]:
    if value is None:
        return None
    return Path(value)


@dataclass(frozen=True)
class RunConfig:
    """
    The validated-once, read-only configuration surface of a single run.

    Attributes:
        geometry: The geometry file. Mandatory; the validator rejects `None`.
        transformation_file: Optional list of geometrical transformations.
        omega_values: Explicitly given frequencies, in the order given.
        omega_file: Optional file with one frequency per line.
        omega_min: Lower integration limit, or `None` if not specified.
        omega_max: Upper integration limit, or `None` if not specified (unbounded).
        output_file: Name of the frequency-integrated output file.
        by_omega_file: Name of the frequency-resolved output file.
        plot_flux: Whether to write spatially-resolved flux data.
        log_file: Name of the log file.
        cache: Combined read/write cache file.
        read_caches: Cache files to preload, in precedence order.
        write_cache: Cache file to write after the run.
        n_thread: Worker-thread hint handed to the evaluator (0 = evaluator default).
        evaluator: Registry name of the integrand evaluator.
        continue_on_failure: Mark failed evaluations as unavailable instead of aborting.
    """
    geometry: Optional[Path] = None
    transformation_file: Optional[Path] = None
    omega_values: Tuple[complex, ...] = ()
    omega_file: Optional[Path] = None
    omega_min: Optional[complex] = None
    omega_max: Optional[complex] = None
    output_file: Optional[Path] = None
    by_omega_file: Optional[Path] = None
    plot_flux: bool = False
    log_file: Optional[Path] = None
    cache: Optional[Path] = None
    read_caches: Tuple[Path, ...] = ()
    write_cache: Optional[Path] = None
    n_thread: int = 0
    evaluator: str = DEFAULT_EVALUATOR_NAME
    continue_on_failure: bool = False

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> "RunConfig":
        """
        Builds a `RunConfig` from a normalized option mapping (as produced by
        `OptionFileParser` and `merge_options`). Unknown keys are rejected.

        Raises:
            OptionValueError: if a frequency value cannot be interpreted.
        """
        unknown = set(options) - set(cls.__dataclass_fields__)
        if unknown:
            raise OptionValueError(option=", ".join(sorted(unknown)), value=None,
                                   details=f"Unknown option(s): {sorted(unknown)}.")

        def freq(option: str, raw: Any) -> complex:
            try:
                return parse_frequency_value(raw)
            except (TypeError, ValueError) as e:
                raise OptionValueError(option=option, value=raw, details=str(e)) from e

        omega_values = tuple(freq('omega_values', v) for v in options.get('omega_values') or ())
        omega_min = options.get('omega_min')
        omega_max = options.get('omega_max')

        return cls(
            geometry=_as_path(options.get('geometry')),
            transformation_file=_as_path(options.get('transformation_file')),
            omega_values=omega_values,
            omega_file=_as_path(options.get('omega_file')),
            omega_min=None if omega_min is None else freq('omega_min', omega_min),
            omega_max=None if omega_max is None else freq('omega_max', omega_max),
            output_file=_as_path(options.get('output_file')),
            by_omega_file=_as_path(options.get('by_omega_file')),
            plot_flux=bool(options.get('plot_flux', False)),
            log_file=_as_path(options.get('log_file')),
            cache=_as_path(options.get('cache')),
            read_caches=tuple(Path(p) for p in options.get('read_caches') or ()),
            write_cache=_as_path(options.get('write_cache')),
            n_thread=int(options.get('n_thread') or 0),
            evaluator=options.get('evaluator') or DEFAULT_EVALUATOR_NAME,
            continue_on_failure=bool(options.get('continue_on_failure', False)),
        )

    # --- Derived values ---

    @property
    def preload_sources(self) -> Tuple[Path, ...]:
        """Read caches in the order given, then the combined cache (lowest precedence)."""
        if self.cache is not None:
            return self.read_caches + (self.cache,)
        return self.read_caches

    @property
    def write_back_target(self) -> Optional[Path]:
        """The combined cache if set, otherwise the write cache, otherwise `None`."""
        return self.cache if self.cache is not None else self.write_cache

    @property
    def resolved_by_omega_file(self) -> Path:
        if self.by_omega_file is not None:
            return self.by_omega_file
        return self._derived_from_geometry(BY_OMEGA_SUFFIX)

    @property
    def resolved_output_file(self) -> Path:
        if self.output_file is not None:
            return self.output_file
        return self._derived_from_geometry(OUTPUT_SUFFIX)

    @property
    def resolved_log_file(self) -> Path:
        return self.log_file if self.log_file is not None else Path(DEFAULT_LOG_FILE)

    def _derived_from_geometry(self, suffix: str) -> Path:
        if self.geometry is None:
            raise ValueError("Output file names cannot be derived without a geometry file.")
        return self.geometry.with_suffix(suffix)
