# src/radheat_core/sweep/results.py
"""
Defines the data contracts produced by a sweep.

`FrequencyResult` is what the engine hands to result sinks, one per frequency.
`SweepSummary` is what the engine returns. `SweepOutcome` is what the public
`run_heat_sweep` facade returns.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..cache import CachePreloadFailure
from ..evaluation.capabilities import FluxRecord


@dataclass(frozen=True, eq=False)
class FrequencyResult:
    """
    The result vector of one frequency.

    Attributes:
        frequency: The angular frequency the vector was computed at.
        values: 1-D float array, one entry per transformation, in transformation order.
                Entries that could not be computed are NaN.
        transformation_names: Names of the transformations, aligned with `values`.
        failed_indices: Transformation indices whose evaluation failed. Always empty
                        unless the sweep runs with `continue_on_failure`.
        flux: Per-transformation flux records, present only when flux output was
              requested and the evaluator provides it.
    """
    frequency: complex
    values: np.ndarray
    transformation_names: Tuple[str, ...]
    failed_indices: Tuple[int, ...] = ()
    flux: Optional[Tuple[List[FluxRecord], ...]] = None

    def __post_init__(self):
        if self.values.shape != (len(self.transformation_names),):
            raise ValueError(
                f"Result vector has shape {self.values.shape}; expected ({len(self.transformation_names)},)."
            )

    @property
    def is_complete(self) -> bool:
        return not self.failed_indices


@dataclass(frozen=True)
class SweepSummary:
    """Counts describing a finished sweep. The engine keeps no other cross-frequency state."""
    num_frequencies: int
    num_transformations: int
    num_evaluations: int
    num_failures: int = 0


@dataclass(frozen=True)
class SweepOutcome:
    """
    The user-facing result of `run_heat_sweep`.

    Attributes:
        results: One `FrequencyResult` per frequency, in evaluation order.
        summary: The engine's counts.
        cache_stats: Hit/miss/insert/preload counters of the run's kernel cache.
        output_files: Files written by the run, keyed by kind ('by_omega', 'flux').
        preload_failures: Cache sources that could not be preloaded.
        cache_written: Whether the cache was written back.
    """
    results: Tuple[FrequencyResult, ...]
    summary: SweepSummary
    cache_stats: Dict[str, int]
    output_files: Dict[str, List[Path]] = field(default_factory=dict)
    preload_failures: Tuple[CachePreloadFailure, ...] = ()
    cache_written: bool = False

    @property
    def num_evaluations(self) -> int:
        return self.summary.num_evaluations

    @property
    def frequencies(self) -> Tuple[complex, ...]:
        return tuple(r.frequency for r in self.results)

    def values_array(self) -> np.ndarray:
        """All result vectors stacked into a (num_frequencies, num_transformations) array."""
        if not self.results:
            return np.empty((0, self.summary.num_transformations), dtype=float)
        return np.vstack([r.values for r in self.results])
