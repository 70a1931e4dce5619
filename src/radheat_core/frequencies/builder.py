# src/radheat_core/frequencies/builder.py
"""
Assembles the frequencies of a run from the frequency file, the explicit values
and the integration range.

The outcome is a `FrequencyPlan` that is either a non-empty discrete list or a
validated range, never both. File-derived frequencies always come before
explicitly given ones.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from ..config.run_config import RunConfig
from .exceptions import ConflictingFrequencyMode, InvalidRangeBound
from .loader import load_frequency_file

logger = logging.getLogger(__name__)


class FrequencyMode(Enum):
    """How the frequencies of a run are to be used."""
    DISCRETE = "discrete"
    RANGE = "range"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class FrequencyPlan:
    """
    The immutable result of frequency assembly.

    Attributes:
        mode: DISCRETE when `frequencies` is non-empty, RANGE otherwise.
        frequencies: Frequencies in evaluation order (empty in RANGE mode).
        omega_min: Lower integration limit (RANGE mode only).
        omega_max: Upper integration limit, `None` for unbounded (RANGE mode only).
    """
    mode: FrequencyMode
    frequencies: Tuple[complex, ...] = ()
    omega_min: Optional[float] = None
    omega_max: Optional[float] = None

    def __post_init__(self):
        if self.mode == FrequencyMode.DISCRETE and not self.frequencies:
            raise ValueError("A discrete FrequencyPlan needs at least one frequency.")
        if self.mode == FrequencyMode.RANGE and self.frequencies:
            raise ValueError("A range FrequencyPlan cannot carry discrete frequencies.")

    @property
    def is_range_mode(self) -> bool:
        return self.mode == FrequencyMode.RANGE

    @property
    def is_unbounded(self) -> bool:
        return self.is_range_mode and self.omega_max is None

    def __len__(self) -> int:
        return len(self.frequencies)

    def __iter__(self):
        return iter(self.frequencies)

    @classmethod
    def discrete(cls, frequencies: Sequence[complex]) -> "FrequencyPlan":
        return cls(mode=FrequencyMode.DISCRETE, frequencies=tuple(complex(f) for f in frequencies))


def _drop_duplicates(frequencies: Iterable[complex]) -> List[complex]:
    unique: List[complex] = []
    seen = set()
    for freq in frequencies:
        if freq in seen:
            logger.warning(f"Frequency {freq} is listed more than once; evaluating it only at its first position.")
            continue
        seen.add(freq)
        unique.append(freq)
    return unique


def _validate_range(omega_min: Optional[complex], omega_max: Optional[complex]) -> Tuple[float, Optional[float]]:
    lower = complex(0.0) if omega_min is None else complex(omega_min)
    if not (lower.real >= 0.0) or lower.imag != 0.0:
        raise InvalidRangeBound(
            option='omega_min', value=omega_min,
            details=f"The lower integration limit must be real and non-negative, got {lower}."
        )
    if omega_max is None:
        return lower.real, None

    upper = complex(omega_max)
    if upper.imag != 0.0:
        raise InvalidRangeBound(
            option='omega_max', value=omega_max,
            details=f"The upper integration limit must be real, got {upper}."
        )
    if not (upper.real >= lower.real):
        raise InvalidRangeBound(
            option='omega_max', value=omega_max,
            details=f"The upper integration limit {upper.real:g} is not at or above the lower limit {lower.real:g}."
        )
    return lower.real, upper.real


def build_frequency_plan(
    omega_values: Sequence[complex] = (),
    omega_file: Optional[Path] = None,
    omega_min: Optional[complex] = None,
    omega_max: Optional[complex] = None,
) -> FrequencyPlan:
    """
    Builds the `FrequencyPlan` of a run.

    Args:
        omega_values: Explicitly given frequencies, evaluated after the file's.
        omega_file: Optional frequency file, evaluated first.
        omega_min: Lower integration limit; `None` if not specified.
        omega_max: Upper integration limit; `None` if not specified (unbounded).

    Raises:
        InvalidInputFile: if the frequency file cannot be loaded.
        ConflictingFrequencyMode: if a list and a range bound were both given.
        InvalidRangeBound: if a range bound is non-real or out of order.
    """
    frequencies: List[complex] = []
    if omega_file is not None:
        frequencies.extend(load_frequency_file(omega_file))

    if omega_values:
        frequencies.extend(complex(v) for v in omega_values)
        logger.info(f"Read {len(omega_values)} frequencies from the command line.")

    frequencies = _drop_duplicates(frequencies)

    if frequencies:
        given_bounds = [name for name, val in (('omega_min', omega_min), ('omega_max', omega_max)) if val is not None]
        if given_bounds:
            sources = [name for name, val in (('omega_file', omega_file), ('omega_values', omega_values)) if val]
            raise ConflictingFrequencyMode(num_frequencies=len(frequencies), options=sources + given_bounds)
        logger.info(f"Computing spectral density at {len(frequencies)} frequencies.")
        return FrequencyPlan.discrete(frequencies)

    lower, upper = _validate_range(omega_min, omega_max)
    if upper is None:
        logger.info(f"Integrating over range Omega=({lower:g},infinity).")
    else:
        logger.info(f"Integrating over range Omega=({lower:g},{upper:g}).")
    return FrequencyPlan(mode=FrequencyMode.RANGE, omega_min=lower, omega_max=upper)


class FrequencyListBuilder:
    """Builds the `FrequencyPlan` for a `RunConfig`."""

    def __init__(self, config: RunConfig):
        self.config = config

    @classmethod
    def from_config(cls, config: RunConfig) -> "FrequencyListBuilder":
        return cls(config)

    def build(self) -> FrequencyPlan:
        cfg = self.config
        return build_frequency_plan(
            omega_values=cfg.omega_values,
            omega_file=cfg.omega_file,
            omega_min=cfg.omega_min,
            omega_max=cfg.omega_max,
        )
