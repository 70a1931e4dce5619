# src/radheat_core/evaluation/capabilities.py
"""
Defines the contracts between the sweep engine and the integrand evaluator.

The engine never depends on a concrete evaluator. It needs `IntegrandEvaluator`
for every sweep and asks for `IFluxProvider` only when spatially-resolved flux
output was requested. An evaluator that does not implement `IFluxProvider`
simply produces no flux files.
"""
import logging
from dataclasses import dataclass
from typing import List, Protocol, runtime_checkable

import numpy as np

logger = logging.getLogger(__name__)


@runtime_checkable
class IntegrandEvaluator(Protocol):
    """
    Evaluates the spectral heat-transfer integrand for one sweep point.

    Implementations return a real scalar and raise `EvaluationFailure` when the
    point cannot be evaluated.
    """
    def evaluate(self, frequency: complex, transformation_index: int) -> float:
        ...


@dataclass(frozen=True, eq=False)
class FluxRecord:
    """Spectral power absorbed by one body at one sweep point (negative when emitted)."""
    label: str
    position: np.ndarray
    power: float


@runtime_checkable
class IFluxProvider(Protocol):
    """Reports spatially-resolved flux data for one sweep point."""
    def flux_records(self, frequency: complex, transformation_index: int) -> List[FluxRecord]:
        ...
