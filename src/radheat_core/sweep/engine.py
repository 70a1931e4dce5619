# src/radheat_core/sweep/engine.py
"""
Defines the `SweepEngine`, the stateless service that drives a frequency sweep.

The engine holds no state of its own beyond the `SweepContext` it was created
with. For every frequency it evaluates the integrand once per transformation,
assembles the result vector and hands it to the result sinks.
"""
import logging
import math
import numbers
from typing import List, Optional, Sequence

import numpy as np

from ..evaluation.capabilities import FluxRecord, IFluxProvider
from ..evaluation.exceptions import EvaluationFailure
from .context import SweepContext
from .exceptions import UnsupportedMode
from .output import ResultSink
from .results import FrequencyResult, SweepSummary

logger = logging.getLogger(__name__)


class SweepEngine:
    """
    Runs the nested frequency/transformation loop over a `SweepContext`.
    Frequencies are processed in plan order and transformations in set order.
    """

    def __init__(self, context: SweepContext):
        self.context: SweepContext = context
        self.plan = context.plan
        self.transformations = context.transformations
        self.evaluator = context.evaluator
        self.flux_provider: Optional[IFluxProvider] = None
        if context.plot_flux:
            if isinstance(self.evaluator, IFluxProvider):
                self.flux_provider = self.evaluator
            else:
                logger.warning(
                    f"Flux output was requested but evaluator {type(self.evaluator).__name__} "
                    "does not provide flux data; no flux files will be written."
                )
        logger.debug(f"SweepEngine initialized: {len(self.plan)} frequencies x {len(self.transformations)} transformations.")

    def execute_sweep(self, sinks: Sequence[ResultSink] = ()) -> SweepSummary:
        """
        Evaluates every (frequency, transformation) pair.

        Raises:
            UnsupportedMode: if the plan is a frequency range.
            EvaluationFailure: on the first failed evaluation, unless the context
                               enables `continue_on_failure`.
        """
        if self.plan.is_range_mode:
            raise UnsupportedMode(
                details="Frequency integration is not yet implemented.",
                omega_min=self.plan.omega_min,
                omega_max=self.plan.omega_max,
            )

        names = self.transformations.names
        num_evaluations = 0
        num_failures = 0

        begun: List[ResultSink] = []
        try:
            for sink in sinks:
                sink.begin(names)
                begun.append(sink)
            for n, omega in enumerate(self.plan.frequencies):
                logger.info(f"Working at frequency {n + 1}/{len(self.plan)}: omega={omega}")
                result = self._evaluate_frequency(omega)
                num_evaluations += len(names)
                num_failures += len(result.failed_indices)
                for sink in sinks:
                    sink.accept(result)
        finally:
            for sink in begun:
                sink.end()

        summary = SweepSummary(
            num_frequencies=len(self.plan),
            num_transformations=len(names),
            num_evaluations=num_evaluations,
            num_failures=num_failures,
        )
        logger.info(f"Sweep complete: {summary}")
        return summary

    def _evaluate_frequency(self, omega: complex) -> FrequencyResult:
        names = self.transformations.names
        values = np.full(len(names), np.nan, dtype=float)
        failed: List[int] = []
        flux: Optional[List[List[FluxRecord]]] = [] if self.flux_provider is not None else None

        for index, name in enumerate(names):
            logger.debug(f"Evaluating omega={omega}, transformation '{name}'.")
            try:
                values[index] = self._evaluate_point(omega, index, name)
                if flux is not None:
                    flux.append(self._collect_flux(omega, index, name))
            except EvaluationFailure as e:
                if not self.context.continue_on_failure:
                    raise
                failed.append(index)
                values[index] = np.nan
                if flux is not None and len(flux) == index:
                    flux.append([])
                logger.error(f"{e}. The value is marked unavailable and the sweep continues.")

        return FrequencyResult(
            frequency=omega,
            values=values,
            transformation_names=names,
            failed_indices=tuple(failed),
            flux=tuple(flux) if flux is not None else None,
        )

    def _evaluate_point(self, omega: complex, index: int, name: str) -> float:
        try:
            value = self.evaluator.evaluate(omega, index)
        except EvaluationFailure:
            raise
        except Exception as e:
            raise EvaluationFailure(
                details=f"The evaluator raised {type(e).__name__}: {e}",
                frequency=omega, transformation=name,
            ) from e

        if isinstance(value, np.ndarray) and value.shape == ():
            value = value.item()
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise EvaluationFailure(
                details=f"The evaluator returned {value!r} ({type(value).__name__}); a real scalar was expected.",
                frequency=omega, transformation=name,
            )
        value = float(value)
        if math.isinf(value):
            raise EvaluationFailure(
                details=f"The evaluator returned a non-finite value ({value}).",
                frequency=omega, transformation=name,
            )
        if math.isnan(value):
            logger.warning(f"The evaluator returned NaN at omega={omega}, transformation '{name}'; the value is kept as NaN.")
        return value

    def _collect_flux(self, omega: complex, index: int, name: str) -> List[FluxRecord]:
        try:
            return list(self.flux_provider.flux_records(omega, index))
        except EvaluationFailure:
            raise
        except Exception as e:
            raise EvaluationFailure(
                details=f"The evaluator's flux output raised {type(e).__name__}: {e}",
                frequency=omega, transformation=name,
            ) from e
