# src/radheat_core/sweep/context.py
"""
Defines the `SweepContext`, the immutable input of the `SweepEngine`.
"""
from dataclasses import dataclass

from ..evaluation.capabilities import IntegrandEvaluator
from ..frequencies import FrequencyPlan
from ..geometry import TransformationSet


@dataclass(frozen=True)
class SweepContext:
    """
    Everything a single sweep operates on: the frequency plan, the
    transformations, the evaluator and the output and failure policies.

    The engine reads it and never changes it, so the inputs of a sweep cannot be
    altered once it has started.
    """
    plan: FrequencyPlan
    transformations: TransformationSet
    evaluator: IntegrandEvaluator
    plot_flux: bool = False
    continue_on_failure: bool = False
