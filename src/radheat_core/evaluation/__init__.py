# src/radheat_core/evaluation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .capabilities import IntegrandEvaluator, IFluxProvider, FluxRecord
from .exceptions import EvaluationFailure, EvaluatorSetupError
from .base import (
    EvaluationContext,
    KernelEvaluator,
    EVALUATOR_REGISTRY,
    register_evaluator,
    create_evaluator,
)
# Import built-in evaluators to trigger registration
from .point_dipole import PointDipoleEvaluator, planck_oscillator_energy, free_space_dyadic_green

logger.debug(f"Available evaluators: {list(EVALUATOR_REGISTRY.keys())}")

__all__ = [
    "IntegrandEvaluator",
    "IFluxProvider",
    "FluxRecord",
    "EvaluationFailure",
    "EvaluatorSetupError",
    "EvaluationContext",
    "KernelEvaluator",
    "EVALUATOR_REGISTRY",
    "register_evaluator",
    "create_evaluator",
    "PointDipoleEvaluator",
    "planck_oscillator_energy",
    "free_space_dyadic_green",
]
