# src/radheat_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("RadHeat Core package initialized.")

from .units import ureg, pint, Quantity, ANGULAR_FREQUENCY_DIMENSIONALITY
from .config import RunConfig, OptionFileParser, merge_options
from .frequencies import FrequencyPlan, FrequencyMode, build_frequency_plan
from .geometry import Geometry, TransformationSet, load_geometry, load_transformations
from .cache import KernelCache
from .evaluation import register_evaluator, create_evaluator, KernelEvaluator
from .sweep import run_heat_sweep, SweepEngine, SweepOutcome, FrequencyResult
from .errors import RadHeatError, ConfigurationError, SweepRunError

__all__ = [
    # Units
    "ureg", "pint", "Quantity", "ANGULAR_FREQUENCY_DIMENSIONALITY",
    # Configuration
    "RunConfig", "OptionFileParser", "merge_options",
    # Frequencies
    "FrequencyPlan", "FrequencyMode", "build_frequency_plan",
    # Geometry
    "Geometry", "TransformationSet", "load_geometry", "load_transformations",
    # Cache
    "KernelCache",
    # Evaluation
    "register_evaluator", "create_evaluator", "KernelEvaluator",
    # Sweep
    "run_heat_sweep", "SweepEngine", "SweepOutcome", "FrequencyResult",
    # Top-Level Errors (Actionable Diagnostics)
    "RadHeatError", "ConfigurationError", "SweepRunError",
]
