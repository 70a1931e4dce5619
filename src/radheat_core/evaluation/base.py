# src/radheat_core/evaluation/base.py
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, ClassVar, Dict

import numpy as np

from ..cache import KernelCache, create_kernel_key
from ..geometry import Geometry, TransformationSet
from .exceptions import EvaluatorSetupError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationContext:
    """
    Everything an evaluator may use: the geometry, the transformations, the run's
    kernel cache and the worker-thread hint (0 means "evaluator default").
    """
    geometry: Geometry
    transformations: TransformationSet
    cache: KernelCache
    n_thread: int = 0


class KernelEvaluator(ABC):
    """
    Base class for evaluators whose expensive sub-results ("kernels") are kept
    in the run's `KernelCache`.

    Subclasses implement `evaluate` and obtain kernels through `cached_kernel`,
    which consults the cache first and stores newly computed values.
    """
    evaluator_name: ClassVar[str] = "BaseEvaluator"

    def __init__(self, context: EvaluationContext):
        self.context = context
        self.geometry: Geometry = context.geometry
        self.transformations: TransformationSet = context.transformations
        self.cache: KernelCache = context.cache
        self.n_thread: int = max(context.n_thread, 0)
        logger.debug(f"Initialized evaluator '{self.evaluator_name}' for geometry '{self.geometry.name}'.")

    @abstractmethod
    def evaluate(self, frequency: complex, transformation_index: int) -> float:
        raise NotImplementedError

    def cached_kernel(
        self,
        frequency: complex,
        transformation_index: int,
        discriminator: str,
        compute: Callable[[], np.ndarray],
    ) -> np.ndarray:
        """Returns the kernel named by `discriminator`, computing and caching it on a miss."""
        key = create_kernel_key(self.geometry, frequency, self.transformations[transformation_index], discriminator)
        return self.cache.get_or_compute(key, compute)


EVALUATOR_REGISTRY: Dict[str, type] = {}


def register_evaluator(name: str):
    """
    A class decorator registering an evaluator class under `name`, which makes it
    selectable through the 'evaluator' option.
    """
    def decorator(cls: type):
        if not callable(getattr(cls, "evaluate", None)):
            raise TypeError(f"Class {cls.__name__} must define 'evaluate' to be registered as an evaluator.")
        if name in EVALUATOR_REGISTRY:
            logger.warning(f"Evaluator '{name}' is being redefined/overwritten.")
        cls.evaluator_name = name
        EVALUATOR_REGISTRY[name] = cls
        logger.debug(f"Registered evaluator '{name}' -> {cls.__name__}")
        return cls
    return decorator


def create_evaluator(name: str, context: EvaluationContext):
    """
    Instantiates the registered evaluator `name` for `context`.

    Raises:
        EvaluatorSetupError: if no evaluator is registered under `name`.
    """
    cls = EVALUATOR_REGISTRY.get(name)
    if cls is None:
        raise EvaluatorSetupError(
            evaluator=name,
            details=f"No evaluator is registered under the name '{name}'.",
            available=sorted(EVALUATOR_REGISTRY),
        )
    return cls(context)
