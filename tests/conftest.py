# tests/conftest.py
from pathlib import Path
from typing import List, Tuple

import numpy as np
import pytest

from radheat_core.evaluation import EvaluationFailure, KernelEvaluator


TWO_BODY_GEOMETRY = """
name: TwoSpheres
bodies:
  - label: Hot
    position: [0.0, 0.0, 0.0]
    temperature: "300 K"
    polarizability: 1.0e-21
  - label: Cold
    position: [0.0, 0.0, 1.0e-6]
    temperature: 0
    polarizability: "1e-21 m**3"
"""

TWO_TRANSFORMATIONS = """
transformations:
  - name: Near
  - name: Far
    operations:
      - body: Cold
        displacement: [0.0, 0.0, 1.0e-6]
"""


@pytest.fixture
def write_file(tmp_path):
    """Writes `content` to `tmp_path/name` and returns the path."""
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def geometry_file(write_file) -> Path:
    return write_file("spheres.yaml", TWO_BODY_GEOMETRY)


@pytest.fixture
def transformation_file(write_file) -> Path:
    return write_file("moves.yaml", TWO_TRANSFORMATIONS)


class RecordingEvaluator:
    """Returns omega.real * (index + 1) and records every call."""

    def __init__(self, fail_at: Tuple[complex, int] = None):
        self.calls: List[Tuple[complex, int]] = []
        self.fail_at = fail_at

    def evaluate(self, frequency: complex, transformation_index: int) -> float:
        self.calls.append((frequency, transformation_index))
        if self.fail_at == (frequency, transformation_index):
            raise EvaluationFailure(details="stub failure", frequency=frequency)
        return complex(frequency).real * (transformation_index + 1)


class CachingStubEvaluator(KernelEvaluator):
    """
    Stores one small kernel per sweep point in the run's cache. With
    `fail_on_miss`, computing a kernel is an error, so every kernel must be
    found in the cache.
    """
    evaluator_name = "caching_stub"

    def __init__(self, context, fail_on_miss: bool = False):
        super().__init__(context)
        self.fail_on_miss = fail_on_miss
        self.computed = 0

    def _compute(self, frequency: complex, transformation_index: int) -> np.ndarray:
        if self.fail_on_miss:
            raise RuntimeError(f"cache miss at omega={frequency}, index={transformation_index}")
        self.computed += 1
        return np.array([complex(frequency).real, 10.0 * (transformation_index + 1)])

    def evaluate(self, frequency: complex, transformation_index: int) -> float:
        kernel = self.cached_kernel(
            frequency, transformation_index, "stub",
            lambda: self._compute(frequency, transformation_index),
        )
        return float(kernel[0] + kernel[1])


@pytest.fixture
def recording_evaluator():
    return RecordingEvaluator()
