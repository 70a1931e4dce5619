# src/radheat_core/vecmath.py
"""
Stateless algebra on real 3-vectors stored as NumPy arrays of shape (3,).

Functions that produce a new vector accept an optional `out` array and write
into it when given. The in-place variants (`vec_zero`, `vec_scale`,
`vec_plus_equals`, `vec_normalize`) mutate their first argument.
"""
import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from .errors import DiagnosableError, format_diagnostic_report

logger = logging.getLogger(__name__)

VectorLike = Union[np.ndarray, Sequence[float]]


@dataclass()
class DegenerateVector(DiagnosableError):
    """Raised when an operation needs a direction but the vector has zero length."""
    details: str

    def __str__(self):
        return self.details

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Degenerate Vector",
            details=self.details,
            suggestion="Check the input for a zero-length direction, e.g. a rotation axis of [0, 0, 0].",
            context={}
        )


def as_vector(values: VectorLike) -> np.ndarray:
    """Returns a float copy of `values` as a 3-vector, rejecting other shapes."""
    v = np.array(values, dtype=float)
    if v.shape != (3,):
        raise ValueError(f"Expected a 3-vector, got shape {v.shape}.")
    return v


def _target(out: Optional[np.ndarray]) -> np.ndarray:
    return np.empty(3, dtype=float) if out is None else out


def vec_zero(v: np.ndarray) -> np.ndarray:
    """v <= 0"""
    v[:] = 0.0
    return v


def vec_scale(v: np.ndarray, alpha: float) -> np.ndarray:
    """v *= alpha"""
    v *= alpha
    return v


def vec_scale_add(v1: VectorLike, alpha: float, v2: VectorLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """v3 = v1 + alpha*v2"""
    v3 = _target(out)
    np.add(v1, np.multiply(alpha, v2), out=v3)
    return v3


def vec_lin_comb(alpha: float, v1: VectorLike, beta: float, v2: VectorLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """v3 = alpha*v1 + beta*v2"""
    v3 = _target(out)
    np.add(np.multiply(alpha, v1), np.multiply(beta, v2), out=v3)
    return v3


def vec_add(v1: VectorLike, v2: VectorLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """v3 = v1 + v2"""
    v3 = _target(out)
    np.add(v1, v2, out=v3)
    return v3


def vec_sub(v1: VectorLike, v2: VectorLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """v3 = v1 - v2"""
    v3 = _target(out)
    np.subtract(v1, v2, out=v3)
    return v3


def vec_plus_equals(v1: np.ndarray, alpha: float, v2: VectorLike) -> np.ndarray:
    """v1 += alpha*v2"""
    v1 += np.multiply(alpha, v2)
    return v1


def vec_cross(v1: VectorLike, v2: VectorLike, out: Optional[np.ndarray] = None) -> np.ndarray:
    """v3 = v1 x v2"""
    v3 = _target(out)
    # Components are computed before assignment so `out` may alias an input.
    c0 = v1[1] * v2[2] - v1[2] * v2[1]
    c1 = v1[2] * v2[0] - v1[0] * v2[2]
    c2 = v1[0] * v2[1] - v1[1] * v2[0]
    v3[0], v3[1], v3[2] = c0, c1, c2
    return v3


def vec_dot(v1: VectorLike, v2: VectorLike) -> float:
    return float(v1[0] * v2[0] + v1[1] * v2[1] + v1[2] * v2[2])


def vec_norm2(v: VectorLike) -> float:
    return vec_dot(v, v)


def vec_norm(v: VectorLike) -> float:
    return float(np.sqrt(vec_dot(v, v)))


def vec_distance(v1: VectorLike, v2: VectorLike) -> float:
    return vec_norm(vec_sub(v1, v2))


def vec_distance2(v1: VectorLike, v2: VectorLike) -> float:
    d = vec_sub(v1, v2)
    return vec_dot(d, d)


def vec_normalize(v: np.ndarray) -> float:
    """
    Scales `v` to unit length in place and returns its original length.

    Raises:
        DegenerateVector: if `v` has zero length.
    """
    d = vec_norm(v)
    if d == 0.0:
        raise DegenerateVector(details=f"Cannot normalize the zero-length vector {list(v)}.")
    v /= d
    return d


def rel_diff(x: float, y: float) -> float:
    """Relative difference 2|x-y| / (|x|+|y|); zero when both are zero."""
    denom = abs(x) + abs(y)
    if denom == 0.0:
        return 0.0
    return 2.0 * abs(x - y) / denom
