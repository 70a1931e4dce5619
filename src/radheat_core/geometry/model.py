# src/radheat_core/geometry/model.py
"""
The geometry objects read by the sweep: bodies, the geometry that owns them,
and the named rigid-body transformations applied to it.

Only what the engine and the built-in evaluator need is modelled. The sweep
engine itself reads nothing but `len(TransformationSet)` and the names.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple, Union

import numpy as np

from ..constants import DEFAULT_TRANSFORMATION_NAME
from ..vecmath import (
    as_vector, vec_add, vec_cross, vec_dot, vec_lin_comb, vec_normalize, vec_plus_equals,
)

logger = logging.getLogger(__name__)


def _frozen_vector(values) -> np.ndarray:
    v = as_vector(values)
    v.setflags(write=False)
    return v


@dataclass(frozen=True, eq=False)
class Body:
    """
    One point-like body.

    Attributes:
        label: Unique name within the geometry.
        position: Position in metres (read-only 3-vector).
        temperature_k: Temperature in kelvin.
        polarizability_m3: Imaginary part of the dipole polarizability, in m^3.
    """
    label: str
    position: np.ndarray
    temperature_k: float
    polarizability_m3: float

    def __post_init__(self):
        object.__setattr__(self, 'position', _frozen_vector(self.position))


@dataclass(frozen=True)
class Geometry:
    """
    A set of bodies read from one geometry file.

    `identity` is a content hash of the file; two runs on an unchanged geometry
    file share cache entries.
    """
    name: str
    source_file_path: Path
    bodies: Tuple[Body, ...]
    identity: str

    def body(self, label: str) -> Body:
        for b in self.bodies:
            if b.label == label:
                return b
        raise KeyError(f"Geometry '{self.name}' has no body labelled '{label}'.")

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(b.label for b in self.bodies)


@dataclass(frozen=True, eq=False)
class Displacement:
    """Moves one body by `vector` (metres)."""
    body: str
    vector: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'vector', _frozen_vector(self.vector))

    def apply(self, position: np.ndarray) -> np.ndarray:
        return vec_add(position, self.vector)

    def describe(self) -> str:
        return f"DISPLACE {self.body} {float(self.vector[0])!r} {float(self.vector[1])!r} {float(self.vector[2])!r}"


@dataclass(frozen=True, eq=False)
class Rotation:
    """Rotates one body by `angle_deg` degrees about `axis` through the origin."""
    body: str
    axis: np.ndarray
    angle_deg: float

    def __post_init__(self):
        unit = as_vector(self.axis)
        vec_normalize(unit)
        unit.setflags(write=False)
        object.__setattr__(self, 'axis', unit)

    def apply(self, position: np.ndarray) -> np.ndarray:
        # Rodrigues' rotation formula.
        theta = np.deg2rad(self.angle_deg)
        cos_t, sin_t = np.cos(theta), np.sin(theta)
        rotated = vec_lin_comb(cos_t, position, sin_t, vec_cross(self.axis, position))
        return vec_plus_equals(rotated, vec_dot(self.axis, position) * (1.0 - cos_t), self.axis)

    def describe(self) -> str:
        return f"ROTATE {self.body} {float(self.angle_deg)!r} ABOUT {float(self.axis[0])!r} {float(self.axis[1])!r} {float(self.axis[2])!r}"


Operation = Union[Displacement, Rotation]


@dataclass(frozen=True)
class Transformation:
    """
    A named sequence of per-body operations, applied in order.

    `identity` depends only on the operations, not the name, so two differently
    named but equal transformations share cache entries.
    """
    name: str
    operations: Tuple[Operation, ...] = ()
    identity: str = field(init=False)

    def __post_init__(self):
        identity = "; ".join(op.describe() for op in self.operations) or "IDENTITY"
        object.__setattr__(self, 'identity', identity)

    def body_positions(self, geometry: Geometry) -> Dict[str, np.ndarray]:
        """Returns the position of every body after this transformation."""
        positions = {b.label: np.array(b.position) for b in geometry.bodies}
        for op in self.operations:
            positions[op.body] = op.apply(positions[op.body])
        return positions


@dataclass(frozen=True)
class TransformationSet:
    """The ordered transformations of a run; its length is the width of every result vector."""
    transformations: Tuple[Transformation, ...]
    source_file_path: Optional[Path] = None

    def __post_init__(self):
        if not self.transformations:
            raise ValueError("A TransformationSet needs at least one transformation.")

    @classmethod
    def identity_only(cls) -> "TransformationSet":
        return cls(transformations=(Transformation(name=DEFAULT_TRANSFORMATION_NAME),))

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(t.name for t in self.transformations)

    def __len__(self) -> int:
        return len(self.transformations)

    def __iter__(self) -> Iterator[Transformation]:
        return iter(self.transformations)

    def __getitem__(self, index: int) -> Transformation:
        return self.transformations[index]
