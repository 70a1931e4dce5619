# src/radheat_core/cache/keys.py
"""
Centralizes the construction of kernel cache keys.

A kernel value depends on the geometry, the frequency, the transformation that
was applied and on which kernel quantity was computed. All four are part of the
key; leaving any of them out would allow a false cache hit.
"""
import json
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..geometry import Geometry, Transformation


@dataclass(frozen=True)
class KernelCacheKey:
    """
    The hashable identity of one cached kernel value.

    Attributes:
        geometry_id: Content hash of the geometry definition.
        frequency: The complex angular frequency.
        transformation_id: Canonical description of the applied transformation.
        discriminator: Names the kernel quantity (e.g. 'ggdag:A:B').
    """
    geometry_id: str
    frequency: complex
    transformation_id: str
    discriminator: str

    def to_token(self) -> str:
        """A canonical string form, stable across processes, used by the cache file."""
        freq = complex(self.frequency)
        return json.dumps(
            [self.geometry_id, [freq.real, freq.imag], self.transformation_id, self.discriminator],
            separators=(",", ":"),
        )

    @classmethod
    def from_token(cls, token: str) -> "KernelCacheKey":
        """
        Inverse of `to_token`.

        Raises:
            ValueError: if the token is not a serialized key.
        """
        try:
            geometry_id, (re_part, im_part), transformation_id, discriminator = json.loads(token)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Malformed cache key token: {token!r}") from e
        return cls(
            geometry_id=str(geometry_id),
            frequency=complex(float(re_part), float(im_part)),
            transformation_id=str(transformation_id),
            discriminator=str(discriminator),
        )


def create_kernel_key(
    geometry: "Geometry", frequency: complex, transformation: "Transformation", discriminator: str
) -> KernelCacheKey:
    """Creates the definitive cache key for one kernel quantity of one sweep point."""
    return KernelCacheKey(
        geometry_id=geometry.identity,
        frequency=complex(frequency),
        transformation_id=transformation.identity,
        discriminator=discriminator,
    )
