# src/radheat_core/evaluation/point_dipole.py
"""
A built-in evaluator for geometries of small, point-like bodies.

The first body of the geometry is the emitter; every other body is a receiver.
Each body is an isotropic dipole with a frequency-independent imaginary
polarizability. In the dipole approximation the spectral power transferred from
the emitter (body 0) to receiver j is

    Phi_j(omega) = (2/pi) k^4 Im(a_0) Im(a_j) Tr(G G^+) [Theta(omega, T_0) - Theta(omega, T_j)]

with k = omega/c, G the free-space dyadic Green's function between the two
bodies and Theta(omega, T) = hbar omega / (exp(hbar omega / k_B T) - 1) the mean
energy of a Planck oscillator. The integrand of a sweep point is the sum over
receivers. The Green's function is the cached kernel.
"""
import logging
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..constants import BOLTZMANN_J_PER_K, HBAR_J_S, SPEED_OF_LIGHT_M_S
from ..vecmath import vec_distance, vec_normalize, vec_sub
from .base import EvaluationContext, KernelEvaluator, register_evaluator
from .capabilities import FluxRecord
from .exceptions import EvaluationFailure, EvaluatorSetupError

logger = logging.getLogger(__name__)


def planck_oscillator_energy(omega: float, temperature_k: float) -> float:
    """Theta(omega, T) in joules; zero at T = 0, k_B T in the limit omega -> 0."""
    if temperature_k <= 0.0:
        return 0.0
    if omega == 0.0:
        return BOLTZMANN_J_PER_K * temperature_k
    x = HBAR_J_S * omega / (BOLTZMANN_J_PER_K * temperature_k)
    return float(HBAR_J_S * omega / np.expm1(x))


def free_space_dyadic_green(k: float, separation: np.ndarray) -> np.ndarray:
    """The 3x3 free-space dyadic Green's function for separation vector `separation` (metres)."""
    r_hat = np.array(separation, dtype=float)
    distance = vec_normalize(r_hat)
    kr = k * distance
    a = 1.0 + 1j / kr - 1.0 / kr**2
    b = -1.0 - 3j / kr + 3.0 / kr**2
    prefactor = np.exp(1j * kr) / (4.0 * np.pi * distance)
    return prefactor * (a * np.eye(3) + b * np.outer(r_hat, r_hat))


@register_evaluator("point_dipole")
class PointDipoleEvaluator(KernelEvaluator):
    """Dipole-approximation heat transfer from the first body to all others."""

    def __init__(self, context: EvaluationContext):
        super().__init__(context)
        if len(self.geometry.bodies) < 2:
            raise EvaluatorSetupError(
                evaluator=self.evaluator_name,
                details=f"Geometry '{self.geometry.name}' has {len(self.geometry.bodies)} body; at least two (an emitter and a receiver) are required.",
            )
        self.emitter = self.geometry.bodies[0]
        self.receivers = self.geometry.bodies[1:]
        self._positions: Dict[int, Dict[str, np.ndarray]] = {}
        self._last_contributions: Optional[Tuple[Tuple[complex, int], List[Tuple[str, np.ndarray, float]]]] = None
        if self.n_thread > 1:
            logger.debug(f"'{self.evaluator_name}' is single-threaded; ignoring n_thread={self.n_thread}.")

    def _positions_for(self, transformation_index: int) -> Dict[str, np.ndarray]:
        if transformation_index not in self._positions:
            transformation = self.transformations[transformation_index]
            self._positions[transformation_index] = transformation.body_positions(self.geometry)
        return self._positions[transformation_index]

    def _pair_contributions(self, frequency: complex, transformation_index: int) -> List[Tuple[str, np.ndarray, float]]:
        name = self.transformations[transformation_index].name
        omega = complex(frequency)
        if omega.imag != 0.0:
            raise EvaluationFailure(
                details="The point-dipole model is defined for real frequencies only.",
                frequency=frequency, transformation=name,
            )
        if omega.real < 0.0:
            raise EvaluationFailure(
                details="Negative angular frequencies are not physical.",
                frequency=frequency, transformation=name,
            )
        w = omega.real
        positions = self._positions_for(transformation_index)
        source_pos = positions[self.emitter.label]
        theta_source = planck_oscillator_energy(w, self.emitter.temperature_k)
        k = w / SPEED_OF_LIGHT_M_S

        contributions = []
        for receiver in self.receivers:
            receiver_pos = positions[receiver.label]
            if w == 0.0:
                contributions.append((receiver.label, receiver_pos, 0.0))
                continue
            if vec_distance(source_pos, receiver_pos) == 0.0:
                raise EvaluationFailure(
                    details=f"Bodies '{self.emitter.label}' and '{receiver.label}' coincide.",
                    frequency=frequency, transformation=name,
                )
            separation = vec_sub(receiver_pos, source_pos)
            green = self.cached_kernel(
                frequency, transformation_index,
                f"G:{self.emitter.label}:{receiver.label}",
                lambda: free_space_dyadic_green(k, separation),
            )
            trace = float(np.real(np.trace(green @ green.conj().T)))
            delta_theta = theta_source - planck_oscillator_energy(w, receiver.temperature_k)
            power = (2.0 / np.pi) * k**4 * self.emitter.polarizability_m3 * receiver.polarizability_m3 * trace * delta_theta
            contributions.append((receiver.label, receiver_pos, float(power)))
        return contributions

    def _contributions_for(self, frequency: complex, transformation_index: int) -> List[Tuple[str, np.ndarray, float]]:
        key = (complex(frequency), transformation_index)
        if self._last_contributions is None or self._last_contributions[0] != key:
            self._last_contributions = (key, self._pair_contributions(frequency, transformation_index))
        return self._last_contributions[1]

    def evaluate(self, frequency: complex, transformation_index: int) -> float:
        return float(sum(power for _, _, power in self._contributions_for(frequency, transformation_index)))

    def flux_records(self, frequency: complex, transformation_index: int) -> List[FluxRecord]:
        contributions = self._contributions_for(frequency, transformation_index)
        positions = self._positions_for(transformation_index)
        records = [FluxRecord(label=self.emitter.label, position=positions[self.emitter.label],
                              power=-sum(p for _, _, p in contributions))]
        records.extend(FluxRecord(label=label, position=pos, power=p) for label, pos, p in contributions)
        return records
