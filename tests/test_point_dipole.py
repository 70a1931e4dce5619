# tests/test_point_dipole.py
import numpy as np
import pytest

from radheat_core.cache import KernelCache
from radheat_core.constants import BOLTZMANN_J_PER_K
from radheat_core.evaluation import (
    EVALUATOR_REGISTRY,
    EvaluationContext,
    EvaluationFailure,
    EvaluatorSetupError,
    IFluxProvider,
    IntegrandEvaluator,
    PointDipoleEvaluator,
    create_evaluator,
    free_space_dyadic_green,
    planck_oscillator_energy,
)
from radheat_core.geometry import load_geometry, load_transformations


@pytest.fixture
def context(geometry_file, transformation_file):
    geometry = load_geometry(geometry_file)
    return EvaluationContext(
        geometry=geometry,
        transformations=load_transformations(transformation_file, geometry),
        cache=KernelCache(),
    )


def test_point_dipole_is_registered_and_provides_flux(context):
    assert EVALUATOR_REGISTRY["point_dipole"] is PointDipoleEvaluator
    evaluator = create_evaluator("point_dipole", context)
    assert isinstance(evaluator, IntegrandEvaluator)
    assert isinstance(evaluator, IFluxProvider)


def test_unknown_evaluator_name(context):
    with pytest.raises(EvaluatorSetupError) as exc_info:
        create_evaluator("no_such_model", context)
    assert "point_dipole" in exc_info.value.available


def test_single_body_geometry_is_rejected(write_file):
    path = write_file("one.yaml", "bodies:\n  - {label: A, position: [0, 0, 0], temperature: 300, polarizability: 1}\n")
    geometry = load_geometry(path)
    ctx = EvaluationContext(geometry=geometry, transformations=load_transformations(None, geometry), cache=KernelCache())
    with pytest.raises(EvaluatorSetupError, match="at least two"):
        PointDipoleEvaluator(ctx)


def test_planck_oscillator_energy_limits():
    assert planck_oscillator_energy(1e14, 0.0) == 0.0
    assert planck_oscillator_energy(0.0, 300.0) == pytest.approx(BOLTZMANN_J_PER_K * 300.0)
    # hbar*omega << k_B*T: classical limit
    assert planck_oscillator_energy(1e10, 300.0) == pytest.approx(BOLTZMANN_J_PER_K * 300.0, rel=1e-3)


def test_green_function_far_field():
    distance = 1e-3
    k = 1e4 / distance
    green = free_space_dyadic_green(k, np.array([0.0, 0.0, distance]))
    assert green.shape == (3, 3)
    np.testing.assert_allclose(green, green.T)
    trace = np.real(np.trace(green @ green.conj().T))
    assert trace == pytest.approx(2.0 / (4.0 * np.pi * distance) ** 2, rel=1e-3)


def test_heat_flows_from_hot_to_cold_and_decays_with_distance(context):
    evaluator = PointDipoleEvaluator(context)
    near = evaluator.evaluate(1e14, 0)
    far = evaluator.evaluate(1e14, 1)
    assert near > far > 0.0


def test_zero_frequency_gives_zero(context):
    assert PointDipoleEvaluator(context).evaluate(0.0, 0) == 0.0


@pytest.mark.parametrize("omega", [1e14 + 1e12j, -1e14])
def test_unphysical_frequencies_fail(context, omega):
    with pytest.raises(EvaluationFailure):
        PointDipoleEvaluator(context).evaluate(omega, 0)


def test_kernels_are_cached_per_frequency_and_transformation(context):
    evaluator = PointDipoleEvaluator(context)
    first = evaluator.evaluate(1e14, 0)
    assert len(context.cache) == 1
    evaluator.evaluate(1e14, 1)
    assert evaluator.evaluate(1e14, 0) == first
    assert context.cache.get_stats()['hits'] == 1
    evaluator.evaluate(2e14, 0)
    assert len(context.cache) == 3


def test_flux_after_evaluate_reuses_the_same_contributions(context):
    evaluator = PointDipoleEvaluator(context)
    value = evaluator.evaluate(1e14, 0)
    stats_before = context.cache.get_stats()
    records = evaluator.flux_records(1e14, 0)
    assert context.cache.get_stats() == stats_before
    assert records[1].power == value


def test_flux_records_balance(context):
    evaluator = PointDipoleEvaluator(context)
    records = evaluator.flux_records(1e14, 0)
    assert [r.label for r in records] == ["Hot", "Cold"]
    assert records[1].power == pytest.approx(evaluator.evaluate(1e14, 0))
    assert sum(r.power for r in records) == pytest.approx(0.0, abs=1e-12 * records[1].power)


def test_coincident_bodies_fail(geometry_file, write_file):
    geometry = load_geometry(geometry_file)
    path = write_file("merge.yaml", "transformations:\n  - name: Merge\n    operations:\n"
                                    "      - {body: Cold, displacement: [0.0, 0.0, -1.0e-6]}\n")
    ctx = EvaluationContext(geometry=geometry, transformations=load_transformations(path, geometry), cache=KernelCache())
    with pytest.raises(EvaluationFailure, match="coincide"):
        PointDipoleEvaluator(ctx).evaluate(1e14, 0)
