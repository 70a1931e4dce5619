# tests/test_sweep_engine.py
import logging
import math

import numpy as np
import pytest

from conftest import RecordingEvaluator

from radheat_core.evaluation import EvaluationFailure, FluxRecord
from radheat_core.frequencies import FrequencyMode, FrequencyPlan
from radheat_core.geometry import Transformation, TransformationSet
from radheat_core.sweep import (
    ResultCollector,
    SweepContext,
    SweepEngine,
    UnsupportedMode,
)


@pytest.fixture
def two_transformations():
    return TransformationSet(transformations=(Transformation(name="A"), Transformation(name="B")))


def make_engine(evaluator, transformations, frequencies=(1.0, 2.0, 3.0), **kwargs):
    context = SweepContext(
        plan=FrequencyPlan.discrete(frequencies),
        transformations=transformations,
        evaluator=evaluator,
        **kwargs,
    )
    return SweepEngine(context)


class EventSink(ResultCollector):
    def __init__(self):
        super().__init__()
        self.events = []

    def begin(self, transformation_names):
        super().begin(transformation_names)
        self.events.append(("begin", tuple(transformation_names)))

    def accept(self, result):
        super().accept(result)
        self.events.append(("accept", result.frequency))

    def end(self):
        self.events.append(("end",))


def test_sweep_calls_evaluator_for_every_pair_in_order(recording_evaluator, two_transformations):
    sink = EventSink()
    summary = make_engine(recording_evaluator, two_transformations).execute_sweep([sink])

    assert recording_evaluator.calls == [(1, 0), (1, 1), (2, 0), (2, 1), (3, 0), (3, 1)]
    assert summary.num_evaluations == 6
    assert summary.num_frequencies == 3
    assert summary.num_transformations == 2

    assert [r.frequency for r in sink.results] == [1, 2, 3]
    for result in sink.results:
        assert result.values.shape == (2,)
        assert result.transformation_names == ("A", "B")
        assert result.is_complete
    np.testing.assert_allclose(sink.results[1].values, [2.0, 4.0])
    assert sink.events[0] == ("begin", ("A", "B"))
    assert sink.events[-1] == ("end",)


def test_every_sink_receives_each_result(recording_evaluator, two_transformations):
    first, second = ResultCollector(), ResultCollector()
    make_engine(recording_evaluator, two_transformations).execute_sweep([first, second])
    assert [r.frequency for r in first.results] == [r.frequency for r in second.results] == [1, 2, 3]


def test_range_plan_is_unsupported(recording_evaluator, two_transformations):
    context = SweepContext(
        plan=FrequencyPlan(mode=FrequencyMode.RANGE, omega_min=0.0, omega_max=None),
        transformations=two_transformations,
        evaluator=recording_evaluator,
    )
    with pytest.raises(UnsupportedMode) as exc_info:
        SweepEngine(context).execute_sweep()
    assert recording_evaluator.calls == []
    assert "unbounded" in exc_info.value.get_diagnostic_report()


def test_first_failure_aborts_and_sinks_are_closed(two_transformations):
    evaluator = RecordingEvaluator(fail_at=(2, 1))
    sink = EventSink()
    with pytest.raises(EvaluationFailure):
        make_engine(evaluator, two_transformations).execute_sweep([sink])
    assert evaluator.calls[-1] == (2, 1)
    assert [r.frequency for r in sink.results] == [1]
    assert sink.events[-1] == ("end",)


def test_continue_on_failure_marks_value_unavailable(two_transformations):
    evaluator = RecordingEvaluator(fail_at=(2, 1))
    sink = ResultCollector()
    summary = make_engine(evaluator, two_transformations, continue_on_failure=True).execute_sweep([sink])

    assert len(evaluator.calls) == 6
    assert summary.num_failures == 1
    failed = sink.results[1]
    assert failed.failed_indices == (1,)
    assert failed.values[0] == 2.0
    assert math.isnan(failed.values[1])
    assert sink.results[2].is_complete


class BadReturnEvaluator:
    def __init__(self, value):
        self.value = value

    def evaluate(self, frequency, transformation_index):
        return self.value


@pytest.mark.parametrize("value", [1 + 2j, "1.0", None, True, float("inf"), np.array([1.0, 2.0])])
def test_non_real_scalar_results_are_failures(two_transformations, value):
    with pytest.raises(EvaluationFailure):
        make_engine(BadReturnEvaluator(value), two_transformations).execute_sweep()


@pytest.mark.parametrize("value", [np.float64(2.5), np.array(2.5), 2])
def test_numpy_and_integer_scalars_are_accepted(two_transformations, value):
    sink = ResultCollector()
    make_engine(BadReturnEvaluator(value), two_transformations, frequencies=(1.0,)).execute_sweep([sink])
    np.testing.assert_allclose(sink.results[0].values, [float(value)] * 2)


def test_nan_result_is_kept_and_reported(two_transformations, caplog):
    caplog.set_level(logging.WARNING, logger="radheat_core.sweep.engine")
    sink = ResultCollector()
    make_engine(BadReturnEvaluator(float("nan")), two_transformations, frequencies=(1.0,)).execute_sweep([sink])
    assert np.isnan(sink.results[0].values).all()
    assert sink.results[0].is_complete
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any("NaN" in m and "'A'" in m for m in warnings)
    assert any("NaN" in m and "'B'" in m for m in warnings)


def test_unexpected_evaluator_exception_is_wrapped(two_transformations):
    class Exploding:
        def evaluate(self, frequency, transformation_index):
            raise ZeroDivisionError("boom")

    with pytest.raises(EvaluationFailure, match="ZeroDivisionError") as exc_info:
        make_engine(Exploding(), two_transformations).execute_sweep()
    assert exc_info.value.transformation == "A"
    assert isinstance(exc_info.value.__cause__, ZeroDivisionError)


class FluxEvaluator(RecordingEvaluator):
    def flux_records(self, frequency, transformation_index):
        return [FluxRecord(label="X", position=np.zeros(3), power=float(transformation_index))]


def test_flux_records_are_collected_when_requested(two_transformations):
    sink = ResultCollector()
    make_engine(FluxEvaluator(), two_transformations, frequencies=(1.0,), plot_flux=True).execute_sweep([sink])
    flux = sink.results[0].flux
    assert [[r.power for r in records] for records in flux] == [[0.0], [1.0]]


def test_flux_is_skipped_when_not_requested_or_not_provided(recording_evaluator, two_transformations):
    sink = ResultCollector()
    make_engine(FluxEvaluator(), two_transformations, frequencies=(1.0,)).execute_sweep([sink])
    assert sink.results[0].flux is None

    make_engine(recording_evaluator, two_transformations, frequencies=(1.0,), plot_flux=True).execute_sweep([sink])
    assert sink.results[0].flux is None


class ExplodingFluxEvaluator(RecordingEvaluator):
    def flux_records(self, frequency, transformation_index):
        if (frequency, transformation_index) == (2.0, 1):
            raise ZeroDivisionError("no flux")
        return [FluxRecord(label="X", position=np.zeros(3), power=1.0)]


def test_flux_exception_is_an_evaluation_failure(two_transformations):
    engine = make_engine(ExplodingFluxEvaluator(), two_transformations, plot_flux=True)
    with pytest.raises(EvaluationFailure, match="ZeroDivisionError") as exc_info:
        engine.execute_sweep()
    assert exc_info.value.transformation == "B"


def test_flux_exception_respects_continue_on_failure(two_transformations):
    sink = ResultCollector()
    engine = make_engine(ExplodingFluxEvaluator(), two_transformations, plot_flux=True, continue_on_failure=True)
    summary = engine.execute_sweep([sink])

    assert summary.num_failures == 1
    failed = sink.results[1]
    assert failed.failed_indices == (1,)
    assert math.isnan(failed.values[1])
    assert [len(records) for records in failed.flux] == [1, 0]
    assert sink.results[2].is_complete


def test_sinks_already_begun_are_ended_when_a_later_begin_fails(recording_evaluator, two_transformations):
    class BrokenSink(EventSink):
        def begin(self, transformation_names):
            raise OSError("disk full")

    first, broken, last = EventSink(), BrokenSink(), EventSink()
    with pytest.raises(OSError):
        make_engine(recording_evaluator, two_transformations).execute_sweep([first, broken, last])
    assert first.events[-1] == ("end",)
    assert broken.events == []
    assert last.events == []
    assert recording_evaluator.calls == []
