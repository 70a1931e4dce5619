# tests/test_frequencies.py
import logging

import pytest

from radheat_core.config import RunConfig
from radheat_core.frequencies import (
    ConflictingFrequencyMode,
    FrequencyListBuilder,
    FrequencyMode,
    FrequencyPlan,
    InvalidInputFile,
    InvalidRangeBound,
    build_frequency_plan,
    load_frequency_file,
)
from radheat_core.validation import ConflictingOptions


# --- Frequency file loading ---

def test_load_frequency_file_skips_comments_and_blank_lines(write_file):
    path = write_file("omega.dat", "# header\n1.0\n\n2+0.5j   # trailing comment\n3e14\n4-1i\n")
    assert load_frequency_file(path) == [1.0, 2 + 0.5j, 3e14, 4 - 1j]


def test_load_frequency_file_reports_bad_line_number(write_file):
    path = write_file("omega.dat", "1.0\nnot-a-number\n")
    with pytest.raises(InvalidInputFile) as exc_info:
        load_frequency_file(path)
    assert exc_info.value.line_number == 2
    assert "Line 2" in exc_info.value.get_diagnostic_report()


@pytest.mark.parametrize("line", ["3 4", "1e1 4", "2 +0.5j 1"])
def test_load_frequency_file_rejects_several_values_on_one_line(write_file, line):
    path = write_file("omega.dat", f"1.0\n{line}\n")
    with pytest.raises(InvalidInputFile) as exc_info:
        load_frequency_file(path)
    assert exc_info.value.line_number == 2


def test_load_frequency_file_allows_spaces_around_the_imaginary_sign(write_file):
    path = write_file("omega.dat", "2 + 0.5j\n4 - 1i\n")
    assert load_frequency_file(path) == [2 + 0.5j, 4 - 1j]


def test_load_missing_frequency_file(tmp_path):
    with pytest.raises(InvalidInputFile, match="not found"):
        load_frequency_file(tmp_path / "missing.dat")


def test_load_frequency_file_without_values(write_file):
    path = write_file("omega.dat", "# nothing here\n\n")
    with pytest.raises(InvalidInputFile, match="no frequencies"):
        load_frequency_file(path)


# --- Discrete mode ---

def test_file_values_come_before_explicit_values(write_file):
    path = write_file("omega.dat", "1\n2\n")
    plan = build_frequency_plan(omega_values=[3], omega_file=path)
    assert plan.mode is FrequencyMode.DISCRETE
    assert plan.frequencies == (1, 2, 3)
    assert list(plan) == [1, 2, 3]
    assert len(plan) == 3


def test_exact_duplicates_are_dropped_keeping_first(write_file, caplog):
    path = write_file("omega.dat", "2\n1\n")
    with caplog.at_level(logging.WARNING):
        plan = build_frequency_plan(omega_values=[1, 3, 2], omega_file=path)
    assert plan.frequencies == (2, 1, 3)
    assert "listed more than once" in caplog.text


@pytest.mark.parametrize("bounds", [
    {"omega_min": 0},
    {"omega_max": 10},
    {"omega_min": 1, "omega_max": 10},
])
def test_list_and_range_are_mutually_exclusive(bounds):
    with pytest.raises(ConflictingFrequencyMode) as exc_info:
        build_frequency_plan(omega_values=[1.0, 2.0], **bounds)
    assert isinstance(exc_info.value, ConflictingOptions)
    assert "CFG_FREQ_MODE_CONFLICT" in str(exc_info.value)


def test_conflict_detected_for_file_values_too(write_file):
    path = write_file("omega.dat", "1\n")
    with pytest.raises(ConflictingFrequencyMode):
        build_frequency_plan(omega_file=path, omega_max=5)


def test_bad_frequency_file_is_fatal_even_with_explicit_values(tmp_path):
    with pytest.raises(InvalidInputFile):
        build_frequency_plan(omega_values=[1.0], omega_file=tmp_path / "missing.dat")


# --- Range mode ---

def test_no_frequencies_means_unbounded_range_from_zero():
    plan = build_frequency_plan()
    assert plan.is_range_mode
    assert plan.omega_min == 0.0
    assert plan.omega_max is None
    assert plan.is_unbounded
    assert len(plan) == 0


def test_range_with_only_lower_bound():
    plan = build_frequency_plan(omega_min=0)
    assert plan.mode is FrequencyMode.RANGE
    assert (plan.omega_min, plan.omega_max) == (0.0, None)


def test_bounded_range():
    plan = build_frequency_plan(omega_min=1.0, omega_max=4.0)
    assert (plan.omega_min, plan.omega_max) == (1.0, 4.0)
    assert not plan.is_unbounded


@pytest.mark.parametrize("omega_min, omega_max, bad_option", [
    (5, 2, "omega_max"),
    (-1, None, "omega_min"),
    (1 + 1j, None, "omega_min"),
    (0, 3 + 0.1j, "omega_max"),
    (float("nan"), None, "omega_min"),
    (1, float("nan"), "omega_max"),
])
def test_invalid_range_bounds(omega_min, omega_max, bad_option):
    with pytest.raises(InvalidRangeBound) as exc_info:
        build_frequency_plan(omega_min=omega_min, omega_max=omega_max)
    assert exc_info.value.option == bad_option


def test_plan_rejects_inconsistent_construction():
    with pytest.raises(ValueError):
        FrequencyPlan(mode=FrequencyMode.DISCRETE)
    with pytest.raises(ValueError):
        FrequencyPlan(mode=FrequencyMode.RANGE, frequencies=(1.0,))


def test_builder_reads_run_config(write_file):
    path = write_file("omega.dat", "1\n2\n")
    config = RunConfig.from_options({
        "geometry": "g.yaml",
        "omega_file": str(path),
        "omega_values": ["3", "4+0.5i"],
    })
    plan = FrequencyListBuilder.from_config(config).build()
    assert plan.frequencies == (1, 2, 3, 4 + 0.5j)
