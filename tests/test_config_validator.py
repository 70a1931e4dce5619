# tests/test_config_validator.py
from pathlib import Path

import pytest

from radheat_core.config import RunConfig
from radheat_core.validation import (
    ConfigIssueCode,
    ConfigValidator,
    ConflictingOptions,
    MissingRequiredOption,
    ValidationIssueLevel,
)


def codes(issues):
    return [issue.code for issue in issues]


def test_valid_config_has_no_issues():
    config = RunConfig(geometry=Path("g.yaml"), omega_values=(1.0,))
    assert ConfigValidator(config).validate_or_raise() == []


def test_missing_geometry():
    with pytest.raises(MissingRequiredOption) as exc_info:
        ConfigValidator(RunConfig(omega_values=(1.0,))).validate_or_raise()
    assert codes(exc_info.value.issues) == [ConfigIssueCode.CFG_GEOMETRY_MISSING.code]
    assert "Missing Required Option" in exc_info.value.get_diagnostic_report()


def test_cache_and_write_cache_conflict():
    config = RunConfig(geometry=Path("g.yaml"), cache=Path("c.npz"), write_cache=Path("w.npz"))
    with pytest.raises(ConflictingOptions) as exc_info:
        ConfigValidator(config).validate_or_raise()
    assert codes(exc_info.value.issues) == [ConfigIssueCode.CFG_CACHE_CONFLICT.code]
    assert exc_info.value.issues[0].options == ('cache', 'write_cache')


def test_plot_flux_and_by_omega_file_conflict():
    config = RunConfig(geometry=Path("g.yaml"), plot_flux=True, by_omega_file=Path("x.byOmega"))
    with pytest.raises(ConflictingOptions, match="CFG_FLUX_CONFLICT"):
        ConfigValidator(config).validate_or_raise()


def test_missing_geometry_takes_precedence_and_report_lists_all_errors():
    config = RunConfig(cache=Path("c.npz"), write_cache=Path("w.npz"))
    with pytest.raises(MissingRequiredOption) as exc_info:
        ConfigValidator(config).validate_or_raise()
    assert set(codes(exc_info.value.issues)) == {
        ConfigIssueCode.CFG_GEOMETRY_MISSING.code, ConfigIssueCode.CFG_CACHE_CONFLICT.code,
    }
    report = exc_info.value.get_diagnostic_report()
    assert "CFG_GEOMETRY_MISSING" in report and "CFG_CACHE_CONFLICT" in report


def test_warnings_do_not_raise():
    config = RunConfig(
        geometry=Path("g.yaml"),
        read_caches=(Path("a.npz"), Path("a.npz")),
        n_thread=-2,
    )
    issues = ConfigValidator(config).validate_or_raise()
    assert all(i.level == ValidationIssueLevel.WARNING for i in issues)
    assert set(codes(issues)) == {
        ConfigIssueCode.CFG_CACHE_DUPLICATE.code, ConfigIssueCode.CFG_THREADS_INVALID.code,
    }


def test_read_cache_repeating_combined_cache_is_a_duplicate():
    config = RunConfig(geometry=Path("g.yaml"), read_caches=(Path("c.npz"),), cache=Path("c.npz"))
    issues = ConfigValidator(config).validate()
    assert codes(issues) == [ConfigIssueCode.CFG_CACHE_DUPLICATE.code]


def test_validator_requires_run_config():
    with pytest.raises(TypeError):
        ConfigValidator({"geometry": "g.yaml"})
