# tests/test_cli.py
from pathlib import Path

import pytest

from radheat_core import cli


@pytest.fixture(autouse=True)
def logging_calls(monkeypatch):
    """Records setup_logging calls instead of replacing the test session's handlers."""
    calls = []
    monkeypatch.setattr(cli, "setup_logging", lambda level, log_file: calls.append((level, log_file)))
    return calls


def test_successful_run_exits_zero(geometry_file, transformation_file, tmp_path, logging_calls):
    log_file = tmp_path / "run.log"
    status = cli.main([
        "--geometry", str(geometry_file),
        "--transfile", str(transformation_file),
        "--omega", "1e14", "--omega", "2e14",
        "--log-file", str(log_file),
    ])
    assert status == 0
    assert logging_calls[0][1] == log_file
    lines = [l for l in geometry_file.with_suffix(".byOmega").read_text().splitlines() if not l.startswith("#")]
    assert len(lines) == 4


def test_option_file_and_command_line_are_merged(geometry_file, write_file, tmp_path):
    options = write_file("run.yaml", f"geometry: {geometry_file}\nomega: [1.0e14]\nby_omega_file: {tmp_path / 'from_file.byOmega'}\n")
    status = cli.main(["--options", str(options), "--by-omega-file", str(tmp_path / "from_cli.byOmega")])
    assert status == 0
    assert (tmp_path / "from_cli.byOmega").exists()
    assert not (tmp_path / "from_file.byOmega").exists()


def test_cache_file_is_written(geometry_file, tmp_path):
    cache = tmp_path / "spheres.cache.npz"
    assert cli.main(["--geometry", str(geometry_file), "--omega", "1e14", "--cache", str(cache)]) == 0
    assert cache.exists()


def test_conflicting_options_exit_one_with_report(geometry_file, tmp_path, capsys):
    status = cli.main([
        "--geometry", str(geometry_file), "--omega", "1e14",
        "--cache", str(tmp_path / "c.npz"), "--write-cache", str(tmp_path / "w.npz"),
    ])
    assert status == 1
    err = capsys.readouterr().err
    assert "Actionable Diagnostic Report" in err
    assert "CFG_CACHE_CONFLICT" in err


def test_missing_geometry_exits_one(capsys):
    assert cli.main(["--omega", "1e14"]) == 1
    assert "Missing Required Option" in capsys.readouterr().err


def test_bad_option_file_is_a_configuration_error(write_file, capsys):
    options = write_file("run.yaml", "nthread: many\n")
    assert cli.main(["--options", str(options)]) == 1
    assert "Option Schema Validation Error" in capsys.readouterr().err


def test_bad_omega_value_is_a_configuration_error(geometry_file, capsys):
    assert cli.main(["--geometry", str(geometry_file), "--omega", "fast"]) == 1
    assert "Invalid Option Value" in capsys.readouterr().err


def test_default_log_file_name(geometry_file, monkeypatch, tmp_path, logging_calls):
    monkeypatch.chdir(tmp_path)
    assert cli.main(["--geometry", str(geometry_file), "--omega", "1e14"]) == 0
    assert logging_calls[0][1] == Path("radheat.log")
