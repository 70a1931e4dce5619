# src/radheat_core/config/exceptions.py
"""
Diagnosable exceptions for reading the option file and turning options into a
`RunConfig`. Mirrors the split between file-level errors (`OptionFileError`)
and structural errors (`OptionSchemaError`).
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(frozen=True)
class OptionFileError(DiagnosableError):
    """The option file is missing, unreadable, or not a YAML mapping."""
    details: str
    file_path: Path

    def __str__(self):
        return f"Option file error in '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Option File Error",
            details=self.details,
            suggestion="Ensure the option file exists, is readable, and holds a YAML mapping of option names to values.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class OptionSchemaError(DiagnosableError):
    """The option file is valid YAML but does not match the option schema."""
    errors: Dict[str, Any]
    file_path: Path

    def __str__(self):
        error_lines = [
            f"  - In option '{k}': {v[0]}"
            for k, v in sorted(self.errors.items(), key=lambda kv: str(kv[0]))
        ]
        return (
            f"Option schema validation failed for file '{self.file_path}':\n"
            + "\n".join(error_lines)
        )

    def get_diagnostic_report(self) -> str:
        error_list_str = "\n".join(
            f"  - Option '{k}': {v[0]}"
            for k, v in sorted(self.errors.items(), key=lambda kv: str(kv[0]))
        )
        details = (
            "The option file does not conform to the option schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n{error_list_str}"
        )
        return format_diagnostic_report(
            error_type="Option Schema Validation Error",
            details=details,
            suggestion="Check option names for typos and value types (paths are strings, 'plot_flux' is a boolean, 'n_thread' a non-negative integer).",
            context={'source_file': self.file_path}
        )


@dataclass()
class OptionValueError(DiagnosableError):
    """An option has the right type but a value that cannot be interpreted."""
    option: str
    value: Any
    details: str

    def __str__(self):
        return f"Invalid value for option '{self.option}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Option Value",
            details=self.details,
            suggestion="Frequencies are real or complex literals ('1.5', '2+0.5j', '2+0.5i') or angular-frequency quantities ('3e14 rad/s').",
            context={'option': self.option, 'user_input': self.value}
        )
