# src/radheat_core/geometry/exceptions.py
"""
Diagnosable exceptions for reading geometry and transformation files.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(frozen=True)
class GeometryFileError(DiagnosableError):
    """
    A geometry or transformation file is missing, is not valid YAML, or describes
    something inconsistent (an unknown body, a zero rotation axis).
    """
    details: str
    file_path: Path

    def __str__(self):
        return f"Geometry error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Geometry or Transformation File Error",
            details=self.details,
            suggestion="Ensure the file exists and that every transformation refers to a body label defined in the geometry.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class GeometrySchemaError(DiagnosableError):
    """The file is valid YAML but does not match the geometry or transformation schema."""
    errors: Dict[str, Any]
    file_path: Path

    def __str__(self):
        error_lines = [
            f"  - In field '{k}': {v[0]}"
            for k, v in sorted(self.errors.items(), key=lambda kv: str(kv[0]))
        ]
        return (
            f"Schema validation failed for file '{self.file_path}':\n"
            + "\n".join(error_lines)
        )

    def get_diagnostic_report(self) -> str:
        error_list_str = "\n".join(
            f"  - Field '{k}': {v[0]}"
            for k, v in sorted(self.errors.items(), key=lambda kv: str(kv[0]))
        )
        details = (
            "The structure of the file does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n{error_list_str}"
        )
        return format_diagnostic_report(
            error_type="Geometry Schema Validation Error",
            details=details,
            suggestion="Check for duplicate body labels or transformation names, positions that are not 3-vectors, and missing 'temperature' or 'polarizability' values.",
            context={'source_file': self.file_path}
        )
