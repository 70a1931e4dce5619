# src/radheat_core/frequencies/exceptions.py
"""
Diagnosable exceptions raised while assembling the list of frequencies to evaluate.

A bad frequency file or a bad integration bound is always fatal: both are
detected before any expensive computation begins.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional

from ..errors import DiagnosableError, format_diagnostic_report
from ..validation.exceptions import ConflictingOptions
from ..validation.issues import ValidationIssue, ValidationIssueLevel
from ..validation.issue_codes import ConfigIssueCode


@dataclass()
class InvalidInputFile(DiagnosableError):
    """The frequency file is missing, unreadable, or has a line that is not a frequency."""
    details: str
    file_path: Path
    line_number: Optional[int] = None

    def __str__(self):
        where = f" (line {self.line_number})" if self.line_number is not None else ""
        return f"Invalid frequency file '{self.file_path}'{where}: {self.details}"

    def get_diagnostic_report(self) -> str:
        details = self.details
        if self.line_number is not None:
            details = f"Line {self.line_number}: {details}"
        return format_diagnostic_report(
            error_type="Invalid Frequency File",
            details=details,
            suggestion="Each non-blank line must hold one real or complex frequency (e.g. '1.5', '2+0.5j'). Lines starting with '#' are comments.",
            context={'option': 'omega_file', 'source_file': self.file_path}
        )


@dataclass()
class InvalidRangeBound(DiagnosableError):
    """An integration bound is non-real, negative, or below the lower bound."""
    option: str
    value: Any
    details: str

    def __str__(self):
        return f"Invalid value specified for '{self.option}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Range Bound",
            details=self.details,
            suggestion="Integration bounds must be purely real, 'omega_min' must be >= 0 and 'omega_max' must be >= 'omega_min'.",
            context={'option': self.option, 'user_input': str(self.value)}
        )


class ConflictingFrequencyMode(ConflictingOptions):
    """A discrete frequency list and an integration range were both requested."""
    error_type = "Conflicting Frequency Options"
    suggestion = "Either list frequencies ('omega_values'/'omega_file') or give a range ('omega_min'/'omega_max'), not both."

    def __init__(self, num_frequencies: int, options: List[str]):
        issue = ValidationIssue(
            level=ValidationIssueLevel.ERROR,
            code=ConfigIssueCode.CFG_FREQ_MODE_CONFLICT.code,
            message=ConfigIssueCode.CFG_FREQ_MODE_CONFLICT.format_message(num_frequencies=num_frequencies),
            options=tuple(options),
            details={'num_frequencies': num_frequencies},
        )
        super().__init__([issue])
