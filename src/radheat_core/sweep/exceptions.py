# src/radheat_core/sweep/exceptions.py
"""
Diagnosable exceptions of the sweep driver.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class UnsupportedMode(DiagnosableError):
    """
    A frequency range was requested. Its bounds are validated, but integrating
    over frequency is not implemented, so the run stops before any evaluation.
    """
    details: str
    omega_min: Optional[float] = None
    omega_max: Optional[float] = None

    def __str__(self):
        return f"Unsupported frequency mode: {self.details}"

    def get_diagnostic_report(self) -> str:
        upper = "unbounded" if self.omega_max is None else str(self.omega_max)
        return format_diagnostic_report(
            error_type="Unsupported Frequency Mode",
            details=f"{self.details}\nRequested range: [{self.omega_min}, {upper}].",
            suggestion="Give a discrete list of frequencies with 'omega_values' or 'omega_file' instead.",
            context={'option': 'omega_min, omega_max'}
        )
