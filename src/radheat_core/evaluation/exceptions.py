# src/radheat_core/evaluation/exceptions.py
"""
Defines the diagnosable exceptions of the evaluation subsystem.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class EvaluationFailure(DiagnosableError):
    """
    The integrand could not be evaluated for one (frequency, transformation) pair.

    By default this aborts the sweep; no partial physical output is produced.
    """
    details: str
    frequency: Optional[complex] = None
    transformation: Optional[str] = None

    def __str__(self):
        where = []
        if self.frequency is not None:
            where.append(f"omega={self.frequency}")
        if self.transformation is not None:
            where.append(f"transformation '{self.transformation}'")
        prefix = f"Evaluation failed at {', '.join(where)}" if where else "Evaluation failed"
        return f"{prefix}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Integrand Evaluation Failure",
            details=self.details,
            suggestion="Check the geometry and the frequency at which the failure occurred. Use 'continue_on_failure' to mark such points as unavailable instead of aborting.",
            context={
                'frequency': str(self.frequency) if self.frequency is not None else "N/A",
                'transformation': self.transformation,
            }
        )


@dataclass()
class EvaluatorSetupError(DiagnosableError):
    """The evaluator cannot be created for the given geometry or name."""
    evaluator: str
    details: str
    available: List[str] = field(default_factory=list)

    def __str__(self):
        return f"Cannot set up evaluator '{self.evaluator}': {self.details}"

    def get_diagnostic_report(self) -> str:
        suggestion = "Check the 'evaluator' option and the geometry file."
        if self.available:
            suggestion += f"\nAvailable evaluators: {', '.join(self.available)}."
        return format_diagnostic_report(
            error_type="Evaluator Setup Error",
            details=self.details,
            suggestion=suggestion,
            context={'option': 'evaluator', 'user_input': self.evaluator}
        )
