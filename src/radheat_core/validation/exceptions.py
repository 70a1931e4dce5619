# src/radheat_core/validation/exceptions.py
"""
Defines the diagnosable exceptions raised when a run configuration is rejected.

`ConfigValidationError` carries every error-level `ValidationIssue` found in one
pass. Its two concrete subclasses name the kind of rejection:
`MissingRequiredOption` and `ConflictingOptions`.
"""
from typing import List

from .issues import ValidationIssue, ValidationIssueLevel
from ..errors import DiagnosableError, format_diagnostic_report


class ConfigValidationError(DiagnosableError):
    """
    Raised when configuration validation detects one or more errors.

    It keeps only the `ERROR`-level issues of the list it is given and formats
    them into a single report.
    """
    error_type: str = "Run Configuration Error"
    suggestion: str = "Correct the listed options on the command line or in the option file."

    def __init__(self, issues: List[ValidationIssue]):
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.level == ValidationIssueLevel.ERROR
        ]
        if not self.issues:
            summary_message = f"{type(self).__name__} was raised with no error-level issues."
        else:
            error_lines = [str(issue) for issue in self.issues]
            summary_message = (
                f"Configuration validation failed with {len(self.issues)} error(s):\n"
                + "\n".join(f"  - {line}" for line in error_lines)
            )
        super().__init__(summary_message)

    def get_diagnostic_report(self) -> str:
        error_lines = [str(issue) for issue in self.issues]
        details = (
            f"The run was rejected before any frequency was evaluated.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {line}" for line in error_lines)
        )

        first_issue = self.issues[0] if self.issues else None
        context = {}
        if first_issue:
            context['option'] = ", ".join(first_issue.options) or 'Multiple'
            if first_issue.source_file:
                context['source_file'] = first_issue.source_file

        return format_diagnostic_report(
            error_type=self.error_type,
            details=details,
            suggestion=self.suggestion,
            context=context
        )


class MissingRequiredOption(ConfigValidationError):
    """Raised when a mandatory option (the geometry) was not given."""
    error_type = "Missing Required Option"
    suggestion = "Provide the missing option, e.g. '--geometry MyGeometry.yaml'."


class ConflictingOptions(ConfigValidationError):
    """Raised when mutually exclusive options are given together."""
    error_type = "Conflicting Options"
    suggestion = "Remove one option from each conflicting pair listed above."
