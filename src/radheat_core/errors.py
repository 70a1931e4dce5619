# src/radheat_core/errors.py
import logging
from abc import abstractmethod
from typing import Any, Dict, Protocol
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class RadHeatError(Exception):
    """Base class for all custom, user-facing errors in RadHeat Core."""
    pass

class ConfigurationError(RadHeatError):
    """
    Raised when the run configuration cannot be assembled, e.g. an unreadable or
    schema-violating option file. The message is a pre-formatted diagnostic report.
    """
    pass

class SweepRunError(RadHeatError):
    """
    Raised when a frequency sweep fails for any reason: invalid option combinations,
    a malformed frequency file, an unsupported frequency mode or an evaluator failure.
    The message is a pre-formatted, user-friendly diagnostic report.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """
    A protocol for exceptions that can generate their own rich diagnostic report.
    """
    def get_diagnostic_report(self) -> str:
        """Generates a complete, user-friendly, multi-line report string."""
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    A common, concrete base class for all internal exceptions that are diagnosable.

    It inherits from `Exception`, so it can be used in `except` clauses, and it
    declares `get_diagnostic_report` abstract, so every subclass must say how it
    is reported to the user.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# --- Stateless Formatting Utility ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Formats the final multi-line report string shared by all user-facing diagnostics.

    Args:
        error_type: The high-level category of the error (e.g., "Invalid Range Bound").
        details: A detailed, potentially multi-line description of the problem.
        suggestion: Actionable advice for the user to resolve the issue.
        context: Contextual information (option name, file path, user input,
                 frequency, transformation).

    Returns:
        A formatted diagnostic report string ready for display.
    """
    lines = [
        "\n",
        "=============== RadHeat Core: Actionable Diagnostic Report ===============",
        f"Error Type:     {error_type}",
    ]
    if option := context.get('option'):
        lines.append(f"Option:         {option}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:    {source_file}")
    if user_input := context.get('user_input'):
        lines.append(f"User Input:     '{user_input}'")
    if frequency := context.get('frequency'):
        lines.append(f"Frequency:      {frequency}")
    if transformation := context.get('transformation'):
        lines.append(f"Transformation: {transformation}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("==========================================================================")
    return "\n".join(lines)
