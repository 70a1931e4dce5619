# src/radheat_core/validation/issues.py
import logging
from enum import Enum
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class ValidationIssueLevel(Enum):
    """Severity level of a validation issue."""
    ERROR = "ERROR"
    WARNING = "WARNING"

    def __str__(self):
        return self.value


@dataclass
class ValidationIssue:
    """
    Represents a single problem found while checking a run configuration.
    `options` names the configuration options involved, in the order they are reported.
    """
    level: ValidationIssueLevel
    code: str
    message: str
    options: tuple = ()
    source_file: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.level.name} - {self.code}]"]
        if self.options:
            parts.append(f"Options: {', '.join(self.options)}")
        if self.source_file:
            parts.append(f"File: {self.source_file}")
        parts.append(f"Message: {self.message}")

        if self.details:
            filtered_details = {
                k: v for k, v in self.details.items()
                if k not in ['option', 'options', 'source_file']
            }
            if filtered_details:
                details_str = ", ".join(f"{k}={v}" for k, v in sorted(filtered_details.items()))
                parts.append(f"Details: ({details_str})")

        return " ".join(parts)
