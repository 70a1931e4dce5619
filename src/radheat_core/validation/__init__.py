# src/radheat_core/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import ConfigIssueCode
from .exceptions import ConfigValidationError, MissingRequiredOption, ConflictingOptions
from .config_validator import ConfigValidator

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "ConfigIssueCode",
    "ConfigValidator",
    "ConfigValidationError",
    "MissingRequiredOption",
    "ConflictingOptions",
]
