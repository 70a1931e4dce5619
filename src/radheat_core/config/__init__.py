# src/radheat_core/config/__init__.py
from .run_config import RunConfig
from .parser import OptionFileParser, merge_options
from .exceptions import OptionFileError, OptionSchemaError, OptionValueError

__all__ = [
    "RunConfig",
    "OptionFileParser",
    "merge_options",
    "OptionFileError",
    "OptionSchemaError",
    "OptionValueError",
]
