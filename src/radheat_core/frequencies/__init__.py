# src/radheat_core/frequencies/__init__.py
from .exceptions import InvalidInputFile, InvalidRangeBound, ConflictingFrequencyMode
from .loader import load_frequency_file
from .builder import FrequencyMode, FrequencyPlan, FrequencyListBuilder, build_frequency_plan

__all__ = [
    "FrequencyMode",
    "FrequencyPlan",
    "FrequencyListBuilder",
    "build_frequency_plan",
    "load_frequency_file",
    "InvalidInputFile",
    "InvalidRangeBound",
    "ConflictingFrequencyMode",
]
