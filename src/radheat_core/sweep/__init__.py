# src/radheat_core/sweep/__init__.py
from .exceptions import UnsupportedMode
from .context import SweepContext
from .results import FrequencyResult, SweepSummary, SweepOutcome
from .output import ResultSink, ResultCollector, ByOmegaWriter, FluxWriter, format_frequency
from .engine import SweepEngine
from .execution import run_heat_sweep

__all__ = [
    "UnsupportedMode",
    "SweepContext",
    "FrequencyResult",
    "SweepSummary",
    "SweepOutcome",
    "ResultSink",
    "ResultCollector",
    "ByOmegaWriter",
    "FluxWriter",
    "format_frequency",
    "SweepEngine",
    "run_heat_sweep",
]
