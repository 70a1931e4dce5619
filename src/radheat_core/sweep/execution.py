# src/radheat_core/sweep/execution.py
"""
Provides `run_heat_sweep`, the public entry point for running a frequency sweep.

The function is a thin facade over the validator, the frequency builder, the
geometry loaders, the kernel cache and the `SweepEngine`. It runs them in order,
packages what they produced into a `SweepOutcome`, and turns any diagnosable
failure into a single `SweepRunError` carrying its report.
"""
import logging
from typing import Callable, Dict, List, Optional, Sequence

from ..cache import KernelCache
from ..config.run_config import RunConfig
from ..errors import DiagnosableError, SweepRunError, format_diagnostic_report
from ..evaluation import EvaluationContext, IntegrandEvaluator, create_evaluator
from ..frequencies import FrequencyListBuilder
from ..geometry import load_geometry, load_transformations
from ..validation import ConfigValidator
from .context import SweepContext
from .engine import SweepEngine
from .exceptions import UnsupportedMode
from .output import ByOmegaWriter, FluxWriter, ResultCollector, ResultSink
from .results import SweepOutcome

logger = logging.getLogger(__name__)

EvaluatorFactory = Callable[[EvaluationContext], IntegrandEvaluator]


def run_heat_sweep(
    config: RunConfig,
    evaluator_factory: Optional[EvaluatorFactory] = None,
    sinks: Sequence[ResultSink] = (),
    cache: Optional[KernelCache] = None,
) -> SweepOutcome:
    """
    Runs a complete frequency sweep for `config`.

    Order of work: validate the options, build the frequency list, load the
    geometry and transformations, preload the kernel cache, sweep, write the
    cache back. Nothing is evaluated if any step before the sweep fails.

    Args:
        config: The run configuration.
        evaluator_factory: Builds the integrand evaluator from an `EvaluationContext`.
                           Defaults to the registered evaluator named by `config.evaluator`.
        sinks: Extra result sinks, called after the built-in output writers.
        cache: An optional kernel cache to use instead of a new, empty one.

    Returns:
        A `SweepOutcome` with every result vector and the run's bookkeeping.

    Raises:
        SweepRunError: if the run fails at any stage. The original exception is chained.
    """
    effective_cache = cache if cache is not None else KernelCache()

    try:
        logger.info(f"--- Starting heat-transfer sweep for '{config.geometry}' ---")
        ConfigValidator(config).validate_or_raise()

        plan = FrequencyListBuilder.from_config(config).build()
        if plan.is_range_mode:
            raise UnsupportedMode(
                details="Frequency integration is not yet implemented.",
                omega_min=plan.omega_min,
                omega_max=plan.omega_max,
            )

        geometry = load_geometry(config.geometry)
        transformations = load_transformations(config.transformation_file, geometry)

        sources = config.preload_sources
        if sources:
            readable = effective_cache.preload_all(sources)
            logger.info(f"Preloaded {readable}/{len(sources)} cache file(s); {len(effective_cache)} entries available.")

        eval_context = EvaluationContext(
            geometry=geometry,
            transformations=transformations,
            cache=effective_cache,
            n_thread=config.n_thread,
        )
        if evaluator_factory is None:
            evaluator = create_evaluator(config.evaluator, eval_context)
        else:
            evaluator = evaluator_factory(eval_context)

        collector = ResultCollector()
        by_omega = ByOmegaWriter(config.resolved_by_omega_file, geometry_name=geometry.name)
        all_sinks: List[ResultSink] = [collector, by_omega]
        flux_writer = None
        if config.plot_flux:
            flux_writer = FluxWriter(config.geometry.parent, config.geometry.stem)
            all_sinks.append(flux_writer)
        all_sinks.extend(sinks)

        sweep_context = SweepContext(
            plan=plan,
            transformations=transformations,
            evaluator=evaluator,
            plot_flux=config.plot_flux,
            continue_on_failure=config.continue_on_failure,
        )
        summary = SweepEngine(sweep_context).execute_sweep(all_sinks)

        if summary.num_failures:
            logger.error(
                f"{summary.num_failures} of {summary.num_evaluations} evaluations failed and are "
                "marked unavailable (NaN) in the output."
            )

        cache_written = effective_cache.write_back(config.write_back_target)

        output_files: Dict[str, list] = {'by_omega': [by_omega.path]}
        if flux_writer is not None:
            output_files['flux'] = list(flux_writer.written)

        logger.info(f"Sweep successful. Cache stats: {effective_cache.get_stats()}")
        return SweepOutcome(
            results=tuple(collector.results),
            summary=summary,
            cache_stats=effective_cache.get_stats(),
            output_files=output_files,
            preload_failures=tuple(effective_cache.preload_failures),
            cache_written=cache_written,
        )

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during the sweep: {e}")
        raise SweepRunError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during the sweep: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Sweep Error Occurred ({type(e).__name__})",
            details=f"The sweep encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={}
        )
        raise SweepRunError(report) from e
