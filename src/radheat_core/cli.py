# src/radheat_core/cli.py
"""
Command-line driver.

Usage:
    radheat --geometry Spheres.yaml --omega 1e14 --omega 2e14 [--transfile Moves.yaml]
    radheat --options run.yaml [--cache Spheres.cache.npz]

Every option can also be given in a YAML option file (`--options`); values on
the command line take precedence.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .config import OptionFileParser, RunConfig, merge_options
from .errors import ConfigurationError, DiagnosableError, RadHeatError
from .log_config import setup_logging
from .sweep import run_heat_sweep

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="radheat",
        description="Compute frequency-resolved radiative heat transfer between bodies.",
    )
    parser.add_argument("--options", type=Path, help="YAML option file; command-line values take precedence.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    geo = parser.add_argument_group("geometry")
    geo.add_argument("--geometry", help="Geometry file (required).")
    geo.add_argument("--transfile", dest="transformation_file", help="List of geometrical transformations.")

    freq = parser.add_argument_group("frequencies")
    freq.add_argument("--omega", dest="omega_values", action="append",
                      help="Angular frequency (rad/s, complex allowed). May be repeated.")
    freq.add_argument("--omega-file", dest="omega_file", help="File with one frequency per line.")
    freq.add_argument("--omega-min", dest="omega_min", help="Lower integration limit.")
    freq.add_argument("--omega-max", dest="omega_max", help="Upper integration limit.")

    out = parser.add_argument_group("output")
    out.add_argument("--output-file", dest="output_file", help="Frequency-integrated output file.")
    out.add_argument("--by-omega-file", dest="by_omega_file", help="Frequency-resolved output file.")
    out.add_argument("--plot-flux", dest="plot_flux", action="store_true",
                     help="Write spatially-resolved flux data.")
    out.add_argument("--log-file", dest="log_file", help="Log file (default: radheat.log).")

    cache = parser.add_argument_group("caching")
    cache.add_argument("--cache", help="Read/write cache file.")
    cache.add_argument("--read-cache", dest="read_caches", action="append",
                       help="Cache file to preload. May be repeated.")
    cache.add_argument("--write-cache", dest="write_cache", help="Cache file to write after the run.")

    ev = parser.add_argument_group("evaluation")
    ev.add_argument("--nthread", dest="n_thread", type=int, help="Worker-thread hint for the evaluator.")
    ev.add_argument("--evaluator", help="Registered integrand evaluator (default: point_dipole).")
    ev.add_argument("--continue-on-failure", dest="continue_on_failure", action="store_true",
                    help="Mark failed evaluations as unavailable instead of aborting.")
    return parser


def load_run_config(args: argparse.Namespace) -> RunConfig:
    """
    Merges the option file (if any) and the command line into a `RunConfig`.

    Raises:
        ConfigurationError: if the option file or an option value is invalid.
    """
    cli_options: Dict[str, Any] = {
        k: v for k, v in vars(args).items() if k not in ("options", "verbose")
    }
    try:
        file_options = OptionFileParser().parse(args.options) if args.options else {}
        return RunConfig.from_options(merge_options(file_options, cli_options))
    except DiagnosableError as e:
        raise ConfigurationError(e.get_diagnostic_report()) from e


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO

    try:
        config = load_run_config(args)
        setup_logging(level=level, log_file=config.resolved_log_file)
        outcome = run_heat_sweep(config)
    except RadHeatError as e:
        print(str(e), file=sys.stderr)
        return 1

    files = ", ".join(str(p) for paths in outcome.output_files.values() for p in paths)
    logger.info(f"Evaluated {outcome.num_evaluations} points; output written to: {files}")
    if outcome.summary.num_failures:
        logger.error(f"{outcome.summary.num_failures} evaluation(s) failed and are marked 'nan'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
