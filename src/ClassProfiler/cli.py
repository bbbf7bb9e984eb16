# ============================================================================
# ClassProfiler - Command Line Interface
#
# Purpose: CLI entry point for running the bundled profiling examples
# Inputs: Command-line arguments
# Outputs: Text reports on stdout, or JSON snapshots with --json
# Dependencies: argparse, config, examples, utils.serialization
# Usage: classprofiler examples primes --n 5000
#
# Changelog:
#   2026-10-03: Initial CLI with 'examples' command (text and --json output)
#   2026-10-10: --config and --log_level flags
# ============================================================================

import argparse
import sys
from typing import List, Optional

from ClassProfiler import __version__
from ClassProfiler.config import Config, set_config
from ClassProfiler.errors import ClassProfilerError
from ClassProfiler.examples.primes import DEFAULT_LIMIT, run_primes
from ClassProfiler.examples.two_sum import DEFAULT_SEED, DEFAULT_SIZE, run_two_sum
from ClassProfiler.logging_utils import get_logger, setup_logging
from ClassProfiler.mixins import Profiled
from ClassProfiler.reporting.schema import ProfileSnapshot
from ClassProfiler.utils.serialization import serialize_snapshots_to_json

logger = get_logger(__name__)

EXAMPLE_CHOICES = ["primes", "two-sum", "all"]


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="classprofiler",
        description="Per-method timing and allocation profiling for Python classes",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Examples command
    examples_parser = subparsers.add_parser(
        "examples",
        help="Run the bundled algorithm comparisons and print their profile reports",
    )
    examples_parser.add_argument(
        "name",
        nargs="?",
        choices=EXAMPLE_CHOICES,
        default="all",
        help="Example to run (default: all)",
    )
    examples_parser.add_argument(
        "--n",
        type=int,
        default=DEFAULT_LIMIT,
        help=f"Upper limit for the primes example (default: {DEFAULT_LIMIT})",
    )
    examples_parser.add_argument(
        "--size",
        type=int,
        default=DEFAULT_SIZE,
        help=f"List size for the two-sum example (default: {DEFAULT_SIZE})",
    )
    examples_parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help=f"Random seed for the two-sum example (default: {DEFAULT_SEED})",
    )
    examples_parser.add_argument(
        "--json",
        action="store_true",
        help="Print metric snapshots as JSON instead of text reports",
    )
    examples_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file (default: configs/default.yaml)",
    )
    examples_parser.add_argument(
        "--log_level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Module logging level (overrides config)",
    )

    return parser


def _print_text_report(title: str, example: Profiled) -> None:
    print(f"=== {title} ===")
    type(example).enable_profiler_logging_to_stdout()
    example.profile_report()
    print()


def examples_command(args: argparse.Namespace) -> int:
    """
    Execute the 'examples' command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    try:
        config = Config.from_yaml(args.config) if args.config else Config.from_default()
        if args.log_level:
            config.logging.level = args.log_level
        setup_logging(config.logging.level, config.logging.format)
        set_config(config)

        if args.n < 0 or args.size < 0:
            print("✗ Error: --n and --size must be non-negative", file=sys.stderr)
            return 1

        snapshots: List[ProfileSnapshot] = []
        if args.name in ("primes", "all"):
            logger.info(f"Running primes example (N={args.n})")
            primes = run_primes(args.n)
            if args.json:
                snapshots.append(primes.snapshot(owner="primes"))
            else:
                _print_text_report(
                    f"Primes: trial_division vs sieve_of_eratosthenes (N={args.n})",
                    primes,
                )

        if args.name in ("two-sum", "all"):
            logger.info(f"Running two-sum example (SIZE={args.size}, seed={args.seed})")
            two_sum = run_two_sum(args.size, args.seed)
            if args.json:
                snapshots.append(two_sum.snapshot(owner="two-sum"))
            else:
                _print_text_report(
                    f"Two Sum: brute_force vs hashmap (SIZE={args.size})",
                    two_sum,
                )

        if args.json:
            print(serialize_snapshots_to_json(snapshots, indent=2))
        return 0

    except FileNotFoundError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1
    except ClassProfilerError as e:
        logger.error(f"Profiling error: {e}")
        print(f"✗ Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected error while running examples")
        print(f"✗ Unexpected error: {e}", file=sys.stderr)
        return 2


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "examples":
        return examples_command(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
