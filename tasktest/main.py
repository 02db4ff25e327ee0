"""Entry point for running a deferred suite from the command line.

Loads a suite named as ``module:attribute``, builds run options from the
command line and the optional config file, and hands over to the
orchestrator, which terminates the process.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

from tasktest.core.resolver import DeferredTest
from tasktest.exceptions import SuiteLoadError
from tasktest.run.config import DEFAULT_CONFIG_PATH, RunConfig
from tasktest.run.environment import Environment
from tasktest.run.orchestrator import run_with_options


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve a task-dependent test suite and run it"
    )
    parser.add_argument(
        "suite",
        help="Suite to run, as module:attribute (a DeferredTest or a "
             "zero-argument callable returning one)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for fuzz tests (default: current time in milliseconds)",
    )
    parser.add_argument(
        "--fuzz",
        type=int,
        default=None,
        help="Number of inputs per fuzz test (default: 100)",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Path to write a YAML report file",
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help=f"Path to the JSON run config file (default: {DEFAULT_CONFIG_PATH} "
             "if present)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Raise on internal consistency errors instead of reporting them",
    )
    return parser.parse_args(argv)


def load_suite(spec: str) -> DeferredTest:
    """Import the suite named by ``module:attribute``.

    Raises:
        SuiteLoadError: If the module cannot be imported, the attribute is
            missing or not a suite, or the suite factory raises.
    """
    module_name, sep, attribute = spec.partition(":")
    if not sep or not module_name or not attribute:
        raise SuiteLoadError(spec, "expected the form module:attribute")

    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        raise SuiteLoadError(spec, f"cannot import module: {e!r}")

    try:
        suite = getattr(module, attribute)
    except AttributeError:
        raise SuiteLoadError(spec, f"module has no attribute '{attribute}'")

    if not isinstance(suite, DeferredTest) and callable(suite):
        try:
            suite = suite()
        except Exception as e:
            raise SuiteLoadError(spec, f"suite factory raised: {e!r}")
    if not isinstance(suite, DeferredTest):
        raise SuiteLoadError(
            spec, f"expected a DeferredTest, got {type(suite).__name__}"
        )
    return suite


def main(argv: list[str] | None = None, env: Environment | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    if env is None:
        env = Environment.from_process()

    config_path = args.config_file
    if config_path is None and DEFAULT_CONFIG_PATH.exists():
        config_path = DEFAULT_CONFIG_PATH
    elif config_path is not None and not config_path.exists():
        print(
            f"Warning: config file not found: {config_path}, using defaults",
            file=env.stderr,
        )
    config = RunConfig(config_path)
    config.set_config(
        runs=args.fuzz,
        seed=args.seed,
        report=args.report,
        strict=args.strict or None,
    )

    try:
        suite = load_suite(args.suite)
    except SuiteLoadError as e:
        print(f"Error: {e}", file=env.stderr)
        return 1

    try:
        options = config.options(env.now_millis)
        report_path = config.report
    except (TypeError, ValueError) as e:
        print(f"Error: invalid run options: {e}", file=env.stderr)
        return 1

    return run_with_options(env, options, suite, report_path)


if __name__ == "__main__":
    sys.exit(main())
