"""Run orchestration: seed, resolve, execute, report, exit.

The stages are strictly linear:

1. **Seed acquisition** (``run`` only): read the clock once and seed the
   fuzz generator from its millisecond value.  ``run_with_options``
   skips this stage.
2. **Resolution and handoff** (``execute``): resolve the whole deferred
   suite, probe the terminal colour depth, run the synchronous tree and
   write the report to the environment's stdout.
3. **Termination**: call ``env.exit`` with the summary's exit code.

Pass/fail is decided entirely by the runner's summary.  The only failure
this layer adds is an output error while writing results, which forces
exit code 1.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from tasktest.core.node import reset_strict, set_strict
from tasktest.core.resolver import DeferredTest
from tasktest.engine.runner import run_tree
from tasktest.reporting.reporter import Reporter
from tasktest.run.config import DEFAULT_RUNS, RunOptions
from tasktest.run.environment import ColorDepth, Environment


def _print_stderr(env: Environment, message: str) -> None:
    try:
        print(message, file=env.stderr)
    except (OSError, ValueError):
        # stderr itself is gone; there is nowhere left to report to
        pass


def _probe_color_depth(env: Environment) -> ColorDepth:
    """Ask the environment for colour support, defaulting to none."""
    try:
        return ColorDepth(env.color_depth())
    except Exception as e:
        _print_stderr(env, f"Warning: colour detection failed ({e}), using plain output")
        return ColorDepth.NONE


async def execute(
    env: Environment,
    options: RunOptions,
    suite: DeferredTest,
    report_path: Path | None = None,
) -> int:
    """Resolve ``suite``, run it and write the results.

    Args:
        env: Process environment providing the output streams.
        options: Fuzz run count, seed and strictness.
        suite: The deferred suite to resolve.
        report_path: Optional path for a YAML report.

    Returns:
        0 if every test passed and nothing auto-failed, 1 otherwise.
    """
    token = set_strict(True) if options.strict else None
    try:
        test = await suite.resolve_test()
    finally:
        if token is not None:
            reset_strict(token)
    color_depth = _probe_color_depth(env)

    summary = run_tree(test, runs=options.runs, seed=options.seed)
    reporter = Reporter(summary, options)

    try:
        env.stdout.write(reporter.render_text(color_depth))
        env.stdout.flush()
        if report_path is not None:
            reporter.write_yaml(report_path)
    # ValueError covers closed streams and UnicodeEncodeError
    except (OSError, ValueError) as e:
        _print_stderr(env, f"Error: could not write test results: {e}")
        return 1

    return summary.exit_code


def run_with_options(
    env: Environment,
    options: RunOptions,
    suite: DeferredTest,
    report_path: Path | None = None,
) -> int:
    """Run ``suite`` with explicit options and terminate via ``env.exit``.

    Returns the exit code when ``env.exit`` returns (as fakes do).
    """
    exit_code = asyncio.run(execute(env, options, suite, report_path))
    env.exit(exit_code)
    return exit_code


def run(
    env: Environment,
    suite: DeferredTest,
    runs: int = DEFAULT_RUNS,
    report_path: Path | None = None,
    strict: bool = False,
) -> int:
    """Run ``suite`` seeded from the current wall-clock time.

    Unseeded runs draw different fuzz inputs on every invocation; the
    seed is printed in the report header so a failing run can be
    replayed with ``--seed``.
    """
    options = RunOptions.from_time(env.now_millis(), runs=runs, strict=strict)
    return run_with_options(env, options, suite, report_path)
