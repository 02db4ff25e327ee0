"""Run orchestration: options, process environment and the run entry points."""

from tasktest.run.config import RunConfig, RunOptions
from tasktest.run.environment import ColorDepth, Environment, detect_color_depth
from tasktest.run.orchestrator import execute, run, run_with_options

__all__ = [
    "ColorDepth",
    "Environment",
    "RunConfig",
    "RunOptions",
    "detect_color_depth",
    "execute",
    "run",
    "run_with_options",
]
