"""Process environment used by the orchestrator.

Bundles the clock, the terminal colour probe, the two output streams and
the process exit call so the orchestrator can be driven with fakes.
"""

from __future__ import annotations

import enum
import os
import sys
import time
from dataclasses import dataclass
from typing import Any, Callable, Mapping, TextIO


class ColorDepth(enum.IntEnum):
    """Colour support of the output terminal."""

    NONE = 0
    BASIC = 1  # 16 colours
    ANSI256 = 2
    TRUECOLOR = 3


_FORCE_COLOR_LEVELS = {
    "": ColorDepth.BASIC,
    "true": ColorDepth.BASIC,
    "0": ColorDepth.NONE,
    "false": ColorDepth.NONE,
    "1": ColorDepth.BASIC,
    "2": ColorDepth.ANSI256,
    "3": ColorDepth.TRUECOLOR,
}


def detect_color_depth(
    stream: TextIO,
    environ: Mapping[str, str] | None = None,
) -> ColorDepth:
    """Best-effort colour depth of ``stream``.

    ``NO_COLOR`` disables colour, ``FORCE_COLOR`` overrides detection,
    otherwise a TTY is inspected through ``COLORTERM`` and ``TERM``.
    """
    if environ is None:
        environ = os.environ

    if "NO_COLOR" in environ:
        return ColorDepth.NONE

    force = environ.get("FORCE_COLOR")
    if force is not None:
        return _FORCE_COLOR_LEVELS.get(force.strip().lower(), ColorDepth.BASIC)

    try:
        is_tty = stream.isatty()
    except (AttributeError, ValueError, OSError):
        return ColorDepth.NONE
    if not is_tty:
        return ColorDepth.NONE

    if environ.get("COLORTERM", "").lower() in ("truecolor", "24bit"):
        return ColorDepth.TRUECOLOR

    term = environ.get("TERM", "")
    if not term or term == "dumb":
        return ColorDepth.NONE
    if "256" in term:
        return ColorDepth.ANSI256
    return ColorDepth.BASIC


def wall_clock_millis() -> int:
    return int(time.time() * 1000)


@dataclass
class Environment:
    """Everything the orchestrator needs from the hosting process."""

    stdout: TextIO
    stderr: TextIO
    now_millis: Callable[[], int] = wall_clock_millis
    color_depth: Callable[[], ColorDepth] = lambda: ColorDepth.NONE
    exit: Callable[[int], Any] = sys.exit

    @classmethod
    def from_process(cls) -> Environment:
        """Environment backed by the real process streams, clock and exit."""
        return cls(
            stdout=sys.stdout,
            stderr=sys.stderr,
            now_millis=wall_clock_millis,
            color_depth=lambda: detect_color_depth(sys.stdout),
            exit=sys.exit,
        )
