"""Unit tests for the process environment and colour detection."""

from __future__ import annotations

import io
import sys
import time

import pytest

from tasktest.run.environment import (
    ColorDepth,
    Environment,
    detect_color_depth,
    wall_clock_millis,
)


class _Tty(io.StringIO):
    def isatty(self) -> bool:
        return True


class _BrokenStream:
    def isatty(self) -> bool:
        raise ValueError("I/O operation on closed file")


class TestDetectColorDepth:
    """Tests for detect_color_depth()."""

    def test_not_a_tty(self):
        assert detect_color_depth(io.StringIO(), {"TERM": "xterm"}) == ColorDepth.NONE

    def test_no_color_wins(self):
        assert detect_color_depth(_Tty(), {"NO_COLOR": "", "FORCE_COLOR": "3"}) == ColorDepth.NONE

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("0", ColorDepth.NONE),
            ("1", ColorDepth.BASIC),
            ("2", ColorDepth.ANSI256),
            ("3", ColorDepth.TRUECOLOR),
            ("", ColorDepth.BASIC),
            ("weird", ColorDepth.BASIC),
        ],
    )
    def test_force_color(self, value: str, expected: ColorDepth):
        assert detect_color_depth(io.StringIO(), {"FORCE_COLOR": value}) == expected

    def test_truecolor_tty(self):
        assert detect_color_depth(_Tty(), {"COLORTERM": "truecolor", "TERM": "xterm"}) == ColorDepth.TRUECOLOR

    def test_256_tty(self):
        assert detect_color_depth(_Tty(), {"TERM": "xterm-256color"}) == ColorDepth.ANSI256

    def test_basic_tty(self):
        assert detect_color_depth(_Tty(), {"TERM": "xterm"}) == ColorDepth.BASIC

    def test_dumb_terminal(self):
        assert detect_color_depth(_Tty(), {"TERM": "dumb"}) == ColorDepth.NONE

    def test_probe_failure_defaults_to_none(self):
        assert detect_color_depth(_BrokenStream(), {"TERM": "xterm"}) == ColorDepth.NONE  # type: ignore[arg-type]


class TestEnvironment:
    """Tests for Environment construction."""

    def test_from_process_uses_real_streams(self):
        env = Environment.from_process()
        assert env.stdout is sys.stdout
        assert env.stderr is sys.stderr
        assert env.exit is sys.exit

    def test_defaults(self):
        env = Environment(stdout=io.StringIO(), stderr=io.StringIO())
        assert env.color_depth() == ColorDepth.NONE
        assert abs(env.now_millis() - int(time.time() * 1000)) < 5000

    def test_wall_clock_millis_is_milliseconds(self):
        before = int(time.time() * 1000)
        now = wall_clock_millis()
        after = int(time.time() * 1000)
        assert before <= now <= after
