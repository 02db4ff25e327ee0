"""Unit tests for run options and the run config file."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import pytest

from tasktest.run.config import DEFAULT_CONFIG, DEFAULT_RUNS, RunConfig, RunOptions


class TestRunOptions:
    """Tests for RunOptions."""

    def test_defaults(self):
        options = RunOptions(seed=7)
        assert options.runs == DEFAULT_RUNS == 100
        assert options.strict is False

    def test_from_time(self):
        options = RunOptions.from_time(1_700_000_000_123)
        assert options.seed == 1_700_000_000_123
        assert options.runs == 100

    def test_from_time_carries_runs_and_strict(self):
        options = RunOptions.from_time(5, runs=3, strict=True)
        assert (options.seed, options.runs, options.strict) == (5, 3, True)

    def test_invalid_runs(self):
        with pytest.raises(ValueError):
            RunOptions(seed=1, runs=0)

    def test_frozen(self):
        options = RunOptions(seed=1)
        with pytest.raises(AttributeError):
            options.seed = 2  # type: ignore[misc]


class TestRunConfigCreate:
    """Tests for creating RunConfig instances."""

    def test_no_path_uses_defaults(self):
        cfg = RunConfig(None)
        assert cfg.runs == DEFAULT_CONFIG["runs"]
        assert cfg.seed is None
        assert cfg.report is None
        assert cfg.strict is False

    def test_nonexistent_path_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = RunConfig(Path(tmpdir) / "missing.json")
            assert cfg.runs == 100

    def test_load_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".tasktest_config"
            path.write_text(json.dumps({
                "runs": 25,
                "seed": 1234,
                "report": "out/report.yaml",
                "strict": True,
            }))
            cfg = RunConfig(path)
            assert cfg.runs == 25
            assert cfg.seed == 1234
            assert cfg.report == Path("out/report.yaml")
            assert cfg.strict is True

    def test_partial_file_fills_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".tasktest_config"
            path.write_text(json.dumps({"seed": 9}))
            cfg = RunConfig(path)
            assert cfg.seed == 9
            assert cfg.runs == 100  # default

    def test_corrupted_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".tasktest_config"
            path.write_text("{ invalid json }")
            cfg = RunConfig(path)
            assert cfg.config == DEFAULT_CONFIG

    def test_non_dict_json_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".tasktest_config"
            path.write_text("[1, 2, 3]")
            cfg = RunConfig(path)
            assert cfg.config == DEFAULT_CONFIG

    def test_null_values_use_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".tasktest_config"
            path.write_text(json.dumps({"runs": None, "strict": None, "seed": 3}))
            cfg = RunConfig(path)
            assert cfg.runs == DEFAULT_RUNS
            assert cfg.strict is False
            assert cfg.seed == 3


class TestRunConfigOptions:
    """Tests for building RunOptions from config."""

    def test_pinned_seed_does_not_read_clock(self):
        cfg = RunConfig(None)
        cfg.set_config(seed=99)

        def clock():
            raise AssertionError("clock should not be read")

        options = cfg.options(clock)
        assert options.seed == 99

    def test_unpinned_seed_reads_clock_once(self):
        reads: list[int] = []

        def clock():
            reads.append(1)
            return 123456

        options = RunConfig(None).options(clock)
        assert options.seed == 123456
        assert reads == [1]

    def test_set_config_none_leaves_values(self):
        cfg = RunConfig(None)
        cfg.set_config(runs=3)
        cfg.set_config(runs=None, strict=None)
        assert cfg.runs == 3
        assert cfg.strict is False
