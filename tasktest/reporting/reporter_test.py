"""Unit tests for the console and YAML reporter."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
import yaml

from tasktest.engine import runner, tree
from tasktest.engine.expect import fail, pass_
from tasktest.engine.runner import AUTO_FAIL_TODO, Summary, run_tree
from tasktest.reporting.reporter import VALID_STATUSES, Reporter
from tasktest.run.config import RunOptions
from tasktest.run.environment import ColorDepth

_OPTIONS = RunOptions(seed=4242, runs=10)


def _mixed_summary():
    return run_tree(
        tree.batch([
            tree.describe("api", [tree.leaf("returns 200", pass_)]),
            tree.describe("db", [tree.leaf("has rows", lambda: fail("table empty"))]),
        ]),
        runs=_OPTIONS.runs,
        seed=_OPTIONS.seed,
    )


class TestHeader:
    def test_includes_seed_and_runs(self):
        header = Reporter(_mixed_summary(), _OPTIONS).header()
        assert "Running 2 tests" in header
        assert "--seed 4242" in header
        assert "--fuzz 10" in header

    def test_singular(self):
        summary = run_tree(tree.leaf("one", pass_))
        assert "Running 1 test." in Reporter(summary, _OPTIONS).header()


class TestRenderText:
    """Tests for render_text()."""

    def test_passed_run(self):
        summary = run_tree(tree.leaf("ok", pass_))
        text = Reporter(summary, _OPTIONS).render_text()
        assert "TEST RUN PASSED" in text
        assert "Passed:   1" in text
        assert "Failed:   0" in text

    def test_failed_run_lists_failure_with_labels(self):
        text = Reporter(_mixed_summary(), _OPTIONS).render_text()
        assert "TEST RUN FAILED" in text
        assert "↓ db" in text
        assert "✗ has rows" in text
        assert "    table empty" in text
        assert "returns 200" not in text

    def test_auto_fail_reported_as_incomplete(self):
        summary = run_tree(tree.batch([tree.leaf("ok", pass_), tree.todo("later")]))
        text = Reporter(summary, _OPTIONS).render_text()
        assert f"TEST RUN INCOMPLETE because {AUTO_FAIL_TODO}" in text
        assert "TODO: later" in text

    def test_skipped_count(self):
        summary = run_tree(tree.skip(tree.leaf("later", pass_)))
        text = Reporter(summary, _OPTIONS).render_text()
        assert "Skipped:  1" in text

    def test_no_color_has_no_escape_codes(self):
        text = Reporter(_mixed_summary(), _OPTIONS).render_text(ColorDepth.NONE)
        assert "\x1b[" not in text

    def test_color_adds_escape_codes(self):
        text = Reporter(_mixed_summary(), _OPTIONS).render_text(ColorDepth.ANSI256)
        assert "\x1b[31m✗ has rows\x1b[0m" in text

    def test_ends_with_newline(self):
        assert Reporter(_mixed_summary(), _OPTIONS).render_text().endswith("\n")


class TestReportDict:
    """Tests for generate_report()."""

    def test_summary_counts(self):
        report = Reporter(_mixed_summary(), _OPTIONS).generate_report()
        summary = report["report"]["summary"]
        assert summary["total"] == 2
        assert summary["passed"] == 1
        assert summary["failed"] == 1
        assert summary["exit_code"] == 1
        assert report["report"]["seed"] == 4242
        assert report["report"]["runs"] == 10

    def test_test_entries(self):
        report = Reporter(_mixed_summary(), _OPTIONS).generate_report()
        tests = report["report"]["tests"]
        assert [t["name"] for t in tests] == ["api / returns 200", "db / has rows"]
        assert "message" not in tests[0]
        assert tests[1]["message"] == "table empty"
        assert {t["status"] for t in tests} <= VALID_STATUSES

    def test_unknown_status_rejected(self):
        summary = Summary(
            failed=1,
            results=[runner.TestOutcome(labels=(), description="odd", status="errored")],
        )
        with pytest.raises(ValueError, match="Invalid status 'errored'"):
            Reporter(summary, _OPTIONS).generate_report()


class TestYamlOutput:
    """Tests for YAML file output."""

    def test_yaml_output_valid(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "report.yaml"
            Reporter(_mixed_summary(), _OPTIONS).write_yaml(path)

            loaded = yaml.safe_load(path.read_text())
            assert loaded["report"]["summary"]["total"] == 2
            assert len(loaded["report"]["tests"]) == 2

    def test_yaml_output_creates_parent_dirs(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "subdir" / "nested" / "report.yaml"
            Reporter(_mixed_summary(), _OPTIONS).write_yaml(path)
            assert path.exists()

    def test_yaml_preserves_unicode_and_order(self):
        summary = run_tree(tree.leaf("naïve café", pass_))
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "report.yaml"
            Reporter(summary, _OPTIONS).write_yaml(path)
            text = path.read_text(encoding="utf-8")
            assert "naïve café" in text
            assert text.index("seed") < text.index("tests")
