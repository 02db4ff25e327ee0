"""Rendering of run summaries.

Produces the console report (optionally with ANSI colours) and a YAML
report file.  Status values follow the runner: passed, failed, skipped,
todo.
"""

from __future__ import annotations

import datetime
from pathlib import Path
from typing import Any

import yaml

from tasktest.engine.runner import Summary, TestOutcome
from tasktest.run.config import RunOptions
from tasktest.run.environment import ColorDepth

# Valid status values in a report
VALID_STATUSES = frozenset({"passed", "failed", "skipped", "todo"})

_RED = "31"
_GREEN = "32"
_YELLOW = "33"
_DIM = "2"
_BOLD = "1"

REPRODUCE_COMMAND = "tasktest"


class Reporter:
    """Formats one run's ``Summary`` for the console and for YAML files."""

    def __init__(self, summary: Summary, options: RunOptions) -> None:
        self.summary = summary
        self.options = options

    def header(self) -> str:
        """The first console line, carrying everything needed to reproduce the run."""
        count = sum(
            1 for r in self.summary.results if r.status in ("passed", "failed")
        )
        noun = "test" if count == 1 else "tests"
        return (
            f"Running {count} {noun}. To reproduce these results, run: "
            f"{REPRODUCE_COMMAND} --fuzz {self.options.runs} "
            f"--seed {self.options.seed}"
        )

    def render_text(self, color_depth: ColorDepth = ColorDepth.NONE) -> str:
        """Render the full console report.

        Args:
            color_depth: Terminal colour support; ``NONE`` emits plain text.

        Returns:
            The report text, ending with a newline.
        """

        def paint(text: str, code: str) -> str:
            if color_depth == ColorDepth.NONE:
                return text
            return f"\x1b[{code}m{text}\x1b[0m"

        lines: list[str] = [self.header(), ""]

        for result in self.summary.results:
            if result.status != "failed":
                continue
            lines.extend(paint(f"↓ {label}", _DIM) for label in result.labels)
            lines.append(paint(f"✗ {result.description}", _RED))
            lines.append("")
            lines.extend(f"    {line}" for line in result.message.splitlines())
            lines.append("")

        summary = self.summary
        if summary.exit_code == 0:
            lines.append(paint("TEST RUN PASSED", f"{_BOLD};{_GREEN}"))
        elif summary.failed == 0 and summary.auto_fail is not None:
            lines.append(
                paint(
                    f"TEST RUN INCOMPLETE because {summary.auto_fail}",
                    f"{_BOLD};{_YELLOW}",
                )
            )
        else:
            lines.append(paint("TEST RUN FAILED", f"{_BOLD};{_RED}"))
        lines.append("")

        lines.append(f"Duration: {round(summary.duration * 1000)} ms")
        lines.append(f"Passed:   {summary.passed}")
        lines.append(f"Failed:   {summary.failed}")
        if summary.skipped:
            lines.append(f"Skipped:  {summary.skipped}")
        if summary.todos:
            lines.append(f"Todo:     {len(summary.todos)}")
            lines.extend(paint(f"◦ TODO: {t}", _YELLOW) for t in summary.todos)

        return "\n".join(lines) + "\n"

    def generate_report(self) -> dict[str, Any]:
        """Build the structured report.

        Returns:
            Dictionary with run options, summary counts and per-test entries.
        """
        summary = self.summary
        return {
            "report": {
                "generated_at": datetime.datetime.now(
                    datetime.timezone.utc
                ).isoformat(),
                "seed": self.options.seed,
                "runs": self.options.runs,
                "summary": {
                    "total": len(summary.results),
                    "passed": summary.passed,
                    "failed": summary.failed,
                    "skipped": summary.skipped,
                    "todo": len(summary.todos),
                    "auto_fail": summary.auto_fail,
                    "exit_code": summary.exit_code,
                    "total_duration_seconds": round(summary.duration, 3),
                },
                "tests": [self._format_result(r) for r in summary.results],
            }
        }

    def write_yaml(self, path: Path) -> None:
        """Write the report as a YAML file.

        Args:
            path: File path to write the YAML report to.
        """
        report = self.generate_report()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                report,
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )

    def _format_result(self, result: TestOutcome) -> dict[str, Any]:
        if result.status not in VALID_STATUSES:
            raise ValueError(
                f"Invalid status '{result.status}' for {result.description!r}"
            )
        entry: dict[str, Any] = {
            "name": " / ".join(result.labels + (result.description,)),
            "status": result.status,
            "duration_seconds": round(result.duration, 3),
        }
        # Include message only if non-empty
        if result.message:
            entry["message"] = result.message
        return entry
