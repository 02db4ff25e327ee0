"""Seeded synchronous runner for test trees.

Walks a ``SyncTest`` depth-first in declaration order, evaluates every
leaf and fuzz test, and collects a ``Summary``.  The run is
deterministic for a given ``(tree, runs, seed)``: all fuzz tests draw
from one ``random.Random(seed)`` in the order they are declared.

Auto-failure mirrors how focused or incomplete suites are treated in
CI: a run that used ``only``, ``skip`` or ``todo`` (or found nothing to
run) fails even when every executed test passed.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any

from tasktest.engine.expect import Expectation, is_failure
from tasktest.engine.tree import (
    Batch,
    Fuzz,
    Labeled,
    Leaf,
    Only,
    Skipped,
    SyncTest,
    Todo,
    contains_only,
)

AUTO_FAIL_ONLY = "Test.only was used"
AUTO_FAIL_SKIP = "Test.skip was used"
AUTO_FAIL_TODO = "Test.todo was used"
AUTO_FAIL_EMPTY = "No tests were found"


@dataclass
class TestOutcome:
    """Outcome of a single leaf, fuzz test or todo."""

    labels: tuple[str, ...]
    description: str
    status: str  # passed, failed, skipped, todo
    message: str = ""
    duration: float = 0.0


@dataclass
class Summary:
    """Aggregate result of one run."""

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    todos: list[str] = field(default_factory=list)
    auto_fail: str | None = None
    results: list[TestOutcome] = field(default_factory=list)
    duration: float = 0.0

    @property
    def exit_code(self) -> int:
        return 1 if self.failed or self.auto_fail is not None else 0


class _Walker:
    def __init__(self, runs: int, seed: int) -> None:
        self.runs = runs
        self.rng = random.Random(seed)
        self.summary = Summary()
        self.used_skip = False

    def walk(
        self,
        test: SyncTest,
        labels: tuple[str, ...],
        active: bool,
        skipped: bool,
    ) -> None:
        if isinstance(test, Labeled):
            self.walk(test.test, labels + (test.label,), active, skipped)
        elif isinstance(test, Batch):
            for child in test.tests:
                self.walk(child, labels, active, skipped)
        elif isinstance(test, Only):
            self.walk(test.test, labels, True, skipped)
        elif isinstance(test, Skipped):
            self.used_skip = True
            self.walk(test.test, labels, active, True)
        elif isinstance(test, Todo):
            if active and not skipped:
                self.summary.todos.append(test.description)
                self.summary.results.append(
                    TestOutcome(labels, test.description, "todo")
                )
        elif isinstance(test, (Leaf, Fuzz)):
            if not active:
                return
            if skipped:
                self.summary.skipped += 1
                self.summary.results.append(
                    TestOutcome(labels, test.description, "skipped")
                )
                return
            outcome = self._execute(test, labels)
            if outcome.status == "passed":
                self.summary.passed += 1
            else:
                self.summary.failed += 1
            self.summary.results.append(outcome)
        else:
            raise TypeError(f"Not a synchronous test: {test!r}")

    def _execute(self, test: Leaf | Fuzz, labels: tuple[str, ...]) -> TestOutcome:
        start_time = time.monotonic()
        if isinstance(test, Leaf):
            message = _check(test.thunk)
        else:
            message = self._fuzz(test)
        duration = time.monotonic() - start_time
        status = "passed" if message is None else "failed"
        return TestOutcome(
            labels=labels,
            description=test.description,
            status=status,
            message=message or "",
            duration=duration,
        )

    def _fuzz(self, test: Fuzz) -> str | None:
        for _ in range(self.runs):
            try:
                args = [generate(self.rng) for generate in test.generators]
            except Exception as e:
                return f"Fuzzer raised: {e!r}"
            message = _check(test.check, *args)
            if message is not None:
                given = ", ".join(repr(a) for a in args)
                return f"Given {given}\n\n{message}"
        return None


def _check(thunk: Any, *args: Any) -> str | None:
    """Evaluate a thunk and return its failure message, if any."""
    try:
        result: Expectation = thunk(*args)
    except Exception as e:
        return f"Test raised: {e!r}"
    try:
        failed = is_failure(result)
    except TypeError:
        return f"Test returned a non-expectation value: {result!r}"
    return result.message if failed else None


def run_tree(test: SyncTest, runs: int = 100, seed: int = 0) -> Summary:
    """Run every test in ``test`` and return the summary.

    Args:
        test: Root of the synchronous test tree.
        runs: Number of generated inputs per fuzz test.
        seed: Seed for the shared fuzz random generator.

    Returns:
        ``Summary`` with per-test outcomes in declaration order.

    Raises:
        ValueError: If ``runs`` is less than 1.
    """
    if runs < 1:
        raise ValueError(f"runs must be at least 1, got {runs}")

    focused = contains_only(test)
    walker = _Walker(runs, seed)

    start_time = time.monotonic()
    walker.walk(test, (), not focused, False)
    summary = walker.summary
    summary.duration = time.monotonic() - start_time

    if focused:
        summary.auto_fail = AUTO_FAIL_ONLY
    elif walker.used_skip:
        summary.auto_fail = AUTO_FAIL_SKIP
    elif summary.todos:
        summary.auto_fail = AUTO_FAIL_TODO
    elif not summary.results:
        summary.auto_fail = AUTO_FAIL_EMPTY

    return summary
