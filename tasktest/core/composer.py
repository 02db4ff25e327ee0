"""Structural combinators for deferred tests.

Every combinator that takes several deferred tests resolves them one at
a time in the order given, so the tasks behind the second test never
start before the first test's whole chain has finished.
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from tasktest.core.node import Node, Resolved
from tasktest.core.resolver import DeferredTest
from tasktest.engine import tree
from tasktest.engine.expect import Expectation
from tasktest.engine.tree import Generator, SyncTest


async def _resolve_in_order(tests: Sequence[DeferredTest]) -> list[SyncTest]:
    resolved: list[SyncTest] = []
    for deferred in tests:
        resolved.append(await deferred.resolve_test())
    return resolved


def concat(tests: Sequence[DeferredTest]) -> DeferredTest:
    """Flatten ``tests`` into one unlabeled group."""
    tests = list(tests)

    async def factory() -> Node:
        return Resolved(tree.batch(await _resolve_in_order(tests)))

    return DeferredTest(factory)


def describe(label: str, tests: Sequence[DeferredTest]) -> DeferredTest:
    """Flatten ``tests`` into one group labeled ``label``."""
    tests = list(tests)

    async def factory() -> Node:
        return Resolved(tree.describe(label, await _resolve_in_order(tests)))

    return DeferredTest(factory)


def wrap(test: SyncTest) -> DeferredTest:
    """Lift a test built directly with the engine."""
    return DeferredTest.resolved(test)


def test(description: str, thunk: Callable[[], Expectation]) -> DeferredTest:
    return DeferredTest.resolved(tree.leaf(description, thunk))


def fuzz(
    generator: Generator,
    description: str,
    check: Callable[[Any], Expectation],
) -> DeferredTest:
    return DeferredTest.resolved(tree.fuzz([generator], description, check))


def fuzz2(
    first: Generator,
    second: Generator,
    description: str,
    check: Callable[[Any, Any], Expectation],
) -> DeferredTest:
    return DeferredTest.resolved(tree.fuzz([first, second], description, check))


def fuzz3(
    first: Generator,
    second: Generator,
    third: Generator,
    description: str,
    check: Callable[[Any, Any, Any], Expectation],
) -> DeferredTest:
    return DeferredTest.resolved(
        tree.fuzz([first, second, third], description, check)
    )


def todo(description: str) -> DeferredTest:
    return DeferredTest.resolved(tree.todo(description))


def skip(deferred: DeferredTest) -> DeferredTest:
    """Resolve ``deferred`` but mark it as not to be run.

    The tasks behind a skipped test still run; only the resulting tests
    are skipped.
    """

    async def factory() -> Node:
        return Resolved(tree.skip(await deferred.resolve_test()))

    return DeferredTest(factory)


def only(deferred: DeferredTest) -> DeferredTest:
    """Resolve ``deferred`` and focus the run on it."""

    async def factory() -> Node:
        return Resolved(tree.only(await deferred.resolve_test()))

    return DeferredTest(factory)
