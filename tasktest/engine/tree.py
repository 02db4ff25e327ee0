"""Synchronous test tree.

The tree is built once and then handed to ``run_tree``.  Nodes are plain
frozen dataclasses:

- ``Leaf``: a description and a thunk returning an ``Expectation``
- ``Labeled``: a label wrapping exactly one child
- ``Batch``: an unlabeled, ordered list of children
- ``Fuzz``: a check run repeatedly against generated inputs
- ``Skipped`` / ``Only``: wrappers that change which tests run
- ``Todo``: a placeholder for a test not yet written
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Sequence

from tasktest.engine.expect import Expectation, Fail

Generator = Callable[[random.Random], Any]


@dataclass(frozen=True)
class Leaf:
    description: str
    thunk: Callable[[], Expectation]


@dataclass(frozen=True)
class Labeled:
    label: str
    test: "SyncTest"


@dataclass(frozen=True)
class Batch:
    tests: tuple["SyncTest", ...]


@dataclass(frozen=True)
class Fuzz:
    """A check applied to ``runs`` generated inputs.

    ``generators`` holds one function per argument of ``check``; each
    receives the run's seeded ``random.Random``.
    """

    description: str
    generators: tuple[Generator, ...]
    check: Callable[..., Expectation]


@dataclass(frozen=True)
class Skipped:
    test: "SyncTest"


@dataclass(frozen=True)
class Only:
    test: "SyncTest"


@dataclass(frozen=True)
class Todo:
    description: str


SyncTest = Leaf | Labeled | Batch | Fuzz | Skipped | Only | Todo


def leaf(description: str, thunk: Callable[[], Expectation]) -> SyncTest:
    return Leaf(description, thunk)


def describe(label: str, tests: Sequence[SyncTest]) -> SyncTest:
    return Labeled(label, Batch(tuple(tests)))


def batch(tests: Sequence[SyncTest]) -> SyncTest:
    return Batch(tuple(tests))


def labeled(label: str, test: SyncTest) -> SyncTest:
    return Labeled(label, test)


def failing(description: str, message: str) -> SyncTest:
    """A leaf that always fails with ``message``."""
    return Leaf(description, lambda: Fail(message))


def fuzz(
    generators: Sequence[Generator],
    description: str,
    check: Callable[..., Expectation],
) -> SyncTest:
    if not generators:
        raise ValueError("fuzz needs at least one generator")
    return Fuzz(description, tuple(generators), check)


def skip(test: SyncTest) -> SyncTest:
    return Skipped(test)


def only(test: SyncTest) -> SyncTest:
    return Only(test)


def todo(description: str) -> SyncTest:
    return Todo(description)


def contains_only(test: SyncTest) -> bool:
    """Whether an ``Only`` wrapper appears anywhere in the tree."""
    if isinstance(test, Only):
        return True
    if isinstance(test, (Labeled, Skipped)):
        return contains_only(test.test)
    if isinstance(test, Batch):
        return any(contains_only(child) for child in test.tests)
    if isinstance(test, (Leaf, Fuzz, Todo)):
        return False
    raise TypeError(f"Not a synchronous test: {test!r}")
