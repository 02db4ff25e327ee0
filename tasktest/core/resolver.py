"""Resolution of tests that depend on asynchronous tasks.

A ``DeferredTest`` is a lazily evaluated producer of a node.  Nothing
runs until ``resolve()`` is awaited, and every ``resolve()`` runs the
whole dependency chain again.

``await_task`` and ``await_error`` run a task exactly once, carry the
settled outcome as ``Pending(Ok | Err)``, then convert it into a
``Resolved`` node labeled with the caller's description.  Task failures
never propagate as exceptions past these two functions; they become
failing tests.

There is no timeout: a task that never completes hangs the suite.
"""

from __future__ import annotations

import asyncio
import functools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

from tasktest.core.node import Node, Pending, Resolved, unwrap
from tasktest.engine import tree
from tasktest.engine.tree import SyncTest

A = TypeVar("A")
E = TypeVar("E")

Task = Callable[[], Awaitable[A]]

TASK_FAILED_PREFIX = "Task failed with: "
EXPECTED_ERROR_PREFIX = "Expected error, but got non-error value: "
CONTINUATION_RAISED_PREFIX = "Continuation raised: "


class TaskError(Exception):
    """Failure carrying an explicit error value.

    A task that raises ``TaskError(error)`` fails with ``error``; any
    other exception is itself the error value.
    """

    def __init__(self, error: Any) -> None:
        super().__init__(error)
        self.error = error


def succeed(value: A) -> Task[A]:
    """A task that succeeds with ``value``."""

    async def task() -> A:
        return value

    return task


def fail(error: Any) -> Task[Any]:
    """A task that fails with ``error``."""

    async def task() -> Any:
        raise TaskError(error)

    return task


def from_callable(fn: Callable[..., A], *args: Any, **kwargs: Any) -> Task[A]:
    """A task that runs a blocking function in the default thread pool."""

    async def task() -> A:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, functools.partial(fn, *args, **kwargs)
        )

    return task


def render(value: Any) -> str:
    return repr(value)


class DeferredTest:
    """A test tree, or a promise to produce one once its tasks have run."""

    def __init__(self, factory: Callable[[], Awaitable[Node]]) -> None:
        self._factory = factory

    @classmethod
    def resolved(cls, test: SyncTest) -> DeferredTest:
        """A deferred test that resolves to ``test`` without any task."""

        async def factory() -> Node:
            return Resolved(test)

        return cls(factory)

    async def resolve(self) -> Node:
        return await self._factory()

    async def resolve_test(self) -> SyncTest:
        """Resolve and unwrap into a synchronous test."""
        return unwrap(await self.resolve())

    def __repr__(self) -> str:
        return f"DeferredTest({self._factory!r})"


@dataclass(frozen=True)
class Ok(Generic[A]):
    value: A


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E


Outcome = Ok[Any] | Err[Any]


async def settle(task: Task[Any]) -> Pending[Outcome]:
    """Run ``task`` once and capture its outcome without raising."""
    try:
        value = await task()
    except TaskError as e:
        return Pending(Err(e.error))
    except Exception as e:
        return Pending(Err(e))
    return Pending(Ok(value))


def _failing(description: str, message: str) -> DeferredTest:
    return DeferredTest.resolved(tree.failing(description, message))


async def _convert(
    pending: Pending[Outcome],
    description: str,
    on_ok: Callable[[Any], DeferredTest],
    on_err: Callable[[Any], DeferredTest],
) -> Resolved:
    """Run the matching continuation and label its result."""
    outcome = pending.payload
    if isinstance(outcome, Ok):
        handler, argument = on_ok, outcome.value
    elif isinstance(outcome, Err):
        handler, argument = on_err, outcome.error
    else:
        raise TypeError(f"Not a task outcome: {outcome!r}")

    try:
        inner = handler(argument)
    except Exception as e:
        inner = _failing(description, CONTINUATION_RAISED_PREFIX + render(e))

    if not isinstance(inner, DeferredTest):
        inner = _failing(
            description,
            f"Continuation returned {inner!r} instead of a DeferredTest",
        )

    test = await inner.resolve_test()
    return Resolved(tree.labeled(description, test))


def await_task(
    task: Task[A],
    description: str,
    continuation: Callable[[A], DeferredTest],
) -> DeferredTest:
    """Run ``task`` and build tests from its result.

    On success ``continuation(value)`` supplies the tests.  On failure the
    continuation is not called and a failing test named ``description``
    takes its place.  Either way the result sits under one group labeled
    ``description``.
    """

    def on_err(error: Any) -> DeferredTest:
        return _failing(description, TASK_FAILED_PREFIX + render(error))

    async def factory() -> Node:
        pending = await settle(task)
        return await _convert(pending, description, continuation, on_err)

    return DeferredTest(factory)


def await_error(
    task: Task[Any],
    description: str,
    continuation: Callable[[Any], DeferredTest],
) -> DeferredTest:
    """Run ``task`` expecting it to fail, and build tests from the error.

    The mirror of ``await_task``: a successful task produces a failing
    test named ``description``.
    """

    def on_ok(value: Any) -> DeferredTest:
        return _failing(description, EXPECTED_ERROR_PREFIX + render(value))

    async def factory() -> Node:
        pending = await settle(task)
        return await _convert(pending, description, on_ok, continuation)

    return DeferredTest(factory)
