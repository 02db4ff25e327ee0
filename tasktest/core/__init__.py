"""Deferred test nodes, task resolution and structural composition."""

from tasktest.core.composer import (
    concat,
    describe,
    fuzz,
    fuzz2,
    fuzz3,
    only,
    skip,
    test,
    todo,
    wrap,
)
from tasktest.core.node import Pending, Resolved, unwrap
from tasktest.core.resolver import (
    DeferredTest,
    Task,
    TaskError,
    await_error,
    await_task,
    fail,
    from_callable,
    succeed,
)

__all__ = [
    "DeferredTest",
    "Pending",
    "Resolved",
    "Task",
    "TaskError",
    "await_error",
    "await_task",
    "concat",
    "describe",
    "fail",
    "from_callable",
    "fuzz",
    "fuzz2",
    "fuzz3",
    "only",
    "skip",
    "succeed",
    "test",
    "todo",
    "unwrap",
    "wrap",
]
