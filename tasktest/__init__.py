"""tasktest - test suites whose tests depend on asynchronous tasks.

Tasks run one at a time, in declaration order, before the tests that use
their results; the resolved suite is then run synchronously and reported.
"""

from tasktest.core import (
    DeferredTest,
    Task,
    TaskError,
    await_error,
    await_task,
    concat,
    describe,
    fail,
    from_callable,
    fuzz,
    fuzz2,
    fuzz3,
    only,
    skip,
    succeed,
    test,
    todo,
    wrap,
)
from tasktest.engine import expect
from tasktest.run import Environment, RunOptions, run, run_with_options

__all__ = [
    "DeferredTest",
    "Environment",
    "RunOptions",
    "Task",
    "TaskError",
    "await_error",
    "await_task",
    "concat",
    "describe",
    "expect",
    "fail",
    "from_callable",
    "fuzz",
    "fuzz2",
    "fuzz3",
    "only",
    "run",
    "run_with_options",
    "skip",
    "succeed",
    "test",
    "todo",
    "wrap",
]
