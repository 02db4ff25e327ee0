"""Deferred test nodes.

A node is either ``Resolved`` (wrapping a synchronous test tree) or
``Pending`` (holding the payload of a settled task that a continuation
has not yet turned into a test).  ``unwrap`` is the single boundary where
nodes become synchronous tests; it never lets a ``Pending`` through as if
it were resolved.
"""

from __future__ import annotations

import os
from contextvars import ContextVar, Token
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from tasktest.engine import tree
from tasktest.engine.tree import SyncTest
from tasktest.exceptions import InternalConsistencyError

T = TypeVar("T")

DEFECT_DESCRIPTION = "Internal error"
DEFECT_MESSAGE = (
    "Internal error: a pending test node reached the runner. "
    "This is a bug in tasktest, please file a defect report."
)

STRICT_ENV_VAR = "TASKTEST_STRICT"

_strict: ContextVar[bool] = ContextVar("tasktest_strict")


@dataclass(frozen=True)
class Pending(Generic[T]):
    payload: T


@dataclass(frozen=True)
class Resolved:
    test: SyncTest


Node = Pending[Any] | Resolved


def strict_mode() -> bool:
    """Whether pending nodes at the unwrap boundary raise instead of failing.

    An explicit ``set_strict`` in the current context wins; otherwise the
    ``TASKTEST_STRICT`` environment variable is consulted.
    """
    value = _strict.get(None)
    if value is not None:
        return value
    return os.environ.get(STRICT_ENV_VAR, "").lower() in ("1", "true", "yes")


def set_strict(enabled: bool) -> Token[bool]:
    """Set strict mode for the current context.

    Returns the token to pass to ``reset_strict`` when the scope ends.
    """
    return _strict.set(enabled)


def reset_strict(token: Token[bool]) -> None:
    _strict.reset(token)


def unwrap(node: Node) -> SyncTest:
    """Turn a resolved node into its synchronous test.

    Raises:
        InternalConsistencyError: If ``node`` is ``Pending`` and strict
            mode is on.
        TypeError: If ``node`` is not a node at all.
    """
    if isinstance(node, Resolved):
        return node.test
    if isinstance(node, Pending):
        if strict_mode():
            raise InternalConsistencyError(node.payload)
        return tree.failing(DEFECT_DESCRIPTION, DEFECT_MESSAGE)
    raise TypeError(f"Not a deferred test node: {node!r}")
