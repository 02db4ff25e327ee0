"""Expectation values returned by test thunks.

A test thunk returns either ``Pass()`` or ``Fail(message)``.  The helpers
here build those values so suites rarely need the classes directly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class Pass:
    """A passing expectation."""


@dataclass(frozen=True)
class Fail:
    """A failing expectation with a human-readable reason."""

    message: str


Expectation = Pass | Fail


def pass_() -> Expectation:
    return Pass()


def fail(message: str) -> Expectation:
    return Fail(message)


def equal(expected: Any, actual: Any) -> Expectation:
    """Pass when ``expected == actual``."""
    if expected == actual:
        return Pass()
    return Fail(f"Expected {actual!r} to equal {expected!r}")


def not_equal(unexpected: Any, actual: Any) -> Expectation:
    """Pass when ``unexpected != actual``."""
    if unexpected != actual:
        return Pass()
    return Fail(f"Expected {actual!r} not to equal {unexpected!r}")


def ok(condition: bool, message: str = "Expected condition to hold") -> Expectation:
    return Pass() if condition else Fail(message)


def all_of(
    *checks: Callable[[Any], Expectation],
) -> Callable[[Any], Expectation]:
    """Combine checks on one subject; the first failure wins.

    With no checks the combined expectation fails, since an empty
    conjunction usually means a suite forgot its assertions.
    """

    def combined(subject: Any) -> Expectation:
        if not checks:
            return Fail("all_of was given no checks")
        for check in checks:
            result = check(subject)
            if isinstance(result, Fail):
                return result
        return Pass()

    return combined


def is_failure(expectation: Expectation) -> bool:
    if isinstance(expectation, Pass):
        return False
    if isinstance(expectation, Fail):
        return True
    raise TypeError(f"Not an expectation: {expectation!r}")
