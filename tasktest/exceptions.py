"""Exception types raised by tasktest."""

from __future__ import annotations


class TaskTestError(Exception):
    """Base exception for all tasktest errors."""


class InternalConsistencyError(TaskTestError):
    """Raised in strict mode when a pending node reaches the runner."""

    def __init__(self, payload: object) -> None:
        self.payload = payload
        super().__init__(
            f"Pending test node reached the unwrap boundary with payload {payload!r}"
        )


class SuiteLoadError(TaskTestError):
    """Raised when a suite cannot be imported from a ``module:attribute`` spec."""

    def __init__(self, spec: str, reason: str) -> None:
        self.spec = spec
        self.reason = reason
        super().__init__(f"Cannot load suite '{spec}': {reason}")
