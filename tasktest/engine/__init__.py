"""Synchronous test engine: expectations, test trees and the seeded runner."""

from tasktest.engine.expect import (
    Expectation,
    Fail,
    Pass,
    all_of,
    equal,
    fail,
    not_equal,
    ok,
    pass_,
)
from tasktest.engine.runner import Summary, TestOutcome, run_tree
from tasktest.engine.tree import SyncTest

__all__ = [
    "Expectation",
    "Fail",
    "Pass",
    "Summary",
    "SyncTest",
    "TestOutcome",
    "all_of",
    "equal",
    "fail",
    "not_equal",
    "ok",
    "pass_",
    "run_tree",
]
