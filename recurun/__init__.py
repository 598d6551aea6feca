"""
recurun: write recursion, run it iteratively.

A recursive function is written as a generator; each recursive call site
yields the child computation instead of calling it:

    def depth(node):
        if node is None:
            return 0
        left = yield depth(node.left)
        right = yield depth(node.right)
        return 1 + max(left, right)

    run(depth(root))

``run`` keeps suspended parents on an explicit list, so depth is bounded by
memory rather than by the interpreter's recursion limit. ``run_tail`` keeps
no parents at all and is meant for calls in tail position:

    def last(node):
        if node.next is None:
            return node.value
        return (yield last(node.next))

Async generators are driven the same way by awaiting ``run``/``run_tail``;
since they cannot ``return`` a value, they finish with ``yield Return(x)``.
"""

from recurun.result import Err, Ok, Result
from recurun.classification import (
    classify_produced,
    is_async_computation,
    is_computation,
    is_deferred_factory,
    is_nested_computation,
)
from recurun.computation import (
    AsyncComputation,
    AsyncGeneratorComputation,
    Computation,
    GeneratorComputation,
    as_async_computation,
    as_computation,
)
from recurun.config import Settings, get_settings, override_settings
from recurun.drivers import DriverStats, RunResult
from recurun.errors import (
    InertComputationError,
    InvalidDeferredResultError,
    MixedModeError,
    RecurunError,
    StackDepthExceededError,
    UnsupportedSuspensionError,
    UsageError,
)
from recurun.run import run, run_async, run_safe, run_safe_async, run_tail, run_tail_async
from recurun.types import (
    Completed,
    Deferred,
    Failed,
    Kind,
    Nested,
    Plain,
    Return,
    StepOutcome,
    Suspended,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncComputation",
    "AsyncGeneratorComputation",
    "Completed",
    "Computation",
    "Deferred",
    "DriverStats",
    "Err",
    "Failed",
    "GeneratorComputation",
    "InertComputationError",
    "InvalidDeferredResultError",
    "Kind",
    "MixedModeError",
    "Nested",
    "Ok",
    "Plain",
    "RecurunError",
    "Result",
    "Return",
    "RunResult",
    "Settings",
    "StackDepthExceededError",
    "StepOutcome",
    "Suspended",
    "UnsupportedSuspensionError",
    "UsageError",
    "as_async_computation",
    "as_computation",
    "classify_produced",
    "get_settings",
    "is_async_computation",
    "is_computation",
    "is_deferred_factory",
    "is_nested_computation",
    "override_settings",
    "run",
    "run_async",
    "run_safe",
    "run_safe_async",
    "run_tail",
    "run_tail_async",
]
