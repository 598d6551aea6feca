"""Error types raised by the recurun drivers."""

from __future__ import annotations

from typing import Any


class RecurunError(Exception):
    """Base class for errors raised by the drivers themselves.

    Failures raised *inside* a driven computation are never wrapped in a
    ``RecurunError``; they reach the caller of ``run``/``run_tail`` unchanged.
    """


class UsageError(RecurunError, TypeError):
    """Raised when a driver is handed something it cannot drive."""


class UnsupportedSuspensionError(UsageError):
    """Raised when a computation suspends with a value the driver cannot use.

    The general driver raises this for a ``Deferred`` suspension, which only
    the tail driver understands.

    Attributes:
        value: The produced value that was rejected.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class MixedModeError(UnsupportedSuspensionError):
    """Raised when sync and async computations are mixed in one driver call.

    Example:
        >>> async def child():
        ...     yield Return(1)
        >>> def parent():
        ...     return (yield child())
        >>> run(parent())  # MixedModeError: async child in a sync driver
    """


class InvalidDeferredResultError(UsageError):
    """Raised when a deferred factory does not produce a computation."""

    def __init__(self, result: Any) -> None:
        self.result = result
        super().__init__(
            "run_tail: deferred factory must return a resumable computation, "
            f"got {type(result).__name__}"
        )


class InertComputationError(RecurunError, RuntimeError):
    """Raised when a computation is resumed after it completed or failed."""


class StackDepthExceededError(RecurunError, RecursionError):
    """Raised when the general driver's explicit stack passes ``max_depth``."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        super().__init__(
            f"Explicit stack exceeded max_depth={max_depth}\n"
            "Hint: raise the bound via `max_depth=` or RECURUN_MAX_DEPTH, "
            "or use run_tail if every nested call is in tail position"
        )


__all__ = [
    "InertComputationError",
    "InvalidDeferredResultError",
    "MixedModeError",
    "RecurunError",
    "StackDepthExceededError",
    "UnsupportedSuspensionError",
    "UsageError",
]
