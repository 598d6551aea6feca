"""Driver bookkeeping shared by the sync and asyncio drivers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from recurun.result import Err, Ok, Result
from recurun.errors import StackDepthExceededError
from recurun.types import Deferred

T = TypeVar("T")


@dataclass
class DriverStats:
    """Counters filled in by a driver when passed via ``stats=``.

    ``depth`` is the current size of the explicit stack and ``max_depth`` its
    peak; the tail driver never stacks, so both stay at zero there.
    """

    steps: int = 0
    descents: int = 0
    depth: int = 0
    max_depth: int = 0

    def push(self) -> None:
        self.descents += 1
        self.depth += 1
        if self.depth > self.max_depth:
            self.max_depth = self.depth

    def pop(self) -> None:
        self.depth -= 1


@dataclass(frozen=True)
class RunResult(Generic[T]):
    """Outcome of ``run_safe``: the driver's result or the error it raised."""

    result: Result[T]

    @property
    def is_ok(self) -> bool:
        return isinstance(self.result, Ok)

    @property
    def is_err(self) -> bool:
        return isinstance(self.result, Err)

    @property
    def value(self) -> T | None:
        return self.result.ok()

    @property
    def error(self) -> Exception | None:
        return self.result.err()

    def unwrap(self) -> T:
        """Get value or raise if error."""
        return self.result.unwrap()

    def unwrap_err(self) -> Exception:
        """Get error or raise if ok."""
        return self.result.unwrap_err()

    def display(self) -> str:
        if self.is_ok:
            return f"Ok({self.result.ok()!r})"
        return f"Err({self.result.err()!r})"


def check_depth(depth: int, max_depth: int | None) -> None:
    if max_depth is not None and depth > max_depth:
        raise StackDepthExceededError(max_depth)


def deferred_factory(value: Any) -> Callable[[], Any]:
    if isinstance(value, Deferred):
        return value.factory
    return value


__all__ = ["DriverStats", "RunResult", "check_depth", "deferred_factory"]
