"""
Public entry points.

``run`` and ``run_tail`` pick the synchronous or the asyncio driver from the
computation they are given: a generator is driven immediately and its result
returned; an async generator gives back a coroutine to await.

Example:
    >>> def fib(n):
    ...     if n < 2:
    ...         return n
    ...     a = yield fib(n - 1)
    ...     b = yield fib(n - 2)
    ...     return a + b
    >>> run(fib(20))
    6765

    >>> def count_down(n, acc=0):
    ...     if n == 0:
    ...         return acc
    ...     return (yield count_down(n - 1, acc + 1))
    >>> run_tail(count_down(100_000))
    100000
"""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any

from recurun.result import Err, Ok
from recurun.classification import is_async_computation
from recurun.drivers.asyncio_driver import run_async, run_tail_async
from recurun.drivers.base import DriverStats, RunResult
from recurun.drivers.sync import run_sync, run_tail_sync
from recurun.types import Nested


def _is_async(computation: Any) -> bool:
    if isinstance(computation, Nested):
        computation = computation.computation
    return is_async_computation(computation)


def run(
    computation: Any,
    *,
    stats: DriverStats | None = None,
    max_depth: int | None = None,
) -> Any | Awaitable[Any]:
    """Run a recursive computation with an explicit stack.

    Returns the result for a synchronous computation, or an awaitable of the
    result for an asynchronous one.
    """
    if _is_async(computation):
        return run_async(computation, stats=stats, max_depth=max_depth)
    return run_sync(computation, stats=stats, max_depth=max_depth)


def run_tail(computation: Any, *, stats: DriverStats | None = None) -> Any | Awaitable[Any]:
    """Run a tail-recursive computation in constant auxiliary memory.

    Returns the result for a synchronous computation, or an awaitable of the
    result for an asynchronous one.
    """
    if _is_async(computation):
        return run_tail_async(computation, stats=stats)
    return run_tail_sync(computation, stats=stats)


def run_safe(
    computation: Any,
    *,
    tail: bool = False,
    stats: DriverStats | None = None,
    max_depth: int | None = None,
) -> RunResult[Any] | Awaitable[RunResult[Any]]:
    """Like ``run``/``run_tail`` but returns a ``RunResult`` instead of raising.

    ``max_depth`` only applies to the general driver (``tail=False``).
    """
    if _is_async(computation):
        return run_safe_async(computation, tail=tail, stats=stats, max_depth=max_depth)
    try:
        if tail:
            value = run_tail_sync(computation, stats=stats)
        else:
            value = run_sync(computation, stats=stats, max_depth=max_depth)
    except Exception as e:
        return RunResult(Err(e))
    return RunResult(Ok(value))


async def run_safe_async(
    computation: Any,
    *,
    tail: bool = False,
    stats: DriverStats | None = None,
    max_depth: int | None = None,
) -> RunResult[Any]:
    """Async ``run_safe``: await the driver, capture the outcome."""
    try:
        if tail:
            value = await run_tail_async(computation, stats=stats)
        else:
            value = await run_async(computation, stats=stats, max_depth=max_depth)
    except Exception as e:
        return RunResult(Err(e))
    return RunResult(Ok(value))


__all__ = [
    "run",
    "run_async",
    "run_safe",
    "run_safe_async",
    "run_tail",
    "run_tail_async",
]
