"""Asyncio drivers: ``run_sync``/``run_tail_sync`` with awaited resumption.

The control flow is the same as in :mod:`recurun.drivers.sync`; each
``resume`` is awaited before its outcome is inspected, and in tail mode a
factory may return an awaitable that resolves to the next computation.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any

from recurun.classification import classify_produced, is_async_computation, is_computation
from recurun.computation import AsyncComputation, as_async_computation
from recurun.config import get_settings
from recurun.drivers.base import DriverStats, check_depth, deferred_factory
from recurun.errors import InvalidDeferredResultError, MixedModeError, UnsupportedSuspensionError
from recurun.types import Completed, Failed, Kind, Nested, Plain, Suspended

logger = logging.getLogger(__name__)


async def run_async(
    computation: Any,
    *,
    stats: DriverStats | None = None,
    max_depth: int | None = None,
) -> Any:
    """Drive an async computation to completion with an explicit call stack."""
    settings = get_settings()
    if max_depth is None:
        max_depth = settings.max_depth
    trace = settings.trace

    current: AsyncComputation = as_async_computation(computation)
    del computation
    stack: list[AsyncComputation] = []
    pending: Any = None
    logger.debug("run_async: start %r", current)

    while True:
        outcome = await current.resume(pending)
        if stats is not None:
            stats.steps += 1

        match outcome:
            case Suspended(value=value):
                kind = classify_produced(value, thunks=False)
                if kind is Kind.PLAIN:
                    pending = value.value if isinstance(value, Plain) else value
                    continue
                if kind is Kind.DEFERRED:
                    raise UnsupportedSuspensionError(
                        "run_async: Deferred suspensions are only supported by run_tail_async",
                        value,
                    )
                child = as_async_computation(value)
                check_depth(len(stack) + 1, max_depth)
                stack.append(current)
                if stats is not None:
                    stats.push()
                if trace:
                    logger.debug("run_async: descend into %r at depth %d", child, len(stack))
                current = child
                pending = None

            case Completed(result=result):
                if not stack:
                    logger.debug("run_async: completed %r", current)
                    return result
                current = stack.pop()
                if stats is not None:
                    stats.pop()
                if trace:
                    logger.debug("run_async: return to %r at depth %d", current, len(stack))
                pending = result

            case Failed(error=error):
                logger.debug(
                    "run_async: %r failed with %s at depth %d",
                    current,
                    type(error).__name__,
                    len(stack),
                )
                raise error


async def run_tail_async(computation: Any, *, stats: DriverStats | None = None) -> Any:
    """Drive an async computation to completion without stacking.

    Same caller obligation as ``run_tail_sync``: every nested suspension
    must be in tail position.
    """
    trace = get_settings().trace

    current: AsyncComputation | None = as_async_computation(computation)
    del computation
    pending: Any = None
    logger.debug("run_tail_async: start %r", current)

    while True:
        outcome = await current.resume(pending)
        if stats is not None:
            stats.steps += 1

        match outcome:
            case Suspended(value=value):
                kind = classify_produced(value)
                if kind is Kind.PLAIN:
                    pending = value.value if isinstance(value, Plain) else value
                    continue
                current = None
                if kind is Kind.DEFERRED:
                    current = await _call_factory(value)
                else:
                    current = as_async_computation(value)
                if stats is not None:
                    stats.descents += 1
                if trace:
                    logger.debug("run_tail_async: replace with %r", current)
                pending = None

            case Completed(result=result):
                logger.debug("run_tail_async: completed %r", current)
                return result

            case Failed(error=error):
                logger.debug("run_tail_async: %r failed with %s", current, type(error).__name__)
                raise error


async def _call_factory(value: Any) -> AsyncComputation:
    produced = deferred_factory(value)()
    if inspect.isawaitable(produced):
        produced = await produced
    if isinstance(produced, Nested):
        produced = produced.computation
    if is_async_computation(produced):
        return as_async_computation(produced)
    if is_computation(produced):
        raise MixedModeError(
            f"run_tail_async: deferred factory returned synchronous computation {produced!r}",
            produced,
        )
    raise InvalidDeferredResultError(produced)


__all__ = ["run_async", "run_tail_async"]
