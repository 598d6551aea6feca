"""Synchronous drivers: the general driver and the tail driver."""

from __future__ import annotations

import logging
from typing import Any

from recurun.classification import classify_produced, is_async_computation, is_computation
from recurun.computation import Computation, as_computation
from recurun.config import get_settings
from recurun.drivers.base import DriverStats, check_depth, deferred_factory
from recurun.errors import InvalidDeferredResultError, MixedModeError, UnsupportedSuspensionError
from recurun.types import Completed, Failed, Kind, Nested, Plain, Suspended

logger = logging.getLogger(__name__)


def run_sync(
    computation: Any,
    *,
    stats: DriverStats | None = None,
    max_depth: int | None = None,
) -> Any:
    """Drive ``computation`` to completion with an explicit call stack.

    A suspension on a nested computation saves the current one on the stack
    and switches into the child; when the child completes, its parent is
    popped and resumed with the child's result. Any other produced value is
    sent straight back. Children run one at a time, depth first, in the order
    they are produced.

    Args:
        computation: A generator or ``Computation``.
        stats: Optional counters updated while driving.
        max_depth: Bound on saved parents. Defaults to ``RECURUN_MAX_DEPTH``.

    Raises:
        Whatever the computation raises, unchanged. Stacked parents are
        abandoned without being resumed.
        UnsupportedSuspensionError: A ``Deferred`` was produced.
        MixedModeError: An async computation was produced.
        StackDepthExceededError: The stack grew past ``max_depth``.
    """
    settings = get_settings()
    if max_depth is None:
        max_depth = settings.max_depth
    trace = settings.trace

    current: Computation = as_computation(computation)
    del computation
    stack: list[Computation] = []
    pending: Any = None
    logger.debug("run: start %r", current)

    while True:
        outcome = current.resume(pending)
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
                        "run: Deferred suspensions are only supported by run_tail", value
                    )
                child = as_computation(value)
                check_depth(len(stack) + 1, max_depth)
                stack.append(current)
                if stats is not None:
                    stats.push()
                if trace:
                    logger.debug("run: descend into %r at depth %d", child, len(stack))
                current = child
                pending = None

            case Completed(result=result):
                if not stack:
                    logger.debug("run: completed %r", current)
                    return result
                current = stack.pop()
                if stats is not None:
                    stats.pop()
                if trace:
                    logger.debug("run: return to %r at depth %d", current, len(stack))
                pending = result

            case Failed(error=error):
                logger.debug("run: %r failed with %s at depth %d", current, type(error).__name__, len(stack))
                raise error


def run_tail_sync(computation: Any, *, stats: DriverStats | None = None) -> Any:
    """Drive ``computation`` to completion without stacking.

    Every nested computation, or ``Deferred`` factory, produced by the current
    computation replaces it: the child's result becomes the final result
    directly. This is only correct when each such suspension is the last
    thing its computation does (``return (yield child(...))``). Nothing here
    checks that; a non-tail suspension silently loses its parent.

    Raises:
        Whatever the computation (or a factory) raises, unchanged.
        InvalidDeferredResultError: A factory returned a non-computation.
        MixedModeError: An async computation was produced.
    """
    trace = get_settings().trace

    current: Computation | None = as_computation(computation)
    del computation
    pending: Any = None
    logger.debug("run_tail: start %r", current)

    while True:
        outcome = current.resume(pending)
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
                    current = _call_factory(value)
                else:
                    current = as_computation(value)
                if stats is not None:
                    stats.descents += 1
                if trace:
                    logger.debug("run_tail: replace with %r", current)
                pending = None

            case Completed(result=result):
                logger.debug("run_tail: completed %r", current)
                return result

            case Failed(error=error):
                logger.debug("run_tail: %r failed with %s", current, type(error).__name__)
                raise error


def _call_factory(value: Any) -> Computation:
    produced = deferred_factory(value)()
    if isinstance(produced, Nested):
        produced = produced.computation
    if is_computation(produced):
        return as_computation(produced)
    if is_async_computation(produced):
        raise MixedModeError(
            f"run_tail: deferred factory returned async computation {produced!r}", produced
        )
    raise InvalidDeferredResultError(produced)


__all__ = ["run_sync", "run_tail_sync"]
