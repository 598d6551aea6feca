"""Classification of values produced by a suspended computation."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator
from typing import Any

from recurun.computation import AsyncComputation, Computation
from recurun.types import Deferred, Kind, Nested, Plain


def is_computation(value: Any) -> bool:
    """Check if value satisfies the synchronous computation contract.

    Generators are recognised through the ``Generator`` ABC, which checks for
    ``send``/``throw``/``close`` rather than the concrete type, so plain
    iterators and objects that only look iterable are rejected.
    """
    return isinstance(value, (Computation, Generator))


def is_async_computation(value: Any) -> bool:
    """Check if value satisfies the asynchronous computation contract."""
    return isinstance(value, (AsyncComputation, AsyncGenerator))


def is_nested_computation(value: Any) -> bool:
    """Check if value is a computation of either flavour, tagged or not."""
    if isinstance(value, Nested):
        return True
    return is_computation(value) or is_async_computation(value)


def is_deferred_factory(value: Any) -> bool:
    """Check if value is a zero-argument factory for the next computation.

    Classes are callable but never treated as factories.
    """
    if isinstance(value, Deferred):
        return True
    return callable(value) and not isinstance(value, type) and not is_nested_computation(value)


def classify_produced(value: Any, *, thunks: bool = True) -> Kind:
    """Classify a produced value as nested, deferred or plain.

    Explicit tags win. Untagged values are classified structurally; bare
    callables count as deferred factories only when ``thunks`` is true.

    Example:
        >>> def child():
        ...     yield 1
        >>> classify_produced(child())
        <Kind.NESTED: 'nested'>
        >>> classify_produced(child)
        <Kind.DEFERRED: 'deferred'>
        >>> classify_produced(child, thunks=False)
        <Kind.PLAIN: 'plain'>
        >>> classify_produced({})
        <Kind.PLAIN: 'plain'>
    """
    match value:
        case Nested():
            return Kind.NESTED
        case Deferred():
            return Kind.DEFERRED
        case Plain() | None:
            return Kind.PLAIN
    if is_computation(value) or is_async_computation(value):
        return Kind.NESTED
    if thunks and callable(value) and not isinstance(value, type):
        return Kind.DEFERRED
    return Kind.PLAIN


__all__ = [
    "classify_produced",
    "is_async_computation",
    "is_computation",
    "is_deferred_factory",
    "is_nested_computation",
]
