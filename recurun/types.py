"""Produced-value tags and step outcomes.

A computation talks to a driver in two directions:

- what it *produces* when it suspends. A bare generator or callable is
  classified structurally, but a computation may state its intent with one
  of the tags below instead, which removes any guessing on the driver side.
- what a single ``resume`` call *returns* to the driver: a step outcome.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeAlias, TypeVar

T = TypeVar("T")


class Kind(enum.Enum):
    """Classification of a produced value."""

    NESTED = "nested"
    DEFERRED = "deferred"
    PLAIN = "plain"


# =========================================================
# Produced-value tags
# =========================================================
@dataclass(frozen=True)
class Nested:
    """A child computation to run to completion before the parent resumes."""

    computation: Any


@dataclass(frozen=True)
class Deferred:
    """A zero-argument factory producing the next computation.

    Only meaningful to the tail driver, which calls ``factory`` exactly once,
    after it has let go of the computation that produced this tag.
    """

    factory: Callable[[], Any]


@dataclass(frozen=True)
class Plain:
    """A value handed straight back to the suspended computation.

    Use it to round-trip something that would otherwise be classified as a
    computation or a factory (a generator object, a function).
    """

    value: Any


@dataclass(frozen=True)
class Return(Generic[T]):
    """Finish the producing computation with ``value``.

    Async generators cannot ``return`` a value, so they yield this instead.
    Plain generators may use it too; the generator is closed afterwards.
    """

    value: T


# =========================================================
# Step outcomes
# =========================================================
@dataclass(frozen=True)
class Suspended:
    """Non-terminal: the computation produced ``value`` and is waiting."""

    value: Any


@dataclass(frozen=True)
class Completed:
    """Terminal: the computation returned ``result``."""

    result: Any


@dataclass(frozen=True)
class Failed:
    """Terminal: the computation raised ``error``."""

    error: BaseException


StepOutcome: TypeAlias = Suspended | Completed | Failed


__all__ = [
    "Completed",
    "Deferred",
    "Failed",
    "Kind",
    "Nested",
    "Plain",
    "Return",
    "StepOutcome",
    "Suspended",
]
