"""The resumable computation contract and its generator adapters.

A driver never touches a generator directly. It sees a ``Computation`` (or an
``AsyncComputation``) exposing a single ``resume`` operation that returns a
step outcome. Generators and async generators are adapted on the way in;
anything else may implement the ABCs by hand.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, Generator
from typing import Any

from recurun.errors import InertComputationError, MixedModeError, UnsupportedSuspensionError
from recurun.types import Completed, Failed, Nested, Return, StepOutcome, Suspended


class Computation(ABC):
    """A synchronously resumable computation."""

    @property
    @abstractmethod
    def finished(self) -> bool:
        """``True`` once ``resume`` has returned ``Completed`` or ``Failed``."""

    @abstractmethod
    def resume(self, value: Any = None) -> StepOutcome:
        """Advance until the next suspension or the end of the computation."""


class AsyncComputation(ABC):
    """A computation whose ``resume`` may wait on external events."""

    @property
    @abstractmethod
    def finished(self) -> bool:
        """``True`` once ``resume`` has returned ``Completed`` or ``Failed``."""

    @abstractmethod
    async def resume(self, value: Any = None) -> StepOutcome:
        """Advance until the next suspension or the end of the computation."""


class GeneratorComputation(Computation):
    """Adapt a generator to the ``Computation`` contract.

    The first ``resume`` primes the generator and ignores its argument.
    ``return x`` and ``yield Return(x)`` both complete with ``x``; an
    exception escaping the generator becomes ``Failed``.
    A generator that has already finished is rejected up front.
    """

    __slots__ = ("_gen", "_started", "_finished")

    def __init__(self, gen: Generator[Any, Any, Any]) -> None:
        if inspect.isgenerator(gen) and inspect.getgeneratorstate(gen) == inspect.GEN_CLOSED:
            raise InertComputationError(f"Generator {gen.__qualname__} has already finished")
        self._gen = gen
        self._started = False
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def resume(self, value: Any = None) -> StepOutcome:
        if self._finished:
            raise InertComputationError(f"Cannot resume finished computation {self!r}")
        if not self._started:
            self._started = True
            value = None
        try:
            produced = self._gen.send(value)
        except StopIteration as stop:
            self._finished = True
            return Completed(stop.value)
        except Exception as exc:
            self._finished = True
            return Failed(exc)

        if isinstance(produced, Return):
            self._finished = True
            self._gen.close()
            return Completed(produced.value)
        return Suspended(produced)

    def __repr__(self) -> str:
        name = getattr(self._gen, "__qualname__", type(self._gen).__name__)
        return f"GeneratorComputation({name})"


class AsyncGeneratorComputation(AsyncComputation):
    """Adapt an async generator to the ``AsyncComputation`` contract.

    Async generators cannot return a value: they finish by yielding
    ``Return(x)``. Running off the end completes with ``None``.
    An async generator that has already finished is rejected up front.
    """

    __slots__ = ("_agen", "_started", "_finished")

    def __init__(self, agen: AsyncGenerator[Any, Any]) -> None:
        if inspect.isasyncgen(agen) and agen.ag_frame is None:
            raise InertComputationError(f"Async generator {agen.__qualname__} has already finished")
        self._agen = agen
        self._started = False
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    async def resume(self, value: Any = None) -> StepOutcome:
        if self._finished:
            raise InertComputationError(f"Cannot resume finished computation {self!r}")
        if not self._started:
            self._started = True
            value = None
        try:
            produced = await self._agen.asend(value)
        except StopAsyncIteration:
            self._finished = True
            return Completed(None)
        except Exception as exc:
            self._finished = True
            return Failed(exc)

        if isinstance(produced, Return):
            self._finished = True
            await self._agen.aclose()
            return Completed(produced.value)
        return Suspended(produced)

    def __repr__(self) -> str:
        name = getattr(self._agen, "__qualname__", type(self._agen).__name__)
        return f"AsyncGeneratorComputation({name})"


def as_computation(value: Any) -> Computation:
    """Return ``value`` as a synchronous ``Computation``.

    Raises:
        MixedModeError: ``value`` is an asynchronous computation.
        UnsupportedSuspensionError: ``value`` is not a computation at all.
        InertComputationError: ``value`` is a generator that already finished.
    """
    if isinstance(value, Nested):
        value = value.computation
    if isinstance(value, Computation):
        return value
    if isinstance(value, Generator):
        return GeneratorComputation(value)
    if isinstance(value, (AsyncComputation, AsyncGenerator)):
        raise MixedModeError(
            f"Synchronous driver cannot drive async computation {value!r}; "
            "await run_async()/run_tail_async() instead",
            value,
        )
    raise UnsupportedSuspensionError(_not_a_computation(value), value)


def as_async_computation(value: Any) -> AsyncComputation:
    """Return ``value`` as an ``AsyncComputation``.

    Raises:
        MixedModeError: ``value`` is a synchronous computation.
        UnsupportedSuspensionError: ``value`` is not a computation at all.
        InertComputationError: ``value`` is an async generator that already finished.
    """
    if isinstance(value, Nested):
        value = value.computation
    if isinstance(value, AsyncComputation):
        return value
    if isinstance(value, AsyncGenerator):
        return AsyncGeneratorComputation(value)
    if isinstance(value, (Computation, Generator)):
        raise MixedModeError(
            f"Async driver cannot drive synchronous computation {value!r}; "
            "use run()/run_tail() instead",
            value,
        )
    raise UnsupportedSuspensionError(_not_a_computation(value), value)


def _not_a_computation(value: Any) -> str:
    message = f"Expected a resumable computation, got {type(value).__name__}"
    if callable(value):
        message += "\nHint: call the generator function to get a generator object"
    return message


__all__ = [
    "AsyncComputation",
    "AsyncGeneratorComputation",
    "Computation",
    "GeneratorComputation",
    "as_async_computation",
    "as_computation",
]
