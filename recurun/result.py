"""Outcome of a ``run_safe`` call: the driver's result or the error it raised."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Result(Generic[T_co]):
    """Either ``Ok(value)`` or ``Err(error)``."""

    __slots__ = ()

    def ok(self) -> T_co | None:
        if isinstance(self, Ok):
            return self.value
        return None

    def err(self) -> Exception | None:
        if isinstance(self, Err):
            return self.error
        return None

    def unwrap(self) -> T_co:
        """Return the driver's result or re-raise the error it captured."""
        if isinstance(self, Ok):
            return self.value
        raise self.error

    def unwrap_err(self) -> Exception:
        if isinstance(self, Err):
            return self.error
        raise RuntimeError("Called unwrap_err on Ok value")


@dataclass(frozen=True)
class Ok(Result[T], Generic[T]):
    value: T


@dataclass(frozen=True)
class Err(Result[NoReturn]):
    error: Exception


__all__ = ["Err", "Ok", "Result"]
