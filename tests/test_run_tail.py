"""Tests for the tail driver (constant auxiliary memory)."""

from __future__ import annotations

import gc
import weakref
from dataclasses import dataclass

import pytest

from recurun import (
    Deferred,
    DriverStats,
    InvalidDeferredResultError,
    MixedModeError,
    Nested,
    run,
    run_tail,
)


def factorial(n: int, acc: int = 1):
    if n <= 1:
        return acc
    return (yield factorial(n - 1, acc * n))


def factorial_deferred(n: int, acc: int = 1):
    if n <= 1:
        return acc
    return (yield Deferred(lambda: factorial_deferred(n - 1, acc * n)))


def factorial_thunk(n: int, acc: int = 1):
    if n <= 1:
        return acc
    return (yield lambda: factorial_thunk(n - 1, acc * n))


def iterative_factorial(n: int, acc: int = 1) -> int:
    while n > 1:
        acc *= n
        n -= 1
    return acc


def count(n: int, acc: int = 0):
    if n == 0:
        return acc
    return (yield count(n - 1, acc + 1))


def total(n: int, acc: int = 0):
    if n == 0:
        return acc
    return (yield total(n - 1, acc + n))


@dataclass
class Link:
    value: int
    next: Link | None = None


def make_list(n: int) -> Link | None:
    head = None
    for value in reversed(range(1, n + 1)):
        head = Link(value, head)
    return head


def list_sum(node: Link | None, acc: int = 0):
    if node is None:
        return acc
    return (yield list_sum(node.next, acc + node.value))


def find(node: Link | None, target: int):
    if node is None:
        return None
    if node.value == target:
        return node
    return (yield find(node.next, target))


class TestTailEquivalence:
    @pytest.mark.parametrize("n", [0, 1, 5, 20])
    def test_factorial(self, n):
        assert run_tail(factorial(n)) == iterative_factorial(n)

    def test_large_factorial(self):
        assert run_tail(factorial(10_000)) == iterative_factorial(10_000)

    def test_seeded_accumulator(self):
        assert run_tail(factorial(6, 2)) == iterative_factorial(6, 2)

    def test_same_result_as_general_driver(self):
        assert run_tail(total(500)) == run(total(500)) == sum(range(501))

    def test_linked_list_traversal(self):
        head = make_list(1000)
        assert run_tail(list_sum(head)) == sum(range(1, 1001))

    def test_search(self):
        head = make_list(50)
        assert run_tail(find(head, 37)).value == 37
        assert run_tail(find(head, 99)) is None

    def test_nested_tag(self):
        def parent():
            return (yield Nested(count(10)))

        assert run_tail(parent()) == 10


class TestConstantMemory:
    def test_very_deep_tail_recursion(self, stats: DriverStats):
        assert run_tail(count(100_000), stats=stats) == 100_000
        assert stats.max_depth == 0
        assert stats.depth == 0
        assert stats.descents == 100_000
        assert stats.steps == 100_001

    def test_superseded_computations_are_released(self):
        refs: list[weakref.ref] = []

        def track(gen):
            refs.append(weakref.ref(gen))
            return gen

        def chain(n: int):
            if n == 0:
                gc.collect()
                return [ref() is None for ref in refs]
            return (yield track(chain(n - 1)))

        released = run_tail(chain(5))
        # The last reference is the computation doing the checking.
        assert released == [True, True, True, True, False]


class TestDeferred:
    @pytest.mark.parametrize("n", [0, 1, 10, 1000])
    def test_deferred_matches_direct(self, n):
        expected = run_tail(factorial(n))
        assert run_tail(factorial_deferred(n)) == expected
        assert run_tail(factorial_thunk(n)) == expected

    def test_deep_deferred(self, stats: DriverStats):
        assert run_tail(factorial_deferred(3000), stats=stats) == iterative_factorial(3000)
        assert stats.max_depth == 0

    def test_factory_called_once_after_parent_suspends(self):
        calls: list[str] = []

        def factory():
            calls.append("factory")
            return count(3)

        def parent():
            calls.append("parent")
            return (yield Deferred(factory))

        assert run_tail(parent()) == 3
        assert calls == ["parent", "factory"]

    def test_factory_returning_nested_tag(self):
        def parent():
            return (yield Deferred(lambda: Nested(count(4))))

        assert run_tail(parent()) == 4

    def test_factory_must_return_computation(self):
        def parent():
            return (yield lambda: 42)

        with pytest.raises(InvalidDeferredResultError) as exc_info:
            run_tail(parent())
        assert exc_info.value.result == 42

    def test_factory_returning_async_computation(self):
        async def child():
            yield 1

        def parent():
            return (yield Deferred(child))

        with pytest.raises(MixedModeError):
            run_tail(parent())

    def test_factory_exception_propagates(self):
        def factory():
            raise LookupError("no next step")

        def parent():
            return (yield Deferred(factory))

        with pytest.raises(LookupError, match="no next step"):
            run_tail(parent())


class TestSuspensionValues:
    def test_plain_value_round_trip(self):
        def echo(n: int):
            doubled = yield n * 2
            if n == 0:
                return doubled
            return (yield echo(n - 1))

        assert run_tail(echo(3)) == 0


class TestCallerObligation:
    def test_non_tail_call_loses_parent(self):
        def not_tail(n: int):
            if n == 0:
                return 0
            result = yield not_tail(n - 1)
            return result + 1

        # The tail driver does not verify tail position: parents are dropped.
        assert run(not_tail(10)) == 10
        assert run_tail(not_tail(10)) == 0
