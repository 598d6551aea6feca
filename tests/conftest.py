"""Shared fixtures for driver tests."""

from __future__ import annotations

import sys
from collections.abc import Iterator

import pytest

from recurun import DriverStats, Settings, override_settings


@pytest.fixture
def stats() -> DriverStats:
    return DriverStats()


@pytest.fixture(autouse=True)
def default_settings() -> Iterator[Settings]:
    """Run every test with the environment-derived settings reset."""
    with override_settings(trace=False, max_depth=None) as settings:
        yield settings


@pytest.fixture
def beyond_recursion_limit() -> int:
    """A depth that plain Python recursion cannot reach."""
    return sys.getrecursionlimit() * 5
