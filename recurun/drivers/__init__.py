"""Drivers that resume computations to completion.

Two strategies, each in a synchronous and an asyncio flavour:
- general (``run_sync``/``run_async``): explicit stack, any recursion shape
- tail (``run_tail_sync``/``run_tail_async``): no stack, tail calls only
"""

from recurun.drivers.base import DriverStats, RunResult
from recurun.drivers.sync import run_sync, run_tail_sync
from recurun.drivers.asyncio_driver import run_async, run_tail_async

__all__ = [
    "DriverStats",
    "RunResult",
    "run_async",
    "run_sync",
    "run_tail_async",
    "run_tail_sync",
]
