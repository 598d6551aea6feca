"""Process-wide settings read from the environment.

- ``RECURUN_TRACE``: log every driver step at DEBUG level.
- ``RECURUN_MAX_DEPTH``: default bound on the general driver's explicit
  stack. Unset, empty, non-positive or non-numeric means unbounded; a
  non-numeric value is logged at WARNING.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any

logger = logging.getLogger(__name__)


def _flag(raw: str | None) -> bool:
    return (raw or "").lower() in ("1", "true", "yes")


def _positive_int(name: str, raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, treating as unbounded", name, raw)
        return None
    return value if value > 0 else None


@dataclass(frozen=True)
class Settings:
    trace: bool = False
    max_depth: int | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        return cls(
            trace=_flag(env.get("RECURUN_TRACE")),
            max_depth=_positive_int("RECURUN_MAX_DEPTH", env.get("RECURUN_MAX_DEPTH")),
        )


_settings = Settings.from_env()


def get_settings() -> Settings:
    return _settings


@contextmanager
def override_settings(**changes: Any) -> Iterator[Settings]:
    """Temporarily replace fields of the process-wide settings."""
    global _settings
    previous = _settings
    _settings = replace(previous, **changes)
    try:
        yield _settings
    finally:
        _settings = previous


__all__ = ["Settings", "get_settings", "override_settings"]
