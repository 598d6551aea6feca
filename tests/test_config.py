"""Tests for environment-derived settings and driver logging."""

from __future__ import annotations

import logging

import pytest

from recurun import Settings, get_settings, override_settings, run, run_tail


def fib(n: int):
    if n < 2:
        return n
    a = yield fib(n - 1)
    b = yield fib(n - 2)
    return a + b


def count(n: int):
    if n == 0:
        return 0
    return (yield count(n - 1))


class TestSettingsFromEnv:
    def test_defaults(self):
        assert Settings.from_env({}) == Settings(trace=False, max_depth=None)

    @pytest.mark.parametrize("raw", ["1", "true", "TRUE", "yes"])
    def test_trace_enabled(self, raw):
        assert Settings.from_env({"RECURUN_TRACE": raw}).trace is True

    @pytest.mark.parametrize("raw", ["", "0", "false", "off"])
    def test_trace_disabled(self, raw):
        assert Settings.from_env({"RECURUN_TRACE": raw}).trace is False

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("10", 10), (" 25 ", 25), ("0", None), ("-3", None), ("", None)],
    )
    def test_max_depth(self, raw, expected):
        assert Settings.from_env({"RECURUN_MAX_DEPTH": raw}).max_depth == expected

    def test_invalid_max_depth_is_unbounded_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="recurun"):
            settings = Settings.from_env({"RECURUN_MAX_DEPTH": "deep"})
        assert settings.max_depth is None
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "RECURUN_MAX_DEPTH" in warnings[0].getMessage()

    def test_invalid_process_environment_does_not_raise(self, monkeypatch):
        monkeypatch.setenv("RECURUN_MAX_DEPTH", "deep")
        assert Settings.from_env().max_depth is None

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("RECURUN_MAX_DEPTH", "7")
        monkeypatch.setenv("RECURUN_TRACE", "yes")
        assert Settings.from_env() == Settings(trace=True, max_depth=7)


class TestOverrideSettings:
    def test_restores_previous_settings(self):
        before = get_settings()
        with override_settings(max_depth=12) as settings:
            assert settings.max_depth == 12
            assert get_settings() is settings
        assert get_settings() is before


class TestLogging:
    def test_start_and_completion_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="recurun"):
            run(fib(3))
        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith("run: start") for m in messages)
        assert any(m.startswith("run: completed") for m in messages)
        assert not any("descend" in m for m in messages)

    def test_trace_logs_every_descent(self, caplog):
        with override_settings(trace=True), caplog.at_level(logging.DEBUG, logger="recurun"):
            run(fib(3))
        descents = [r for r in caplog.records if "descend" in r.getMessage()]
        assert len(descents) == 4

    def test_trace_logs_tail_replacements(self, caplog):
        with override_settings(trace=True), caplog.at_level(logging.DEBUG, logger="recurun"):
            run_tail(count(5))
        replacements = [r for r in caplog.records if "replace with" in r.getMessage()]
        assert len(replacements) == 5
