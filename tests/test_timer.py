"""
Unit Tests for Repeating Timers
===============================
"""

import logging
import threading

import pytest

from thinkcontrol.core.errors import InvalidArgument
from thinkcontrol.utils.timer import CancellationToken, ManualClock, ManualTimer, ThreadedTimer


class TestManualTimer:

    def test_fires_on_schedule(self):
        timer = ManualTimer()
        fired_at = []
        timer.schedule(0.5, lambda: fired_at.append(timer.clock()))

        assert timer.advance(0.4) == 0
        assert timer.advance(0.1) == 1
        assert timer.advance(1.0) == 2
        assert fired_at == pytest.approx([0.5, 1.0, 1.5])
        assert timer.clock() == pytest.approx(1.5)

    def test_cancel_stops_firings(self, manual_timer):
        calls = []
        token = manual_timer.schedule(0.1, lambda: calls.append(1))
        manual_timer.advance(0.25)
        token.cancel()

        assert manual_timer.advance(10.0) == 0
        assert len(calls) == 2
        assert manual_timer.active == 0

    def test_cancel_from_inside_callback(self, manual_timer):
        calls = []
        token = None

        def callback():
            calls.append(1)
            token.cancel()

        token = manual_timer.schedule(0.1, callback)
        manual_timer.advance(5.0)

        assert len(calls) == 1

    def test_interleaves_schedules(self):
        timer = ManualTimer()
        order = []
        timer.schedule(0.3, lambda: order.append("slow"))
        timer.schedule(0.25, lambda: order.append("fast"))
        timer.advance(0.65)

        assert order == ["fast", "slow", "fast", "slow"]

    def test_owns_clock_by_default(self):
        timer = ManualTimer()
        timer.advance(2.0)

        assert isinstance(timer.clock, ManualClock)
        assert timer.clock() == pytest.approx(2.0)

    def test_invalid_arguments(self, manual_timer):
        with pytest.raises(InvalidArgument):
            manual_timer.schedule(0.0, lambda: None)
        with pytest.raises(InvalidArgument):
            manual_timer.advance(-1.0)


class TestThreadedTimer:

    def test_fires_until_cancelled(self):
        fired = threading.Event()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) >= 3:
                fired.set()

        token = ThreadedTimer().schedule(0.01, callback)
        assert fired.wait(2.0)
        token.cancel()

        assert token.cancelled
        assert len(calls) >= 3

    def test_callback_errors_do_not_kill_timer(self):
        fired = threading.Event()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) == 1:
                raise RuntimeError("boom")
            fired.set()

        token = ThreadedTimer().schedule(0.01, callback)
        assert fired.wait(2.0)
        token.cancel()

    def test_invalid_interval(self):
        with pytest.raises(InvalidArgument):
            ThreadedTimer().schedule(-0.1, lambda: None)

    @pytest.mark.parametrize("interval", [float("nan"), float("inf")])
    def test_non_finite_interval(self, interval):
        with pytest.raises(InvalidArgument):
            ThreadedTimer().schedule(interval, lambda: None)

    def test_repeated_failures_logged_once_with_traceback(self, caplog):
        caplog.set_level(logging.DEBUG)
        token = CancellationToken()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) == 5:
                token.cancel()
            raise RuntimeError("boom")

        # Run the thread body inline so the log records are deterministic
        ThreadedTimer._run(0.001, callback, token)

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(calls) == 5
        assert len(errors) == 1
        assert "1 consecutive" in errors[0].getMessage()
        assert errors[0].exc_info is not None
        assert sum("consecutive" in r.getMessage() for r in caplog.records
                   if r.levelno == logging.DEBUG) == 4

    def test_failure_reports_are_periodic_and_recovery_logged(self, caplog, monkeypatch):
        monkeypatch.setattr(ThreadedTimer, "REPORT_EVERY", 3)
        caplog.set_level(logging.INFO)
        token = CancellationToken()
        calls = []

        def callback():
            calls.append(1)
            if len(calls) <= 7:
                raise RuntimeError("boom")
            token.cancel()

        ThreadedTimer._run(0.001, callback, token)

        errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
        assert errors == [f"Timer callback failed ({n} consecutive)" for n in (1, 3, 6)]
        assert any("recovered after 7" in r.getMessage() for r in caplog.records
                   if r.levelno == logging.INFO)


def test_token_wait_returns_on_cancel():
    token = CancellationToken()
    threading.Timer(0.01, token.cancel).start()

    assert token.wait(2.0) is True
    assert token.cancelled
