"""
Cancellable repeating timers

The control loop is driven by a RepeatingTimer. Each schedule() call hands
back a single CancellationToken; every firing checks the token right before
running the callback, so cancelling it guarantees no later firing runs.

Two implementations are provided:
- ThreadedTimer: real time, one daemon thread per schedule
- ManualTimer: virtual time advanced explicitly, for deterministic replay
"""

import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable, List

from ..core.errors import InvalidArgument
from ..core.validation import check_positive


class CancellationToken:
    """One-shot cancellation flag shared by a schedule and its owner"""

    def __init__(self):
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self):
        self._event.set()

    def wait(self, timeout: float) -> bool:
        """Sleep up to timeout seconds; True if cancelled meanwhile"""
        return self._event.wait(timeout)


class RepeatingTimer(ABC):
    """Abstract repeating timer"""

    @abstractmethod
    def schedule(self, interval_sec: float, callback: Callable[[], None]) -> CancellationToken:
        """
        Call ``callback`` every ``interval_sec`` seconds until cancelled

        Returns:
            CancellationToken: Cancel it to stop further firings
        """


def _check_interval(interval_sec: float):
    check_positive("Timer interval", interval_sec)


class ThreadedTimer(RepeatingTimer):
    """
    Real-time timer backed by a daemon thread

    A failing callback does not stop the schedule. The first failure of a
    run of consecutive failures is logged with its traceback, then every
    ``REPORT_EVERY``-th one; the rest go to debug.
    """

    REPORT_EVERY = 50

    def __init__(self, name: str = "thinkcontrol-timer"):
        self.name = name

    def schedule(self, interval_sec: float, callback: Callable[[], None]) -> CancellationToken:
        _check_interval(interval_sec)
        token = CancellationToken()
        thread = threading.Thread(target=self._run, args=(interval_sec, callback, token),
                                  name=self.name, daemon=True)
        thread.start()
        logging.debug(f"Timer thread started ({interval_sec * 1000:.0f} ms)")
        return token

    @classmethod
    def _run(cls, interval_sec: float, callback: Callable[[], None], token: CancellationToken):
        failures = 0
        while not token.wait(interval_sec):
            if token.cancelled:
                break
            try:
                callback()
            except Exception as e:
                failures += 1
                if failures == 1 or failures % cls.REPORT_EVERY == 0:
                    logging.exception(f"Timer callback failed ({failures} consecutive)")
                else:
                    logging.debug(f"Timer callback failed ({failures} consecutive): {e}")
                continue
            if failures:
                logging.info(f"Timer callback recovered after {failures} consecutive failures")
                failures = 0
        logging.debug("Timer thread exited")


class ManualClock:
    """Virtual wall clock, in epoch seconds"""

    def __init__(self, start: float = 0.0):
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class _Schedule:
    def __init__(self, interval_sec: float, callback: Callable[[], None],
                 token: CancellationToken, due: float):
        self.interval_sec = interval_sec
        self.callback = callback
        self.token = token
        self.due = due


class ManualTimer(RepeatingTimer):
    """
    Deterministic timer driven by advance()

    Firings happen synchronously inside advance(), in due-time order, with
    the shared clock set to each firing's due time.
    """

    def __init__(self, clock: ManualClock = None):
        self.clock = clock if clock is not None else ManualClock()
        self._schedules: List[_Schedule] = []

    @property
    def active(self) -> int:
        """Number of schedules not yet cancelled"""
        return sum(1 for s in self._schedules if not s.token.cancelled)

    def schedule(self, interval_sec: float, callback: Callable[[], None]) -> CancellationToken:
        _check_interval(interval_sec)
        token = CancellationToken()
        self._schedules.append(_Schedule(interval_sec, callback, token,
                                         self.clock.now + interval_sec))
        return token

    def advance(self, seconds: float) -> int:
        """
        Move virtual time forward, running every firing that falls due

        Returns:
            int: Number of callbacks executed
        """
        if seconds < 0:
            raise InvalidArgument(f"Cannot advance by a negative duration: {seconds}")

        target = self.clock.now + seconds
        fired = 0
        while True:
            self._schedules = [s for s in self._schedules if not s.token.cancelled]
            pending = [s for s in self._schedules if s.due <= target]
            if not pending:
                break
            current = min(pending, key=lambda s: s.due)
            self.clock.now = current.due
            current.due += current.interval_sec
            if current.token.cancelled:
                continue
            current.callback()
            fired += 1

        self.clock.now = target
        return fired
