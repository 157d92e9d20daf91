"""
Closed-loop control

ControlLoop ties the synthesizer, classifier, cursor and history log
together, owns the run/idle state and publishes a snapshot plus any hit
events to subscribers after every tick or forced classification.
"""

import logging
import threading
import time
from typing import Callable, List, Optional

from ..acquisition.sources import SignalSynthesizer
from ..core.config import LoopConfig, validate_config
from ..core.data_types import HitEvent, RunState, Snapshot
from ..detection.motor_imagery import MotorImageryClassifier
from ..utils.rng import RandomSource, as_generator
from ..utils.timer import CancellationToken, RepeatingTimer, ThreadedTimer
from .cursor import CursorIntegrator
from .history import HistoryBuffer

Subscriber = Callable[[Snapshot, List[HitEvent]], None]


class ControlLoop:
    """
    Simulated BCI decoder loop

    Per tick, in order: synthesize a sample, classify, move the cursor,
    maybe log the classification, publish. All public operations are
    serialized by one lock, so a tick never overlaps reset, force_classify,
    start or stop.

    Args:
        config: Loop parameters (validated on construction)
        rng: Seed or numpy Generator shared by every stochastic component
        clock: Callable returning epoch seconds. History entries are stamped
            with it, and the synthesizer is fed seconds elapsed since
            construction.
        timer: RepeatingTimer driving ticks (ThreadedTimer by default)
    """

    def __init__(self, config: Optional[LoopConfig] = None, rng: RandomSource = None,
                 clock: Callable[[], float] = time.time,
                 timer: Optional[RepeatingTimer] = None):
        self.config = config if config is not None else LoopConfig()
        validate_config(self.config)

        self.rng = as_generator(rng)
        self.clock = clock
        self.timer = timer if timer is not None else ThreadedTimer()
        self._t0 = clock()

        self.synthesizer = SignalSynthesizer(self.rng, self.config.window_capacity,
                                             self.config.noise_amp)
        self.classifier = MotorImageryClassifier(self.rng, self.config.persistence,
                                                 self.config.tick_confidence,
                                                 self.config.forced_confidence)
        self.cursor = CursorIntegrator(self.config.step_gain, self.config.hit_left_below,
                                       self.config.hit_right_above, self.config.highlight_ms)
        self.history = HistoryBuffer(self.rng, clock, self.config.history_capacity,
                                     self.config.record_probability,
                                     self.config.correct_probability)

        self._lock = threading.RLock()
        self._run_state = RunState.IDLE
        self._token: Optional[CancellationToken] = None
        self._generation = 0
        self._subscribers: List[Subscriber] = []
        self._tick_count = 0
        self._latency_ms = 0.0
        self._snapshot = self._build_snapshot()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def run_state(self) -> RunState:
        return self._run_state

    @property
    def is_running(self) -> bool:
        return self._run_state is RunState.RUNNING

    @property
    def elapsed(self) -> float:
        """Seconds of signal time since the loop was created"""
        return self.clock() - self._t0

    def get_snapshot(self) -> Snapshot:
        """State as of the most recently completed tick or operation"""
        return self._snapshot

    def _build_snapshot(self) -> Snapshot:
        classification = self.classifier.state
        cursor = self.cursor.state
        return Snapshot(
            cursor_position=cursor.position,
            hits_left=cursor.hits_left,
            hits_right=cursor.hits_right,
            current_label=classification.label,
            confidence=classification.confidence,
            history=self.history.entries,
            run_state=self._run_state,
            cursor_zone=cursor.zone,
            prob_left=classification.prob_left,
            prob_right=classification.prob_right,
            tick_count=self._tick_count,
            latency_ms=self._latency_ms,
        )

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback receiving (snapshot, events) after every update

        Returns:
            Callable that removes the subscription
        """
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, events: List[HitEvent]):
        self._snapshot = self._build_snapshot()
        for callback in list(self._subscribers):
            try:
                callback(self._snapshot, list(events))
            except Exception as e:
                logging.error(f"Subscriber {getattr(callback, '__name__', callback)!r} failed: {e}")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def start(self):
        """Idle -> Running. No effect if already running."""
        with self._lock:
            if self.is_running:
                return
            self._run_state = RunState.RUNNING
            self._generation += 1
            generation = self._generation
            self._token = self.timer.schedule(self.config.tick_interval_sec,
                                              lambda: self._on_timer(generation))
            self._snapshot = self._build_snapshot()
            logging.info(f"Control loop started ({self.config.tick_interval_ms:.0f} ms cadence)")

    def stop(self):
        """Running -> Idle. No tick runs after this returns."""
        with self._lock:
            if not self.is_running:
                return
            if self._token is not None:
                self._token.cancel()
                self._token = None
            self._run_state = RunState.IDLE
            self._snapshot = self._build_snapshot()
            logging.info(f"Control loop stopped after {self._tick_count} ticks")

    def reset(self):
        """Recenter the cursor, zero the counters and clear the history"""
        with self._lock:
            self.cursor.reset()
            self.history.reset()
            logging.info("Cursor and history reset")
            self._publish([])

    def _draw_latency(self):
        low, high = self.config.latency_ms
        self._latency_ms = float(self.rng.uniform(low, high))

    def _on_timer(self, generation: int):
        with self._lock:
            # A firing that raced with stop() belongs to a stale generation
            if not self.is_running or generation != self._generation:
                return
            self.tick()

    def tick(self) -> Snapshot:
        """Run one loop iteration and publish the result"""
        with self._lock:
            classification = self.classifier.state
            self.synthesizer.generate(self.elapsed, classification.label)
            classification = self.classifier.tick()
            result = self.cursor.integrate(classification)
            self.history.maybe_record(classification)
            self._tick_count += 1
            self._draw_latency()
            self._publish([result.event] if result.event is not None else [])
            return self._snapshot

    def force_classify(self) -> Snapshot:
        """Operator-triggered classification, valid whether or not running"""
        with self._lock:
            classification = self.classifier.force_classify()
            result = self.cursor.integrate(classification)
            self.history.record(classification)
            self._draw_latency()
            self._publish([result.event] if result.event is not None else [])
            return self._snapshot

    def close(self):
        """Stop the loop and drop all subscribers"""
        with self._lock:
            self.stop()
            self._subscribers.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
