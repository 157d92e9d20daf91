"""
Pytest Configuration and Fixtures
==================================

Shared fixtures for all test modules: seeded random sources and a virtual
clock/timer pair so every loop run is deterministic.
"""

from datetime import datetime

import numpy as np
import pytest

from thinkcontrol.control.loop import ControlLoop
from thinkcontrol.core.config import LoopConfig
from thinkcontrol.utils.timer import ManualClock, ManualTimer


# =============================================================================
# Global Fixtures
# =============================================================================

@pytest.fixture
def rng():
    """Seeded numpy generator."""
    return np.random.default_rng(42)


@pytest.fixture
def manual_clock():
    """Virtual clock starting at 2024-03-01 14:05 local time."""
    return ManualClock(start=datetime(2024, 3, 1, 14, 5, 0).timestamp())


@pytest.fixture
def manual_timer(manual_clock):
    """Timer advanced explicitly by the test."""
    return ManualTimer(manual_clock)


@pytest.fixture
def make_loop(manual_clock, manual_timer):
    """Factory for control loops on virtual time."""
    loops = []

    def factory(config=None, seed=42, **overrides):
        if config is None:
            config = LoopConfig(**overrides)
        loop = ControlLoop(config, rng=seed, clock=manual_clock, timer=manual_timer)
        loops.append(loop)
        return loop

    yield factory

    for loop in loops:
        loop.close()


@pytest.fixture
def recorder():
    """Subscriber that remembers every (snapshot, events) publication."""

    class Recorder:
        def __init__(self):
            self.calls = []

        def __call__(self, snapshot, events):
            self.calls.append((snapshot, events))

        @property
        def snapshots(self):
            return [snapshot for snapshot, _ in self.calls]

        @property
        def events(self):
            return [event for _, events in self.calls for event in events]

    return Recorder()


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Add custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
