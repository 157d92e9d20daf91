"""
Utility functions and helpers

This module contains the random source helpers and the repeating timers that
drive the control loop.
"""

from .rng import as_generator, bernoulli
from .timer import (CancellationToken, RepeatingTimer, ThreadedTimer,
                    ManualClock, ManualTimer)

__all__ = ['as_generator', 'bernoulli',
           'CancellationToken', 'RepeatingTimer', 'ThreadedTimer',
           'ManualClock', 'ManualTimer']
