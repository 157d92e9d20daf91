"""
Configuration constants for ThinkControl

This module contains all tunable parameters of the simulated decoder loop.
The module-level constants are the defaults; LoopConfig gathers them so a
caller can override individual values and validate the result.
"""

from dataclasses import dataclass
from typing import Tuple

from .validation import (
    check_band,
    check_count,
    check_non_negative,
    check_positive,
    check_probability,
    check_thresholds,
)

# ============================================================================
# LOOP TIMING
# ============================================================================

TICK_INTERVAL_MS = 100            # Nominal cadence of the control loop (ms)
HIGHLIGHT_MS = 500                # How long a collaborator should show a hit
LATENCY_MS = (200.0, 300.0)       # Simulated decode latency reported per update (ms)

# ============================================================================
# SIGNAL SYNTHESIS
# ============================================================================

WINDOW_CAPACITY = 100             # Samples kept per channel
MU_HZ = 10.0                      # Mu rhythm (sensorimotor, 8-12 Hz)
BETA_HZ = 20.0                    # Beta rhythm (13-30 Hz)
MU_AMP_HIGH = 0.8                 # Mu amplitude on the synchronized hemisphere
MU_AMP_LOW = 0.3                  # Mu amplitude on the desynchronized hemisphere
MU_AMP_CZ = 0.5                   # Central channel, label independent
BETA_AMP = 0.2                    # Beta amplitude for C3/C4
BETA_AMP_CZ = 0.15                # Beta amplitude for Cz
NOISE_AMP = 0.05                  # Uniform noise in [-NOISE_AMP, NOISE_AMP]

# ============================================================================
# CLASSIFICATION
# ============================================================================

PERSISTENCE = 0.7                       # Probability of keeping the last label
TICK_CONFIDENCE = (0.5, 0.9)            # Confidence band for regular ticks
FORCED_CONFIDENCE = (0.6, 0.9)          # Confidence band for forced events

# ============================================================================
# CURSOR
# ============================================================================

CURSOR_MIN = 0.0
CURSOR_MAX = 100.0
CURSOR_START = 50.0
STEP_GAIN = 5.0                   # Step = confidence * STEP_GAIN
HIT_LEFT_BELOW = 15.0             # Position < this scores a left hit
HIT_RIGHT_ABOVE = 85.0            # Position > this scores a right hit
ZONE_LEFT_BELOW = 40.0            # Display zones (Left Zone / Center / Right Zone)
ZONE_RIGHT_ABOVE = 60.0

# ============================================================================
# HISTORY
# ============================================================================

HISTORY_CAPACITY = 10
RECORD_PROBABILITY = 0.1          # Chance a regular tick is logged
CORRECT_PROBABILITY = 0.7         # Stand-in for a ground-truth comparison


@dataclass
class LoopConfig:
    """
    Configuration for the closed-loop simulation

    Every field defaults to the module constant of the same meaning, so
    ``LoopConfig()`` reproduces the reference behaviour.
    """

    tick_interval_ms: float = TICK_INTERVAL_MS
    highlight_ms: int = HIGHLIGHT_MS
    latency_ms: Tuple[float, float] = LATENCY_MS

    window_capacity: int = WINDOW_CAPACITY
    noise_amp: float = NOISE_AMP

    persistence: float = PERSISTENCE
    tick_confidence: Tuple[float, float] = TICK_CONFIDENCE
    forced_confidence: Tuple[float, float] = FORCED_CONFIDENCE

    step_gain: float = STEP_GAIN
    hit_left_below: float = HIT_LEFT_BELOW
    hit_right_above: float = HIT_RIGHT_ABOVE

    history_capacity: int = HISTORY_CAPACITY
    record_probability: float = RECORD_PROBABILITY
    correct_probability: float = CORRECT_PROBABILITY

    @property
    def tick_interval_sec(self) -> float:
        return self.tick_interval_ms / 1000.0


def validate_config(config: LoopConfig) -> None:
    """
    Validate configuration parameters

    Numeric fields must be finite. Capacities and the highlight duration
    must be integers.

    Args:
        config: Configuration to validate

    Raises:
        InvalidArgument: If any value is out of its domain
    """
    check_positive("Tick interval", config.tick_interval_ms)
    check_count("Highlight duration", config.highlight_ms, minimum=0)
    check_count("Window capacity", config.window_capacity)
    check_count("History capacity", config.history_capacity)

    check_non_negative("Noise amplitude", config.noise_amp)
    check_non_negative("Step gain", config.step_gain)

    check_probability("Persistence", config.persistence)
    check_probability("Record probability", config.record_probability)
    check_probability("Correct probability", config.correct_probability)

    check_band("Tick confidence band", config.tick_confidence)
    check_band("Forced confidence band", config.forced_confidence)
    check_band("Latency band", config.latency_ms, upper=float("inf"))

    check_thresholds(config.hit_left_below, config.hit_right_above, CURSOR_MIN, CURSOR_MAX)
