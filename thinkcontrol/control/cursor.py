"""
Cursor integration

Turns classifier output into cursor motion on a 0-100 track and scores hits
when the cursor ends a step inside one of the target zones.
"""

import logging
from typing import Optional, Tuple

from ..core.config import (CURSOR_MIN, CURSOR_MAX, STEP_GAIN, HIT_LEFT_BELOW, HIT_RIGHT_ABOVE,
                           HIGHLIGHT_MS)
from ..core.data_types import (ClassificationState, CursorState, HitEvent, HitSide,
                               IntegrationResult, Label)
from ..core.validation import check_count, check_non_negative, check_thresholds


def advance_cursor(cursor: CursorState, classification: ClassificationState,
                   step_gain: float = STEP_GAIN,
                   hit_left_below: float = HIT_LEFT_BELOW,
                   hit_right_above: float = HIT_RIGHT_ABOVE,
                   highlight_ms: int = HIGHLIGHT_MS) -> Tuple[CursorState, Optional[HitEvent]]:
    """
    Pure cursor transition

    Scoring is continuous: every step that ends inside a zone counts a hit,
    not only the step that enters it.

    Args:
        cursor: Current cursor state
        classification: Classifier output driving this step
        step_gain: Step size per unit of confidence

    Returns:
        Tuple[CursorState, Optional[HitEvent]]: New state and the hit, if any
    """
    step = classification.confidence * step_gain
    if classification.label is Label.LEFT:
        position = cursor.position - step
    else:
        position = cursor.position + step

    # CursorState clamps the position to the track
    moved = CursorState(position, cursor.hits_left, cursor.hits_right)

    if moved.position < hit_left_below:
        return (CursorState(moved.position, moved.hits_left + 1, moved.hits_right),
                HitEvent(HitSide.LEFT, highlight_ms))
    if moved.position > hit_right_above:
        return (CursorState(moved.position, moved.hits_left, moved.hits_right + 1),
                HitEvent(HitSide.RIGHT, highlight_ms))
    return moved, None


class CursorIntegrator:
    """Owns the cursor state and applies advance_cursor on every update"""

    def __init__(self, step_gain: float = STEP_GAIN, hit_left_below: float = HIT_LEFT_BELOW,
                 hit_right_above: float = HIT_RIGHT_ABOVE, highlight_ms: int = HIGHLIGHT_MS):
        self.step_gain = check_non_negative("Step gain", step_gain)
        self.hit_left_below, self.hit_right_above = check_thresholds(
            hit_left_below, hit_right_above, CURSOR_MIN, CURSOR_MAX)
        self.highlight_ms = check_count("Highlight duration", highlight_ms, minimum=0)
        self._state = CursorState()

    @property
    def state(self) -> CursorState:
        return self._state

    def integrate(self, classification: ClassificationState) -> IntegrationResult:
        """
        Move the cursor one step

        Args:
            classification: Current classifier output

        Returns:
            IntegrationResult: New position and the emitted hit event, if any
        """
        self._state, event = advance_cursor(self._state, classification, self.step_gain,
                                            self.hit_left_below, self.hit_right_above,
                                            self.highlight_ms)
        if event is not None:
            logging.debug(f"{event.side.value} at {self._state.position:.1f} "
                          f"(L/R hits: {self._state.hits_left}/{self._state.hits_right})")
        return IntegrationResult(self._state.position, event)

    def reset(self):
        """Recenter the cursor and zero the hit counters"""
        self._state = CursorState()
