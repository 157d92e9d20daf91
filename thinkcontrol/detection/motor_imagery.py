"""
Motor imagery classification

This module implements the simulated LEFT/RIGHT classifier. There is no
trained model behind it: the label follows a persistent random walk and
the confidence models fluctuating signal quality.
"""

import logging
from typing import Tuple

from ..core.config import PERSISTENCE, TICK_CONFIDENCE, FORCED_CONFIDENCE
from ..core.data_types import ClassificationState, Label
from ..core.validation import check_band, check_probability
from ..utils.rng import RandomSource, as_generator, bernoulli


class MotorImageryClassifier:
    """
    Motor imagery classification with temporal persistence

    On every tick the previous label is kept with probability
    ``persistence``; otherwise a fresh label is drawn uniformly. Without this
    hysteresis the label would flip on almost every tick and the cursor would
    never show directed motion. Confidence is redrawn on every tick whether
    or not the label changed.
    """

    def __init__(self, rng: RandomSource = None, persistence: float = PERSISTENCE,
                 tick_confidence: Tuple[float, float] = TICK_CONFIDENCE,
                 forced_confidence: Tuple[float, float] = FORCED_CONFIDENCE,
                 initial_label=Label.LEFT):
        self.rng = as_generator(rng)
        self.persistence = check_probability("Persistence", persistence)
        self.tick_confidence = check_band("Tick confidence band", tick_confidence)
        self.forced_confidence = check_band("Forced confidence band", forced_confidence)
        self._state = ClassificationState(Label.parse(initial_label), 0.5)

    @property
    def state(self) -> ClassificationState:
        return self._state

    def _draw_label(self) -> Label:
        return Label.RIGHT if self.rng.random() > 0.5 else Label.LEFT

    def _draw_confidence(self, band: Tuple[float, float]) -> float:
        low, high = band
        return float(self.rng.uniform(low, high))

    def tick(self) -> ClassificationState:
        """
        Advance the classifier by one tick

        Returns:
            ClassificationState: Updated label and confidence
        """
        label = self._state.label
        if not bernoulli(self.rng, self.persistence):
            label = self._draw_label()

        confidence = self._draw_confidence(self.tick_confidence)
        self._state = ClassificationState(label, confidence)
        return self._state

    def force_classify(self) -> ClassificationState:
        """
        Operator-triggered classification

        Bypasses persistence and draws confidence from the tighter, higher
        forced band.
        """
        self._state = ClassificationState(self._draw_label(),
                                          self._draw_confidence(self.forced_confidence))
        logging.info(f"Forced classification: {self._state.label.display_name} "
                     f"({self._state.confidence:.0%})")
        return self._state
