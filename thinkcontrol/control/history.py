"""
Classification history log

Keeps the most recent classification events, newest first, for display.
"""

import logging
import time
from collections import deque
from datetime import datetime
from typing import Callable, Deque, Optional, Tuple

from ..core.config import HISTORY_CAPACITY, RECORD_PROBABILITY, CORRECT_PROBABILITY
from ..core.data_types import ClassificationState, HistoryEntry
from ..core.validation import check_count, check_probability
from ..utils.rng import RandomSource, as_generator, bernoulli


class HistoryBuffer:
    """
    Bounded, newest-first log of classification events

    The ``correct`` flag is drawn at random: the simulation has no ground
    truth to compare against, so it stands in for one.
    """

    def __init__(self, rng: RandomSource = None, clock: Callable[[], float] = time.time,
                 capacity: int = HISTORY_CAPACITY,
                 record_probability: float = RECORD_PROBABILITY,
                 correct_probability: float = CORRECT_PROBABILITY):
        self.rng = as_generator(rng)
        self.clock = clock
        self.capacity = check_count("History capacity", capacity)
        self.record_probability = check_probability("Record probability", record_probability)
        self.correct_probability = check_probability("Correct probability", correct_probability)
        self._entries: Deque[HistoryEntry] = deque(maxlen=capacity)

    @property
    def entries(self) -> Tuple[HistoryEntry, ...]:
        """Entries, most recent first"""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, classification: ClassificationState) -> HistoryEntry:
        """Unconditionally log a classification"""
        entry = HistoryEntry(
            timestamp=datetime.fromtimestamp(self.clock()).strftime("%H:%M"),
            label=classification.label,
            confidence=int(round(classification.confidence * 100)),
            correct=bernoulli(self.rng, self.correct_probability),
        )
        # appendleft on a bounded deque drops the oldest entry from the right
        self._entries.appendleft(entry)
        logging.debug(f"History: {entry.timestamp} {entry.label.display_name} "
                      f"{entry.confidence}% {'correct' if entry.correct else 'incorrect'}")
        return entry

    def maybe_record(self, classification: ClassificationState) -> Optional[HistoryEntry]:
        """Log a classification with probability ``record_probability``"""
        if bernoulli(self.rng, self.record_probability):
            return self.record(classification)
        return None

    def reset(self):
        self._entries.clear()
