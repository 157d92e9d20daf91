"""
Core data types for ThinkControl

This module defines the enumerations and immutable records passed between the
synthesizer, classifier, cursor, history log and control loop.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .config import (CURSOR_MIN, CURSOR_MAX, CURSOR_START, HIGHLIGHT_MS,
                     ZONE_LEFT_BELOW, ZONE_RIGHT_ABOVE)
from .errors import InvalidArgument


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]"""
    return max(low, min(high, value))


class Channel(Enum):
    """Recorded electrodes (10-20 system, motor strip)"""
    C3 = "C3"
    C4 = "C4"
    CZ = "Cz"


class Label(Enum):
    """Motor imagery class"""
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: Any) -> "Label":
        """
        Normalize a label from an enum member, name or 0/1 code

        Raises:
            InvalidArgument: If the value does not name a label
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        elif isinstance(value, int) and not isinstance(value, bool) and value in (0, 1):
            return cls.LEFT if value == 0 else cls.RIGHT
        raise InvalidArgument(f"Malformed label: {value!r}")

    @property
    def display_name(self) -> str:
        return "Left Hand" if self is Label.LEFT else "Right Hand"


class HitSide(Enum):
    """Target zone that registered a hit"""
    LEFT = "HitLeft"
    RIGHT = "HitRight"


class CursorZone(Enum):
    """Coarse cursor region for display"""
    LEFT = "Left Zone"
    CENTER = "Center"
    RIGHT = "Right Zone"


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True)
class ClassificationState:
    """Current classifier output"""
    label: Label
    confidence: float

    def __post_init__(self):
        object.__setattr__(self, "label", Label.parse(self.label))
        object.__setattr__(self, "confidence", clamp(float(self.confidence), 0.0, 1.0))

    @property
    def prob_left(self) -> float:
        return self.confidence if self.label is Label.LEFT else 1.0 - self.confidence

    @property
    def prob_right(self) -> float:
        return 1.0 - self.prob_left


@dataclass(frozen=True)
class CursorState:
    """Cursor position on the 0-100 track and per-side hit counters"""
    position: float = CURSOR_START
    hits_left: int = 0
    hits_right: int = 0

    def __post_init__(self):
        object.__setattr__(self, "position", clamp(float(self.position), CURSOR_MIN, CURSOR_MAX))

    @property
    def zone(self) -> CursorZone:
        if self.position < ZONE_LEFT_BELOW:
            return CursorZone.LEFT
        if self.position > ZONE_RIGHT_ABOVE:
            return CursorZone.RIGHT
        return CursorZone.CENTER


@dataclass(frozen=True)
class HitEvent:
    """Emitted when the cursor ends a step inside a target zone"""
    side: HitSide
    highlight_ms: int = HIGHLIGHT_MS


@dataclass(frozen=True)
class HistoryEntry:
    """One logged classification"""
    timestamp: str            # "HH:MM", 24-hour clock
    label: Label
    confidence: int           # Integer percent, 0-100
    correct: bool


@dataclass(frozen=True)
class IntegrationResult:
    position: float
    event: Optional[HitEvent] = None


@dataclass(frozen=True)
class Snapshot:
    """
    Read-only view of the loop after the most recent tick or operation

    ``latency_ms`` is the simulated decode latency of the last update; it is
    reported for display and does not delay anything.
    """
    cursor_position: float
    hits_left: int
    hits_right: int
    current_label: Label
    confidence: float
    history: Tuple[HistoryEntry, ...]
    run_state: RunState
    cursor_zone: CursorZone
    prob_left: float
    prob_right: float
    tick_count: int
    latency_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with enum members replaced by their values"""
        data = asdict(self)
        data["current_label"] = self.current_label.value
        data["run_state"] = self.run_state.value
        data["cursor_zone"] = self.cursor_zone.value
        data["history"] = [
            {**entry, "label": entry["label"].value} for entry in data["history"]
        ]
        return data
