"""
ThinkControl - simulated closed-loop BCI cursor decoder

Synthesizes motor-strip EEG, classifies LEFT/RIGHT motor imagery with
persistence, integrates the result into a cursor on a 0-100 track, scores
target-zone hits and keeps a short history of classifications.

Python: 3.10+
"""

__version__ = "1.0.0"

# Main package imports for easy access
from .core.errors import InvalidArgument
from .core.config import LoopConfig, validate_config
from .core.data_types import (Channel, Label, HitSide, CursorZone, RunState,
                              ClassificationState, CursorState, HitEvent,
                              HistoryEntry, Snapshot)
from .acquisition.sources import SignalSynthesizer
from .detection.motor_imagery import MotorImageryClassifier
from .control.cursor import CursorIntegrator
from .control.history import HistoryBuffer
from .control.loop import ControlLoop
from .utils.timer import ThreadedTimer, ManualClock, ManualTimer

__all__ = [
    'InvalidArgument', 'LoopConfig', 'validate_config',
    'Channel', 'Label', 'HitSide', 'CursorZone', 'RunState',
    'ClassificationState', 'CursorState', 'HitEvent', 'HistoryEntry', 'Snapshot',
    'SignalSynthesizer', 'MotorImageryClassifier',
    'CursorIntegrator', 'HistoryBuffer', 'ControlLoop',
    'ThreadedTimer', 'ManualClock', 'ManualTimer',
]
