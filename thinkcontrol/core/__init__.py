"""
Core data types and configuration for ThinkControl

This module contains the fundamental records, error type and tunable
parameters used throughout the system.
"""

from .errors import InvalidArgument
from .data_types import (Channel, Label, HitSide, CursorZone, RunState,
                         ClassificationState, CursorState, HitEvent,
                         HistoryEntry, IntegrationResult, Snapshot)
from .config import LoopConfig, validate_config

__all__ = [
    'InvalidArgument',
    'Channel', 'Label', 'HitSide', 'CursorZone', 'RunState',
    'ClassificationState', 'CursorState', 'HitEvent', 'HistoryEntry',
    'IntegrationResult', 'Snapshot',
    'LoopConfig', 'validate_config',
]
