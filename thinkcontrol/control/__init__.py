"""
Closed-loop control components

This module contains the cursor integrator, the classification history log
and the control loop that drives them.
"""

from .cursor import CursorIntegrator, advance_cursor
from .history import HistoryBuffer
from .loop import ControlLoop

__all__ = ['CursorIntegrator', 'advance_cursor', 'HistoryBuffer', 'ControlLoop']
