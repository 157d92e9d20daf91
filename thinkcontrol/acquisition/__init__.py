"""
EEG data acquisition sources

This module provides the synthetic signal source that feeds the decoder loop.
"""

from .sources import SignalSynthesizer

__all__ = ['SignalSynthesizer']
