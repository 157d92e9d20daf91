"""
Mental state detection

This module implements the simulated motor imagery classifier.
"""

from .motor_imagery import MotorImageryClassifier

__all__ = ['MotorImageryClassifier']
