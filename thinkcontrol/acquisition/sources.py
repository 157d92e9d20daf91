"""
Synthetic EEG sources

This module generates the three-channel motor-strip signal the simulated
decoder runs on. There is no hardware here: samples are a sum of mu and
beta sinusoids whose amplitudes encode the current motor imagery label,
plus uniform noise from an injected random source.
"""

import logging
from collections import deque
from typing import Deque, Dict

import numpy as np

from ..core.config import (WINDOW_CAPACITY, MU_HZ, BETA_HZ, MU_AMP_HIGH, MU_AMP_LOW,
                           MU_AMP_CZ, BETA_AMP, BETA_AMP_CZ, NOISE_AMP)
from ..core.data_types import Channel, Label
from ..core.validation import check_count, check_non_negative
from ..utils.rng import RandomSource, as_generator


class SignalSynthesizer:
    """
    Generate one synthetic EEG sample per channel per tick

    Physiological basis (contralateral ERD):
    - Right hand imagery desynchronizes the left motor cortex, so the model
      drives C3 mu high and C4 mu low when the label is RIGHT
    - Left hand imagery is the mirror image
    - Cz sits on the midline and does not discriminate, so it has a fixed
      moderate amplitude and a quarter-cycle phase offset

    Each generated sample is appended to a per-channel FIFO window.
    """

    def __init__(self, rng: RandomSource = None, window_capacity: int = WINDOW_CAPACITY,
                 noise_amp: float = NOISE_AMP):
        self.rng = as_generator(rng)
        self.window_capacity = check_count("Window capacity", window_capacity)
        self.noise_amp = check_non_negative("Noise amplitude", noise_amp)
        self._windows: Dict[Channel, Deque[float]] = {
            channel: deque(maxlen=window_capacity) for channel in Channel
        }

    def _noise(self) -> float:
        return float(self.rng.uniform(-self.noise_amp, self.noise_amp))

    def generate(self, time: float, label) -> Dict[Channel, float]:
        """
        Generate one sample per channel and append it to the windows

        Args:
            time: Elapsed time in seconds
            label: Current motor imagery label (Label, "left"/"right" or 0/1)

        Returns:
            Dict[Channel, float]: The new sample for each channel
        """
        label = Label.parse(label)

        mu_phase = 2 * np.pi * MU_HZ * time
        beta = np.sin(2 * np.pi * BETA_HZ * time)

        if label is Label.RIGHT:
            c3_amp, c4_amp = MU_AMP_HIGH, MU_AMP_LOW
        else:
            c3_amp, c4_amp = MU_AMP_LOW, MU_AMP_HIGH

        samples = {
            Channel.C3: float(c3_amp * np.sin(mu_phase) + BETA_AMP * beta + self._noise()),
            Channel.C4: float(c4_amp * np.sin(mu_phase + np.pi / 4) + BETA_AMP * beta + self._noise()),
            Channel.CZ: float(MU_AMP_CZ * np.sin(mu_phase + np.pi / 2) + BETA_AMP_CZ * beta + self._noise()),
        }

        for channel, value in samples.items():
            # deque(maxlen) evicts the oldest sample before appending
            self._windows[channel].append(value)

        logging.debug(f"Synth t={time:.3f}s label={label.value} "
                      f"C3={samples[Channel.C3]:+.3f} C4={samples[Channel.C4]:+.3f} "
                      f"Cz={samples[Channel.CZ]:+.3f}")
        return samples

    def window(self, channel: Channel) -> np.ndarray:
        """Copy of one channel's window, oldest sample first"""
        return np.array(self._windows[channel], dtype=float)

    def windows(self) -> Dict[Channel, np.ndarray]:
        """Copies of all channel windows"""
        return {channel: self.window(channel) for channel in Channel}

    def clear(self):
        """Empty every channel window"""
        for samples in self._windows.values():
            samples.clear()
