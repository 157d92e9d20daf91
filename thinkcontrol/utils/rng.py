"""
Random source handling

Every stochastic component takes an injected numpy Generator so a whole
session can be replayed from one seed.
"""

from typing import Union

import numpy as np

RandomSource = Union[None, int, np.random.Generator]


def as_generator(rng: RandomSource = None) -> np.random.Generator:
    """
    Normalize a seed or generator into a numpy Generator

    Args:
        rng: Existing Generator (returned as-is), an int seed, or None for
            fresh OS entropy

    Returns:
        np.random.Generator
    """
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def bernoulli(rng: np.random.Generator, p: float) -> bool:
    """True with probability p"""
    return bool(rng.random() < p)
