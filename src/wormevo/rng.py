"""
Random source handling.

Every function that needs randomness takes an explicit 'rng' argument, which
may be a numpy Generator, an integer seed, or None (fresh OS entropy).
"""

import numpy as np

RandomSource = np.random.Generator | int | None

def as_generator(rng: RandomSource) -> np.random.Generator:
    """
    Return 'rng' as a numpy Generator. A Generator is returned unchanged, so
    draws made by the callee advance the caller's stream.
    """
    return np.random.default_rng(rng)
