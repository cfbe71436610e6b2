"""
Random source shared by the balancer and scheduler.

Both consume a random.Random instance passed in by the caller. When none is
given, a fresh generator is created here, seeded from ENGINE_RANDOM_SEED if
that is configured.
"""

import random

from config import ENGINE_RANDOM_SEED


def make_rng(seed: int | None = None) -> random.Random:
    """
    Build a random generator for the engine.

    Args:
        seed: Explicit seed; falls back to ENGINE_RANDOM_SEED, then to OS entropy

    Returns:
        A dedicated random.Random instance (never the module-global one)
    """
    if seed is None:
        seed = ENGINE_RANDOM_SEED
    return random.Random(seed)
