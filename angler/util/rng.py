"""RNG utilities for deterministic encounters.

This module provides utilities for obtaining RNGs in a way that fails
loudly when a deterministic source is required but missing, rather than
silently creating an unseeded fallback.
"""

import random
from typing import Any, Optional


class MissingRNGError(RuntimeError):
    """Raised when an RNG is required but not available.

    This error indicates a bug in the encounter setup - every context must
    be created with an explicit random source.
    """

    pass


def require_rng_param(rng: Optional[Any], context: str) -> Any:
    """Validate that an RNG parameter was provided, failing loudly if not.

    Any object with a ``random()`` method returning floats in [0, 1) is
    accepted, so tests can substitute scripted sources.

    Args:
        rng: The RNG that should have been provided
        context: Description of where this is called from (for error messages)

    Returns:
        The validated RNG

    Raises:
        MissingRNGError: If rng is None or has no ``random()`` method

    Example:
        def __init__(self, rng: Optional[random.Random] = None):
            self._rng = require_rng_param(rng, "EncounterContext.__init__")
    """
    if rng is None:
        raise MissingRNGError(
            f"RNG required: {context}. Pass an explicit random source."
        )
    if not callable(getattr(rng, "random", None)):
        raise MissingRNGError(
            f"RNG for {context} has no random() method: {type(rng).__name__}"
        )
    return rng


def make_rng(rng: Optional[random.Random] = None, seed: Optional[int] = None) -> random.Random:
    """Resolve the RNG for a new encounter.

    Prefers an explicit rng, then a seed, then a fresh RNG.

    Args:
        rng: Explicit random source (wins over seed)
        seed: Seed for a new ``random.Random``

    Returns:
        The random source to use
    """
    if rng is not None:
        return rng
    if seed is not None:
        return random.Random(seed)
    return random.Random()
