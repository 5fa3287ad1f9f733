"""Weighted fish selection.

Species are drawn in proportion to ``rarity_base``: a species with weight 0.8
is sixteen times as likely as one with weight 0.05. Candidate order is stable,
so the same uniform draw always yields the same species.
"""

from typing import Callable, Iterable, Optional

from angler.fishing.species import FishDescriptor


def select_fish(
    candidates: Optional[Iterable[Optional[FishDescriptor]]],
    uniform: Callable[[], float],
) -> Optional[FishDescriptor]:
    """Pick one species from ``candidates`` weighted by rarity.

    Args:
        candidates: Species to choose from. ``None`` entries are skipped.
        uniform: Source of draws in [0, 1), usually ``EncounterContext.uniform``

    Returns:
        The chosen descriptor, or None if there are no candidates. When every
        weight is zero or negative the first candidate is returned without
        drawing.
    """
    present = [fish for fish in (candidates or ()) if fish is not None]
    if not present:
        return None

    total_weight = sum(fish.rarity_base for fish in present)
    if total_weight <= 0:
        return present[0]

    roll = uniform() * total_weight
    cumulative = 0.0
    for fish in present:
        cumulative += fish.rarity_base
        if cumulative >= roll:
            return fish

    # Float rounding can leave the roll just above the final cumulative sum
    return present[-1]
