"""Pytest configuration and fixtures for encounter tests."""

import random

import pytest

from angler.fishing.context import EncounterContext
from angler.fishing.species import FishDescriptor
from tests.fakes.scripted_rng import ScriptedRandom


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return random.Random(42)


@pytest.fixture
def scripted_rng():
    """A scripted RNG that answers 0.5 once its queue runs dry."""
    return ScriptedRandom(default=0.5)


@pytest.fixture
def context(scripted_rng):
    """A fresh encounter context driven by the scripted RNG."""
    return EncounterContext(rng=scripted_rng)


@pytest.fixture
def common_and_rare():
    """One common and one rare species."""
    return [
        FishDescriptor(id="common", display_name="Common Fish", rarity_base=0.8),
        FishDescriptor(id="rare", display_name="Rare Fish", rarity_base=0.05),
    ]
