import pytest

from flappy_fish.physics_bird import BirdEngine
from flappy_fish.physics_fish import FishEngine


class StubRng:
    """Deterministic stand-in for random.Random: always the same fraction of the range."""

    def __init__(self, fraction: float = 0.5):
        self.fraction = fraction
        self.calls = []

    def uniform(self, a, b):
        self.calls.append((a, b))
        return a + (b - a) * self.fraction


@pytest.fixture
def fish():
    return FishEngine(rng=StubRng())


@pytest.fixture
def bird():
    return BirdEngine(rng=StubRng())


def park_obstacles(session, start_x=1000.0):
    """Moves every obstacle far ahead of the agent."""
    for i, obstacle in enumerate(session.obstacles):
        obstacle.x = start_x + i * 100.0
