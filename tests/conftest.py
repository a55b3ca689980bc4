"""Shared fixtures and stubs for the dodger tests."""

import pytest

from game.dodge.config import KIND_CONFIG
from game.dodge.entities import PursuerKind
from game.dodge.round import RoundController
from game.dodge.scores import MemoryScoreStore


class ScriptedRng:
    """
    Deterministic stand-in for the ``random`` module.

    ``uniform`` consumes fractions in [0, 1] and maps them onto the requested
    range, so tests do not have to know each call's bounds.
    """

    def __init__(self, randoms=(), fractions=(), ranges=()):
        self.randoms = list(randoms)
        self.fractions = list(fractions)
        self.ranges = list(ranges)

    def random(self):
        return self.randoms.pop(0) if self.randoms else 0.99

    def uniform(self, lo, hi):
        f = self.fractions.pop(0) if self.fractions else 0.5
        return lo + f * (hi - lo)

    def randrange(self, n):
        return self.ranges.pop(0) if self.ranges else 0


class NoSpawner:
    def update(self, frame, difficulty, active, viewport):
        return None


class RecordingSink:
    def __init__(self):
        self.calls = []

    def __call__(self, pursuer):
        self.calls.append((pursuer.slot, pursuer.x, pursuer.y, pursuer.heading, pursuer.visible))


def place_pursuer(controller, x, y, heading=0.0, kind=PursuerKind.SMALL, speed=1.0):
    """Put a pursuer straight into a controller's active list"""
    slot = controller.pool.acquire()
    assert slot is not None
    p = controller.pool.get(slot)
    params = KIND_CONFIG[kind.value]
    p.kind = kind
    p.size = params["size"]
    p.follow_radius = params["follow_radius"]
    p.turn_speed = params["turn_speed"]
    p.speed = speed
    p.x = x
    p.y = y
    p.heading = heading
    p.target_heading = heading
    p.visible = True
    controller.state.active.append(p)
    return p


@pytest.fixture
def store():
    return MemoryScoreStore()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def controller(store, sink):
    return RoundController(800, 600, store=store, render_sink=sink)
