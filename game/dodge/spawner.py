"""
Edge spawner for pursuers
"""

from __future__ import annotations

import random
from typing import Any, List, Optional

from .config import (
    BASE_SPAWN_INTERVAL,
    BIG_PROBABILITY,
    DIFFICULTY_OFFSET,
    KIND_CONFIG,
    MIN_SPAWN_INTERVAL,
    SPAWN_INTERVAL_STEP,
    SPEED_STEP,
)
from .entities import Pursuer, PursuerKind, Viewport
from .pool import EntityPool
from .utils import heading_towards

# Edge order used for the uniform edge pick
EDGES = ("top", "right", "bottom", "left")


def spawn_interval(difficulty: int) -> int:
    """Ticks between spawns; shrinks with difficulty down to a floor"""
    return max(MIN_SPAWN_INTERVAL, BASE_SPAWN_INTERVAL - (difficulty + DIFFICULTY_OFFSET) * SPAWN_INTERVAL_STEP)


def speed_multiplier(difficulty: int) -> float:
    return 1 + ((difficulty + DIFFICULTY_OFFSET) - 1) * SPEED_STEP


class Spawner:
    """
    Decides once per tick whether a pursuer enters the field.

    ``rng`` is anything with ``random()``, ``uniform()`` and ``randrange()``;
    it defaults to the global ``random`` module so ``seed_everything`` applies.
    """

    def __init__(self, pool: EntityPool, rng: Optional[Any] = None):
        self.pool = pool
        self.rng = rng if rng is not None else random

    def update(self, frame: int, difficulty: int, active: List[Pursuer], viewport: Viewport) -> Optional[Pursuer]:
        if frame % spawn_interval(difficulty) != 0:
            return None
        return self.spawn(difficulty, active, viewport)

    def spawn(self, difficulty: int, active: List[Pursuer], viewport: Viewport) -> Optional[Pursuer]:
        slot = self.pool.acquire()
        if slot is None:
            return None

        p = self.pool.get(slot)
        kind = PursuerKind.BIG if self.rng.random() < BIG_PROBABILITY else PursuerKind.SMALL
        params = KIND_CONFIG[kind.value]
        lo, hi = params["speed_range"]

        p.kind = kind
        p.size = params["size"]
        p.follow_radius = params["follow_radius"]
        p.turn_speed = params["turn_speed"]
        p.speed = self.rng.uniform(lo, hi) * speed_multiplier(difficulty)
        p.vx = 0.0
        p.vy = 0.0

        p.x, p.y = self._edge_position(p.size, viewport)
        cx, cy = viewport.center
        p.heading = heading_towards(p.x, p.y, cx, cy) % 360.0
        p.target_heading = p.heading
        p.visible = True

        active.append(p)
        return p

    def _edge_position(self, size: float, viewport: Viewport):
        # Just outside the chosen edge, offset by the pursuer's own size
        w, h = viewport.width, viewport.height
        side = EDGES[self.rng.randrange(len(EDGES))]
        if side == "top":
            return self.rng.uniform(0.0, w), -size
        if side == "right":
            return w + size, self.rng.uniform(0.0, h)
        if side == "bottom":
            return self.rng.uniform(0.0, w), h + size
        return -size, self.rng.uniform(0.0, h)
