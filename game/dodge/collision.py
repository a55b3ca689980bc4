"""
Player vs pursuer collision test
"""

from __future__ import annotations

from typing import Iterable, Optional

from .entities import Player, Pursuer
from .utils import circle_collide


def collides(player: Player, p: Pursuer) -> bool:
    # Triangles are approximated by a circle of half their size
    return circle_collide(player.x, player.y, player.radius, p.x, p.y, p.size * 0.5)


def detect_collision(player: Player, active: Iterable[Pursuer]) -> Optional[Pursuer]:
    """First pursuer touching the player, or None"""
    for p in active:
        if collides(player, p):
            return p
    return None
