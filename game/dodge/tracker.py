"""
Player tracker: eases the player toward the latest pointer sample.

The pointer target is the only datum shared between input handling and the
tick. Input callbacks write it, the tick reads it once, and both run on the
same thread between frames, so no locking is needed. A multi-threaded host
would have to guard ``target_x``/``target_y``.
"""

from __future__ import annotations

from .entities import Player


class PlayerTracker:
    def __init__(self, player: Player):
        assert 0.0 < player.easing <= 1.0, "Easing factor must be in (0, 1]"
        self.player = player

    def pointer_moved(self, x: float, y: float) -> None:
        """Store the raw sample; no smoothing on the target itself"""
        self.player.target_x = x
        self.player.target_y = y

    def reset(self, x: float, y: float) -> None:
        self.player.x = self.player.target_x = x
        self.player.y = self.player.target_y = y

    def update(self) -> None:
        p = self.player
        p.x += (p.target_x - p.x) * p.easing
        p.y += (p.target_y - p.y) * p.easing
