"""
Pursuer steering: bounded-turn homing, straight-line drift outside range.
"""

from __future__ import annotations

from typing import List, Optional

from .config import CULL_MARGIN
from .entities import Player, Pursuer, Viewport
from .pool import EntityPool, RenderSink
from .utils import dist_sq, heading_towards, heading_vector, normalize_angle


def steer(p: Pursuer, px: float, py: float) -> None:
    """Turn toward (px, py) by at most turn_speed, only when within follow radius"""
    if dist_sq(p.x, p.y, px, py) >= p.follow_radius * p.follow_radius:
        return

    p.target_heading = heading_towards(p.x, p.y, px, py)
    diff = normalize_angle(p.target_heading - p.heading)
    if abs(diff) < p.turn_speed:
        p.heading = p.target_heading
    elif diff > 0:
        p.heading += p.turn_speed
    else:
        p.heading -= p.turn_speed
    p.heading %= 360.0


def advance(p: Pursuer) -> None:
    """Single Euler step along the current heading"""
    ux, uy = heading_vector(p.heading)
    p.vx = ux * p.speed
    p.vy = uy * p.speed
    p.x += p.vx
    p.y += p.vy


def out_of_bounds(p: Pursuer, viewport: Viewport) -> bool:
    margin = p.size * CULL_MARGIN
    return (
        p.x < -margin
        or p.x > viewport.width + margin
        or p.y < -margin
        or p.y > viewport.height + margin
    )


def update_pursuers(
    active: List[Pursuer],
    player: Player,
    pool: EntityPool,
    viewport: Viewport,
    render_sink: Optional[RenderSink] = None,
) -> int:
    """
    Steer, move and cull every active pursuer.

    Iterates backwards so culled entries can be removed in place.
    Returns the number of pursuers culled this tick.
    """
    culled = 0
    for i in range(len(active) - 1, -1, -1):
        p = active[i]
        steer(p, player.x, player.y)
        advance(p)
        if render_sink is not None:
            render_sink(p)

        if out_of_bounds(p, viewport):
            pool.release(p.slot)
            del active[i]
            culled += 1
    return culled
