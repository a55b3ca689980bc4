"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum

from .config import EASING_FACTOR, PLAYER_RADIUS


class PursuerKind(str, Enum):
    SMALL = "small"
    BIG = "big"


@dataclass
class Viewport:
    """Playfield bounds; read on every use so resizes apply immediately"""
    width: float
    height: float

    @property
    def center(self):
        return self.width * 0.5, self.height * 0.5


@dataclass
class Player:
    """Pointer-driven player point"""
    x: float
    y: float
    target_x: float
    target_y: float
    radius: float = PLAYER_RADIUS
    easing: float = EASING_FACTOR


@dataclass
class Pursuer:
    """Enemy triangle; one record per pool slot, reused across spawns"""
    slot: int
    kind: PursuerKind = PursuerKind.SMALL
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    heading: float = 0.0  # degrees, 0 = up
    target_heading: float = 0.0
    size: float = 0.0
    speed: float = 0.0  # px/tick
    follow_radius: float = 0.0
    turn_speed: float = 0.0  # deg/tick
    active: bool = False
    visible: bool = False
