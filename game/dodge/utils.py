"""
Utility functions for game mechanics
"""

from __future__ import annotations
import math
import random
import re
from typing import Any, Optional, Tuple
import numpy as np

from .config import DEFAULT_DIFFICULTY, MAX_DIFFICULTY, MIN_DIFFICULTY

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def dist_sq(x1: float, y1: float, x2: float, y2: float) -> float:
    """Squared distance between two points"""
    dx = x2 - x1
    dy = y2 - y1
    return dx * dx + dy * dy


def circle_collide(x1, y1, r1, x2, y2, r2) -> bool:
    """Check if two circles overlap (touching edges do not count)"""
    rr = r1 + r2
    return dist_sq(x1, y1, x2, y2) < (rr * rr)


def normalize_angle(deg: float) -> float:
    """Wrap an angle difference into (-180, 180]"""
    while deg > 180.0:
        deg -= 360.0
    while deg <= -180.0:
        deg += 360.0
    return deg


def heading_towards(x: float, y: float, tx: float, ty: float) -> float:
    """Heading in degrees from (x, y) to (tx, ty), with 0 pointing up the screen"""
    return math.degrees(math.atan2(ty - y, tx - x)) + 90.0


def heading_vector(heading: float) -> Tuple[float, float]:
    """Unit vector for a heading (0 = up, screen y grows downward)"""
    rad = math.radians(heading - 90.0)
    return math.cos(rad), math.sin(rad)


def parse_difficulty(value: Any, default: int = DEFAULT_DIFFICULTY) -> int:
    """
    Read a difficulty from loose UI input.

    Integers and numeric strings are accepted (a string only needs a leading
    integer, "7 (hard)" reads as 7); anything else falls back to the default.
    The result is always clamped to the valid range.
    """
    parsed: Optional[int] = None
    if isinstance(value, bool) or value is None:
        parsed = None
    elif isinstance(value, (int, np.integer)):
        parsed = int(value)
    elif isinstance(value, (float, np.floating)):
        parsed = int(value) if math.isfinite(value) else None
    elif isinstance(value, str):
        m = _LEADING_INT.match(value)
        parsed = int(m.group(1)) if m else None

    if parsed is None:
        parsed = default
    return int(clamp(parsed, MIN_DIFFICULTY, MAX_DIFFICULTY))


def seed_everything(py_seed: Optional[int]):
    """Seed all random number generators"""
    if py_seed is None:
        return
    random.seed(py_seed)
    np.random.seed(py_seed)
