"""
High score table and its persistence backends
"""

from __future__ import annotations

import json
import math
import os
from typing import Any, Dict, Optional

from .config import MAX_DIFFICULTY, MIN_DIFFICULTY


def sanitize_scores(raw: Any) -> Dict[int, int]:
    """
    Coerce loaded data into {difficulty: score}.

    Anything that is not a mapping becomes an empty table; entries with an
    unknown difficulty or a non-integer/negative score are dropped.
    """
    if not isinstance(raw, dict):
        return {}

    scores: Dict[int, int] = {}
    for key, value in raw.items():
        try:
            difficulty = int(key)
        except (TypeError, ValueError):
            continue
        if not MIN_DIFFICULTY <= difficulty <= MAX_DIFFICULTY:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if not math.isfinite(value) or value < 0 or int(value) != value:
            continue
        scores[difficulty] = int(value)
    return scores


class MemoryScoreStore:
    """In-process store; used by the environment and tests"""

    def __init__(self, initial: Optional[Dict[int, int]] = None):
        self.data: Dict[int, int] = dict(initial or {})
        self.save_count = 0

    def load(self) -> Dict[int, int]:
        return sanitize_scores(self.data)

    def save(self, scores: Dict[int, int]) -> None:
        self.data = dict(scores)
        self.save_count += 1


class JsonScoreStore:
    """High scores kept as a JSON object keyed by difficulty"""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> Dict[int, int]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError):
            return {}
        return sanitize_scores(raw)

    def save(self, scores: Dict[int, int]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({str(k): v for k, v in sorted(scores.items())}, f, indent=2)


class HighScoreTable:
    """Best score per difficulty; entries only ever grow"""

    def __init__(self, store=None):
        self.store = store if store is not None else MemoryScoreStore()
        self.scores: Dict[int, int] = self.store.load()

    def get(self, difficulty: int) -> int:
        return self.scores.get(difficulty, 0)

    def submit(self, difficulty: int, score: int) -> bool:
        """Record ``score`` if it beats the stored best. Returns True on a new record."""
        if score <= self.get(difficulty):
            return False
        self.scores[difficulty] = score
        self.store.save(dict(self.scores))
        return True
