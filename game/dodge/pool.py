"""
Fixed-capacity pursuer pool.

Slots are plain integer indices into a pre-allocated list of ``Pursuer``
records. A slot is either on the free list or active; nothing is allocated
after construction, so per-tick work is bounded by the capacity.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .config import MAX_ENTITIES
from .entities import Pursuer

RenderSink = Callable[[Pursuer], None]


class EntityPool:
    """Index-based slot arena with an explicit free list"""

    def __init__(self, capacity: int = MAX_ENTITIES, render_sink: Optional[RenderSink] = None):
        assert capacity > 0, "Pool capacity must be positive"
        self.capacity = capacity
        self.render_sink = render_sink
        self._records: List[Pursuer] = [Pursuer(slot=i) for i in range(capacity)]
        # Reversed so slot 0 is handed out first
        self._free: List[int] = list(range(capacity - 1, -1, -1))

    @property
    def free_count(self) -> int:
        return len(self._free)

    @property
    def active_count(self) -> int:
        return self.capacity - len(self._free)

    def get(self, slot: int) -> Pursuer:
        return self._records[slot]

    def acquire(self) -> Optional[int]:
        """Take a free slot, or None when the pool is exhausted"""
        if not self._free:
            return None
        slot = self._free.pop()
        self._records[slot].active = True
        return slot

    def release(self, slot: int) -> None:
        """Return a slot to the free list and hide its pursuer"""
        rec = self._records[slot]
        assert rec.active, f"slot {slot} released while free"
        rec.active = False
        rec.visible = False
        rec.vx = 0.0
        rec.vy = 0.0
        self._free.append(slot)
        if self.render_sink is not None:
            self.render_sink(rec)

    def release_all(self, active: List[Pursuer]) -> None:
        """Release every pursuer in an active list and empty it"""
        for p in active:
            self.release(p.slot)
        active.clear()
