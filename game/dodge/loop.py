"""
Game loop scheduler.

Each frame callback runs one tick and, if the round is still being played,
requests the next frame. The phase is checked again right before that
request, so the tick that ends a round never schedules a successor.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .collision import detect_collision
from .config import SCORE_PER_TICK
from .round import Phase, PhaseChange, RoundController
from .spawner import Spawner
from .steering import update_pursuers


class ManualScheduler:
    """
    Holds at most one pending frame callback until ``pump`` is called.

    The arcade window pumps it from ``on_update`` (one call per display
    refresh); the gym environment pumps it once per ``step``.
    """

    def __init__(self):
        self._pending: Optional[Callable[[], None]] = None
        self.requests = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def request(self, callback: Callable[[], None]) -> None:
        self._pending = callback
        self.requests += 1

    def cancel(self) -> None:
        self._pending = None

    def pump(self) -> bool:
        """Run the pending callback, if any. Returns whether one ran."""
        callback = self._pending
        if callback is None:
            return False
        self._pending = None
        callback()
        return True


class GameLoop:
    def __init__(
        self,
        controller: RoundController,
        scheduler: Optional[Any] = None,
        spawner: Optional[Any] = None,
        rng: Optional[Any] = None,
    ):
        self.controller = controller
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.spawner = spawner if spawner is not None else Spawner(controller.pool, rng)
        controller.subscribe(self._on_phase_change)

    def _on_phase_change(self, event: PhaseChange) -> None:
        # Drop whatever was queued; a fresh round gets a fresh frame chain
        self.scheduler.cancel()
        if event.current is Phase.PLAYING:
            self.scheduler.request(self._frame)

    def _frame(self) -> None:
        if self.controller.phase is not Phase.PLAYING:
            return
        self.tick()
        if self.controller.phase is Phase.PLAYING:
            self.scheduler.request(self._frame)

    def tick(self) -> bool:
        """
        Advance the simulation one step.

        Order: clock and score, spawn, player easing, steer/move/cull,
        then collisions against the post-move positions.
        Returns False when this tick ended the round.
        """
        c = self.controller
        st = c.state

        st.frame += 1
        st.score += SCORE_PER_TICK

        self.spawner.update(st.frame, st.difficulty, st.active, c.viewport)
        c.tracker.update()
        update_pursuers(st.active, c.player, c.pool, c.viewport, c.render_sink)

        if detect_collision(c.player, st.active) is not None:
            c.end_round()
            return False
        return True

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Pump frames until the chain stops (or max_ticks). Returns frames run."""
        frames = 0
        while max_ticks is None or frames < max_ticks:
            if not self.scheduler.pump():
                break
            frames += 1
        return frames
