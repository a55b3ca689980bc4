"""
Round/score controller: phase machine, score bookkeeping and high scores.

IDLE --start--> PLAYING --collision--> ENDED --restart--> PLAYING
PLAYING/ENDED --return_to_menu--> IDLE

Listeners registered with ``subscribe`` receive a ``PhaseChange`` on every
transition; presentation layers switch screens from those events and the
game loop uses them to start and stop frame scheduling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional

from .config import DEFAULT_DIFFICULTY, GAME_CONFIG, MAX_ENTITIES, SCORE_PER_TICK, TICKS_PER_POINT
from .entities import Player, Pursuer, Viewport
from .pool import EntityPool, RenderSink
from .scores import HighScoreTable
from .tracker import PlayerTracker
from .utils import parse_difficulty


class Phase(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    ENDED = "ended"


@dataclass
class RoundState:
    phase: Phase = Phase.IDLE
    score: float = 0.0
    frame: int = 0
    difficulty: int = DEFAULT_DIFFICULTY
    active: List[Pursuer] = field(default_factory=list)

    @property
    def display_score(self) -> int:
        # Snap to whole ticks first: summing 1/6 drifts below k after enough frames
        ticks = int(round(self.score / SCORE_PER_TICK))
        return ticks // TICKS_PER_POINT


@dataclass
class RoundResult:
    final_score: int
    difficulty: int
    high_score: int
    new_high_score: bool


@dataclass
class PhaseChange:
    previous: Phase
    current: Phase
    difficulty: int
    result: Optional[RoundResult] = None


Listener = Callable[[PhaseChange], None]


class RoundController:
    """Owns the round state, the pursuer pool, the player and the high score table"""

    def __init__(
        self,
        width: float = GAME_CONFIG["width"],
        height: float = GAME_CONFIG["height"],
        store=None,
        capacity: int = MAX_ENTITIES,
        render_sink: Optional[RenderSink] = None,
        verbose: int = 0,
    ):
        self.viewport = Viewport(width, height)
        self.state = RoundState()
        self.render_sink = render_sink
        self.pool = EntityPool(capacity, render_sink)

        cx, cy = self.viewport.center
        self.player = Player(x=cx, y=cy, target_x=cx, target_y=cy)
        self.tracker = PlayerTracker(self.player)

        self.high_scores = HighScoreTable(store)
        self.last_result: Optional[RoundResult] = None
        self.verbose = verbose
        self._listeners: List[Listener] = []

    # ----------------------------
    # Queries
    # ----------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def difficulty(self) -> int:
        return self.state.difficulty

    @property
    def active(self) -> List[Pursuer]:
        return self.state.active

    def high_score(self, difficulty: Optional[int] = None) -> int:
        if difficulty is None:
            difficulty = self.state.difficulty
        return self.high_scores.get(difficulty)

    def subscribe(self, listener: Listener) -> Listener:
        self._listeners.append(listener)
        return listener

    # ----------------------------
    # Commands
    # ----------------------------

    def set_difficulty(self, difficulty: Any) -> int:
        self.state.difficulty = parse_difficulty(difficulty)
        return self.state.difficulty

    def start(self, difficulty: Any = None) -> None:
        self.set_difficulty(difficulty)
        self._begin_round()

    def restart(self) -> None:
        """Start again at the current difficulty"""
        self._begin_round()

    def return_to_menu(self, difficulty: Any = None) -> None:
        self.set_difficulty(difficulty)
        self.clear_pursuers()
        self._set_phase(Phase.IDLE)

    def end_round(self) -> Optional[RoundResult]:
        """Freeze the round and record its score. No-op outside PLAYING."""
        st = self.state
        if st.phase is not Phase.PLAYING:
            return self.last_result

        final = st.display_score
        new_record = self.high_scores.submit(st.difficulty, final)
        result = RoundResult(
            final_score=final,
            difficulty=st.difficulty,
            high_score=self.high_scores.get(st.difficulty),
            new_high_score=new_record,
        )
        self.last_result = result

        if self.verbose > 0:
            tag = " (new high score!)" if new_record else ""
            print(f"[RoundController] Round over at frame {st.frame}: "
                  f"score {final}, difficulty {st.difficulty}, best {result.high_score}{tag}")

        self._set_phase(Phase.ENDED, result)
        return result

    # ----------------------------
    # Environment input
    # ----------------------------

    def pointer_moved(self, x: float, y: float) -> None:
        self.tracker.pointer_moved(x, y)

    def resize(self, width: float, height: float) -> None:
        self.viewport.width = width
        self.viewport.height = height
        # Pursuers placed for the old bounds are dropped; the spawner refills
        if self.state.phase is Phase.PLAYING:
            self.clear_pursuers()

    def clear_pursuers(self) -> None:
        self.pool.release_all(self.state.active)

    # ----------------------------
    # Internals
    # ----------------------------

    def _begin_round(self) -> None:
        st = self.state
        st.score = 0.0
        st.frame = 0
        self.clear_pursuers()
        cx, cy = self.viewport.center
        self.tracker.reset(cx, cy)
        self.last_result = None
        self._set_phase(Phase.PLAYING)

    def _set_phase(self, phase: Phase, result: Optional[RoundResult] = None) -> None:
        previous = self.state.phase
        self.state.phase = phase
        event = PhaseChange(previous=previous, current=phase, difficulty=self.state.difficulty, result=result)
        for listener in list(self._listeners):
            listener(event)
