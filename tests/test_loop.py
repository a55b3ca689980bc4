"""Tests for the game loop scheduler and whole-tick behaviour."""

import random

from game.dodge.entities import PursuerKind
from game.dodge.loop import GameLoop, ManualScheduler
from game.dodge.round import Phase, RoundController
from game.dodge.scores import MemoryScoreStore
from game.dodge.spawner import Spawner

from conftest import NoSpawner, ScriptedRng, place_pursuer


def make_game(spawner=None, capacity=100, store=None):
    controller = RoundController(800, 600, store=store or MemoryScoreStore(), capacity=capacity)
    loop = GameLoop(controller, spawner=spawner or NoSpawner())
    return controller, loop


# --- Scheduler ---

def test_manual_scheduler_runs_pending_once():
    scheduler = ManualScheduler()
    calls = []
    scheduler.request(lambda: calls.append(1))
    assert scheduler.pending
    assert scheduler.pump() is True
    assert scheduler.pump() is False
    assert calls == [1]


def test_manual_scheduler_cancel():
    scheduler = ManualScheduler()
    scheduler.request(lambda: None)
    scheduler.cancel()
    assert not scheduler.pending
    assert scheduler.pump() is False


# --- Frame chain ---

def test_no_frames_while_idle():
    controller, loop = make_game()
    assert not loop.scheduler.pending
    assert loop.run(10) == 0


def test_start_requests_first_frame():
    controller, loop = make_game()
    controller.start(3)
    assert loop.scheduler.pending
    loop.scheduler.pump()
    assert controller.state.frame == 1
    assert controller.state.score > 0
    assert loop.scheduler.pending


def test_restart_replaces_pending_frame():
    controller, loop = make_game()
    controller.start(3)
    loop.run(5)
    controller.start(3)
    assert loop.run(3) == 3
    assert controller.state.frame == 3


def test_menu_stops_the_chain():
    controller, loop = make_game()
    controller.start(3)
    loop.run(5)
    controller.return_to_menu(3)
    assert not loop.scheduler.pending
    assert loop.run(5) == 0
    assert controller.state.frame == 5


def test_stale_frame_does_nothing_outside_playing():
    controller, loop = make_game()
    controller.start(3)
    controller.state.phase = Phase.ENDED
    loop.scheduler.pump()
    assert controller.state.frame == 0
    assert not loop.scheduler.pending


# --- Scoring ---

def test_score_rises_by_one_every_six_ticks():
    controller, loop = make_game()
    controller.start(1)

    previous = 0
    for window in range(1, 101):
        loop.run(6)
        assert controller.phase is Phase.PLAYING
        assert controller.state.display_score == window
        assert controller.state.display_score == previous + 1
        previous = controller.state.display_score
    assert controller.state.frame == 600


def test_display_score_lags_within_window():
    controller, loop = make_game()
    controller.start(1)
    loop.run(5)
    assert controller.state.display_score == 0
    loop.run(1)
    assert controller.state.display_score == 1


def test_long_round_score_does_not_drift_below_tick_count():
    controller, loop = make_game()
    controller.start(1)
    # 1/6 summed this many times lands a hair under the whole point at 21348
    while controller.state.frame < 36000:
        loop.run(6)
        assert controller.state.display_score == controller.state.frame // 6


def test_long_round_final_score_matches_tick_count():
    store = MemoryScoreStore()
    controller, loop = make_game(store=store)
    controller.start(1)
    loop.run(21348)
    result = controller.end_round()
    assert result.final_score == 21348 // 6 == 3558
    assert store.data == {1: 3558}


# --- Collisions ---

def test_pursuer_on_player_ends_round_next_tick():
    controller, loop = make_game()
    controller.start(3)
    place_pursuer(controller, 400, 300, kind=PursuerKind.SMALL)

    loop.scheduler.pump()

    assert controller.phase is Phase.ENDED
    assert controller.state.frame == 1


def test_no_frame_requested_after_game_over_tick():
    controller, loop = make_game()
    controller.start(3)
    loop.run(12)
    requests_before = loop.scheduler.requests
    place_pursuer(controller, 400, 300)

    loop.scheduler.pump()

    assert controller.phase is Phase.ENDED
    assert not loop.scheduler.pending
    assert loop.scheduler.requests == requests_before
    assert loop.run(5) == 0
    assert controller.state.frame == 13


def test_collision_uses_post_move_positions():
    controller, loop = make_game()
    controller.start(3)
    # 26px left of the player, pointing right at it: clear now, touching after one step
    place_pursuer(controller, 374, 300, heading=90.0, speed=2.0)
    assert loop.tick() is False
    assert controller.phase is Phase.ENDED


def test_game_over_records_score():
    store = MemoryScoreStore({3: 1})
    controller, loop = make_game(store=store)
    controller.start(3)
    loop.run(30)
    place_pursuer(controller, 400, 300)
    loop.scheduler.pump()
    assert controller.last_result.final_score == 5
    assert store.data == {3: 5}


def test_restart_after_game_over_resumes():
    controller, loop = make_game()
    controller.start(3)
    place_pursuer(controller, 400, 300)
    loop.scheduler.pump()
    assert controller.phase is Phase.ENDED

    controller.restart()

    assert controller.active == []
    assert loop.run(10) == 10
    assert controller.phase is Phase.PLAYING


# --- Spawning and the pool ---

def test_spawn_happens_at_interval():
    controller = RoundController(800, 600, store=MemoryScoreStore())
    loop = GameLoop(controller, spawner=Spawner(controller.pool, ScriptedRng()))
    controller.start(10)
    loop.run(14)
    assert controller.active == []
    loop.run(1)
    assert len(controller.active) == 1


def test_pool_invariant_holds_every_tick():
    controller = RoundController(800, 600, store=MemoryScoreStore(), capacity=100)
    loop = GameLoop(controller, spawner=Spawner(controller.pool, random.Random(3)))
    controller.start(10)
    pool = controller.pool

    rnd = random.Random(11)
    for _ in range(3000):
        if controller.phase is not Phase.PLAYING:
            controller.restart()
        controller.pointer_moved(rnd.uniform(0, 800), rnd.uniform(0, 600))
        loop.scheduler.pump()
        assert pool.free_count + pool.active_count == pool.capacity
        assert pool.active_count == len(controller.active)
        assert all(p.active for p in controller.active)


def test_full_pool_keeps_active_count():
    controller = RoundController(800, 600, store=MemoryScoreStore(), capacity=100)
    spawner = Spawner(controller.pool, ScriptedRng())
    controller.start(3)
    for _ in range(100):
        spawner.spawn(3, controller.active, controller.viewport)
    assert len(controller.active) == 100

    assert spawner.spawn(3, controller.active, controller.viewport) is None
    assert len(controller.active) == 100
