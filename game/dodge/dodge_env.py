"""
DodgeEnv - Triangle Dodger as a Gymnasium environment
-----------------------------------------------------
- One round of the game per episode, driven one tick per step
- Continuous action: where the pointer is, in [-1, 1] screen coordinates
  (the player eases toward it exactly as it does under a mouse)
- Vector observation: player position + top-K nearest pursuers
- Reward: score gained per surviving tick, penalty on collision
- Optional Arcade rendering through the same window used for play

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.dodge.dodge_env
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import DEFAULT_DIFFICULTY, KIND_CONFIG, MAX_DIFFICULTY, MAX_ENTITIES, SCORE_PER_TICK
from .entities import Pursuer, PursuerKind
from .loop import GameLoop
from .round import Phase, RoundController
from .scores import MemoryScoreStore
from .spawner import speed_multiplier
from .utils import clamp, seed_everything

# Fastest pursuer possible, used to normalise velocities
MAX_PURSUER_SPEED = max(cfg["speed_range"][1] for cfg in KIND_CONFIG.values()) * speed_multiplier(MAX_DIFFICULTY)


class DodgeEnv(gym.Env):
    """Headless Triangle Dodger with optional Arcade rendering"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        difficulty: int = DEFAULT_DIFFICULTY,
        max_steps: int = 3600,  # 60s at 60 FPS
        k_pursuers: int = 8,
        capacity: int = MAX_ENTITIES,
        reward_survive: float = SCORE_PER_TICK,
        reward_death: float = 5.0,
        store=None,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render mode: {render_mode}"
        self.render_mode = render_mode

        self.width = width
        self.height = height
        self.difficulty = difficulty
        self.max_steps = max_steps
        self.k_pursuers = k_pursuers
        self.reward_survive = reward_survive
        self.reward_death = reward_death

        self.controller = RoundController(
            width,
            height,
            store=store if store is not None else MemoryScoreStore(),
            capacity=capacity,
            render_sink=self._render_sink,
        )
        self.loop = GameLoop(self.controller)

        # Action: pointer target, x and y mapped from [-1, 1] to the screen
        self.action_space = spaces.Box(low=-1.0, high=1.0, shape=(2,), dtype=np.float32)

        # Observation (vector)
        # Player: pos(2) pointer offset(2)
        # Each pursuer: rel pos(2) vel(2) big flag(1)
        obs_dim = 2 + 2 + self.k_pursuers * 5
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self._window = None
        self._step_count = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        seed_everything(seed)

        difficulty = (options or {}).get("difficulty", self.difficulty)
        self._step_count = 0
        self.controller.start(difficulty)

        return self._get_obs(), self._get_info()

    def step(self, action):
        ax = clamp(float(action[0]), -1.0, 1.0)
        ay = clamp(float(action[1]), -1.0, 1.0)
        self.controller.pointer_moved((ax + 1) * 0.5 * self.width, (ay + 1) * 0.5 * self.height)

        ticked = self.loop.scheduler.pump()

        terminated = self.controller.phase is Phase.ENDED
        reward = 0.0
        if ticked:
            reward = -self.reward_death if terminated else self.reward_survive

        self._step_count += 1
        truncated = (not terminated) and self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _nearest(self) -> List[Pursuer]:
        px, py = self.controller.player.x, self.controller.player.y
        return sorted(
            self.controller.active,
            key=lambda p: (p.x - px) ** 2 + (p.y - py) ** 2,
        )[: self.k_pursuers]

    def _get_obs(self) -> np.ndarray:
        player = self.controller.player
        w, h = self.controller.viewport.width, self.controller.viewport.height

        obs_parts = [
            clamp(player.x / w * 2 - 1, -1, 1),
            clamp(player.y / h * 2 - 1, -1, 1),
            clamp((player.target_x - player.x) / w, -1, 1),
            clamp((player.target_y - player.y) / h, -1, 1),
        ]

        nearest = self._nearest()
        for i in range(self.k_pursuers):
            if i < len(nearest):
                p = nearest[i]
                obs_parts += [
                    clamp((p.x - player.x) / w, -1, 1),
                    clamp((p.y - player.y) / h, -1, 1),
                    clamp(p.vx / MAX_PURSUER_SPEED, -1, 1),
                    clamp(p.vy / MAX_PURSUER_SPEED, -1, 1),
                    1.0 if p.kind is PursuerKind.BIG else -1.0,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        st = self.controller.state
        info = {
            "score": st.display_score,
            "frame": st.frame,
            "difficulty": st.difficulty,
            "num_pursuers": len(st.active),
            "free_slots": self.controller.pool.free_count,
            "high_score": self.controller.high_score(),
            "step": self._step_count,
        }
        result = self.controller.last_result
        if result is not None:
            info["final_score"] = result.final_score
            info["new_high_score"] = result.new_high_score
        return info

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def _render_sink(self, pursuer: Pursuer) -> None:
        if self._window is not None:
            self._window.render_pursuer(pursuer)

    def render(self):
        if self.render_mode is None:
            return None

        if self._window is None:
            from .window import DodgeWindow

            self._window = DodgeWindow(controller=self.controller, interactive=False)
            for p in self.controller.active:
                self._window.render_pursuer(p)

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = False, seed: Optional[int] = 42, difficulty: int = DEFAULT_DIFFICULTY):
    """Run one episode with a random pointer policy"""
    env = DodgeEnv(render_mode="human" if render else None, difficulty=difficulty)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f} "
          f"(score {info['score']}, {info['frame']} frames, difficulty {info['difficulty']})")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=False)
