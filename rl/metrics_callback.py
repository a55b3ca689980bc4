"""
Per-episode metrics for Triangle Dodger training runs.

Each finished episode becomes one CSV row (score, difficulty, whether the
agent was still alive at truncation) and, optionally, a set of
``dodge/*`` TensorBoard scalars on the model's logger.
"""

import os
import csv
from dataclasses import dataclass, asdict, fields
from typing import Dict, List, Any, Optional

import numpy as np
from stable_baselines3.common.callbacks import BaseCallback


@dataclass
class EpisodeRecord:
    timestep: int
    episode: int
    reward: float
    length: int
    score: int
    difficulty: int
    survived: bool


CSV_FIELDS = [f.name for f in fields(EpisodeRecord)]


def episode_from_info(info: Dict[str, Any], timestep: int, episode: int) -> Optional[EpisodeRecord]:
    """Build a record from a Monitor-wrapped final-step info dict, or None mid-episode"""
    ep = info.get("episode")
    if ep is None:
        return None
    # final_score is only present when a collision ended the round
    collided = "final_score" in info
    return EpisodeRecord(
        timestep=timestep,
        episode=episode,
        reward=float(ep["r"]),
        length=int(ep["l"]),
        score=int(info.get("final_score", info.get("score", 0))),
        difficulty=int(info.get("difficulty", 0)),
        survived=not collided,
    )


class MetricsCallback(BaseCallback):
    """Collects an EpisodeRecord per finished episode across all vectorized envs."""

    def __init__(
        self,
        log_dir: str,
        algo_name: str,
        tensorboard: bool = True,
        report_every: int = 10,
        verbose: int = 1,
    ):
        super().__init__(verbose)
        self.log_dir = log_dir
        self.algo_name = algo_name
        self.tensorboard = tensorboard
        self.report_every = report_every

        self.records: List[EpisodeRecord] = []
        self.csv_path = os.path.join(log_dir, f"{algo_name}_metrics.csv")
        self._csv_file = None
        self._writer: Optional[csv.DictWriter] = None

    def _on_training_start(self) -> None:
        os.makedirs(self.log_dir, exist_ok=True)
        self._csv_file = open(self.csv_path, "w", newline="")
        self._writer = csv.DictWriter(self._csv_file, fieldnames=CSV_FIELDS)
        self._writer.writeheader()
        self._csv_file.flush()

        if self.verbose > 0:
            print(f"[MetricsCallback] Logging to {self.csv_path}")

    def _on_step(self) -> bool:
        dones = self.locals.get("dones", [])
        infos = self.locals.get("infos", [])

        for done, info in zip(dones, infos):
            if not done:
                continue
            record = episode_from_info(info, self.num_timesteps, len(self.records) + 1)
            if record is not None:
                self._record_episode(record)

        return True

    def _record_episode(self, record: EpisodeRecord) -> None:
        self.records.append(record)

        if self._writer is not None:
            row = asdict(record)
            row["survived"] = int(record.survived)
            self._writer.writerow(row)
            self._csv_file.flush()

        if self.tensorboard:
            self.logger.record("dodge/episode_reward", record.reward)
            self.logger.record("dodge/episode_length", record.length)
            self.logger.record("dodge/score", record.score)
            self.logger.record("dodge/survived", float(record.survived))

        if self.verbose > 0 and record.episode % self.report_every == 0:
            recent = self.records[-self.report_every:]
            best = max(r.score for r in recent)
            mean = sum(r.score for r in recent) / len(recent)
            print(f"[{self.algo_name}] Episode {record.episode} @ {self.num_timesteps} steps: "
                  f"score mean {mean:.1f}, best {best}")

    def _on_training_end(self) -> None:
        if self._csv_file is not None:
            self._csv_file.close()
            self._csv_file = None
            self._writer = None
        if self.verbose > 0:
            print(f"[MetricsCallback] {len(self.records)} episodes written to {self.csv_path}")

    def get_summary(self) -> Dict[str, Any]:
        if not self.records:
            return {}

        rewards = np.array([r.reward for r in self.records])
        scores = np.array([r.score for r in self.records])
        return {
            "total_episodes": len(self.records),
            "mean_reward": float(rewards.mean()),
            "std_reward": float(rewards.std()),
            "mean_length": float(np.mean([r.length for r in self.records])),
            "mean_score": float(scores.mean()),
            "best_score": int(scores.max()),
            "survival_rate": float(np.mean([r.survived for r in self.records])),
        }
