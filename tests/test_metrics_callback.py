"""Tests for the per-episode training metrics callback."""

import csv
from types import SimpleNamespace

import pytest

pytest.importorskip("stable_baselines3")

from rl.metrics_callback import CSV_FIELDS, MetricsCallback, episode_from_info


class RecordingLogger:
    def __init__(self):
        self.values = []

    def record(self, key, value):
        self.values.append((key, value))


def make_callback(tmp_path, **kwargs):
    cb = MetricsCallback(log_dir=str(tmp_path / "logs"), algo_name="ppo", verbose=0, **kwargs)
    cb.model = SimpleNamespace(logger=RecordingLogger())
    return cb


def collided(reward, length, score, difficulty=3):
    return {"episode": {"r": reward, "l": length}, "score": score,
            "final_score": score, "difficulty": difficulty}


def truncated(reward, length, score, difficulty=3):
    return {"episode": {"r": reward, "l": length}, "score": score, "difficulty": difficulty}


def step(cb, timesteps, infos, dones):
    cb.num_timesteps = timesteps
    cb.locals = {"infos": infos, "dones": dones}
    return cb._on_step()


# --- Record extraction ---

def test_mid_episode_info_has_no_record():
    assert episode_from_info({"score": 4, "difficulty": 3}, 10, 1) is None


def test_collision_episode_is_not_survived():
    record = episode_from_info(collided(12.5, 90, 15), 90, 1)
    assert record.score == 15
    assert record.length == 90
    assert record.survived is False


def test_truncated_episode_is_survived():
    record = episode_from_info(truncated(300.0, 2000, 333, difficulty=7), 2000, 4)
    assert record.survived is True
    assert record.difficulty == 7
    assert record.episode == 4


# --- Callback ---

def test_only_finished_episodes_are_recorded(tmp_path):
    cb = make_callback(tmp_path)
    cb._on_training_start()
    assert step(cb, 2, [{"score": 0}, collided(1.0, 6, 1)], [False, True])
    # done without Monitor info is skipped
    assert step(cb, 4, [{"score": 3}, {"score": 0}], [True, False])
    cb._on_training_end()

    assert len(cb.records) == 1
    assert cb.records[0].timestep == 2


def test_csv_rows_follow_episodes(tmp_path):
    cb = make_callback(tmp_path)
    cb._on_training_start()
    step(cb, 120, [collided(10.0, 120, 20), truncated(50.0, 300, 50, difficulty=5)], [True, True])
    cb._on_training_end()

    with open(cb.csv_path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert list(rows[0].keys()) == CSV_FIELDS
    assert [row["episode"] for row in rows] == ["1", "2"]
    assert [row["score"] for row in rows] == ["20", "50"]
    assert [row["survived"] for row in rows] == ["0", "1"]
    assert rows[1]["difficulty"] == "5"


def test_scalars_go_to_model_logger(tmp_path):
    cb = make_callback(tmp_path)
    cb._on_training_start()
    step(cb, 60, [collided(4.0, 60, 10)], [True])
    cb._on_training_end()

    assert dict(cb.model.logger.values) == {
        "dodge/episode_reward": 4.0,
        "dodge/episode_length": 60,
        "dodge/score": 10,
        "dodge/survived": 0.0,
    }


def test_tensorboard_can_be_disabled(tmp_path):
    cb = make_callback(tmp_path, tensorboard=False)
    cb._on_training_start()
    step(cb, 60, [collided(4.0, 60, 10)], [True])
    cb._on_training_end()
    assert cb.model.logger.values == []


def test_summary(tmp_path):
    cb = make_callback(tmp_path)
    assert cb.get_summary() == {}

    cb._on_training_start()
    step(cb, 60, [collided(2.0, 60, 10)], [True])
    step(cb, 300, [truncated(6.0, 240, 40)], [True])
    cb._on_training_end()

    summary = cb.get_summary()
    assert summary["total_episodes"] == 2
    assert summary["mean_reward"] == pytest.approx(4.0)
    assert summary["std_reward"] == pytest.approx(2.0)
    assert summary["mean_length"] == pytest.approx(150.0)
    assert summary["mean_score"] == pytest.approx(25.0)
    assert summary["best_score"] == 40
    assert summary["survival_rate"] == pytest.approx(0.5)
