"""
Evaluation script for trained dodger agents
"""

import argparse
import time
import numpy as np
from typing import Optional

from game.dodge import DodgeEnv
from rl.configs.dodge_config import ENV_CONFIG, REWARD_CONFIG


def _make_env(render: bool = False, difficulty: Optional[int] = None) -> DodgeEnv:
    config = dict(ENV_CONFIG, **REWARD_CONFIG)
    if difficulty is not None:
        config["difficulty"] = difficulty
    return DodgeEnv(render_mode="human" if render else None, **config)


def _report(title: str, rewards, lengths, scores):
    print("\n" + "=" * 50)
    print(f"{title} ({len(rewards)} episodes):")
    print(f"Mean Reward: {np.mean(rewards):.2f} ± {np.std(rewards):.2f}")
    print(f"Mean Episode Length: {np.mean(lengths):.1f}")
    print(f"Mean Score: {np.mean(scores):.1f}")
    print(f"Best Score: {int(np.max(scores))}")
    print("=" * 50)


def evaluate_model(
    model_path: str,
    n_episodes: int = 10,
    render: bool = True,
    seed: Optional[int] = None,
    vec_normalize_path: Optional[str] = None,
    difficulty: Optional[int] = None,
):
    """
    Evaluate a trained PPO model

    Args:
        model_path: Path to the saved model
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Random seed for evaluation
        vec_normalize_path: Path to VecNormalize stats
        difficulty: Difficulty override (1-10)
    """
    from stable_baselines3 import PPO
    from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize

    model = PPO.load(model_path)

    base_env = _make_env(render=render, difficulty=difficulty)
    env = DummyVecEnv([lambda: base_env])

    if vec_normalize_path:
        env = VecNormalize.load(vec_normalize_path, env)
        env.training = False
        env.norm_reward = False

    episode_rewards = []
    episode_lengths = []
    episode_scores = []

    for episode in range(n_episodes):
        if seed is not None:
            env.seed(seed + episode)
        obs = env.reset()

        total_reward = 0.0
        steps = 0

        while True:
            action, _ = model.predict(obs, deterministic=True)
            obs, reward, done, info = env.step(action)
            total_reward += reward[0]
            steps += 1

            if render:
                time.sleep(1 / 60)

            if done[0]:
                break

        score = info[0].get("score", 0)
        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(score)

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}, Score = {score}")

    env.close()

    _report("Evaluation Results", episode_rewards, episode_lengths, episode_scores)

    return {
        "mean_reward": float(np.mean(episode_rewards)),
        "std_reward": float(np.std(episode_rewards)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_score": float(np.mean(episode_scores)),
        "episode_rewards": episode_rewards,
        "episode_lengths": episode_lengths,
        "episode_scores": episode_scores,
    }


def compare_with_random(n_episodes: int = 10, seed: Optional[int] = None, difficulty: Optional[int] = None):
    """
    Evaluate a random pointer policy baseline
    """
    print("Evaluating random policy baseline...")

    env = _make_env(render=False, difficulty=difficulty)
    if seed is not None:
        env.action_space.seed(seed)

    episode_rewards = []
    episode_lengths = []
    episode_scores = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info["score"])

    env.close()

    _report("Random Policy Results", episode_rewards, episode_lengths, episode_scores)

    return {
        "mean_reward": float(np.mean(episode_rewards)),
        "std_reward": float(np.std(episode_rewards)),
        "mean_length": float(np.mean(episode_lengths)),
        "mean_score": float(np.mean(episode_scores)),
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate trained dodger agent")
    parser.add_argument(
        "model_path",
        type=str,
        nargs="?",
        default=None,
        help="Path to the trained model (omit to only run the random baseline)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=10,
        help="Number of evaluation episodes (default: 10)",
    )
    parser.add_argument(
        "--no-render",
        action="store_true",
        help="Disable rendering",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--difficulty",
        type=int,
        default=None,
        help=f"Difficulty 1-10 (default: {ENV_CONFIG['difficulty']})",
    )
    parser.add_argument(
        "--vec-normalize",
        type=str,
        default=None,
        help="Path to VecNormalize stats file",
    )
    parser.add_argument(
        "--compare-random",
        action="store_true",
        help="Also evaluate random policy for comparison",
    )

    args = parser.parse_args()

    if args.model_path is None:
        compare_with_random(n_episodes=args.n_episodes, seed=args.seed, difficulty=args.difficulty)
        return

    results = evaluate_model(
        model_path=args.model_path,
        n_episodes=args.n_episodes,
        render=not args.no_render,
        seed=args.seed,
        vec_normalize_path=args.vec_normalize,
        difficulty=args.difficulty,
    )

    if args.compare_random:
        print("\n")
        random_results = compare_with_random(
            n_episodes=args.n_episodes,
            seed=args.seed,
            difficulty=args.difficulty,
        )

        improvement = results["mean_score"] - random_results["mean_score"]
        print(f"\nScore improvement over random: {improvement:.1f}")


if __name__ == "__main__":
    main()
