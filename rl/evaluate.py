"""
Evaluation script for baseline policies on the Emu War environment
"""

import os
import csv
import argparse
import logging
from typing import Callable, Dict, List, Optional

import numpy as np

from emu_war import EmuWarEnv
from rl.configs.emu_config import ENV_CONFIG, REWARD_CONFIGS, EVAL_CONFIG

# Action indices of EmuWarEnv: 0 stay, 1 up, 2 down, 3 left, 4 right
STAY, UP, DOWN, LEFT, RIGHT = range(5)

CSV_FIELDS = ["policy", "episode", "reward", "length", "score", "crops", "lives", "outcome"]


def random_policy(env: EmuWarEnv, obs: np.ndarray) -> int:
    """Uniformly random move"""
    return int(env.action_space.sample())


def reachable(env: EmuWarEnv, crop) -> bool:
    """Whether the player can get within pickup range of ``crop`` at all"""
    game = env.game
    max_x = game.state.width - game.player_margin
    max_y = game.state.height - game.player_margin
    nearest_x = min(max(crop.x, 0.0), max_x)
    nearest_y = min(max(crop.y, 0.0), max_y)
    return ((crop.x - nearest_x) ** 2 + (crop.y - nearest_y) ** 2) ** 0.5 < game.crop_threshold


def greedy_policy(env: EmuWarEnv, obs: np.ndarray) -> int:
    """Walk straight at the nearest reachable crop, ignoring bullets"""
    state = env.game.state
    p = state.player
    standing = [c for c in state.crops if not c.destroyed and reachable(env, c)]
    if not standing:
        return STAY

    target = min(standing, key=lambda c: (c.x - p.x) ** 2 + (c.y - p.y) ** 2)
    dx = target.x - p.x
    dy = target.y - p.y
    if abs(dx) >= abs(dy):
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


POLICIES: Dict[str, Callable[[EmuWarEnv, np.ndarray], int]] = {
    "random": random_policy,
    "greedy": greedy_policy,
}


def run_episodes(
    policy: str = "random",
    n_episodes: int = 10,
    seed: Optional[int] = None,
    reward_config: str = "baseline",
    env_config: Optional[dict] = None,
    verbose: int = 1,
) -> List[dict]:
    """
    Roll out a baseline policy and collect one row of metrics per episode

    Args:
        policy: Name in POLICIES
        n_episodes: Number of episodes to run
        seed: Base seed; episode i uses seed + i
        reward_config: Name in REWARD_CONFIGS
        env_config: Overrides for ENV_CONFIG
        verbose: 0 silent, 1 one line per episode
    """
    if policy not in POLICIES:
        raise ValueError(f"Unknown policy: {policy}")
    if reward_config not in REWARD_CONFIGS:
        raise ValueError(f"Unknown reward config: {reward_config}")

    config = dict(ENV_CONFIG)
    config.update(env_config or {})
    env = EmuWarEnv(reward_config=REWARD_CONFIGS[reward_config], **config)
    if seed is not None:
        env.action_space.seed(seed)
    act = POLICIES[policy]

    rows = []
    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            obs, reward, terminated, truncated, info = env.step(act(env, obs))
            total_reward += reward
            steps += 1

        rows.append({
            "policy": policy,
            "episode": episode,
            "reward": total_reward,
            "length": steps,
            "score": info["score"],
            "crops": info["crops_destroyed"],
            "lives": info["lives"],
            "outcome": info["phase"] if terminated else "timeout",
        })

        if verbose > 0:
            print(f"[{policy}] Episode {episode + 1}/{n_episodes}: "
                  f"Reward = {total_reward:.2f}, Length = {steps}, Outcome = {rows[-1]['outcome']}")

    env.close()
    return rows


def summarize(rows: List[dict]) -> dict:
    """Aggregate statistics over episode rows"""
    if not rows:
        return {}
    rewards = np.array([r["reward"] for r in rows], dtype=np.float64)
    lengths = np.array([r["length"] for r in rows], dtype=np.float64)
    return {
        "episodes": len(rows),
        "mean_reward": float(np.mean(rewards)),
        "std_reward": float(np.std(rewards)),
        "mean_length": float(np.mean(lengths)),
        "mean_crops": float(np.mean([r["crops"] for r in rows])),
        "win_rate": sum(1 for r in rows if r["outcome"] == "victory") / len(rows),
    }


def write_csv(rows: List[dict], path: str) -> str:
    """Write episode rows to CSV, creating the parent directory"""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in rows:
            writer.writerow({k: row[k] for k in CSV_FIELDS})
    return path


def main():
    parser = argparse.ArgumentParser(description="Evaluate baseline policies on Emu War")
    parser.add_argument(
        "--policies",
        nargs="+",
        default=EVAL_CONFIG["policies"],
        choices=sorted(POLICIES),
        help="Policies to evaluate (default: random greedy)",
    )
    parser.add_argument("--episodes", type=int, default=EVAL_CONFIG["n_episodes"], help="Episodes per policy")
    parser.add_argument("--seed", type=int, default=EVAL_CONFIG["seed"], help="Base random seed")
    parser.add_argument(
        "--reward-config",
        type=str,
        default="baseline",
        choices=sorted(REWARD_CONFIGS),
        help="Reward shaping preset (default: baseline)",
    )
    parser.add_argument("--log-dir", type=str, default=EVAL_CONFIG["log_dir"], help="Where to write metrics CSVs")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging from the game core")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    for policy in args.policies:
        print(f"\n{'='*60}")
        print(f"Evaluating {policy} policy for {args.episodes} episodes...")
        print(f"{'='*60}\n")

        rows = run_episodes(
            policy=policy,
            n_episodes=args.episodes,
            seed=args.seed,
            reward_config=args.reward_config,
        )
        path = write_csv(rows, os.path.join(args.log_dir, f"{policy}_metrics.csv"))
        summary = summarize(rows)

        print("\n" + "="*50)
        print(f"{policy} Results ({summary['episodes']} episodes):")
        print(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        print(f"Mean Episode Length: {summary['mean_length']:.1f}")
        print(f"Mean Crops Destroyed: {summary['mean_crops']:.1f}")
        print(f"Win Rate: {summary['win_rate']:.0%}")
        print(f"Metrics saved to {path}")
        print("="*50)


if __name__ == "__main__":
    main()
