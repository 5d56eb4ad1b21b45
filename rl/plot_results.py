"""
Plotting script for baseline policy evaluations.
Generates per-policy episode plots and a comparison figure.
"""

import os
import argparse
import pandas as pd
import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from typing import Dict, Optional


def load_metrics(log_dir: str, policy: str) -> Optional[pd.DataFrame]:
    """Load the metrics CSV written by rl.evaluate for one policy."""
    csv_path = os.path.join(log_dir, f"{policy}_metrics.csv")
    if os.path.exists(csv_path):
        return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def plot_policy(
    df: pd.DataFrame,
    policy: str,
    output_dir: str,
    window: int = 5,
):
    """Plot episode metrics for a single policy."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{policy} policy", fontsize=16, fontweight="bold")

    episodes = df["episode"].values

    # Episode reward
    ax = axes[0, 0]
    rewards = df["reward"].values
    smoothed = smooth(rewards, window)
    ax.plot(episodes, rewards, alpha=0.3, label="raw")
    ax.plot(episodes[:len(smoothed)], smoothed, linewidth=2, label="smoothed")
    ax.set_xlabel("Episode")
    ax.set_ylabel("Episode Reward")
    ax.set_title("Episode Reward")
    ax.legend()
    ax.grid(True, alpha=0.3)

    # Crops destroyed
    ax = axes[0, 1]
    ax.bar(episodes, df["crops"].values, color="goldenrod")
    ax.set_xlabel("Episode")
    ax.set_ylabel("Crops Destroyed")
    ax.set_title("Crops Destroyed per Episode")
    ax.grid(True, alpha=0.3)

    # Episode length
    ax = axes[1, 0]
    ax.plot(episodes, df["length"].values, linewidth=2, color="orange")
    ax.set_xlabel("Episode")
    ax.set_ylabel("Ticks")
    ax.set_title("Episode Length")
    ax.grid(True, alpha=0.3)

    # Outcomes
    ax = axes[1, 1]
    counts = df["outcome"].value_counts()
    ax.bar(counts.index.astype(str), counts.values, edgecolor="black")
    ax.set_ylabel("Episodes")
    ax.set_title("Outcomes")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{policy}_episodes.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {policy} plot to {save_path}")
    return save_path


def plot_comparison(data: Dict[str, pd.DataFrame], output_dir: str):
    """Box plots of reward and crops across policies."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle("Policy Comparison", fontsize=16, fontweight="bold")

    labels = list(data.keys())

    ax = axes[0]
    ax.boxplot([df["reward"].values for df in data.values()], patch_artist=True)
    ax.set_xticks(range(1, len(labels) + 1), labels)
    ax.set_ylabel("Episode Reward")
    ax.set_title("Reward")
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.boxplot([df["crops"].values for df in data.values()], patch_artist=True)
    ax.set_xticks(range(1, len(labels) + 1), labels)
    ax.set_ylabel("Crops Destroyed")
    ax.set_title("Crops")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "policy_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved comparison plot to {save_path}")
    return save_path


def main():
    parser = argparse.ArgumentParser(description="Plot policy evaluation results")
    parser.add_argument("--log-dir", type=str, default="./logs", help="Directory containing metrics CSVs")
    parser.add_argument("--output-dir", type=str, default="./plots", help="Directory to save plots")
    parser.add_argument("--window", type=int, default=5, help="Smoothing window size (default: 5)")
    parser.add_argument("--policies", nargs="+", default=["random", "greedy"], help="Policies to plot")

    args = parser.parse_args()

    # Headless: figures only go to files
    matplotlib.use("Agg")

    print(f"Loading metrics from {args.log_dir}...")

    data = {}
    for policy in args.policies:
        df = load_metrics(args.log_dir, policy)
        if df is not None:
            print(f"  Loaded {policy}: {len(df)} episodes")
            data[policy] = df
        else:
            print(f"  No data found for {policy}")

    if not data:
        print("\nNo data found! Run `python -m rl.evaluate` first.")
        return

    for policy, df in data.items():
        plot_policy(df, policy, args.output_dir, args.window)

    if len(data) > 1:
        plot_comparison(data, args.output_dir)

    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
