"""
Plotting script for chase training results.
Generates learning curves and algorithm comparison plots from MetricsCallback CSVs.
"""

import os
import argparse
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
from typing import Dict, Optional


def load_metrics(log_dir: str, algo: str) -> Optional[pd.DataFrame]:
    """Load metrics CSV for an algorithm."""
    for csv_path in (os.path.join(log_dir, algo, f"{algo}_metrics.csv"),
                     os.path.join(log_dir, f"{algo}_metrics.csv")):
        if os.path.exists(csv_path):
            return pd.read_csv(csv_path)
    return None


def smooth(data: np.ndarray, window: int = 10) -> np.ndarray:
    """Apply rolling average smoothing."""
    if len(data) < window:
        return data
    kernel = np.ones(window) / window
    return np.convolve(data, kernel, mode="valid")


def _plot_series(ax, df: pd.DataFrame, column: str, window: int, **kwargs):
    values = smooth(df[column].values, window)
    ax.plot(df["timestep"].values[:len(values)], values, linewidth=2, **kwargs)


def plot_learning_curve(
    df: pd.DataFrame,
    algo: str,
    output_dir: str,
    window: int = 50,
):
    """Plot reward, episode length, stars and survival for a single algorithm."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"{algo.upper()} Learning Curves", fontsize=16, fontweight="bold")

    panels = [
        (axes[0, 0], "reward", "Episode Reward", None),
        (axes[0, 1], "length", "Episode Length (ticks)", "orange"),
        (axes[1, 0], "score", "Stars Collected", "goldenrod"),
        (axes[1, 1], "survived", "Survival Rate", "green"),
    ]
    for ax, column, label, color in panels:
        if column not in df.columns:
            ax.axis("off")
            continue
        _plot_series(ax, df, column, window, color=color)
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} vs Timesteps")
        ax.grid(True, alpha=0.3)
    if "survived" in df.columns:
        axes[1, 1].set_ylim(0, 1.1)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, f"{algo}_learning_curve.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved {algo} learning curve to {save_path}")
    return save_path


def plot_comparison(
    data: Dict[str, pd.DataFrame],
    output_dir: str,
    window: int = 50,
):
    """Overlay reward and stars for every algorithm with data."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    fig.suptitle("Algorithm Comparison", fontsize=16, fontweight="bold")

    colors = {"dqn": "#2ecc71", "ppo": "#3498db", "sac": "#e74c3c"}

    for ax, column, label in ((axes[0], "reward", "Episode Reward"),
                              (axes[1], "score", "Stars Collected")):
        for algo, df in data.items():
            if df is not None and len(df) > 0:
                _plot_series(ax, df, column, window, label=algo.upper(),
                             color=colors.get(algo, None))
        ax.set_xlabel("Timesteps")
        ax.set_ylabel(label)
        ax.set_title(f"{label} Comparison")
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()

    os.makedirs(output_dir, exist_ok=True)
    save_path = os.path.join(output_dir, "algorithm_comparison.png")
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()

    print(f"Saved comparison plot to {save_path}")
    return save_path


def generate_summary_report(data: Dict[str, pd.DataFrame], output_dir: str):
    """Generate a text summary report."""
    report_lines = [
        "=" * 60,
        "CHASE TRAINING SUMMARY",
        "=" * 60,
    ]

    for algo, df in data.items():
        if df is None or len(df) == 0:
            continue
        final = df.tail(100)
        report_lines += [
            f"\n{algo.upper()} Results:",
            "-" * 40,
            f"  Total Episodes: {len(df)}",
            f"  Total Timesteps: {df['timestep'].max():,}",
            f"  Mean Reward: {df['reward'].mean():.2f} ± {df['reward'].std():.2f}",
            f"  Best Stars: {df['score'].max()}",
            "\n  Final Performance (last 100 episodes):",
            f"    Mean Reward: {final['reward'].mean():.2f} ± {final['reward'].std():.2f}",
            f"    Mean Stars: {final['score'].mean():.2f}",
            f"    Survival Rate: {final['survived'].mean():.2%}",
        ]

    report_lines.append("\n" + "=" * 60)

    report = "\n".join(report_lines)
    print(report)

    os.makedirs(output_dir, exist_ok=True)
    report_path = os.path.join(output_dir, "training_summary.txt")
    with open(report_path, "w") as f:
        f.write(report)

    print(f"\nSaved summary report to {report_path}")
    return report_path


def main():
    parser = argparse.ArgumentParser(description="Plot chase training results")
    parser.add_argument(
        "--log-dir",
        type=str,
        default="./logs",
        help="Directory containing log files",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default="./plots",
        help="Directory to save plots",
    )
    parser.add_argument(
        "--window",
        type=int,
        default=50,
        help="Smoothing window size (default: 50)",
    )
    parser.add_argument(
        "--algos",
        nargs="+",
        default=["dqn", "ppo", "sac"],
        help="Algorithms to plot",
    )

    args = parser.parse_args()

    print(f"Loading metrics from {args.log_dir}...")

    data = {}
    for algo in args.algos:
        df = load_metrics(args.log_dir, algo)
        if df is not None:
            print(f"  Loaded {algo}: {len(df)} episodes")
        else:
            print(f"  No data found for {algo}")
        data[algo] = df

    if not any(d is not None for d in data.values()):
        print("\nNo data found! Make sure training has generated metrics files.")
        return

    for algo, df in data.items():
        if df is not None:
            plot_learning_curve(df, algo, args.output_dir, args.window)

    if sum(1 for d in data.values() if d is not None) > 1:
        plot_comparison(data, args.output_dir, args.window)

    generate_summary_report(data, args.output_dir)

    print(f"\nAll plots saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
