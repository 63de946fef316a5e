"""Charts for simulation summaries."""

from __future__ import annotations

import matplotlib
matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt

from snakes_skills.stats import SimulationSummary


def make_summary_chart(
    summary: SimulationSummary,
    output_path: str = "simulation.png",
    title: str = "Snakes & Skills Simulation",
) -> str:
    """Game-length histogram next to a bar chart of wins per seat.

    Returns the path to the saved PNG.
    """
    fig, (ax_len, ax_wins) = plt.subplots(1, 2, figsize=(12, 5))

    if summary.turn_counts:
        ax_len.hist(summary.turn_counts, bins=30, color="#4A90D9", edgecolor="white")
        ax_len.axvline(summary.mean_turns, color="#D9534F", linestyle="--",
                       label=f"mean {summary.mean_turns:.1f}")
        ax_len.legend()
    ax_len.set_xlabel("Turns until finished")
    ax_len.set_ylabel("Games")
    ax_len.set_title("Game length")

    names = summary.names
    wins = [summary.wins_by_player.get(n, 0) for n in names]
    bars = ax_wins.bar(names, wins, color="#5CB85C", edgecolor="white")
    for bar, count in zip(bars, wins):
        ax_wins.text(
            bar.get_x() + bar.get_width() / 2, bar.get_height(),
            f"{count}",
            ha="center", va="bottom", fontsize=11, fontweight="bold",
        )
    ax_wins.set_ylabel("First-place finishes")
    ax_wins.set_title("Wins by seat")

    fig.suptitle(title, fontsize=14, fontweight="bold")
    plt.tight_layout()
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
    return output_path
