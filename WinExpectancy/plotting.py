"""
plotting.py

Visualization functions for win probability timelines and the run
expectancy matrix.
"""

import numpy as np
import matplotlib.pyplot as plt
from typing import Optional

from .config import BASE_STATE_NAMES, OUTS, RE_MATRIX
from .timeline import WinProbabilityTimeline


def _save_figure(fig: plt.Figure, save_path: Optional[str], verbose: bool) -> None:
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
        if verbose:
            print(f"Saved plot to {save_path}")


def plot_wp_timeline(
    timeline: WinProbabilityTimeline,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
    figsize: tuple = (12, 6),
    verbose: bool = True,
) -> plt.Figure:
    """
    Plot the home team's win probability across a game.

    Parameters
    ----------
    timeline : WinProbabilityTimeline
        Output of ``aggregate_timeline``
    title : str, optional
        Figure title
    save_path : str, optional
        Path to save figure
    figsize : tuple
        Figure size
    verbose : bool
        Print the saved path

    Returns
    -------
    plt.Figure
    """
    fig, ax = plt.subplots(figsize=figsize)

    if len(timeline) == 0:
        ax.text(0.5, 0.5, "No events", ha="center", va="center", transform=ax.transAxes)
        ax.set_axis_off()
        _save_figure(fig, save_path, verbose)
        return fig

    # x = 0 is the state before the first event
    x = np.arange(len(timeline) + 1)
    home_wp = np.array([timeline.starting_wp] + [p.home_wp_after for p in timeline])
    leverage = np.array([p.leverage_index for p in timeline])

    # Leverage bars behind the WP line
    ax_li = ax.twinx()
    ax_li.bar(x[1:], leverage, width=0.8, color="tab:orange", alpha=0.25, label="Leverage")
    ax_li.set_ylim(0, max(4.0, leverage.max() * 1.1))
    ax_li.set_ylabel("Leverage Index", fontsize=11)

    ax.step(x, home_wp, where="post", color="tab:green", linewidth=2, label="Home WP")
    ax.fill_between(x, home_wp, 50, step="post", where=home_wp >= 50, color="tab:green", alpha=0.15)
    ax.fill_between(x, home_wp, 50, step="post", where=home_wp < 50, color="tab:red", alpha=0.15)
    ax.axhline(50, color="black", linestyle="--", alpha=0.3)

    high_idx = int(np.argmax(home_wp))
    low_idx = int(np.argmin(home_wp))
    ax.plot(x[high_idx], home_wp[high_idx], "g^", markersize=10, label=f"High {timeline.high_point}%")
    ax.plot(x[low_idx], home_wp[low_idx], "rv", markersize=10, label=f"Low {timeline.low_point}%")

    swing = timeline.biggest_swing
    if swing is not None and swing.delta != 0:
        ax.annotate(
            f"{swing.event} ({swing.delta:+d}%)",
            xy=(swing.index + 1, swing.home_wp_after),
            xytext=(0, 25 if swing.delta > 0 else -25),
            textcoords="offset points",
            ha="center",
            fontsize=9,
            fontweight="bold",
            arrowprops={"arrowstyle": "->", "color": "black"},
        )

    # Inning ticks at the first event of each half
    tick_pos, tick_labels = [], []
    last_half = None
    for p in timeline:
        key = (p.inning, p.half)
        if key != last_half:
            tick_pos.append(p.index + 1)
            tick_labels.append(f"{'T' if p.half == 'top' else 'B'}{p.inning}")
            last_half = key
    ax.set_xticks(tick_pos)
    ax.set_xticklabels(tick_labels, fontsize=8)

    ax.set_ylim(0, 100)
    ax.set_xlim(0, len(timeline) + 0.5)
    ax.set_ylabel("Home Win Probability (%)", fontsize=12)
    ax.set_xlabel("Half-Inning", fontsize=12)
    ax.set_zorder(ax_li.get_zorder() + 1)
    ax.patch.set_visible(False)

    home_runs, away_runs = timeline.final_score
    ax.set_title(title or f"Win Probability (Final: Home {home_runs} - Away {away_runs})", fontsize=13)
    ax.legend(loc="upper left", fontsize=9)

    plt.tight_layout()

    _save_figure(fig, save_path, verbose)

    return fig


def plot_re_matrix(
    save_path: Optional[str] = None,
    figsize: tuple = (10, 4),
    verbose: bool = True,
) -> plt.Figure:
    """Heatmap of the run expectancy matrix (outs x base state)."""
    fig, ax = plt.subplots(figsize=figsize)

    im = ax.imshow(RE_MATRIX, aspect="auto", cmap="YlOrRd")
    for i in range(RE_MATRIX.shape[0]):
        for j in range(RE_MATRIX.shape[1]):
            ax.text(j, i, f"{RE_MATRIX[i, j]:.2f}", ha="center", va="center", fontsize=9)

    ax.set_xticks(range(len(BASE_STATE_NAMES)))
    ax.set_xticklabels(BASE_STATE_NAMES, rotation=30, ha="right")
    ax.set_yticks(range(len(OUTS)))
    ax.set_yticklabels([f"{o} out" for o in OUTS])
    ax.set_title("Run Expectancy by Base-Out State", fontsize=13)

    cbar = plt.colorbar(im, ax=ax)
    cbar.set_label("Expected Runs", fontsize=11)

    plt.tight_layout()

    _save_figure(fig, save_path, verbose)

    return fig
