"""
timeline.py

Fold an ordered sequence of plate appearances into a win probability
timeline for charting.

Each event updates the running score, is evaluated from the home team's
perspective, and is recorded with the home win probability before and after
it. The timeline tracks the high point, low point and biggest single swing.
"""

from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from .config import HIGH_LEVERAGE
from .run_expectancy import BaseState
from .situation import GameSituation, evaluate


@dataclass(frozen=True)
class PlateAppearanceEvent:
    """One event supplied by the caller; runs are credited to the batting team."""

    inning: int
    is_top_half: bool
    outs: int
    base_state: BaseState
    label: str
    runs_scored: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_state", BaseState.parse(self.base_state))

    @property
    def half(self) -> str:
        return "top" if self.is_top_half else "bottom"

    def situation(self, home_score: int, away_score: int) -> GameSituation:
        return GameSituation(
            inning=self.inning,
            is_top_half=self.is_top_half,
            outs=self.outs,
            base_state=self.base_state,
            score_diff=home_score - away_score,
            is_home=True,
        )


@dataclass(frozen=True)
class TimelinePoint:
    index: int
    inning: int
    half: str
    event: str
    home_wp_before: int
    home_wp_after: int
    away_wp: int
    leverage_index: float
    home_score: int
    away_score: int

    @property
    def delta(self) -> int:
        return self.home_wp_after - self.home_wp_before


@dataclass(frozen=True)
class WinProbabilityTimeline:
    """Immutable result of aggregating one game."""

    points: Tuple[TimelinePoint, ...]
    starting_wp: int
    high_point: int
    low_point: int
    biggest_swing: Optional[TimelinePoint]
    final_score: Tuple[int, int]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.points)

    def __getitem__(self, idx):
        return self.points[idx]

    @property
    def max_leverage(self) -> float:
        return max((p.leverage_index for p in self.points), default=0.0)

    @property
    def high_leverage_plays(self) -> int:
        return sum(1 for p in self.points if p.leverage_index >= HIGH_LEVERAGE)

    def to_frame(self) -> pd.DataFrame:
        """One row per event with home/away win probability, delta and leverage."""
        columns = [
            "index", "inning", "half", "event", "home_wp_before", "home_wp_after",
            "away_wp", "delta", "leverage_index", "home_score", "away_score",
        ]
        rows = [
            {
                "index": p.index,
                "inning": p.inning,
                "half": p.half,
                "event": p.event,
                "home_wp_before": p.home_wp_before,
                "home_wp_after": p.home_wp_after,
                "away_wp": p.away_wp,
                "delta": p.delta,
                "leverage_index": p.leverage_index,
                "home_score": p.home_score,
                "away_score": p.away_score,
            }
            for p in self.points
        ]
        return pd.DataFrame(rows, columns=columns)


def aggregate_timeline(
    events: Iterable[PlateAppearanceEvent],
    home_score: int = 0,
    away_score: int = 0,
) -> WinProbabilityTimeline:
    """
    Build a win probability timeline from an ordered sequence of events.

    Parameters
    ----------
    events : iterable of PlateAppearanceEvent
        Events in game order. Each supplies the base-out state after the
        play and the runs it produced.
    home_score, away_score : int
        Score before the first event.

    Returns
    -------
    WinProbabilityTimeline
        Points with before/after home win probability, plus the running
        high point, low point and biggest swing.
    """
    points: List[TimelinePoint] = []
    previous_wp: Optional[int] = None
    starting_wp: Optional[int] = None
    high_point = low_point = None
    biggest_swing: Optional[TimelinePoint] = None

    for index, event in enumerate(events):
        if previous_wp is None:
            previous_wp = evaluate(event.situation(home_score, away_score)).win_probability
            starting_wp = high_point = low_point = previous_wp

        if event.is_top_half:
            away_score += event.runs_scored
        else:
            home_score += event.runs_scored

        result = evaluate(event.situation(home_score, away_score))
        point = TimelinePoint(
            index=index,
            inning=event.inning,
            half=event.half,
            event=event.label,
            home_wp_before=previous_wp,
            home_wp_after=result.win_probability,
            away_wp=100 - result.win_probability,
            leverage_index=result.leverage_index,
            home_score=home_score,
            away_score=away_score,
        )
        points.append(point)

        high_point = max(high_point, point.home_wp_after)
        low_point = min(low_point, point.home_wp_after)
        if biggest_swing is None or abs(point.delta) > abs(biggest_swing.delta):
            biggest_swing = point
        previous_wp = point.home_wp_after

    if starting_wp is None:
        # No events: report the pre-game win probability
        starting_wp = evaluate(
            GameSituation(1, True, 0, BaseState.EMPTY, home_score - away_score, True)
        ).win_probability
        high_point = low_point = starting_wp

    return WinProbabilityTimeline(
        points=tuple(points),
        starting_wp=starting_wp,
        high_point=high_point,
        low_point=low_point,
        biggest_swing=biggest_swing,
        final_score=(home_score, away_score),
    )


def aggregate_timelines(
    games: Sequence[Sequence[PlateAppearanceEvent]],
    n_workers: int = 1,
    verbose: bool = False,
) -> List[WinProbabilityTimeline]:
    """
    Aggregate several independent games, optionally in parallel.

    Results are returned in the same order as ``games``.
    """
    if verbose:
        print(f"Aggregating {len(games)} game(s) with {n_workers} worker(s)...")

    if n_workers > 1 and len(games) > 1:
        with ProcessPoolExecutor(max_workers=n_workers) as executor:
            timelines = list(executor.map(aggregate_timeline, [list(g) for g in games]))
    else:
        timelines = [aggregate_timeline(g) for g in games]

    if verbose:
        total_events = sum(len(t) for t in timelines)
        print(f"  {total_events:,} events across {len(timelines)} game(s)")

    return timelines
