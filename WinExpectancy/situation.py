"""
situation.py

Evaluate a full game situation: run expectancy, leverage index, win
probability, a readable description and an excitement tier.
"""

from dataclasses import dataclass, replace
from typing import Dict

import pandas as pd

from .config import INNING_TOPBOT
from .leverage import Excitement, classify_excitement, leverage_index, leverage_index_vectorized
from .run_expectancy import BaseState, run_expectancy, run_expectancy_vectorized
from .win_probability import round_half_up, win_probability, win_probability_vectorized


SITUATION_COLUMNS = ["inning", "is_top_half", "outs", "base_state", "score_diff", "is_home"]


@dataclass(frozen=True)
class GameSituation:
    """
    Snapshot of a game at one plate appearance.

    ``score_diff`` is always home minus away; ``is_home`` says whether the
    team we are evaluating for is the home team.
    """

    inning: int
    is_top_half: bool
    outs: int
    base_state: BaseState
    score_diff: int
    is_home: bool

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_state", BaseState.parse(self.base_state))

    @property
    def half_label(self) -> str:
        return INNING_TOPBOT[0] if self.is_top_half else INNING_TOPBOT[1]

    def flipped(self) -> "GameSituation":
        """The same moment seen from the other dugout."""
        return replace(self, score_diff=-self.score_diff, is_home=not self.is_home)


@dataclass(frozen=True)
class WinExpectancyResult:
    win_probability: int
    leverage_index: float
    run_expectancy: float
    situation: str
    excitement: Excitement

    @property
    def opponent_win_probability(self) -> int:
        return 100 - self.win_probability

    def as_dict(self) -> Dict[str, object]:
        return {
            "win_probability": self.win_probability,
            "leverage_index": self.leverage_index,
            "run_expectancy": self.run_expectancy,
            "situation": self.situation,
            "excitement": self.excitement.value,
        }


def describe_situation(situation: GameSituation) -> str:
    """Format a situation as e.g. "Bot 7, 1 out, 1st & 2nd"."""
    return (
        f"{situation.half_label} {situation.inning}, "
        f"{situation.outs} out, {situation.base_state.label}"
    )


def evaluate(situation: GameSituation) -> WinExpectancyResult:
    """
    Evaluate a game situation.

    Every call is independent: there is no caching and no shared state, so
    identical situations always produce identical results.
    """
    re = run_expectancy(situation.outs, situation.base_state)
    li = leverage_index(situation.inning, situation.score_diff)
    wp = win_probability(situation, re, li)

    return WinExpectancyResult(
        win_probability=wp,
        leverage_index=round_half_up(li, 2),
        run_expectancy=round_half_up(re, 2),
        situation=describe_situation(situation),
        excitement=classify_excitement(li),
    )


def evaluate_frame(states_df: pd.DataFrame) -> pd.DataFrame:
    """
    Evaluate many situations at once.

    Parameters
    ----------
    states_df : pd.DataFrame
        DataFrame with columns: inning, is_top_half, outs, base_state,
        score_diff, is_home. ``base_state`` may hold codes or names.

    Returns
    -------
    pd.DataFrame
        Copy of the input with run_expectancy, leverage_index,
        win_probability and excitement columns added
    """
    missing = [col for col in SITUATION_COLUMNS if col not in states_df.columns]
    if missing:
        raise ValueError(f"Missing situation columns: {', '.join(missing)}")

    result = states_df.copy()
    re = run_expectancy_vectorized(result["outs"].values, result["base_state"].values)
    li = leverage_index_vectorized(result["inning"].values, result["score_diff"].values)

    result["run_expectancy"] = re
    result["leverage_index"] = li
    result["win_probability"] = win_probability_vectorized(
        result["inning"].values,
        result["score_diff"].values,
        re,
        result["is_home"].values,
    )
    result["excitement"] = [classify_excitement(value).value for value in li]
    return result
