"""
win_probability.py

Logistic win probability model.

Combines score differential, run expectancy, innings remaining, an end-game
urgency multiplier and a home-field constant into a single logit, then maps
it through a sigmoid:

    logit = (score_diff * 0.15 + re * 0.08 + innings_left * 0.02) * urgency
    wp    = 1 / (1 + exp(-(logit +/- 0.12)))

The result is clamped to [0.01, 0.99] and reported as an integer percent.
"""

import math
from typing import Union

import numpy as np

from .config import (
    REGULATION_INNINGS,
    SCORE_DIFF_WEIGHT,
    RUN_EXPECTANCY_WEIGHT,
    INNINGS_LEFT_WEIGHT,
    HOME_FIELD_BONUS,
    FINAL_INNING_URGENCY,
    WP_FLOOR,
    WP_CEILING,
)


def round_half_up(value: float, digits: int = 0) -> Union[int, float]:
    """
    Round to the nearest value, with halves rounded up (toward +inf).

    Published win probabilities were produced with half-up rounding, so
    Python's round-half-even is not a drop-in replacement.
    """
    if digits == 0:
        return math.floor(value + 0.5)
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def win_logit(inning: int, score_diff: int, re: float, is_home: bool) -> float:
    """Return the logit (home bonus included) for a situation."""
    innings_left = max(0, REGULATION_INNINGS - inning)
    urgency = FINAL_INNING_URGENCY if inning >= REGULATION_INNINGS else 1.0
    logit = (
        score_diff * SCORE_DIFF_WEIGHT
        + re * RUN_EXPECTANCY_WEIGHT
        + innings_left * INNINGS_LEFT_WEIGHT
    ) * urgency
    home_bonus = HOME_FIELD_BONUS if is_home else -HOME_FIELD_BONUS
    return logit + home_bonus


def win_probability(situation, re: float, li: float) -> int:
    """
    Compute the win probability for the perspective team.

    Parameters
    ----------
    situation : GameSituation
        Anything with ``inning``, ``score_diff`` and ``is_home`` attributes.
        ``score_diff`` is home minus away.
    re : float
        Run expectancy for the current base-out state
    li : float
        Leverage index. Accepted so callers can pass all three lookups
        together; the logistic model itself does not weight it.

    Returns
    -------
    int
        Win probability percent, always within 1-99
    """
    logit = win_logit(situation.inning, situation.score_diff, re, situation.is_home)
    try:
        wp = 1.0 / (1.0 + math.exp(-logit))
    except OverflowError:
        # exp(-logit) is past float range, so the sigmoid is 0 before clamping
        wp = 0.0
    wp = max(WP_FLOOR, min(WP_CEILING, wp))
    return round_half_up(wp * 100)


def win_probability_vectorized(innings, score_diffs, re, is_home) -> np.ndarray:
    """
    Vectorized win probability over arrays or DataFrame columns.

    Returns
    -------
    np.ndarray
        Integer percents (1-99), identical to the scalar path
    """
    innings = np.asarray(innings, dtype=float)
    score_diffs = np.asarray(score_diffs, dtype=float)
    re = np.asarray(re, dtype=float)
    is_home = np.asarray(is_home, dtype=bool)

    innings_left = np.maximum(0, REGULATION_INNINGS - innings)
    urgency = np.where(innings >= REGULATION_INNINGS, FINAL_INNING_URGENCY, 1.0)
    logit = (
        score_diffs * SCORE_DIFF_WEIGHT
        + re * RUN_EXPECTANCY_WEIGHT
        + innings_left * INNINGS_LEFT_WEIGHT
    ) * urgency
    home_bonus = np.where(is_home, HOME_FIELD_BONUS, -HOME_FIELD_BONUS)

    with np.errstate(over="ignore"):
        wp = 1.0 / (1.0 + np.exp(-(logit + home_bonus)))
    wp = np.clip(wp, WP_FLOOR, WP_CEILING)
    return np.floor(wp * 100 + 0.5).astype(int)
