"""
leverage.py

Leverage index lookup and excitement tiers.

The leverage index (LI) expresses how much the current at-bat can swing the
outcome of the game: low in early blowouts, highest in a tied game in the
9th inning or later.
"""

from enum import Enum

import numpy as np

from .config import (
    INNING_PHASES,
    INNING_PHASE_BOUNDS,
    LEVERAGE_BUCKETS,
    LEVERAGE_TABLE,
    BLOWOUT_MARGIN,
    COMFORTABLE_MARGIN,
    CLOSE_MARGIN,
    EXTREME_LEVERAGE,
    HIGH_LEVERAGE,
    MEDIUM_LEVERAGE,
)


class Excitement(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EXTREME = "extreme"

    def __str__(self) -> str:
        return self.value


def _phase_index(inning: int) -> int:
    for idx, bound in enumerate(INNING_PHASE_BOUNDS):
        if inning <= bound:
            return idx
    return len(INNING_PHASE_BOUNDS)


def _bucket_index(score_diff: int) -> int:
    margin = abs(score_diff)
    if margin >= BLOWOUT_MARGIN:
        return 0
    if margin >= COMFORTABLE_MARGIN:
        return 1
    if margin >= CLOSE_MARGIN:
        return 2
    return 3


def inning_phase(inning: int) -> str:
    """Return "early" (1-3), "middle" (4-6), "late" (7-8) or "final" (9+)."""
    return INNING_PHASES[_phase_index(inning)]


def leverage_bucket(score_diff: int) -> str:
    """Return "blowout", "comfortable", "close" or "tied" for a score differential."""
    return LEVERAGE_BUCKETS[_bucket_index(score_diff)]


def leverage_index(inning: int, score_diff: int) -> float:
    """
    Look up the leverage index for an inning and score differential.

    Parameters
    ----------
    inning : int
        Inning number (extra innings fall in the final phase)
    score_diff : int
        Score differential; only its magnitude matters

    Returns
    -------
    float
        Unrounded table value between 0.3 and 3.5
    """
    return float(LEVERAGE_TABLE[_phase_index(inning), _bucket_index(score_diff)])


def leverage_index_vectorized(innings, score_diffs) -> np.ndarray:
    """Vectorized leverage index lookup over arrays or DataFrame columns."""
    innings = np.asarray(innings)
    margins = np.abs(np.asarray(score_diffs))

    phase_idx = np.searchsorted(INNING_PHASE_BOUNDS, innings, side="left")
    bucket_idx = np.select(
        [margins >= BLOWOUT_MARGIN, margins >= COMFORTABLE_MARGIN, margins >= CLOSE_MARGIN],
        [0, 1, 2],
        default=3,
    )
    return LEVERAGE_TABLE[phase_idx, bucket_idx]


def classify_excitement(li: float) -> Excitement:
    """Map a leverage index onto a coarse excitement tier."""
    if li >= EXTREME_LEVERAGE:
        return Excitement.EXTREME
    if li >= HIGH_LEVERAGE:
        return Excitement.HIGH
    if li >= MEDIUM_LEVERAGE:
        return Excitement.MEDIUM
    return Excitement.LOW
