"""
Win Expectancy / Leverage Index Engine

Evaluates baseball game situations using a historical run expectancy matrix,
an inning/score leverage table and a logistic win probability model, and
folds plate-appearance sequences into win probability timelines for charting.
"""

from .config import (
    BASE_STATE_NAMES,
    RE_MATRIX,
    LEVERAGE_TABLE,
)
from .run_expectancy import BaseState, encode_base_state, run_expectancy
from .leverage import Excitement, classify_excitement, inning_phase, leverage_bucket, leverage_index
from .win_probability import win_probability
from .situation import GameSituation, WinExpectancyResult, evaluate, evaluate_frame
from .timeline import (
    PlateAppearanceEvent,
    TimelinePoint,
    WinProbabilityTimeline,
    aggregate_timeline,
    aggregate_timelines,
)

__all__ = [
    "BASE_STATE_NAMES",
    "RE_MATRIX",
    "LEVERAGE_TABLE",
    "BaseState",
    "encode_base_state",
    "run_expectancy",
    "Excitement",
    "classify_excitement",
    "inning_phase",
    "leverage_bucket",
    "leverage_index",
    "win_probability",
    "GameSituation",
    "WinExpectancyResult",
    "evaluate",
    "evaluate_frame",
    "PlateAppearanceEvent",
    "TimelinePoint",
    "WinProbabilityTimeline",
    "aggregate_timeline",
    "aggregate_timelines",
]
