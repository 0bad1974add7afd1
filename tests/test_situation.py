import dataclasses
from itertools import product

import pandas as pd
import pytest

from WinExpectancy.config import INNING_TOPBOT
from WinExpectancy.leverage import Excitement
from WinExpectancy.run_expectancy import BaseState
from WinExpectancy.situation import (
    GameSituation,
    WinExpectancyResult,
    describe_situation,
    evaluate,
    evaluate_frame,
)


@pytest.fixture
def late_jam():
    return GameSituation(
        inning=7,
        is_top_half=False,
        outs=1,
        base_state=BaseState.FIRST_SECOND,
        score_diff=-1,
        is_home=True,
    )


def test_evaluate_late_jam(late_jam):
    result = evaluate(late_jam)
    assert result == WinExpectancyResult(
        win_probability=52,
        leverage_index=1.8,
        run_expectancy=0.89,
        situation="Bot 7, 1 out, 1st & 2nd",
        excitement=Excitement.HIGH,
    )
    assert result.opponent_win_probability == 48


def test_evaluate_is_idempotent(late_jam):
    assert evaluate(late_jam) == evaluate(late_jam)
    assert evaluate(late_jam) == evaluate(dataclasses.replace(late_jam))


def test_away_side_is_strictly_lower(late_jam):
    home = evaluate(late_jam)
    away = evaluate(dataclasses.replace(late_jam, is_home=False))
    assert away.win_probability < home.win_probability


def test_extra_innings_tie():
    result = evaluate(GameSituation(10, True, 0, "empty", 0, True))
    assert result.leverage_index == 3.5
    assert result.excitement is Excitement.EXTREME
    assert result.situation == "Top 10, 0 out, Bases Empty"


def test_probability_always_in_range():
    for inning, top, outs, state, diff, home in product(
        range(1, 13), (True, False), range(0, 3), BaseState, range(-12, 13, 3), (True, False)
    ):
        wp = evaluate(GameSituation(inning, top, outs, state, diff, home)).win_probability
        assert 1 <= wp <= 99


def test_base_state_is_normalised():
    situation = GameSituation(3, True, 2, "loaded", 0, False)
    assert situation.base_state is BaseState.LOADED
    assert GameSituation(3, True, 2, 7, 0, False) == situation


def test_unknown_base_state_rejected():
    with pytest.raises(ValueError):
        GameSituation(3, True, 2, "crowded", 0, False)


def test_situation_is_immutable(late_jam):
    with pytest.raises(dataclasses.FrozenInstanceError):
        late_jam.outs = 2


def test_out_of_range_outs_use_two_out_row():
    result = evaluate(GameSituation(4, True, 5, BaseState.LOADED, 0, True))
    assert result.run_expectancy == 0.75
    assert result.situation == "Top 4, 5 out, Bases Loaded"


def test_inning_zero_passes_through():
    # Not clamped: treated as an early inning with nine innings left
    result = evaluate(GameSituation(0, True, 0, BaseState.EMPTY, 0, True))
    assert result.leverage_index == 1.0
    assert 1 <= result.win_probability <= 99


def test_flipped(late_jam):
    flipped = late_jam.flipped()
    assert flipped.score_diff == 1
    assert flipped.is_home is False
    assert flipped.flipped() == late_jam


def test_describe_situation(late_jam):
    assert describe_situation(late_jam) == "Bot 7, 1 out, 1st & 2nd"


def test_as_dict(late_jam):
    assert evaluate(late_jam).as_dict() == {
        "win_probability": 52,
        "leverage_index": 1.8,
        "run_expectancy": 0.89,
        "situation": "Bot 7, 1 out, 1st & 2nd",
        "excitement": "high",
    }


def test_evaluate_frame_matches_evaluate():
    situations = [
        GameSituation(inning, inning % 2 == 0, outs, state, diff, diff % 2 == 0)
        for inning in (1, 5, 8, 9, 11)
        for outs in (0, 1, 2)
        for state in BaseState
        for diff in (-7, -1, 0, 2, 5)
    ]
    df = pd.DataFrame(
        {
            "inning": [s.inning for s in situations],
            "is_top_half": [s.is_top_half for s in situations],
            "outs": [s.outs for s in situations],
            "base_state": [s.base_state.name.lower() for s in situations],
            "score_diff": [s.score_diff for s in situations],
            "is_home": [s.is_home for s in situations],
        }
    )
    result = evaluate_frame(df)
    expected = [evaluate(s) for s in situations]

    assert list(result["win_probability"]) == [e.win_probability for e in expected]
    assert list(result["leverage_index"]) == [e.leverage_index for e in expected]
    assert list(result["run_expectancy"]) == [e.run_expectancy for e in expected]
    assert list(result["excitement"]) == [e.excitement.value for e in expected]
    assert "win_probability" not in df.columns


def test_evaluate_frame_missing_columns():
    with pytest.raises(ValueError, match="is_home"):
        evaluate_frame(pd.DataFrame({"inning": [1], "is_top_half": [True], "outs": [0],
                                     "base_state": [0], "score_diff": [0]}))


def test_evaluate_lopsided_score():
    result = evaluate(GameSituation(9, False, 0, BaseState.EMPTY, -5000, True))
    assert result.win_probability == 1
    assert result.excitement is Excitement.LOW


def test_half_label_uses_configured_names():
    assert GameSituation(1, True, 0, BaseState.EMPTY, 0, True).half_label == INNING_TOPBOT[0]
    assert GameSituation(1, False, 0, BaseState.EMPTY, 0, True).half_label == INNING_TOPBOT[1]
