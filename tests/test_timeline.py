import pytest

from WinExpectancy.run_expectancy import BaseState
from WinExpectancy.situation import GameSituation, evaluate
from WinExpectancy.timeline import (
    PlateAppearanceEvent,
    aggregate_timeline,
    aggregate_timelines,
)


@pytest.fixture
def walk_off_events():
    return [
        PlateAppearanceEvent(8, False, 0, BaseState.FIRST, "Leadoff single"),
        PlateAppearanceEvent(8, False, 0, BaseState.EMPTY, "2-run homer", runs_scored=2),
    ]


def test_home_run_swings_probability_up(walk_off_events):
    timeline = aggregate_timeline(walk_off_events, home_score=3, away_score=4)
    first, second = timeline.points

    assert first.home_wp_before == 51
    assert first.home_wp_after == 51
    assert first.delta == 0

    assert second.home_wp_before == first.home_wp_after
    assert second.home_wp_after == 58
    assert second.delta > 0
    assert timeline.high_point >= second.home_wp_after
    assert timeline.biggest_swing is second
    assert timeline.final_score == (5, 4)


def test_points_match_evaluate(walk_off_events):
    timeline = aggregate_timeline(walk_off_events, home_score=3, away_score=4)
    expected = evaluate(GameSituation(8, False, 0, BaseState.EMPTY, 1, True))
    point = timeline[1]
    assert point.home_wp_after == expected.win_probability
    assert point.away_wp == 100 - expected.win_probability
    assert point.leverage_index == expected.leverage_index
    assert (point.home_score, point.away_score) == (5, 4)
    assert point.half == "bottom"
    assert point.event == "2-run homer"


def test_top_half_runs_go_to_away_team():
    events = [
        PlateAppearanceEvent(1, True, 0, BaseState.EMPTY, "Solo homer", runs_scored=1),
        PlateAppearanceEvent(1, False, 0, BaseState.EMPTY, "RBI single", runs_scored=1),
    ]
    timeline = aggregate_timeline(events)
    assert (timeline[0].home_score, timeline[0].away_score) == (0, 1)
    assert (timeline[1].home_score, timeline[1].away_score) == (1, 1)
    assert timeline[0].delta < 0
    assert timeline[1].delta > 0


def test_high_low_and_biggest_swing():
    events = [
        PlateAppearanceEvent(9, True, 0, BaseState.EMPTY, "Grand slam", runs_scored=4),
        PlateAppearanceEvent(9, True, 1, BaseState.EMPTY, "Strikeout"),
        PlateAppearanceEvent(9, False, 0, BaseState.EMPTY, "Solo homer", runs_scored=1),
    ]
    timeline = aggregate_timeline(events)
    afters = [p.home_wp_after for p in timeline]

    assert timeline.high_point == max([timeline.starting_wp] + afters)
    assert timeline.low_point == min([timeline.starting_wp] + afters)
    assert timeline.low_point == timeline[1].home_wp_after
    assert timeline.biggest_swing is timeline[0]
    assert abs(timeline.biggest_swing.delta) == max(abs(p.delta) for p in timeline)


def test_biggest_swing_prefers_earliest_tie():
    events = [
        PlateAppearanceEvent(2, True, 0, BaseState.EMPTY, "Groundout"),
        PlateAppearanceEvent(2, True, 1, BaseState.EMPTY, "Fly out"),
    ]
    timeline = aggregate_timeline(events)
    assert timeline.biggest_swing is timeline[0]


def test_empty_timeline():
    timeline = aggregate_timeline([])
    assert len(timeline) == 0
    assert timeline.biggest_swing is None
    assert timeline.high_point == timeline.low_point == timeline.starting_wp == 58
    assert timeline.max_leverage == 0.0
    assert timeline.high_leverage_plays == 0
    assert timeline.to_frame().empty


def test_events_accept_base_state_names():
    event = PlateAppearanceEvent(5, True, 1, "second_third", "Double")
    assert event.base_state is BaseState.SECOND_THIRD


def test_to_frame(walk_off_events):
    frame = aggregate_timeline(walk_off_events, home_score=3, away_score=4).to_frame()
    assert list(frame["home_wp_after"]) == [51, 58]
    assert list(frame["delta"]) == [0, 7]
    assert list(frame["away_wp"]) == [49, 42]
    assert list(frame["half"]) == ["bottom", "bottom"]


def test_leverage_summary(walk_off_events):
    timeline = aggregate_timeline(walk_off_events, home_score=3, away_score=4)
    assert timeline.max_leverage == 1.8
    assert timeline.high_leverage_plays == 2


def test_aggregate_timelines_sequential(walk_off_events):
    games = [walk_off_events, list(reversed(walk_off_events))]
    timelines = aggregate_timelines(games)
    assert timelines == [aggregate_timeline(g) for g in games]


def test_aggregate_timelines_parallel(walk_off_events):
    games = [walk_off_events] * 3
    assert aggregate_timelines(games, n_workers=2) == aggregate_timelines(games)


def test_aggregate_timelines_verbose(walk_off_events, capsys):
    aggregate_timelines([walk_off_events], verbose=True)
    out = capsys.readouterr().out
    assert "Aggregating 1 game(s)" in out
    assert "2 events" in out
