"""Deterministic demo games for the dashboard and tests."""

from typing import List

from .run_expectancy import BaseState
from .situation import GameSituation
from .timeline import PlateAppearanceEvent, WinProbabilityTimeline, aggregate_timeline


DEMO_EVENTS = [
    "Leadoff single", "Strikeout", "Groundout to SS", "Double to RF gap",
    "Sacrifice bunt", "Walk", "RBI single", "2-run homer", "Pop fly to 2B",
    "Line drive out", "Stolen base", "Wild pitch", "Fly out to CF",
    "Strikeout looking", "HBP", "Double play", "Infield single",
    "Triple to RC", "Sac fly, run scores", "Groundout to 1B",
]

DEMO_BASE_CYCLE = [BaseState.EMPTY, BaseState.FIRST, BaseState.SECOND, BaseState.FIRST_SECOND]


def runs_for_label(label: str) -> int:
    if "homer" in label:
        return 2
    if "RBI" in label or "run scores" in label:
        return 1
    return 0


def generate_demo_events(innings: int = 9) -> List[PlateAppearanceEvent]:
    """Build a fixed nine-inning event sequence using index arithmetic only."""
    events: List[PlateAppearanceEvent] = []
    for inning in range(1, innings + 1):
        for is_top in (True, False):
            event_count = 2 + (len(events) % 3)
            for e in range(event_count):
                offset = 0 if is_top else 5
                label = DEMO_EVENTS[(inning * 7 + e * 13 + offset) % len(DEMO_EVENTS)]
                events.append(
                    PlateAppearanceEvent(
                        inning=inning,
                        is_top_half=is_top,
                        outs=e % 3,
                        base_state=DEMO_BASE_CYCLE[e % 4],
                        label=label,
                        runs_scored=runs_for_label(label),
                    )
                )
    return events


def generate_demo_timeline() -> WinProbabilityTimeline:
    return aggregate_timeline(generate_demo_events())


def generate_demo_situation() -> GameSituation:
    # Bottom 7, one out, runners on 1st and 2nd, home down a run
    return GameSituation(
        inning=7,
        is_top_half=False,
        outs=1,
        base_state=BaseState.FIRST_SECOND,
        score_diff=-1,
        is_home=True,
    )
