#!/usr/bin/env python3
"""
run_evaluation.py

CLI entry point for win expectancy evaluation.

Usage:
    win-expectancy --help
    win-expectancy --inning 9 --half bottom --outs 2 --bases loaded --score-diff -1
    win-expectancy --demo --json
    win-expectancy --timeline --plot wp_timeline.png
"""

import argparse
import json
from pathlib import Path
from typing import List, Optional

from .config import BASE_STATE_NAMES, OUTPUT_DIR
from .run_expectancy import BaseState, run_expectancy_frame
from .situation import GameSituation, WinExpectancyResult, evaluate
from .fixtures import generate_demo_situation, generate_demo_timeline
from .timeline import WinProbabilityTimeline


def _print_result(result: WinExpectancyResult) -> None:
    print(f"\n  {result.situation}")
    print(f"    Win probability:  {result.win_probability}%  (opponent {result.opponent_win_probability}%)")
    print(f"    Leverage index:   {result.leverage_index:.2f}  [{result.excitement.value.upper()}]")
    print(f"    Run expectancy:   {result.run_expectancy:.2f}")


def _print_timeline(timeline: WinProbabilityTimeline) -> None:
    print(f"\n{'INN':<5} {'EVENT':<22} {'HOME':>5} {'AWAY':>5} {'DELTA':>6} {'LI':>5}")
    for p in timeline:
        inn = f"{'T' if p.half == 'top' else 'B'}{p.inning}"
        print(
            f"{inn:<5} {p.event:<22} {p.home_wp_after:>4}% {p.away_wp:>4}% "
            f"{p.delta:>+6d} {p.leverage_index:>5.1f}"
        )

    home_runs, away_runs = timeline.final_score
    print(f"\n{'=' * 52}")
    print(f"  Final score:          Home {home_runs} - Away {away_runs}")
    print(f"  High point:           {timeline.high_point}%")
    print(f"  Low point:            {timeline.low_point}%")
    swing = timeline.biggest_swing
    if swing is not None:
        print(f"  Biggest swing:        {swing.delta:+d}% ({swing.event}, {swing.half} {swing.inning})")
    print(f"  Max leverage:         {timeline.max_leverage:.2f}")
    print(f"  High leverage plays:  {timeline.high_leverage_plays}")
    print(f"  Total events:         {len(timeline)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Evaluate win expectancy and leverage for game situations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Bottom of the 9th, bases loaded, two outs, home team down one
  win-expectancy --inning 9 --half bottom --outs 2 --bases loaded --score-diff -1

  # Same situation from the visiting team's side
  win-expectancy --inning 9 --half bottom --outs 2 --bases loaded --score-diff -1 --away

  # Evaluate the demo situation as JSON
  win-expectancy --demo --json

  # Aggregate the demo game and save the chart
  win-expectancy --timeline --plot wp_timeline.png

  # Save the chart to the default output directory
  win-expectancy --timeline --plot

  # Print the run expectancy matrix
  win-expectancy --re-table
        """
    )

    parser.add_argument("--inning", type=int, help="Inning number (1-9, extras allowed)")
    parser.add_argument(
        "--half",
        choices=["top", "bottom"],
        default="top",
        help="Half-inning (default: top)",
    )
    parser.add_argument("--outs", type=int, default=0, help="Outs (clamped to 0-2, default: 0)")
    parser.add_argument(
        "--bases",
        type=str,
        default="empty",
        help=f"Base state: {', '.join(BASE_STATE_NAMES)} (default: empty)",
    )
    parser.add_argument(
        "--score-diff",
        type=int,
        default=0,
        help="Home score minus away score (default: 0)",
    )
    parser.add_argument(
        "--away",
        action="store_true",
        help="Evaluate from the away team's perspective",
    )

    parser.add_argument("--demo", action="store_true", help="Evaluate the demo situation")
    parser.add_argument("--timeline", action="store_true", help="Aggregate the demo game timeline")
    parser.add_argument(
        "--plot",
        type=str,
        nargs="?",
        const=str(OUTPUT_DIR / "wp_timeline.png"),
        help=f"Save the timeline chart (default path: {OUTPUT_DIR / 'wp_timeline.png'})",
    )
    parser.add_argument("--re-table", action="store_true", help="Print the run expectancy matrix")
    parser.add_argument("--json", action="store_true", help="Print situation results as JSON")
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress progress output",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    verbose = not args.quiet

    if args.re_table:
        print("\nRun expectancy (outs x base state):")
        print(run_expectancy_frame().to_string(float_format=lambda v: f"{v:.2f}"))
        return 0

    if args.timeline or args.plot:
        if verbose:
            print("Aggregating demo game...")
        timeline = generate_demo_timeline()
        _print_timeline(timeline)

        if args.plot:
            import matplotlib
            matplotlib.use("Agg")  # Non-interactive backend for saving files
            import matplotlib.pyplot as plt
            from .plotting import plot_wp_timeline

            plot_path = Path(args.plot)
            plot_path.parent.mkdir(parents=True, exist_ok=True)
            fig = plot_wp_timeline(timeline, save_path=str(plot_path), verbose=verbose)
            plt.close(fig)
        return 0

    if args.demo:
        situation = generate_demo_situation()
    elif args.inning is not None:
        try:
            base_state = BaseState.parse(args.bases)
        except ValueError as e:
            parser.error(str(e))
        situation = GameSituation(
            inning=args.inning,
            is_top_half=args.half == "top",
            outs=args.outs,
            base_state=base_state,
            score_diff=args.score_diff,
            is_home=not args.away,
        )
    else:
        parser.print_help()
        return 0

    result = evaluate(situation)
    if args.json:
        print(json.dumps(result.as_dict(), indent=2))
    else:
        _print_result(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
