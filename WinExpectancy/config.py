"""
config.py

Constants and calibration tables for the win expectancy engine.
"""

from pathlib import Path
import numpy as np

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

# Default location for saved charts
OUTPUT_DIR = Path(__file__).parent / "output"

# ---------------------------------------------------------------------------
# State Space Constants
# ---------------------------------------------------------------------------

# 8 base states encoded as integers
# Binary representation: bit 0 = 1B, bit 1 = 2B, bit 2 = 3B
BASE_STATE_NAMES = [
    "empty",         # 000 - no runners
    "first",         # 001 - runner on 1st
    "second",        # 010 - runner on 2nd
    "first_second",  # 011 - runners on 1st and 2nd
    "third",         # 100 - runner on 3rd
    "first_third",   # 101 - runners on 1st and 3rd
    "second_third",  # 110 - runners on 2nd and 3rd
    "loaded",        # 111 - bases loaded
]

BASE_STATE_LABELS = [
    "Bases Empty",
    "Runner on 1st",
    "Runner on 2nd",
    "1st & 2nd",
    "Runner on 3rd",
    "1st & 3rd",
    "2nd & 3rd",
    "Bases Loaded",
]

# Diamond glyphs for compact terminal output (1B, 2B, 3B occupancy)
BASE_STATE_GLYPHS = ["---", "1--", "-2-", "12-", "--3", "1-3", "-23", "123"]

# Outs: 0, 1, 2
OUTS = [0, 1, 2]

# Half-inning labels used in situation descriptions
INNING_TOPBOT = ["Top", "Bot"]

# ---------------------------------------------------------------------------
# Run Expectancy Matrix
# ---------------------------------------------------------------------------

# Historical league-average runs scored for the remainder of the half-inning.
# Shape (3, 8) indexed by [outs, base_state]
RE_MATRIX = np.array([
    # empty  1B    2B    1B_2B  3B    1B_3B  2B_3B  loaded
    [0.48,  0.85, 1.07, 1.41,  1.35, 1.78,  1.94,  2.29],  # 0 outs
    [0.26,  0.51, 0.66, 0.89,  0.93, 1.17,  1.36,  1.54],  # 1 out
    [0.10,  0.22, 0.32, 0.43,  0.37, 0.49,  0.56,  0.75],  # 2 outs
], dtype=np.float64)
RE_MATRIX.setflags(write=False)

# ---------------------------------------------------------------------------
# Leverage Index Table
# ---------------------------------------------------------------------------

# Innings 1-3 early, 4-6 middle, 7-8 late, 9+ final
INNING_PHASES = ["early", "middle", "late", "final"]
INNING_PHASE_BOUNDS = [3, 6, 8]

# |score_diff| >= 7 blowout, >= 4 comfortable, >= 1 close, 0 tied
LEVERAGE_BUCKETS = ["blowout", "comfortable", "close", "tied"]
BLOWOUT_MARGIN = 7
COMFORTABLE_MARGIN = 4
CLOSE_MARGIN = 1

# Shape (4, 4) indexed by [phase, bucket]
LEVERAGE_TABLE = np.array([
    # blowout comfortable close tied
    [0.3,    0.5,        0.8,  1.0],  # early
    [0.4,    0.7,        1.2,  1.5],  # middle
    [0.5,    1.0,        1.8,  2.2],  # late
    [0.6,    1.5,        2.8,  3.5],  # final
], dtype=np.float64)
LEVERAGE_TABLE.setflags(write=False)

# ---------------------------------------------------------------------------
# Win Probability Calibration
# ---------------------------------------------------------------------------

# Fixed logistic model parameters. Do not re-tune: published win
# probabilities depend on these exact values.
REGULATION_INNINGS = 9
SCORE_DIFF_WEIGHT = 0.15
RUN_EXPECTANCY_WEIGHT = 0.08
INNINGS_LEFT_WEIGHT = 0.02
HOME_FIELD_BONUS = 0.12
FINAL_INNING_URGENCY = 1.5

WP_FLOOR = 0.01
WP_CEILING = 0.99

# ---------------------------------------------------------------------------
# Excitement Tiers
# ---------------------------------------------------------------------------

EXTREME_LEVERAGE = 2.5
HIGH_LEVERAGE = 1.5
MEDIUM_LEVERAGE = 0.8
