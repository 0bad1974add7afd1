"""
run_expectancy.py

Base-out states and the historical run expectancy lookup.

Run expectancy (RE) is the average number of runs a team scores for the
remainder of a half-inning given the current outs and base occupancy.
"""

from enum import IntEnum
from numbers import Integral
from typing import Union

import numpy as np
import pandas as pd

from .config import (
    BASE_STATE_NAMES,
    BASE_STATE_LABELS,
    BASE_STATE_GLYPHS,
    OUTS,
    RE_MATRIX,
)


class BaseState(IntEnum):
    """
    The 8 runner configurations.

    Values use the same binary encoding as play-by-play data:
    bit 0 = 1B, bit 1 = 2B, bit 2 = 3B.
    """

    EMPTY = 0
    FIRST = 1
    SECOND = 2
    FIRST_SECOND = 3
    THIRD = 4
    FIRST_THIRD = 5
    SECOND_THIRD = 6
    LOADED = 7

    @property
    def label(self) -> str:
        return BASE_STATE_LABELS[self.value]

    @property
    def glyph(self) -> str:
        return BASE_STATE_GLYPHS[self.value]

    @property
    def on_first(self) -> bool:
        return bool(self.value & 1)

    @property
    def on_second(self) -> bool:
        return bool(self.value & 2)

    @property
    def on_third(self) -> bool:
        return bool(self.value & 4)

    @classmethod
    def from_runners(cls, on_1b, on_2b, on_3b) -> "BaseState":
        return cls(encode_base_state(on_1b, on_2b, on_3b))

    @classmethod
    def parse(cls, value: Union["BaseState", int, str]) -> "BaseState":
        """
        Coerce a member, an integer code (0-7) or a name into a BaseState.

        Names are case-insensitive and accept both the long form
        ("first_second") and the play-by-play shorthand ("1B_2B").
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, Integral) and not isinstance(value, bool):
            code = int(value)
            if not 0 <= code <= 7:
                raise ValueError(f"Base state code must be 0-7, got {code}")
            return cls(code)
        if isinstance(value, str):
            key = value.strip().lower().replace(" ", "_").replace("-", "_")
            if key in _NAME_LOOKUP:
                return cls(_NAME_LOOKUP[key])
        raise ValueError(
            f"Unknown base state {value!r}; expected one of {', '.join(BASE_STATE_NAMES)}"
        )


_SHORTHAND_NAMES = ["empty", "1b", "2b", "1b_2b", "3b", "1b_3b", "2b_3b", "loaded"]

_NAME_LOOKUP = {name: code for code, name in enumerate(BASE_STATE_NAMES)}
_NAME_LOOKUP.update({name: code for code, name in enumerate(_SHORTHAND_NAMES)})


def _occupied(runner) -> bool:
    # Play-by-play rows carry a runner id or NA; callers may also pass bools
    if runner is None:
        return False
    if isinstance(runner, (bool, np.bool_)):
        return bool(runner)
    return bool(pd.notna(runner))


def encode_base_state(on_1b, on_2b, on_3b) -> int:
    """
    Encode base occupancy as a single integer 0-7.

    Uses binary representation: bit 0 = 1B, bit 1 = 2B, bit 2 = 3B
    """
    state = 0
    if _occupied(on_1b):
        state |= 1  # bit 0
    if _occupied(on_2b):
        state |= 2  # bit 1
    if _occupied(on_3b):
        state |= 4  # bit 2
    return state


def clamp_outs(outs: int) -> int:
    """Clamp outs into the 0-2 range used by every lookup."""
    return min(2, max(0, int(outs)))


def run_expectancy(outs: int, base_state: Union[BaseState, int, str]) -> float:
    """
    Look up expected runs for the rest of the half-inning.

    Parameters
    ----------
    outs : int
        Number of outs. Values outside 0-2 are clamped, never rejected.
    base_state : BaseState, int or str
        Runner configuration (see ``BaseState.parse``).

    Returns
    -------
    float
        The historical matrix constant for this base-out state.
    """
    state = BaseState.parse(base_state)
    return float(RE_MATRIX[clamp_outs(outs), state.value])


def base_state_codes(values) -> np.ndarray:
    """Convert a column of base states (codes, names or members) to int codes."""
    arr = np.asarray(values)
    if arr.dtype.kind in "iu":
        if arr.size and (arr.min() < 0 or arr.max() > 7):
            raise ValueError("Base state codes must be in the range 0-7")
        return arr.astype(int)
    return np.array([BaseState.parse(v).value for v in arr.ravel()], dtype=int).reshape(arr.shape)


def run_expectancy_vectorized(outs, base_states) -> np.ndarray:
    """
    Vectorized run expectancy lookup for many base-out states.

    Parameters
    ----------
    outs : array-like
        Outs per state (clamped to 0-2)
    base_states : array-like
        Base states as codes, names or BaseState members

    Returns
    -------
    np.ndarray
        Run expectancy for each state
    """
    outs_idx = np.clip(np.asarray(outs, dtype=int), 0, 2)
    base_idx = base_state_codes(base_states)
    return RE_MATRIX[outs_idx, base_idx]


def run_expectancy_frame() -> pd.DataFrame:
    """Return the run expectancy matrix as a labelled DataFrame (outs x base state)."""
    return pd.DataFrame(
        RE_MATRIX.copy(),
        index=pd.Index(OUTS, name="outs"),
        columns=list(BASE_STATE_NAMES),
    )
