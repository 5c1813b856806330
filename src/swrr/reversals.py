"""
Steering wheel reversal detection.

A reversal is a change of steering direction larger than the gap size,
measured between two stationary points of the (conditioned) angle signal.
Rises are counted by one pass over the extrema; falls by the same pass over
the negated signal.
"""

from typing import List

import numpy as np
from loguru import logger

from swrr.core import ReversalDetection, ReversalPair


def find_extrema(angle_deg) -> np.ndarray:
    """
    Indices of stationary points, in increasing order.

    Index i is a stationary point when the first difference flips strictly
    from rising to falling (or back) at i, or when the difference into i is
    exactly zero. The first sample is always one (its difference is defined
    as 0), and the last sample closes the final excursion.
    Flat stretches yield one extremum per flat sample.
    """
    x = np.asarray(angle_deg, dtype=float)
    if len(x) < 2:
        return np.arange(len(x))

    # d[i] = x[i] - x[i-1], with d[0] = 0 so the first sample counts as flat
    d = np.concatenate(([0.0], np.diff(x)))
    s = np.sign(d)

    # candidate i compares the step into i with the step out of i
    turning = np.abs(s[:-1] - s[1:]) == 2
    flat = d[:-1] == 0
    extrema = np.flatnonzero(turning | flat)

    # last sample has no step out; it closes the final excursion
    return np.append(extrema, len(x) - 1)


def find_upward_reversals(
    angle_deg, extrema: np.ndarray, gap_size: float
) -> List[ReversalPair]:
    """
    Greedy single pass over the extrema collecting rises larger than gap_size.

    The reference point starts at the first extremum. A candidate exceeding
    it by more than gap_size closes a reversal and becomes the new reference;
    a candidate at or below it replaces it (deepest point before the next
    rise); anything in between is ignored.
    """
    x = np.asarray(angle_deg, dtype=float)
    reversals: List[ReversalPair] = []
    if len(extrema) < 2:
        return reversals

    ref = extrema[0]
    for j in extrema[1:]:
        # strict: an excursion of exactly gap_size is not a reversal
        if x[j] - x[ref] > gap_size:
            reversals.append((int(ref), int(j)))
            ref = j
        elif x[j] <= x[ref]:
            # ties move the reference to the later point
            ref = j

    return reversals


def detect_reversals(angle_deg, gap_size: float) -> ReversalDetection:
    """Upward and downward reversals of the signal, sharing one extrema list"""
    x = np.asarray(angle_deg, dtype=float)
    extrema = find_extrema(x)

    # extrema of -x coincide with those of x
    upward = find_upward_reversals(x, extrema, gap_size)
    downward = find_upward_reversals(-x, extrema, gap_size)

    detection = ReversalDetection(extrema=extrema, upward=upward, downward=downward)
    logger.debug(
        f"{len(extrema)} extrema, {len(upward)} upward + {len(downward)} downward "
        f"reversals (gap {gap_size} deg)"
    )
    return detection
