"""Rounding and range helpers shared by the scorers."""

import math
from collections.abc import Sequence

import numpy as np


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's round() is banker's rounding (8.5 -> 8); stored scores were
    produced with half-up rounding (8.5 -> 9), so every score uses this.
    """
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def population_stdev(values: Sequence[float]) -> float:
    """Population (ddof=0) standard deviation; 0.0 for an empty sequence."""
    if not values:
        return 0.0
    return float(np.std(np.asarray(values, dtype=float)))
