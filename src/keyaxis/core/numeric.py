"""Small numeric primitives shared by the extractor and the scorer."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from keyaxis.core.defaults import NORMALIZE_MIDPOINT, NORMALIZE_Z_DIVISOR


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def normalize(value: float, mean: float, sd: float) -> float:
    """Map *value* onto ``[0, 1]`` relative to a ``(mean, sd)`` distribution.

    The z-score is divided by 4 and shifted by 0.5, so roughly +/-2
    standard deviations span the full unit range.  A zero *sd* yields
    the neutral midpoint without dividing.

    Args:
        value: Raw metric value.
        mean: Reference mean.
        sd: Reference standard deviation.

    Returns:
        Normalized value in ``[0, 1]``.
    """
    if sd == 0:
        return NORMALIZE_MIDPOINT
    z = (value - mean) / sd
    return clamp(z / NORMALIZE_Z_DIVISOR + NORMALIZE_MIDPOINT, 0.0, 1.0)


def normalize_inverted(value: float, mean: float, sd: float) -> float:
    """``1 - normalize(...)``: larger raw values pull the result toward 0."""
    return 1.0 - normalize(value, mean, sd)


def median(values: Sequence[float]) -> float:
    """Median of *values*, or ``0.0`` for an empty sequence."""
    if len(values) == 0:
        return 0.0
    return float(np.median(np.asarray(values, dtype=np.float64)))


def mean_or_zero(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(np.asarray(values, dtype=np.float64)))
