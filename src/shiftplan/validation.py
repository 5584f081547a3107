from __future__ import annotations

import math
from typing import Sequence, Union

import numpy as np

from .errors import GranularityMismatchError, InvalidConstraintError, NegativeDemandError

GRANULARITIES: tuple[int, ...] = (24, 48, 96)

ArrayInput = Union[Sequence[float], np.ndarray]


def validate_granularity(granularity: int) -> int:
    if int(granularity) not in GRANULARITIES:
        raise GranularityMismatchError(int(granularity), GRANULARITIES)
    return int(granularity)


def validate_demand(values: ArrayInput) -> np.ndarray:
    """
    Returns the demand values as a float array.
    Rejects empty input and any value that is negative or not finite.
    """
    arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError("demand values must be one-dimensional")
    if arr.size == 0:
        raise ValueError("demand values must not be empty")

    bad = np.flatnonzero(~np.isfinite(arr) | (arr < 0))
    if bad.size:
        i = int(bad[0])
        raise NegativeDemandError(i, float(arr[i]))
    return arr


def validate_ratio(ratio: float) -> float:
    r = float(ratio)
    if not math.isfinite(r) or r <= 0:
        raise ValueError("ratio must be a finite number > 0")
    return r


def validate_shift_lengths(minimum: int, preferred: int, n_intervals: int) -> None:
    """
    minimum / preferred are interval counts, 0 meaning "not restricted".
    """
    if minimum < 0 or preferred < 0:
        raise InvalidConstraintError(
            "shift lengths must be >= 0", minimum=minimum, preferred=preferred
        )

    if minimum > 0 and preferred > 0 and minimum > preferred:
        raise InvalidConstraintError(
            "minimum shift length exceeds preferred shift length",
            minimum=minimum,
            preferred=preferred,
        )

    if preferred > n_intervals:
        raise InvalidConstraintError(
            "preferred shift length exceeds the day length",
            preferred=preferred,
            n_intervals=n_intervals,
        )
    if minimum > n_intervals:
        raise InvalidConstraintError(
            "minimum shift length exceeds the day length",
            minimum=minimum,
            n_intervals=n_intervals,
        )


__all__ = [
    "GRANULARITIES",
    "validate_granularity",
    "validate_demand",
    "validate_ratio",
    "validate_shift_lengths",
]
