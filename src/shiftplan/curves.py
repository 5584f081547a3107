# src/shiftplan/curves.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Union

import numpy as np

from .errors import NoLoadSignalError
from .validation import GRANULARITIES, validate_demand, validate_granularity, validate_ratio

DAY_SECONDS: int = 86400
CANONICAL_GRANULARITY: int = 48


# -----------------------------
# Helpers
# -----------------------------
def round_half_away(x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Rounds half away from zero (np.round would round half to even)."""
    return np.sign(x) * np.floor(np.abs(x) + 0.5)


def round_count(x: float) -> int:
    return int(round_half_away(float(x)))


def interval_boundary(index: int, n_intervals: int) -> int:
    """Start of interval `index` in seconds; index == n_intervals is the end of the day."""
    if n_intervals <= 0:
        raise ValueError("n_intervals must be > 0")
    return int(index) * DAY_SECONDS // int(n_intervals)


# -----------------------------
# Curve
# -----------------------------
@dataclass(frozen=True, eq=False)
class IntervalCurve:
    """
    One day split into 24, 48 or 96 equal intervals, one non-negative value each.

    The values array is copied on construction and marked read-only, so a
    curve can be shared freely: every operation returns a new curve.
    """
    values: np.ndarray

    def __post_init__(self) -> None:
        arr = validate_demand(self.values)
        validate_granularity(arr.size)
        arr = arr.copy()
        arr.setflags(write=False)
        object.__setattr__(self, "values", arr)

    @classmethod
    def filled(cls, granularity: int, fill_value: float = 0.0) -> "IntervalCurve":
        n = validate_granularity(granularity)
        return cls(np.full(n, float(fill_value)))

    # Basic properties
    @property
    def granularity(self) -> int:
        return int(self.values.size)

    @property
    def interval_seconds(self) -> int:
        return DAY_SECONDS // self.granularity

    def interval_start_seconds(self, index: int) -> int:
        if not (0 <= index <= self.granularity):
            raise IndexError(f"interval index out of range: {index}")
        return interval_boundary(index, self.granularity)

    def interval_labels(self) -> List[str]:
        """HH:MM start time of each interval."""
        out = []
        for i in range(self.granularity):
            m = self.interval_start_seconds(i) // 60
            out.append(f"{m // 60:02d}:{m % 60:02d}")
        return out

    def sum(self) -> float:
        return float(np.sum(self.values))

    def to_list(self) -> List[float]:
        return [float(v) for v in self.values]

    def __len__(self) -> int:
        return self.granularity

    def __getitem__(self, index: int) -> float:
        return float(self.values[index])

    def __iter__(self) -> Iterator[float]:
        return iter(self.to_list())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntervalCurve):
            return NotImplemented
        return bool(np.array_equal(self.values, other.values))

    __hash__ = None

    def __repr__(self) -> str:
        return f"IntervalCurve(granularity={self.granularity}, sum={self.sum():g})"

    # Transforms
    def resample(self, target_granularity: int) -> "IntervalCurve":
        """
        Mass-preserving change of granularity.
        Finer: each value is split evenly over its k sub-intervals.
        Coarser: k adjacent values are summed.
        """
        target = validate_granularity(target_granularity)
        n = self.granularity
        if target == n:
            return IntervalCurve(self.values)
        if target > n:
            k = target // n
            return IntervalCurve(np.repeat(self.values / k, k))
        k = n // target
        return IntervalCurve(self.values.reshape(target, k).sum(axis=1))

    def resample_factors(self, target_granularity: int) -> "IntervalCurve":
        """
        Rate-preserving change of granularity for multiplier curves.
        Finer: each factor is repeated. Coarser: adjacent factors are averaged.
        """
        target = validate_granularity(target_granularity)
        n = self.granularity
        if target == n:
            return IntervalCurve(self.values)
        if target > n:
            return IntervalCurve(np.repeat(self.values, target // n))
        return IntervalCurve(self.values.reshape(target, n // target).mean(axis=1))

    def round(self) -> "IntervalCurve":
        return IntervalCurve(round_half_away(self.values))

    def scale(self, ratio: float, *, keep_positive: bool = True) -> "IntervalCurve":
        """
        Multiplies every value by ratio and rounds to whole agents.
        With keep_positive, intervals that had a positive value keep at least 1.
        """
        r = validate_ratio(ratio)
        scaled = round_half_away(self.values * r)
        if keep_positive:
            scaled = np.where(self.values > 0, np.maximum(scaled, 1.0), scaled)
        return IntervalCurve(scaled)

    def normalize(self) -> "IntervalCurve":
        """Turns the curve into a density (values sum to 1)."""
        total = self.sum()
        if total <= 0:
            raise NoLoadSignalError("cannot normalize a curve whose values sum to 0")
        return IntervalCurve(self.values / total)

    def multiply(self, other: Union[float, "IntervalCurve"]) -> "IntervalCurve":
        """Per-interval product; a curve factor is brought to this granularity as a rate."""
        if isinstance(other, IntervalCurve):
            factors = other.resample_factors(self.granularity).values
            return IntervalCurve(self.values * factors)
        return IntervalCurve(self.values * float(other))

    def add(self, other: "IntervalCurve") -> "IntervalCurve":
        """Per-interval sum; the other curve is resampled mass-preserving."""
        return IntervalCurve(self.values + other.resample(self.granularity).values)


def new_curve(granularity: int, fill_value: float = 0.0) -> IntervalCurve:
    return IntervalCurve.filled(granularity, fill_value)


__all__ = [
    "DAY_SECONDS",
    "CANONICAL_GRANULARITY",
    "GRANULARITIES",
    "IntervalCurve",
    "new_curve",
    "round_half_away",
    "round_count",
    "interval_boundary",
]
