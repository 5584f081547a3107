# src/shiftplan/caller_load.py
from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Union

import numpy as np

from .curves import CANONICAL_GRANULARITY, IntervalCurve
from .errors import NoLoadSignalError
from .validation import ArrayInput, validate_demand

logger = logging.getLogger(__name__)

ArrivalInput = Union[IntervalCurve, ArrayInput]


# -----------------------------
# Helpers
# -----------------------------
def _arrival_values(arrival: ArrivalInput) -> np.ndarray:
    # Curves are compared on the half-hour grid; raw arrays are taken as they are.
    if isinstance(arrival, IntervalCurve):
        return arrival.resample(CANONICAL_GRANULARITY).values
    return validate_demand(arrival)


def _largest_remainder(shares: np.ndarray, total: int) -> np.ndarray:
    """
    Rounds shares (summing to total) to integers that still sum to total.
    Intervals with the largest fractional parts receive the leftover units.
    """
    flo = np.floor(shares)
    rem = shares - flo
    remaining = int(round(float(total) - float(flo.sum())))
    order = np.argsort(-rem, kind="stable")

    if remaining > 0:
        flo[order[:remaining]] += 1
    elif remaining < 0:
        order2 = np.argsort(rem, kind="stable")
        for j in order2[: abs(remaining)]:
            if flo[j] > 0:
                flo[j] -= 1

    return flo


# -----------------------------
# Public API
# -----------------------------
def weighted_arrival_mass(
    weights: Mapping[str, float],
    arrivals: Mapping[str, ArrivalInput],
) -> np.ndarray:
    """
    Sums the caller arrival curves per interval, each multiplied by its weight.

    Caller names match case-insensitively. Weights for unknown caller types are
    skipped and negative weights count as 0.
    """
    by_name: Dict[str, ArrivalInput] = {name.lower(): curve for name, curve in arrivals.items()}

    mass: Optional[np.ndarray] = None
    for name, rate in weights.items():
        curve = by_name.get(name.lower())
        if curve is None:
            logger.warning("caller type %r has a weight but no arrival curve; skipped", name)
            continue
        if rate < 0:
            logger.warning("negative weight %s for caller type %r treated as 0", rate, name)
        values = _arrival_values(curve) * max(0.0, float(rate))

        if mass is None:
            mass = values
        elif mass.size != values.size:
            raise ValueError(
                f"arrival curve for {name!r} has {values.size} intervals, expected {mass.size}"
            )
        else:
            mass = mass + values

    if mass is None:
        raise NoLoadSignalError("no weighted caller type has an arrival curve")
    return mass


def distribute_budget(available_half_hours: int, mass: ArrayInput) -> np.ndarray:
    """
    Spreads the staffing budget over the intervals in proportion to mass:

      demand[i] = budget * mass[i] / sum(mass)

    Result is integral and sums exactly to the budget.
    """
    budget = int(available_half_hours)
    if budget < 0:
        raise ValueError("available_half_hours must be >= 0")

    m = validate_demand(mass)
    total = float(np.sum(m))
    if total <= 0.0:
        raise NoLoadSignalError("weighted arrival mass sums to 0")

    if budget == 0:
        return np.zeros(m.size, dtype=float)

    shares = budget * (m / total)
    return _largest_remainder(shares, budget).astype(float)


def caller_load_curve(
    available_half_hours: int,
    weights: Mapping[str, float],
    arrivals: Mapping[str, IntervalCurve],
    *,
    granularity: int = CANONICAL_GRANULARITY,
) -> IntervalCurve:
    """
    Demand curve for staffing proportional to caller arrivals.

    Computed on the canonical half-hour grid, then resampled to granularity.
    """
    mass = weighted_arrival_mass(weights, arrivals)
    if mass.size != CANONICAL_GRANULARITY:
        raise ValueError(
            f"caller load curves are computed on {CANONICAL_GRANULARITY} intervals, got {mass.size}"
        )

    curve = IntervalCurve(distribute_budget(available_half_hours, mass))
    logger.debug(
        "distributed %d half hours over %d caller types (granularity %d)",
        int(available_half_hours),
        len(weights),
        granularity,
    )
    return curve.resample(granularity)


__all__ = [
    "weighted_arrival_mass",
    "distribute_budget",
    "caller_load_curve",
]
