# src/shiftplan/planner.py
from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

import numpy as np

from .caller_load import caller_load_curve
from .config import DEFAULT_PLANNING, PlanningDefaults
from .curves import CANONICAL_GRANULARITY, IntervalCurve, interval_boundary, round_count
from .decompose import Strategy, decompose
from .models import (
    CallerLoadStaffing,
    DistributionStaffing,
    FixedStaffing,
    ShiftBlock,
    StaffingSpec,
)
from .overlays import OverlayScope, apply_overlays, resolve_scopes
from .validation import validate_granularity

logger = logging.getLogger(__name__)


# -----------------------------
# Internal helpers
# -----------------------------
def _fixed_block(spec: FixedStaffing, skill_level: str) -> List[ShiftBlock]:
    if spec.count == 0:
        return []
    return [
        ShiftBlock(
            count=int(spec.count),
            start_seconds=int(spec.start_seconds),
            end_seconds=spec.end_seconds,
            skill_level=skill_level,
        )
    ]


# -----------------------------
# Public API
# -----------------------------
def resolve_shift_lengths(spec: StaffingSpec, defaults: PlanningDefaults = DEFAULT_PLANNING) -> Tuple[int, int]:
    """Returns (minimum, preferred) in half-hours; 0 falls back to the global default."""
    minimum = spec.minimum_shift_length if spec.minimum_shift_length > 0 else defaults.minimum_shift_length
    preferred = spec.preferred_shift_length if spec.preferred_shift_length > 0 else defaults.preferred_shift_length
    return int(minimum), int(preferred)


def lengths_for_curve(minimum: int, preferred: int, granularity: int) -> Tuple[int, int]:
    """
    Converts half-hour shift lengths to interval counts of a curve with the
    given granularity (16 half-hours is 8 intervals on a 24 curve, 32 on a 96 one).
    """
    n = validate_granularity(granularity)
    factor = n / CANONICAL_GRANULARITY
    return round_count(minimum * factor), round_count(preferred * factor)


def demand_curve(
    spec: StaffingSpec,
    arrivals: Optional[Mapping[str, IntervalCurve]] = None,
) -> Optional[IntervalCurve]:
    """
    Per-interval head-count the roster is derived from.
    None for fixed staffing, which has no curve.
    """
    if isinstance(spec, FixedStaffing):
        return None
    if isinstance(spec, DistributionStaffing):
        return spec.curve
    if isinstance(spec, CallerLoadStaffing):
        if arrivals is None:
            raise ValueError("arrival curves are required for caller load staffing")
        return caller_load_curve(spec.available_half_hours, spec.weights, arrivals)

    raise ValueError(f"Unsupported staffing spec: {type(spec).__name__}")


def effective_curve(
    base: IntervalCurve,
    *scopes: Optional[OverlayScope],
    defaults: PlanningDefaults = DEFAULT_PLANNING,
) -> IntervalCurve:
    """
    round(base * productivity * surcharge) with both overlays resolved over
    scopes (most specific first) and finally the model-wide defaults.
    """
    chain = (*scopes, defaults.overlays)
    return apply_overlays(
        base,
        productivity=resolve_scopes("efficiency", *chain),
        surcharge=resolve_scopes("addition", *chain),
    )


def build_roster(
    spec: StaffingSpec,
    *,
    defaults: PlanningDefaults = DEFAULT_PLANNING,
    arrivals: Optional[Mapping[str, IntervalCurve]] = None,
    skill_level: str = "",
    overlays: Sequence[Optional[OverlayScope]] = (),
    use_productivity: bool = False,
    last_interval_open_end: Optional[bool] = None,
    strategy: Strategy = "level_set",
) -> List[ShiftBlock]:
    """
    Turns one agent group's staffing spec into its shift roster.

    overlays: group and callcenter scopes, most specific first; the
      model-wide overlays from defaults are consulted last.
    use_productivity: convert the demand to net agents with the resolved
      efficiency overlay before building shifts.
    last_interval_open_end: overrides the spec's open-end flag
      (caller load staffing has none and defaults to False).
    Shift lengths are converted from half-hours to intervals of the demand curve.
    """
    if isinstance(spec, FixedStaffing):
        return _fixed_block(spec, skill_level)

    curve = demand_curve(spec, arrivals)
    assert curve is not None

    if use_productivity:
        efficiency = resolve_scopes("efficiency", *overlays, defaults.overlays)
        curve = apply_overlays(curve, productivity=efficiency)

    if last_interval_open_end is None:
        last_interval_open_end = isinstance(spec, DistributionStaffing) and spec.last_interval_open_end

    minimum, preferred = lengths_for_curve(*resolve_shift_lengths(spec, defaults), curve.granularity)
    blocks = decompose(
        curve,
        minimum_shift_length=minimum,
        preferred_shift_length=preferred,
        last_interval_open_end=bool(last_interval_open_end),
        skill_level=skill_level,
        strategy=strategy,
    )

    logger.debug(
        "built roster for %s (skill level %r): %d blocks, %d agents",
        type(spec).__name__,
        skill_level,
        len(blocks),
        sum(b.count for b in blocks),
    )
    return blocks


def coverage_curve(blocks: Sequence[ShiftBlock], granularity: int = 48) -> IntervalCurve:
    """
    Agents present per interval. Blocks not aligned to the grid contribute
    the fraction of the interval they work.
    """
    n = validate_granularity(granularity)
    bounds = np.array([interval_boundary(i, n) for i in range(n + 1)], dtype=float)
    starts, ends = bounds[:-1], bounds[1:]

    cov = np.zeros(n, dtype=float)
    for b in blocks:
        overlap = np.minimum(ends, b.effective_end_seconds) - np.maximum(starts, b.start_seconds)
        cov += b.count * np.clip(overlap, 0.0, None) / (ends - starts)
    return IntervalCurve(cov)


def agent_hours(blocks: Sequence[ShiftBlock]) -> float:
    """Total scheduled working time of a roster in agent-hours."""
    return float(sum(b.count * b.duration_seconds for b in blocks)) / 3600.0


__all__ = [
    "resolve_shift_lengths",
    "lengths_for_curve",
    "demand_curve",
    "effective_curve",
    "build_roster",
    "coverage_curve",
    "agent_hours",
]
