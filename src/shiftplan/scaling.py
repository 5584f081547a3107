# src/shiftplan/scaling.py
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, List

from .curves import round_count
from .models import CallerLoadStaffing, DistributionStaffing, FixedStaffing, StaffingSpec
from .validation import validate_ratio

logger = logging.getLogger(__name__)


def scale_count(value: int, ratio: float) -> int:
    """
    round(value * ratio); a positive value never scales down to 0.
    """
    r = validate_ratio(ratio)
    if value <= 0:
        return 0
    return max(1, round_count(value * r))


def scale_spec(spec: StaffingSpec, ratio: float) -> StaffingSpec:
    """
    Same staffing at ratio intensity ("copy this group at X%").

    Fixed: head-count is scaled. Distribution: each interval is scaled and
    rounded on its own (no renormalisation). Caller load: the half hour budget
    is scaled. Shift lengths and flags are kept.
    """
    validate_ratio(ratio)

    if isinstance(spec, FixedStaffing):
        return replace(spec, count=scale_count(spec.count, ratio))
    if isinstance(spec, DistributionStaffing):
        return replace(spec, curve=spec.curve.scale(ratio, keep_positive=True))
    if isinstance(spec, CallerLoadStaffing):
        return replace(spec, available_half_hours=scale_count(spec.available_half_hours, ratio))

    raise ValueError(f"Unsupported staffing spec: {type(spec).__name__}")


def scale_specs(specs: Iterable[StaffingSpec], ratio: float) -> List[StaffingSpec]:
    """Scales every agent group of a callcenter."""
    out = [scale_spec(s, ratio) for s in specs]
    logger.debug("scaled %d staffing specs by %g", len(out), ratio)
    return out


__all__ = [
    "scale_count",
    "scale_spec",
    "scale_specs",
]
