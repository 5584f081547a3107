# src/shiftplan/overlays.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional, TypeAlias

import numpy as np

from .curves import CANONICAL_GRANULARITY, IntervalCurve, round_half_away
from .validation import ArrayInput, validate_demand

logger = logging.getLogger(__name__)

OverlayKind: TypeAlias = Literal["efficiency", "addition"]


# -----------------------------
# Data models
# -----------------------------
@dataclass(frozen=True)
class OverlayScope:
    """
    Overlays defined at one level (model, callcenter or agent group).

    None means "inherit from the enclosing scope".
    efficiency: productivity factor per interval.
    addition: sickness surcharge factor per interval.
    """
    efficiency: Optional[IntervalCurve] = None
    addition: Optional[IntervalCurve] = None

    def get(self, kind: OverlayKind) -> Optional[IntervalCurve]:
        if kind == "efficiency":
            return self.efficiency
        if kind == "addition":
            return self.addition
        raise ValueError(f"Unsupported overlay kind: {kind}")


# -----------------------------
# Resolution
# -----------------------------
def constant_overlay(value: float, granularity: int = CANONICAL_GRANULARITY) -> IntervalCurve:
    if value < 0:
        raise ValueError("overlay factor must be >= 0")
    return IntervalCurve.filled(granularity, float(value))


def resolve_overlay(*candidates: Optional[IntervalCurve]) -> IntervalCurve:
    """First defined overlay, most specific scope first; neutral 1.0 if none is."""
    for c in candidates:
        if c is not None:
            return c
    return constant_overlay(1.0)


def resolve_scopes(kind: OverlayKind, *scopes: Optional[OverlayScope]) -> IntervalCurve:
    """resolve_overlay over scopes ordered group -> callcenter -> model."""
    return resolve_overlay(*(s.get(kind) if s is not None else None for s in scopes))


# -----------------------------
# Application
# -----------------------------
def apply_overlay_values(base: ArrayInput, *factors: ArrayInput) -> np.ndarray:
    """
    round(base[i] * f1[i] * f2[i] ...) for arrays of equal length.
    Factors are multiplied in the order given, rounding happens once at the end.
    Base values must be finite and >= 0.
    """
    out = validate_demand(base).copy()
    for f in factors:
        arr = np.asarray(f, dtype=float)
        if arr.shape != out.shape:
            raise ValueError(f"overlay has {arr.size} intervals, base has {out.size}")
        if (arr < 0).any():
            raise ValueError("overlay factors must be >= 0")
        out = out * arr
    return round_half_away(out)


def apply_overlays(
    base: IntervalCurve,
    productivity: Optional[IntervalCurve] = None,
    surcharge: Optional[IntervalCurve] = None,
) -> IntervalCurve:
    """
    Effective staffing curve: round(base * productivity * surcharge).

    Surcharge is always applied after productivity. Missing overlays are
    neutral; overlays are resampled to the base granularity as factors.
    """
    factors = [
        o.resample_factors(base.granularity).values
        for o in (productivity, surcharge)
        if o is not None
    ]
    out = IntervalCurve(apply_overlay_values(base.values, *factors))
    logger.debug("applied %d overlays to curve (sum %g -> %g)", len(factors), base.sum(), out.sum())
    return out


__all__ = [
    "OverlayKind",
    "OverlayScope",
    "constant_overlay",
    "resolve_overlay",
    "resolve_scopes",
    "apply_overlay_values",
    "apply_overlays",
]
