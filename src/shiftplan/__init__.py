# src/shiftplan/__init__.py
from __future__ import annotations

import logging

# -----------------------------
# Curves / data model
# -----------------------------
from .curves import (
    DAY_SECONDS,
    CANONICAL_GRANULARITY,
    GRANULARITIES,
    IntervalCurve,
    new_curve,
    round_half_away,
)

from .models import (
    OPEN_END,
    ShiftBlock,
    ShiftTile,
    FixedStaffing,
    DistributionStaffing,
    CallerLoadStaffing,
    StaffingSpec,
)

from .errors import (
    ShiftPlanningError,
    InvalidConstraintError,
    NegativeDemandError,
    NoLoadSignalError,
    GranularityMismatchError,
)

# -----------------------------
# Engine
# -----------------------------
from .decompose import Strategy, decompose, decompose_intervals, tiles_to_blocks

from .caller_load import caller_load_curve, distribute_budget, weighted_arrival_mass

from .overlays import (
    OverlayScope,
    apply_overlay_values,
    apply_overlays,
    constant_overlay,
    resolve_overlay,
)

from .scaling import scale_count, scale_spec, scale_specs

# -----------------------------
# Planning
# -----------------------------
from .config import DEFAULT_PLANNING, PlanningDefaults, load_defaults_from_env

from .planner import (
    agent_hours,
    build_roster,
    coverage_curve,
    demand_curve,
    effective_curve,
    lengths_for_curve,
    resolve_shift_lengths,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Curves / data model
    "DAY_SECONDS",
    "CANONICAL_GRANULARITY",
    "GRANULARITIES",
    "IntervalCurve",
    "new_curve",
    "round_half_away",
    "OPEN_END",
    "ShiftBlock",
    "ShiftTile",
    "FixedStaffing",
    "DistributionStaffing",
    "CallerLoadStaffing",
    "StaffingSpec",
    # Errors
    "ShiftPlanningError",
    "InvalidConstraintError",
    "NegativeDemandError",
    "NoLoadSignalError",
    "GranularityMismatchError",
    # Engine
    "Strategy",
    "decompose",
    "decompose_intervals",
    "tiles_to_blocks",
    "caller_load_curve",
    "distribute_budget",
    "weighted_arrival_mass",
    "OverlayScope",
    "apply_overlay_values",
    "apply_overlays",
    "constant_overlay",
    "resolve_overlay",
    "scale_count",
    "scale_spec",
    "scale_specs",
    # Planning
    "DEFAULT_PLANNING",
    "PlanningDefaults",
    "load_defaults_from_env",
    "agent_hours",
    "build_roster",
    "coverage_curve",
    "demand_curve",
    "effective_curve",
    "lengths_for_curve",
    "resolve_shift_lengths",
]
