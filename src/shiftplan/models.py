# src/shiftplan/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, TypeAlias, Union

from .curves import DAY_SECONDS, IntervalCurve

# A shift with end_seconds OPEN_END keeps working until the simulated day ends.
OPEN_END = None


def _is_whole(value: object) -> bool:
    try:
        return float(value) == int(value)
    except (TypeError, ValueError, OverflowError):
        return False


# -----------------------------
# Roster
# -----------------------------
@dataclass(frozen=True)
class ShiftBlock:
    """A homogeneous group of agents working one contiguous window of the day."""
    count: int
    start_seconds: int
    end_seconds: Optional[int]
    skill_level: str = ""

    def __post_init__(self) -> None:
        if not _is_whole(self.count) or self.count < 1:
            raise ValueError("count must be a whole number >= 1")
        if not (0 <= self.start_seconds < DAY_SECONDS):
            raise ValueError(f"start_seconds must be in [0, {DAY_SECONDS})")
        if self.end_seconds is not OPEN_END:
            if not (self.start_seconds < self.end_seconds <= DAY_SECONDS):
                raise ValueError("end_seconds must be > start_seconds and <= one day")

    @property
    def is_open_end(self) -> bool:
        return self.end_seconds is OPEN_END

    @property
    def effective_end_seconds(self) -> int:
        return DAY_SECONDS if self.end_seconds is OPEN_END else int(self.end_seconds)

    @property
    def duration_seconds(self) -> int:
        return self.effective_end_seconds - self.start_seconds


@dataclass(frozen=True)
class ShiftTile:
    """Interval-index form of a shift: intervals start..end-1."""
    count: int
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


# -----------------------------
# Staffing specifications
# -----------------------------
# Shift lengths are half-hours; 0 means "use the global default".
@dataclass(frozen=True)
class FixedStaffing:
    count: int
    start_seconds: int = 0
    end_seconds: Optional[int] = DAY_SECONDS
    minimum_shift_length: int = 0
    preferred_shift_length: int = 0

    def __post_init__(self) -> None:
        if not _is_whole(self.count) or self.count < 0:
            raise ValueError("count must be a whole number >= 0")


@dataclass(frozen=True)
class DistributionStaffing:
    curve: IntervalCurve
    last_interval_open_end: bool = False
    minimum_shift_length: int = 0
    preferred_shift_length: int = 0


@dataclass(frozen=True)
class CallerLoadStaffing:
    available_half_hours: int
    weights: Mapping[str, float] = field(default_factory=dict)
    minimum_shift_length: int = 0
    preferred_shift_length: int = 0

    def __post_init__(self) -> None:
        if self.available_half_hours < 0:
            raise ValueError("available_half_hours must be >= 0")
        # private copy, the caller's mapping may change later
        weights: Dict[str, float] = {str(k): float(v) for k, v in self.weights.items()}
        object.__setattr__(self, "weights", weights)


StaffingSpec: TypeAlias = Union[FixedStaffing, DistributionStaffing, CallerLoadStaffing]


__all__ = [
    "OPEN_END",
    "ShiftBlock",
    "ShiftTile",
    "FixedStaffing",
    "DistributionStaffing",
    "CallerLoadStaffing",
    "StaffingSpec",
]
