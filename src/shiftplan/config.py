# src/shiftplan/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .curves import IntervalCurve
from .errors import InvalidConstraintError
from .overlays import OverlayScope

ENV_PREFIX = "SHIFTPLAN_"


@dataclass(frozen=True)
class PlanningDefaults:
    """
    Model-wide defaults used when an agent group leaves a setting at 0 / None.

    Shift lengths are half-hours (16 = 8 hours) and are converted to
    interval counts of the curve being decomposed.
    """
    preferred_shift_length: int = 16
    minimum_shift_length: int = 1

    # Model-wide overlays; None is the neutral factor 1.0.
    efficiency: Optional[IntervalCurve] = None
    addition: Optional[IntervalCurve] = None

    def __post_init__(self) -> None:
        if self.preferred_shift_length <= 0 or self.minimum_shift_length <= 0:
            raise InvalidConstraintError(
                "default shift lengths must be > 0",
                preferred=self.preferred_shift_length,
                minimum=self.minimum_shift_length,
            )
        if self.minimum_shift_length > self.preferred_shift_length:
            raise InvalidConstraintError(
                "default minimum shift length exceeds default preferred shift length",
                preferred=self.preferred_shift_length,
                minimum=self.minimum_shift_length,
            )

    @property
    def overlays(self) -> OverlayScope:
        return OverlayScope(efficiency=self.efficiency, addition=self.addition)


DEFAULT_PLANNING = PlanningDefaults()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidConstraintError(
            f"{ENV_PREFIX + name} must be an integer", value=raw
        ) from None


def load_defaults_from_env() -> PlanningDefaults:
    """
    Reads the global shift length defaults from the environment:
      SHIFTPLAN_PREFERRED_SHIFT_LENGTH
      SHIFTPLAN_MINIMUM_SHIFT_LENGTH
    Unset variables keep the built-in defaults.
    """
    return PlanningDefaults(
        preferred_shift_length=_env_int(
            "PREFERRED_SHIFT_LENGTH", DEFAULT_PLANNING.preferred_shift_length
        ),
        minimum_shift_length=_env_int(
            "MINIMUM_SHIFT_LENGTH", DEFAULT_PLANNING.minimum_shift_length
        ),
    )


__all__ = [
    "ENV_PREFIX",
    "PlanningDefaults",
    "DEFAULT_PLANNING",
    "load_defaults_from_env",
]
