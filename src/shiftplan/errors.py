# src/shiftplan/errors.py
"""
Typed errors raised by the staffing computations.

All of them derive from ValueError: every failure is caused by input the
caller can correct (no I/O, nothing transient).
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class ShiftPlanningError(ValueError):
    """Base class for all shift planning errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or "SHIFT_PLANNING_ERROR"
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class InvalidConstraintError(ShiftPlanningError):
    """Contradictory or out-of-range shift length constraints."""

    def __init__(self, reason: str, **details: Any):
        super().__init__(
            message=f"Invalid shift constraint: {reason}",
            error_code="INVALID_CONSTRAINT",
            details=details,
        )


class NegativeDemandError(ShiftPlanningError):
    """A demand value is negative (or not a finite number)."""

    def __init__(self, index: int, value: float):
        super().__init__(
            message=f"Demand must be finite and >= 0 (interval {index} has {value})",
            error_code="NEGATIVE_DEMAND",
            details={"index": index, "value": value},
        )


class NoLoadSignalError(ShiftPlanningError):
    """Caller-driven staffing has no weighted arrival mass to distribute."""

    def __init__(self, reason: Optional[str] = None):
        super().__init__(
            message=f"No caller load signal: {reason or 'all weighted arrivals are zero'}",
            error_code="NO_LOAD_SIGNAL",
            details={"reason": reason},
        )


class GranularityMismatchError(ShiftPlanningError):
    """Interval count outside of the supported granularities."""

    def __init__(self, granularity: int, supported: tuple[int, ...]):
        super().__init__(
            message=f"Unsupported granularity {granularity}; expected one of {list(supported)}",
            error_code="GRANULARITY_MISMATCH",
            details={"granularity": granularity, "supported": list(supported)},
        )


__all__ = [
    "ShiftPlanningError",
    "InvalidConstraintError",
    "NegativeDemandError",
    "NoLoadSignalError",
    "GranularityMismatchError",
]
