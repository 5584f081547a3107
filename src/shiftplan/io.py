# src/shiftplan/io.py
from __future__ import annotations

from typing import Sequence

import pandas as pd

from .curves import IntervalCurve
from .models import ShiftBlock

CURVE_COLUMNS = ["interval", "time", "value"]
ROSTER_COLUMNS = ["count", "start_seconds", "end_seconds", "start", "end", "open_end", "hours", "skill_level"]


def _clock(seconds: int) -> str:
    m = int(seconds) // 60
    return f"{m // 60:02d}:{m % 60:02d}"


def curve_to_df(curve: IntervalCurve) -> pd.DataFrame:
    """
    One row per interval:
      interval (0-based index)
      time (HH:MM interval start)
      value
    """
    return pd.DataFrame(
        {
            "interval": range(curve.granularity),
            "time": curve.interval_labels(),
            "value": curve.to_list(),
        },
        columns=CURVE_COLUMNS,
    )


def curve_from_series(values: pd.Series) -> IntervalCurve:
    """Builds a curve from a numeric series (e.g. the value column of curve_to_df)."""
    s = pd.to_numeric(values, errors="coerce")
    if s.isna().any():
        bad = values.index[s.isna()].tolist()[:10]
        raise ValueError(f"curve values must be numeric. Example bad rows: {bad}")
    return IntervalCurve(s.to_numpy(dtype=float))


def roster_to_df(blocks: Sequence[ShiftBlock]) -> pd.DataFrame:
    """
    Tabular roster for preview/reporting, sorted by start then end.
    Open-ended shifts show end "open" and are counted until the end of the day.
    """
    rows = []
    for b in blocks:
        rows.append(
            {
                "count": b.count,
                "start_seconds": b.start_seconds,
                "end_seconds": b.effective_end_seconds,
                "start": _clock(b.start_seconds),
                "end": "open" if b.is_open_end else _clock(b.effective_end_seconds),
                "open_end": b.is_open_end,
                "hours": b.duration_seconds / 3600.0,
                "skill_level": b.skill_level,
            }
        )

    df = pd.DataFrame(rows, columns=ROSTER_COLUMNS)
    return df.sort_values(["start_seconds", "end_seconds"], kind="stable").reset_index(drop=True)


__all__ = [
    "CURVE_COLUMNS",
    "ROSTER_COLUMNS",
    "curve_to_df",
    "curve_from_series",
    "roster_to_df",
]
