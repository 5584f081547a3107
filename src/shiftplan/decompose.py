# src/shiftplan/decompose.py
"""
Turns a per-interval demand curve into a roster of shift blocks.

Two strategies are available:

  level_set  Peels the demand histogram from the top level down. At each
             level the maximal runs of intervals still needing an agent are
             tiled with shifts of the preferred length; a remainder shorter
             than the minimum is absorbed into the previous tile and a run
             shorter than the minimum is widened to the minimum.

  rolling    First-in first-out sweep over the day. Agents start when demand
             rises; when demand falls the longest-serving agents leave, but
             only once they reached the minimum length. Agents also leave when
             they reached the preferred length (and are replaced if still
             needed).

Both guarantee that every interval is covered by at least as many agents as
its demand and that no shift is shorter than the minimum length.
"""
from __future__ import annotations

import logging
from collections import Counter, deque
from typing import Deque, Dict, List, Literal, Optional, Tuple, TypeAlias, Union

import numpy as np

from .curves import IntervalCurve, interval_boundary
from .models import OPEN_END, ShiftBlock, ShiftTile
from .validation import ArrayInput, validate_demand, validate_shift_lengths

logger = logging.getLogger(__name__)

Strategy: TypeAlias = Literal["level_set", "rolling"]

# Fractional demand is rounded up; this absorbs float noise like 2.0000000001.
_CEIL_TOLERANCE = 1e-9


# -----------------------------
# Internal helpers
# -----------------------------
def _required_agents(values: np.ndarray) -> np.ndarray:
    return np.ceil(values - _CEIL_TOLERANCE).clip(min=0).astype(np.int64)


def _first_run(mask: np.ndarray) -> Optional[Tuple[int, int]]:
    """Earliest maximal run of True values as (start, end), end exclusive."""
    hits = np.flatnonzero(mask)
    if hits.size == 0:
        return None
    start = int(hits[0])
    end = start
    while end < mask.size and mask[end]:
        end += 1
    return start, end


def _tile_run(start: int, end: int, n: int, minimum: int, preferred: int) -> List[Tuple[int, int]]:
    length = end - start

    # Too short: widen to the minimum, to the right unless the day ends first.
    if length < minimum:
        new_end = min(n, start + minimum)
        return [(new_end - minimum, new_end)]

    step = preferred if preferred > 0 else length
    tiles = [(s, s + step) for s in range(start, end - step + 1, step)]
    covered = tiles[-1][1] if tiles else start
    rest = end - covered
    if rest > 0:
        if tiles and rest < minimum:
            last_start, _ = tiles[-1]
            tiles[-1] = (last_start, end)
        else:
            tiles.append((covered, end))
    return tiles


def _level_set_tiles(required: np.ndarray, minimum: int, preferred: int) -> Dict[Tuple[int, int], int]:
    n = int(required.size)
    remaining = required.copy()
    counts: Dict[Tuple[int, int], int] = Counter()

    while True:
        top = int(remaining.max())
        if top <= 0:
            break

        # All levels between the next lower value and top share the same runs.
        lower = remaining[remaining < top]
        height = top - (int(lower.max()) if lower.size else 0)

        while True:
            run = _first_run(remaining >= top)
            if run is None:
                break
            for s, e in _tile_run(run[0], run[1], n, minimum, preferred):
                counts[(s, e)] += height
                remaining[s:e] = np.maximum(remaining[s:e] - height, 0)

    return counts


def _rolling_tiles(required: np.ndarray, minimum: int, preferred: int) -> Dict[Tuple[int, int], int]:
    n = int(required.size)
    working: Deque[int] = deque()
    counts: Dict[Tuple[int, int], int] = Counter()

    for i, needed in enumerate(required.tolist()):
        # Send the longest-serving agents home once they did their minimum.
        while needed < len(working):
            if working[0] + minimum > i:
                break
            counts[(working.popleft(), i)] += 1

        if preferred > 0:
            while working and i - working[0] >= preferred:
                counts[(working.popleft(), i)] += 1

        if needed > len(working):
            working.extend([i] * (needed - len(working)))

    for start in working:
        counts[(start, n)] += 1

    # Shifts cut short by the end of the day start earlier instead.
    if minimum > 0:
        fixed: Dict[Tuple[int, int], int] = Counter()
        for (s, e), c in counts.items():
            if e == n and e - s < minimum:
                s = n - minimum
            fixed[(s, e)] += c
        counts = fixed

    return counts


# -----------------------------
# Public API
# -----------------------------
def decompose_intervals(
    values: Union[IntervalCurve, ArrayInput],
    *,
    minimum_shift_length: int = 0,
    preferred_shift_length: int = 0,
    strategy: Strategy = "level_set",
) -> List[ShiftTile]:
    """
    Decomposes a demand curve (any number of intervals) into shift tiles.

    minimum_shift_length / preferred_shift_length are interval counts,
    0 meaning unrestricted / no preference. Tiles are sorted by start, then end.
    """
    raw = values.values if isinstance(values, IntervalCurve) else values
    demand = validate_demand(raw)
    n = int(demand.size)
    minimum = int(minimum_shift_length)
    preferred = int(preferred_shift_length)
    validate_shift_lengths(minimum, preferred, n)

    required = _required_agents(demand)
    if strategy == "level_set":
        counts = _level_set_tiles(required, minimum, preferred)
    elif strategy == "rolling":
        counts = _rolling_tiles(required, minimum, preferred)
    else:
        raise ValueError(f"Unsupported strategy: {strategy}")

    tiles = [ShiftTile(count=c, start=s, end=e) for (s, e), c in counts.items() if c > 0]
    tiles.sort(key=lambda t: (t.start, t.end))

    logger.debug(
        "decomposed %d intervals (peak %d) into %d tiles using %s",
        n,
        int(required.max()),
        len(tiles),
        strategy,
    )
    return tiles


def tiles_to_blocks(
    tiles: List[ShiftTile],
    n_intervals: int,
    *,
    last_interval_open_end: bool = False,
    skill_level: str = "",
) -> List[ShiftBlock]:
    """Converts interval tiles to blocks in seconds; tiles reaching the day end may be open-ended."""
    blocks: List[ShiftBlock] = []
    for t in tiles:
        end: Optional[int]
        if last_interval_open_end and t.end == n_intervals:
            end = OPEN_END
        else:
            end = interval_boundary(t.end, n_intervals)
        blocks.append(
            ShiftBlock(
                count=t.count,
                start_seconds=interval_boundary(t.start, n_intervals),
                end_seconds=end,
                skill_level=skill_level,
            )
        )
    return blocks


def decompose(
    curve: Union[IntervalCurve, ArrayInput],
    *,
    minimum_shift_length: int = 0,
    preferred_shift_length: int = 0,
    last_interval_open_end: bool = False,
    skill_level: str = "",
    strategy: Strategy = "level_set",
) -> List[ShiftBlock]:
    """
    Converts a demand curve into shift blocks.

    Every interval ends up covered by at least ceil(demand) agents and no
    block is shorter than minimum_shift_length intervals.
    """
    tiles = decompose_intervals(
        curve,
        minimum_shift_length=minimum_shift_length,
        preferred_shift_length=preferred_shift_length,
        strategy=strategy,
    )
    n = len(curve.values) if isinstance(curve, IntervalCurve) else len(curve)
    return tiles_to_blocks(
        tiles,
        n,
        last_interval_open_end=last_interval_open_end,
        skill_level=skill_level,
    )


def tile_coverage(tiles: List[ShiftTile], n_intervals: int) -> np.ndarray:
    """Number of agents working in each interval."""
    cov = np.zeros(int(n_intervals), dtype=np.int64)
    for t in tiles:
        cov[t.start : t.end] += t.count
    return cov


__all__ = [
    "Strategy",
    "decompose_intervals",
    "tiles_to_blocks",
    "decompose",
    "tile_coverage",
]
