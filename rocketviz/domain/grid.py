"""Grid-line synthesis for a fitted viewport."""

from __future__ import annotations

import math
from typing import List, Optional

from .entities import Bounds, GridLine

MAX_LINES_PER_AXIS = 400
EPSILON = 1e-9
MAJOR_EVERY = 5


def effective_step(bounds: Bounds, explicit_step: Optional[float] = None) -> float:
    """Return ``explicit_step`` when usable, otherwise a tenth of the larger side."""
    if explicit_step is not None and math.isfinite(explicit_step) and explicit_step > 0:
        return float(explicit_step)
    return max(bounds.width, bounds.height) / 10


def is_major(coord: float, step: float) -> bool:
    # fmod keeps the dividend's sign, so -5.0000000001 steps still counts as major
    return abs(math.fmod(coord / step, MAJOR_EVERY)) < EPSILON


def _axis_positions(lo: float, hi: float, step: float) -> List[float]:
    start = math.floor(lo / step) * step
    end = math.ceil(hi / step) * step
    positions: List[float] = []
    index = 0
    while len(positions) < MAX_LINES_PER_AXIS:
        value = start + index * step
        if value > end + EPSILON:
            break
        positions.append(value)
        index += 1
    return positions


def build_grid(bounds: Bounds, explicit_step: Optional[float] = None) -> List[GridLine]:
    """Build vertical then horizontal grid lines covering ``bounds``.

    Each axis is capped at ``MAX_LINES_PER_AXIS`` lines; a capped grid is a
    normal result. A zero-area box without an explicit step has no grid.
    """
    step = effective_step(bounds, explicit_step)
    if not (math.isfinite(step) and step > 0):
        return []
    if not all(math.isfinite(value / step) for value in bounds.as_tuple()):
        return []

    start_x = math.floor(bounds.min_x / step) * step
    end_x = math.ceil(bounds.max_x / step) * step
    start_y = math.floor(bounds.min_y / step) * step
    end_y = math.ceil(bounds.max_y / step) * step

    lines: List[GridLine] = []
    for x in _axis_positions(bounds.min_x, bounds.max_x, step):
        lines.append(GridLine(path=((x, start_y), (x, end_y)), is_major=is_major(x, step)))
    for y in _axis_positions(bounds.min_y, bounds.max_y, step):
        lines.append(GridLine(path=((start_x, y), (end_x, y)), is_major=is_major(y, step)))
    return lines


__all__ = ["MAX_LINES_PER_AXIS", "build_grid", "effective_step", "is_major"]
