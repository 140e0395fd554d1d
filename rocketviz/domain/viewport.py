"""Viewport fitting and the orthographic screen/world projection."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Sequence

import numpy as np

from .entities import Bounds, Point, Rect, Record, Viewport

DEFAULT_MARGIN = 0.1
MIN_SPAN = 1e-9
MIN_SCALE = 1e-6


def dataset_bounds(records: Sequence[Record]) -> Bounds:
    """Return the unexpanded bounding box of ``records`` (must be non-empty)."""
    coords = np.array([(record.x, record.y) for record in records], dtype=float)
    mins = coords.min(axis=0)
    maxs = coords.max(axis=0)
    return Bounds(float(mins[0]), float(mins[1]), float(maxs[0]), float(maxs[1]))


def fit(
    records: Sequence[Record],
    margin_fraction: float = DEFAULT_MARGIN,
    viewport_width_px: int = 1,
    viewport_height_px: int = 1,
) -> Viewport:
    """Frame ``records`` inside a viewport of the given pixel size.

    The margin only widens the span used for the zoom; the stored bounds stay
    the tight data box. An empty dataset yields the identity viewport without
    bounds.

    Raises:
        ValueError: If ``margin_fraction`` is not greater than -1, which
            would collapse or invert the framed span.
    """
    if not margin_fraction > -1:
        raise ValueError(f"margin_fraction must be greater than -1, got {margin_fraction!r}")
    if not records:
        return Viewport()

    bounds = dataset_bounds(records)
    width = max(MIN_SPAN, bounds.width)
    height = max(MIN_SPAN, bounds.height)

    vw = max(1, int(viewport_width_px))
    vh = max(1, int(viewport_height_px))
    span = max(width, height) * (1 + margin_fraction)
    scale = min(vw, vh) / span
    zoom = math.log2(max(scale, MIN_SCALE))

    return Viewport(
        target_x=(bounds.min_x + bounds.max_x) / 2,
        target_y=(bounds.min_y + bounds.max_y) / 2,
        zoom=zoom,
        bounds=bounds,
    )


@dataclass(frozen=True)
class Projection:
    """Orthographic mapping for a viewport rendered into ``width`` x ``height`` pixels.

    Screen origin is top-left; world y grows downward on screen, so both axes
    share the same sign.
    """

    viewport: Viewport
    width: int
    height: int

    def project(self, wx: float, wy: float) -> Point:
        scale = self.viewport.scale
        return (
            (wx - self.viewport.target_x) * scale + self.width / 2,
            (wy - self.viewport.target_y) * scale + self.height / 2,
        )

    def unproject(self, px: float, py: float) -> Point:
        scale = self.viewport.scale
        return (
            self.viewport.target_x + (px - self.width / 2) / scale,
            self.viewport.target_y + (py - self.height / 2) / scale,
        )

    def unproject_rect(self, rect: Rect) -> Rect:
        """Map a screen rectangle into a normalized world rectangle."""
        x0, y0 = self.unproject(rect.x0, rect.y0)
        x1, y1 = self.unproject(rect.x1, rect.y1)
        return Rect(x0, y0, x1, y1).normalized()


def pan(viewport: Viewport, dx_px: float, dy_px: float) -> Viewport:
    """Move the camera so content follows a pointer drag of ``(dx_px, dy_px)``."""
    scale = viewport.scale
    return replace(
        viewport,
        target_x=viewport.target_x - dx_px / scale,
        target_y=viewport.target_y - dy_px / scale,
    )


def zoom_at(viewport: Viewport, delta: float, projection: Projection, px: float, py: float) -> Viewport:
    """Change zoom by ``delta`` keeping the world point under ``(px, py)`` fixed."""
    anchor_x, anchor_y = projection.unproject(px, py)
    zoom = viewport.zoom + delta
    scale = 2.0 ** zoom
    return replace(
        viewport,
        zoom=zoom,
        target_x=anchor_x - (px - projection.width / 2) / scale,
        target_y=anchor_y - (py - projection.height / 2) / scale,
    )


__all__ = ["Projection", "dataset_bounds", "fit", "pan", "zoom_at"]
