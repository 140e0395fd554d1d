"""Scatter-plot viewmodel: dataset, viewport, and render controls."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from ..domain import viewport as vp
from ..domain.entities import Dataset, GridLine, Record, Viewport
from ..domain.grid import build_grid
from .settings_vm import SettingsConfig, SettingsVM

LOGGER = logging.getLogger(__name__)

Rgba = Tuple[int, int, int, int]

FEASIBLE_COLOR: Rgba = (34, 197, 94, 255)
INFEASIBLE_COLOR: Rgba = (239, 68, 68, 255)
POINT_LINE_COLOR: Rgba = (255, 255, 255, 180)
MAJOR_GRID_COLOR: Rgba = (120, 120, 120, 140)
MINOR_GRID_COLOR: Rgba = (180, 180, 180, 90)

POINT_SIZE_RANGE = (1, 12)
OPACITY_RANGE = (30, 255)
OPACITY_STEP = 5


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(value)))


@dataclass
class PlotVM:
    """Hold the current dataset and viewport and derive render inputs.

    The viewport is refit only by :meth:`apply_dataset`; pan and zoom keep the
    fitted bounds so the grid stays attached to the data.
    """

    width: int = 1100
    height: int = 700
    margin: float = vp.DEFAULT_MARGIN
    dataset: Dataset = ()
    viewport: Viewport = field(default_factory=Viewport)
    point_size: int = 4
    point_opacity: int = 140
    show_grid: bool = True
    grid_step: Optional[float] = None

    @classmethod
    def from_config(cls, config: SettingsConfig) -> "PlotVM":
        return cls(
            width=max(1, config.viewport_width_px),
            height=max(1, config.viewport_height_px),
            margin=config.fit_margin,
            point_size=_clamp(config.point_size, *POINT_SIZE_RANGE),
            point_opacity=_clamp(config.point_opacity, *OPACITY_RANGE),
            show_grid=config.show_grid,
            grid_step=config.grid_step,
        )

    # ---- Dataset lifecycle ----
    def apply_dataset(self, dataset: Dataset) -> Viewport:
        """Replace the dataset wholesale and fit the viewport to it.

        Both are assigned only after the fit succeeded, so a failing fit
        leaves the previous dataset and viewport in place.
        """
        records = tuple(dataset)
        viewport = vp.fit(records, self.margin, self.width, self.height)
        self.dataset, self.viewport = records, viewport
        LOGGER.debug(
            "Fitted %d records: target=(%.4g, %.4g) zoom=%.3f",
            len(self.dataset),
            self.viewport.target_x,
            self.viewport.target_y,
            self.viewport.zoom,
        )
        return self.viewport

    def zoom_to_fit(self) -> Viewport:
        return self.apply_dataset(self.dataset)

    @property
    def feasible_count(self) -> int:
        return sum(1 for record in self.dataset if record.feasible)

    # ---- Direct manipulation ----
    def projection(self) -> vp.Projection:
        return vp.Projection(self.viewport, self.width, self.height)

    def set_view_state(self, target_x: float, target_y: float, zoom: float) -> None:
        """Accept a camera reported by the rendering surface; bounds are kept."""
        self.viewport = replace(self.viewport, target_x=target_x, target_y=target_y, zoom=zoom)

    def pan_by(self, dx_px: float, dy_px: float) -> None:
        self.viewport = vp.pan(self.viewport, dx_px, dy_px)

    def zoom_by(self, delta: float, px: Optional[float] = None, py: Optional[float] = None) -> None:
        anchor_x = self.width / 2 if px is None else px
        anchor_y = self.height / 2 if py is None else py
        self.viewport = vp.zoom_at(self.viewport, delta, self.projection(), anchor_x, anchor_y)

    # ---- Controls ----
    def set_point_size(self, value: int) -> None:
        self.point_size = _clamp(value, *POINT_SIZE_RANGE)

    def set_point_opacity(self, value: int) -> None:
        lo, hi = OPACITY_RANGE
        stepped = lo + round((int(value) - lo) / OPACITY_STEP) * OPACITY_STEP
        self.point_opacity = _clamp(stepped, lo, hi)

    def set_show_grid(self, enabled: bool) -> None:
        self.show_grid = bool(enabled)

    def set_grid_step(self, value: object) -> None:
        """Accept the raw step field; empty means automatic."""
        self.grid_step = SettingsVM.coerce_step(value)

    # ---- Derived render inputs ----
    def grid_lines(self) -> List[GridLine]:
        if not self.show_grid or self.viewport.bounds is None:
            return []
        return build_grid(self.viewport.bounds, self.grid_step)

    def point_color(self, record: Record) -> Rgba:
        base = FEASIBLE_COLOR if record.feasible else INFEASIBLE_COLOR
        return (base[0], base[1], base[2], self.point_opacity)

    @staticmethod
    def grid_color(line: GridLine) -> Rgba:
        return MAJOR_GRID_COLOR if line.is_major else MINOR_GRID_COLOR

    @staticmethod
    def grid_width(line: GridLine) -> int:
        return 2 if line.is_major else 1
