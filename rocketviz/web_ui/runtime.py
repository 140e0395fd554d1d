"""NiceGUI runtime orchestration for rocketviz.

This module composes the viewmodels and use cases for one browser page. It
holds no NiceGUI imports so it can be driven directly from tests.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

from rocketviz.adapters.source_http import HttpConfig, HttpSourceAdapter
from rocketviz.domain.entities import Dataset, Record
from rocketviz.domain.ports import SourcePort, UseCaseError
from rocketviz.usecases.export_selection import ExportArtifact, ExportSelection
from rocketviz.usecases.error_mapping import map_load_error
from rocketviz.usecases.load_dataset import LoadDataset
from rocketviz.viewmodels.plot_vm import PlotVM
from rocketviz.viewmodels.selection_vm import DRAGGING, SelectionVM
from rocketviz.viewmodels.settings_vm import SettingsVM
from rocketviz.web_ui import scene

LOGGER = logging.getLogger(__name__)

MOUSE_DOWN = "mousedown"
MOUSE_MOVE = "mousemove"
MOUSE_UP = "mouseup"
ZOOM_STEP = 0.5


class WebRuntime:
    """Per-page state: settings, source, plot and selection viewmodels."""

    def __init__(
        self,
        settings_vm: Optional[SettingsVM] = None,
        source: Optional[SourcePort] = None,
    ) -> None:
        self.settings_vm = settings_vm or SettingsVM.from_env()
        cfg = self.settings_vm.config
        self.source: SourcePort = source or HttpSourceAdapter(
            HttpConfig(
                base_url=cfg.source_base_url,
                path=cfg.source_path,
                request_timeout_s=cfg.request_timeout_s,
            )
        )
        self.plot_vm = PlotVM.from_config(cfg)
        self.selection_vm = SelectionVM(on_selection_changed=self._on_selection_changed)
        self.load_dataset = LoadDataset(self.source)
        self.export_selection = ExportSelection(self.selection_vm, dataset_name=cfg.dataset_name)

        self.loading = False
        self.status_message = "No data loaded. Press Load CSV."
        self.hovered: Optional[Record] = None
        self._pan_anchor: Optional[Tuple[float, float]] = None

    # ---- Load ----
    async def load(self) -> Optional[Dataset]:
        """Fetch, parse and fit in one transaction.

        Returns ``None`` when a load is already running. On failure the
        previous dataset and viewport stay in place and ``UseCaseError``
        propagates to the caller.
        """
        if self.loading:
            LOGGER.info("Load already in progress; trigger ignored")
            return None
        self.loading = True
        self.status_message = "Loading..."
        try:
            dataset = await asyncio.to_thread(self.load_dataset)
            try:
                self.plot_vm.apply_dataset(dataset)
            except Exception as exc:
                err = map_load_error(exc, default_message="Could not fit the view to the loaded data")
                LOGGER.warning("Fit after load failed (%s): %s", err.code, err.message)
                raise err from exc
            self.hovered = None
            self.status_message = (
                f"Loaded {len(dataset)} rocket designs ({self.plot_vm.feasible_count} feasible)"
            )
            return dataset
        except UseCaseError as exc:
            self.status_message = f"Error loading data: {exc.message}"
            raise
        finally:
            self.loading = False

    # ---- Selection ----
    def export(self) -> ExportArtifact:
        return self.export_selection()

    def clear_selection(self) -> None:
        self.selection_vm.clear()
        LOGGER.debug("Selection cleared")

    @property
    def selection_count(self) -> int:
        return self.selection_vm.count

    def _on_selection_changed(self, selection) -> None:
        LOGGER.debug("Selection now holds %d items", len(selection))

    # ---- Pointer input ----
    def handle_mouse(self, kind: str, px: float, py: float, *, shift: bool = False) -> None:
        """Route canvas mouse events: shift-drag selects, plain drag pans, move hovers."""
        if kind == MOUSE_DOWN:
            if not self.selection_vm.begin_drag(px, py, modifier=shift):
                self._pan_anchor = (px, py)
            self.hovered = None
        elif kind == MOUSE_MOVE:
            if self.selection_vm.state == DRAGGING:
                self.selection_vm.update_drag(px, py, modifier=shift)
            elif self._pan_anchor is not None:
                ax, ay = self._pan_anchor
                self.plot_vm.pan_by(px - ax, py - ay)
                self._pan_anchor = (px, py)
            else:
                self.hovered = scene.pick(self.plot_vm, px, py)
        elif kind == MOUSE_UP:
            if self.selection_vm.state == DRAGGING:
                self.selection_vm.update_drag(px, py, modifier=shift)
                added = self.selection_vm.end_drag(self.plot_vm.projection(), self.plot_vm.dataset)
                LOGGER.debug("Box selection added %d items (total %d)", added, self.selection_vm.count)
            self._pan_anchor = None

    def release_modifier(self) -> None:
        """Modifier released: abandon any in-progress selection rectangle."""
        if self.selection_vm.state == DRAGGING:
            self.selection_vm.cancel_drag()
            LOGGER.debug("Selection gesture cancelled")

    # ---- View ----
    def zoom_in(self) -> None:
        self.plot_vm.zoom_by(ZOOM_STEP)

    def zoom_out(self) -> None:
        self.plot_vm.zoom_by(-ZOOM_STEP)

    def zoom_to_fit(self) -> None:
        self.plot_vm.zoom_to_fit()

    def scene_svg(self) -> str:
        return scene.render(self.plot_vm, self.selection_vm)
