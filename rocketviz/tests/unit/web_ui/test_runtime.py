from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import pytest

from rocketviz.domain.errors import FetchError
from rocketviz.domain.ports import UseCaseError
from rocketviz.viewmodels.selection_vm import DRAGGING, IDLE
from rocketviz.viewmodels.settings_vm import SettingsVM
from rocketviz.web_ui.runtime import WebRuntime


CSV_TEXT = (
    "id,latentx1,latentx2,design_var_1,design_var_2,feasible\n"
    "r1,0,0,a,b,true\n"
    "r2,1,1,c,d,false\n"
    "r3,10,10,e,f,1\n"
)


class _SourceStub:
    def __init__(self, text: str = CSV_TEXT) -> None:
        self.text = text
        self.error: Optional[Exception] = None
        self.calls: List[str] = []

    def describe(self) -> str:
        return "/data/combined.csv"

    def fetch_text(self) -> str:
        self.calls.append("fetch")
        if self.error is not None:
            raise self.error
        return self.text


def _runtime(source: Optional[_SourceStub] = None) -> WebRuntime:
    return WebRuntime(settings_vm=SettingsVM(), source=source or _SourceStub())


def _loaded_runtime() -> WebRuntime:
    runtime = _runtime()
    asyncio.run(runtime.load())
    return runtime


def test_load_applies_dataset_and_status() -> None:
    runtime = _runtime()

    dataset = asyncio.run(runtime.load())

    assert [record.id for record in dataset] == ["r1", "r2", "r3"]
    assert runtime.plot_vm.dataset == dataset
    assert runtime.plot_vm.viewport.bounds is not None
    assert runtime.plot_vm.feasible_count == 2
    assert runtime.status_message == "Loaded 3 rocket designs (2 feasible)"
    assert runtime.loading is False


def test_load_trigger_is_ignored_while_loading() -> None:
    source = _SourceStub()
    runtime = _runtime(source)
    runtime.loading = True

    assert asyncio.run(runtime.load()) is None
    assert source.calls == []


def test_failed_reload_keeps_previous_dataset() -> None:
    source = _SourceStub()
    runtime = _runtime(source)
    asyncio.run(runtime.load())
    before = (runtime.plot_vm.dataset, runtime.plot_vm.viewport)

    source.error = FetchError(
        "CSV not found at /data/combined.csv. Please ensure the file exists.",
        path="/data/combined.csv",
        status=404,
    )
    with pytest.raises(UseCaseError) as excinfo:
        asyncio.run(runtime.load())

    assert excinfo.value.code == "FETCH_FAILED"
    assert (runtime.plot_vm.dataset, runtime.plot_vm.viewport) == before
    assert runtime.status_message.startswith("Error loading data: CSV not found at /data/combined.csv")
    assert runtime.loading is False


def test_shift_drag_selects_enclosed_points() -> None:
    runtime = _loaded_runtime()
    projection = runtime.plot_vm.projection()
    x0, y0 = projection.project(-0.5, -0.5)
    x1, y1 = projection.project(1.5, 1.5)

    runtime.handle_mouse("mousedown", x0, y0, shift=True)
    runtime.handle_mouse("mousemove", x1, y1, shift=True)
    assert runtime.selection_vm.state == DRAGGING
    runtime.handle_mouse("mouseup", x1, y1, shift=True)

    assert runtime.selection_vm.state == IDLE
    assert set(runtime.selection_vm.get_selection()) == {"r1", "r2"}
    assert runtime.selection_count == 2
    assert runtime.plot_vm.viewport == projection.viewport


def test_releasing_shift_cancels_selection_gesture() -> None:
    runtime = _loaded_runtime()

    runtime.handle_mouse("mousedown", 0.0, 0.0, shift=True)
    runtime.handle_mouse("mousemove", 1100.0, 700.0, shift=True)
    runtime.release_modifier()
    runtime.handle_mouse("mouseup", 1100.0, 700.0, shift=True)

    assert runtime.selection_count == 0


def test_plain_drag_pans_without_selecting() -> None:
    runtime = _loaded_runtime()
    viewport = runtime.plot_vm.viewport
    scale = viewport.scale

    runtime.handle_mouse("mousedown", 100.0, 100.0)
    runtime.handle_mouse("mousemove", 120.0, 90.0)
    runtime.handle_mouse("mouseup", 120.0, 90.0)

    moved = runtime.plot_vm.viewport
    assert moved.target_x == pytest.approx(viewport.target_x - 20.0 / scale)
    assert moved.target_y == pytest.approx(viewport.target_y + 10.0 / scale)
    assert moved.bounds == viewport.bounds
    assert runtime.selection_count == 0


def test_hover_picks_nearest_point() -> None:
    runtime = _loaded_runtime()
    px, py = runtime.plot_vm.projection().project(10.0, 10.0)

    runtime.handle_mouse("mousemove", px + 1.0, py)
    assert runtime.hovered is not None and runtime.hovered.id == "r3"

    runtime.handle_mouse("mousemove", px + 200.0, py)
    assert runtime.hovered is None


def test_export_and_clear_selection() -> None:
    runtime = _loaded_runtime()
    projection = runtime.plot_vm.projection()
    x0, y0 = projection.project(9.0, 9.0)
    x1, y1 = projection.project(11.0, 11.0)
    runtime.handle_mouse("mousedown", x0, y0, shift=True)
    runtime.handle_mouse("mouseup", x1, y1, shift=True)

    artifact = runtime.export()

    assert artifact.filename == "rocket_selection.csv"
    assert artifact.content.decode("utf-8").splitlines()[1].startswith("r3,10.0,10.0,e,f,true")

    runtime.clear_selection()
    with pytest.raises(UseCaseError) as excinfo:
        runtime.export()
    assert excinfo.value.code == "EMPTY_SELECTION"


def test_zoom_controls_keep_bounds() -> None:
    runtime = _loaded_runtime()
    fitted = runtime.plot_vm.viewport

    runtime.zoom_in()
    runtime.zoom_in()
    runtime.zoom_out()
    assert runtime.plot_vm.viewport.zoom == pytest.approx(fitted.zoom + 0.5)
    assert runtime.plot_vm.viewport.bounds == fitted.bounds

    runtime.zoom_to_fit()
    assert runtime.plot_vm.viewport == fitted


def test_fit_failure_is_reported_and_keeps_previous_state() -> None:
    source = _SourceStub()
    runtime = _runtime(source)
    asyncio.run(runtime.load())
    before = (runtime.plot_vm.dataset, runtime.plot_vm.viewport)

    source.text = "id,latentx1,latentx2\nz,50,50\n"
    runtime.plot_vm.margin = -1.0
    with pytest.raises(UseCaseError) as excinfo:
        asyncio.run(runtime.load())

    assert excinfo.value.code == "LOAD_FAILED"
    assert "margin_fraction" in excinfo.value.message
    assert (runtime.plot_vm.dataset, runtime.plot_vm.viewport) == before
    assert runtime.status_message.startswith("Error loading data: margin_fraction")
    assert runtime.loading is False


def test_selection_changes_are_logged(caplog) -> None:
    runtime = _loaded_runtime()
    caplog.set_level(logging.DEBUG, logger="rocketviz.web_ui.runtime")

    runtime.clear_selection()

    assert "Selection now holds 0 items" in caplog.text
