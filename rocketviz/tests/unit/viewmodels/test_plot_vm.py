from __future__ import annotations

import math

import pytest

from rocketviz.domain.entities import Bounds, Record
from rocketviz.viewmodels.plot_vm import (
    FEASIBLE_COLOR,
    INFEASIBLE_COLOR,
    MAJOR_GRID_COLOR,
    MINOR_GRID_COLOR,
    PlotVM,
)
from rocketviz.viewmodels.settings_vm import SettingsConfig


RECORDS = (
    Record(id="a", x=0.0, y=0.0, feasible=True),
    Record(id="b", x=10.0, y=10.0, feasible=False),
)


def test_apply_dataset_fits_viewport() -> None:
    vm = PlotVM(width=500, height=400)

    viewport = vm.apply_dataset(RECORDS)

    assert vm.dataset == RECORDS
    assert viewport.bounds == Bounds(0.0, 0.0, 10.0, 10.0)
    assert (viewport.target_x, viewport.target_y) == (5.0, 5.0)
    assert viewport.zoom == pytest.approx(math.log2(400 / 11.0))
    assert vm.feasible_count == 1


def test_pan_and_zoom_keep_fitted_bounds() -> None:
    vm = PlotVM(width=400, height=400)
    vm.apply_dataset(RECORDS)
    fitted = vm.viewport.bounds

    vm.pan_by(25.0, -10.0)
    vm.zoom_by(1.0)
    vm.set_view_state(100.0, -3.0, 4.0)

    assert vm.viewport.bounds == fitted
    assert (vm.viewport.target_x, vm.viewport.target_y, vm.viewport.zoom) == (100.0, -3.0, 4.0)
    assert len(vm.grid_lines()) == 22


def test_zoom_to_fit_restores_fitted_camera() -> None:
    vm = PlotVM(width=400, height=300)
    fitted = vm.apply_dataset(RECORDS)
    vm.pan_by(50.0, 50.0)

    vm.zoom_to_fit()

    assert vm.viewport == fitted


def test_grid_lines_follow_toggle_and_step() -> None:
    vm = PlotVM()
    assert vm.grid_lines() == []

    vm.apply_dataset(RECORDS)
    assert len(vm.grid_lines()) == 22  # auto step 1.0 -> 11 per axis

    vm.set_grid_step("5")
    assert len(vm.grid_lines()) == 6

    vm.set_grid_step("")
    assert vm.grid_step is None

    vm.set_show_grid(False)
    assert vm.grid_lines() == []


def test_invalid_grid_step_text_is_rejected() -> None:
    vm = PlotVM()
    with pytest.raises(ValueError):
        vm.set_grid_step("abc")


def test_point_controls_are_clamped() -> None:
    vm = PlotVM()

    vm.set_point_size(40)
    assert vm.point_size == 12
    vm.set_point_size(0)
    assert vm.point_size == 1

    vm.set_point_opacity(500)
    assert vm.point_opacity == 255
    vm.set_point_opacity(3)
    assert vm.point_opacity == 30
    vm.set_point_opacity(142)
    assert vm.point_opacity == 140


def test_colors_follow_feasibility_and_opacity() -> None:
    vm = PlotVM(point_opacity=100)

    assert vm.point_color(RECORDS[0]) == FEASIBLE_COLOR[:3] + (100,)
    assert vm.point_color(RECORDS[1]) == INFEASIBLE_COLOR[:3] + (100,)

    vm.apply_dataset(RECORDS)
    major = [line for line in vm.grid_lines() if line.is_major][0]
    minor = [line for line in vm.grid_lines() if not line.is_major][0]
    assert PlotVM.grid_color(major) == MAJOR_GRID_COLOR
    assert PlotVM.grid_width(major) == 2
    assert PlotVM.grid_color(minor) == MINOR_GRID_COLOR
    assert PlotVM.grid_width(minor) == 1


def test_from_config_copies_control_defaults() -> None:
    cfg = SettingsConfig(
        viewport_width_px=640,
        viewport_height_px=480,
        fit_margin=0.25,
        point_size=6,
        point_opacity=200,
        show_grid=False,
        grid_step=0.5,
    )

    vm = PlotVM.from_config(cfg)

    assert (vm.width, vm.height, vm.margin) == (640, 480, 0.25)
    assert (vm.point_size, vm.point_opacity, vm.show_grid, vm.grid_step) == (6, 200, False, 0.5)


def test_failed_fit_keeps_previous_dataset_and_viewport() -> None:
    vm = PlotVM(width=400, height=400)
    vm.apply_dataset(RECORDS)
    before = (vm.dataset, vm.viewport)

    vm.margin = -1.0
    with pytest.raises(ValueError):
        vm.apply_dataset((Record(id="new", x=3.0, y=4.0),))

    assert (vm.dataset, vm.viewport) == before
