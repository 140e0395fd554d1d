from __future__ import annotations

from rocketviz.domain.entities import Record, Rect
from rocketviz.viewmodels.plot_vm import PlotVM
from rocketviz.viewmodels.selection_vm import SelectionVM
from rocketviz.web_ui import scene


RECORDS = (
    Record(id="ok", x=0.0, y=0.0, design_var_1="2", design_var_2="RP-1", feasible=True),
    Record(id="bad", x=10.0, y=10.0, feasible=False),
)


def _plot() -> PlotVM:
    vm = PlotVM(width=200, height=200)
    vm.apply_dataset(RECORDS)
    return vm


def test_render_draws_grid_then_points() -> None:
    svg = scene.render(_plot(), SelectionVM())

    assert svg.count("<circle") == 2
    assert svg.count("<line") == 22
    assert svg.index("<line") < svg.index("<circle")
    assert "rgb(34,197,94)" in svg
    assert "rgb(239,68,68)" in svg
    assert "<rect" not in svg


def test_render_without_grid_or_data() -> None:
    empty = PlotVM()
    assert scene.render(empty, SelectionVM()) == ""

    plot = _plot()
    plot.set_show_grid(False)
    assert "<line" not in scene.render(plot, SelectionVM())


def test_render_marks_selection_and_drag_rectangle() -> None:
    plot = _plot()
    selection = SelectionVM()
    selection.select_world_rect(Rect(-1, -1, 1, 1), RECORDS)
    selection.begin_drag(10.0, 10.0, modifier=True)
    selection.update_drag(40.0, 30.0)

    svg = scene.render(plot, selection)

    assert svg.count(scene.SELECTED_STROKE) == 2  # selected point and drag outline
    assert '<rect x="10.00" y="10.00" width="30.00" height="20.00"' in svg


def test_render_culls_points_outside_canvas() -> None:
    plot = _plot()
    plot.pan_by(-5000.0, 0.0)

    assert "<circle" not in scene.render(plot, SelectionVM())


def test_pick_and_tooltip() -> None:
    plot = _plot()
    px, py = plot.projection().project(0.0, 0.0)

    hit = scene.pick(plot, px + 3.0, py - 2.0)

    assert hit is RECORDS[0]
    assert scene.pick(plot, px + 50.0, py) is None
    assert scene.tooltip_text(hit) == "ID: ok | Design Var 1: 2 | Design Var 2: RP-1 | x=0.000, y=0.000"
