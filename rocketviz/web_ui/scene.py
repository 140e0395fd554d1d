"""SVG scene rendering and hover picking for the interactive canvas.

The NiceGUI ``interactive_image`` overlays this SVG on an empty image of the
viewport size, so every coordinate written here is in screen pixels.
"""

from __future__ import annotations

from typing import List, Optional

from rocketviz.domain.entities import Record
from rocketviz.viewmodels.plot_vm import PlotVM, Rgba
from rocketviz.viewmodels.selection_vm import SelectionVM

SELECTED_STROKE = "#1d5d9b"
DRAG_FILL = "rgba(29, 93, 155, 0.12)"
PICK_SLACK_PX = 2.0


def _rgb(color: Rgba) -> str:
    return f"rgb({color[0]},{color[1]},{color[2]})"


def _alpha(color: Rgba) -> str:
    return f"{color[3] / 255:.3f}"


def _grid_svg(plot_vm: PlotVM) -> List[str]:
    projection = plot_vm.projection()
    parts: List[str] = []
    for line in plot_vm.grid_lines():
        (wx0, wy0), (wx1, wy1) = line.path
        x0, y0 = projection.project(wx0, wy0)
        x1, y1 = projection.project(wx1, wy1)
        color = plot_vm.grid_color(line)
        parts.append(
            f'<line x1="{x0:.2f}" y1="{y0:.2f}" x2="{x1:.2f}" y2="{y1:.2f}" '
            f'stroke="{_rgb(color)}" stroke-opacity="{_alpha(color)}" '
            f'stroke-width="{plot_vm.grid_width(line)}" />'
        )
    return parts


def _points_svg(plot_vm: PlotVM, selection_vm: SelectionVM) -> List[str]:
    projection = plot_vm.projection()
    radius = plot_vm.point_size
    selected = selection_vm.get_selection()
    parts: List[str] = []
    for record in plot_vm.dataset:
        px, py = projection.project(record.x, record.y)
        if not (-radius <= px <= plot_vm.width + radius and -radius <= py <= plot_vm.height + radius):
            continue
        color = plot_vm.point_color(record)
        is_selected = record.id in selected
        stroke = SELECTED_STROKE if is_selected else "white"
        stroke_width = 2 if is_selected else 1
        parts.append(
            f'<circle cx="{px:.2f}" cy="{py:.2f}" r="{radius}" '
            f'fill="{_rgb(color)}" fill-opacity="{_alpha(color)}" '
            f'stroke="{stroke}" stroke-opacity="0.7" stroke-width="{stroke_width}" />'
        )
    return parts


def _drag_svg(selection_vm: SelectionVM) -> List[str]:
    rect = selection_vm.drag_rect
    if rect is None:
        return []
    box = rect.normalized()
    return [
        f'<rect x="{box.x0:.2f}" y="{box.y0:.2f}" width="{box.width:.2f}" height="{box.height:.2f}" '
        f'fill="{DRAG_FILL}" stroke="{SELECTED_STROKE}" stroke-dasharray="4 3" />'
    ]


def render(plot_vm: PlotVM, selection_vm: SelectionVM) -> str:
    """Return SVG content: grid below points, drag rectangle on top."""
    parts = _grid_svg(plot_vm) + _points_svg(plot_vm, selection_vm) + _drag_svg(selection_vm)
    return "\n".join(parts)


def pick(plot_vm: PlotVM, px: float, py: float) -> Optional[Record]:
    """Return the record drawn nearest to ``(px, py)`` within its radius."""
    projection = plot_vm.projection()
    limit = (plot_vm.point_size + PICK_SLACK_PX) ** 2
    best: Optional[Record] = None
    best_dist = limit
    for record in plot_vm.dataset:
        sx, sy = projection.project(record.x, record.y)
        dist = (sx - px) ** 2 + (sy - py) ** 2
        if dist <= best_dist:
            best = record
            best_dist = dist
    return best


def tooltip_text(record: Record) -> str:
    return (
        f"ID: {record.id} | Design Var 1: {record.design_var_1} | "
        f"Design Var 2: {record.design_var_2} | x={record.x:.3f}, y={record.y:.3f}"
    )


__all__ = ["pick", "render", "tooltip_text"]
