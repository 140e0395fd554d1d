"""NiceGUI entrypoint for the rocketviz web runtime."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from typing import Any, Dict

from nicegui import app, ui

from rocketviz.adapters.source_file import FileSourceAdapter
from rocketviz.domain.ports import UseCaseError
from rocketviz.utils.logging import configure_root
from rocketviz.viewmodels.plot_vm import OPACITY_RANGE, OPACITY_STEP, POINT_SIZE_RANGE
from rocketviz.viewmodels.settings_vm import SettingsVM
from rocketviz.web_ui import scene
from rocketviz.web_ui.runtime import WebRuntime

LOGGER = logging.getLogger(__name__)


def _install_theme() -> None:
    """Install global CSS tokens for the web runtime."""
    ui.add_head_html(
        """
<style>
:root {
  --rv-bg-a: #0b1020;
  --rv-bg-b: #1a2140;
  --rv-card: rgba(255, 255, 255, 0.9);
  --rv-border: #c9d7e9;
  --rv-feasible: rgb(34, 197, 94);
  --rv-infeasible: rgb(239, 68, 68);
}
body { background: radial-gradient(circle at top left, var(--rv-bg-a), var(--rv-bg-b)); }
.rv-card { background: var(--rv-card); border: 1px solid var(--rv-border); border-radius: 14px; }
.rv-dot { width: 12px; height: 12px; border-radius: 9999px; display: inline-block; }
.rv-feasible { background: var(--rv-feasible); }
.rv-infeasible { background: var(--rv-infeasible); }
.rv-canvas { background: #ffffff; border-radius: 10px; cursor: grab; }
</style>
        """
    )


def _notify_error(exc: Exception) -> None:
    """Render exceptions as concise NiceGUI toasts."""
    text = exc.message if isinstance(exc, UseCaseError) else str(exc)
    ui.notify(text, color="negative", close_button="OK")


def _build_ui(settings_vm: SettingsVM) -> None:
    """Register the NiceGUI page."""

    @ui.page("/")
    async def index() -> None:
        runtime = WebRuntime(settings_vm=settings_vm)
        plot_vm = runtime.plot_vm
        selection_vm = runtime.selection_vm
        widgets: Dict[str, Any] = {}

        def redraw() -> None:
            widgets["canvas"].content = runtime.scene_svg()

        def refresh_all() -> None:
            redraw()
            render_status.refresh()
            render_selection.refresh()
            widgets["load"].set_enabled(not runtime.loading)
            widgets["load"].set_text("Loading..." if runtime.loading else "Load CSV")

        @ui.refreshable
        def render_status() -> None:
            ui.label(runtime.status_message).classes("text-caption")
            if runtime.hovered is not None:
                ui.label(scene.tooltip_text(runtime.hovered)).classes("text-caption text-weight-medium")

        @ui.refreshable
        def render_selection() -> None:
            count = runtime.selection_count
            with ui.row().classes("w-full items-center justify-between"):
                with ui.row().classes("items-center q-gutter-sm"):
                    ui.label("Selection").classes("text-h6")
                    ui.badge(str(count), color="secondary")
                with ui.row().classes("q-gutter-sm"):
                    ui.button("Export", on_click=export_selection).props("outline dense").set_enabled(count > 0)
                    ui.button("Clear", on_click=clear_selection).props("outline dense").set_enabled(count > 0)
            if count == 0:
                ui.label("No selection. Hold Shift and drag to select points.").classes("text-grey-7")
                return
            with ui.row().classes("w-full no-wrap q-gutter-sm").style("overflow-x: auto"):
                for record in selection_vm.preview():
                    dot = "rv-feasible" if record.feasible else "rv-infeasible"
                    with ui.card().classes("q-pa-sm").style("min-width: 220px"):
                        with ui.row().classes("items-center q-gutter-xs"):
                            ui.element("span").classes(f"rv-dot {dot}")
                            ui.label(f"ID: {record.id}").classes("text-weight-medium")
                        ui.label(f"x={record.x:.2f}, y={record.y:.2f}").classes("text-caption")
                        ui.label(f"v1={record.design_var_1} · v2={record.design_var_2}").classes("text-caption")

        async def trigger_load() -> None:
            widgets["load"].set_enabled(False)
            widgets["load"].set_text("Loading...")
            try:
                dataset = await runtime.load()
            except UseCaseError as exc:
                _notify_error(exc)
            else:
                if dataset is not None:
                    ui.notify(
                        runtime.status_message,
                        color="positive",
                    )
            refresh_all()

        def export_selection() -> None:
            try:
                artifact = runtime.export()
            except UseCaseError as exc:
                _notify_error(exc)
                return
            ui.download(artifact.content, filename=artifact.filename, media_type=artifact.media_type)
            ui.notify(f"Exported {runtime.selection_count} selected items", color="positive")

        def clear_selection() -> None:
            runtime.clear_selection()
            refresh_all()

        def on_mouse(event) -> None:
            runtime.handle_mouse(event.type, event.image_x, event.image_y, shift=bool(event.shift))
            redraw()
            if event.type != "mousemove" or runtime.hovered is not None:
                render_status.refresh()
            if event.type == "mouseup":
                render_selection.refresh()

        def on_key(event) -> None:
            if event.key.name == "Shift" and event.action.keyup:
                runtime.release_modifier()
                redraw()

        def set_point_size(value: Any) -> None:
            plot_vm.set_point_size(int(value or POINT_SIZE_RANGE[0]))
            redraw()

        def set_opacity(value: Any) -> None:
            plot_vm.set_point_opacity(int(value or OPACITY_RANGE[0]))
            redraw()

        def set_show_grid(value: Any) -> None:
            plot_vm.set_show_grid(bool(value))
            redraw()

        def set_grid_step(value: Any) -> None:
            try:
                plot_vm.set_grid_step(value)
            except ValueError as exc:
                _notify_error(exc)
                return
            redraw()

        def view_action(action) -> None:
            action()
            redraw()

        ui.keyboard(on_key=on_key)

        with ui.column().classes("w-full q-pa-md q-gutter-sm"):
            with ui.card().classes("rv-card w-full"):
                with ui.row().classes("items-center q-gutter-md"):
                    widgets["load"] = ui.button("Load CSV", on_click=trigger_load, color="primary")
                    ui.label("Size")
                    ui.slider(
                        min=POINT_SIZE_RANGE[0],
                        max=POINT_SIZE_RANGE[1],
                        step=1,
                        value=plot_vm.point_size,
                        on_change=lambda e: set_point_size(e.value),
                    ).props("label").classes("w-24")
                    ui.label("Opacity")
                    ui.slider(
                        min=OPACITY_RANGE[0],
                        max=OPACITY_RANGE[1],
                        step=OPACITY_STEP,
                        value=plot_vm.point_opacity,
                        on_change=lambda e: set_opacity(e.value),
                    ).props("label").classes("w-24")
                    ui.checkbox("Grid", value=plot_vm.show_grid, on_change=lambda e: set_show_grid(e.value))
                    ui.input(
                        "Step",
                        placeholder="auto",
                        value="" if plot_vm.grid_step is None else str(plot_vm.grid_step),
                        on_change=lambda e: set_grid_step(e.value),
                    ).props("dense outlined").classes("w-24")
                    ui.button("+", on_click=lambda: view_action(runtime.zoom_in)).props("dense outline")
                    ui.button("-", on_click=lambda: view_action(runtime.zoom_out)).props("dense outline")
                    ui.button("Fit", on_click=lambda: view_action(runtime.zoom_to_fit)).props("dense outline")
                    ui.label("Hold Shift + drag to select").classes("text-caption")
                with ui.row().classes("items-center q-gutter-md"):
                    ui.element("span").classes("rv-dot rv-feasible")
                    ui.label("Feasible")
                    ui.element("span").classes("rv-dot rv-infeasible")
                    ui.label("Infeasible")

            widgets["canvas"] = ui.interactive_image(
                size=(plot_vm.width, plot_vm.height),
                content=runtime.scene_svg(),
                on_mouse=on_mouse,
                events=["mousedown", "mousemove", "mouseup"],
                cross=False,
            ).classes("rv-canvas")

            with ui.card().classes("rv-card w-full"):
                render_status()
            with ui.card().classes("rv-card w-full"):
                render_selection()


def _parse_args() -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the rocketviz NiceGUI web UI.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--data-dir", default=None, help="Directory served at /data.")
    parser.add_argument("--source-url", default=None, help="Base URL the dataset is fetched from.")
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args()


def _smoke_test(settings_vm: SettingsVM) -> None:
    """Load the dataset from disk through the same use case and print a summary."""
    path = os.path.join(settings_vm.data_dir, os.path.basename(settings_vm.source_path))
    runtime = WebRuntime(settings_vm=settings_vm, source=FileSourceAdapter(path))
    dataset = asyncio.run(runtime.load())
    bounds = runtime.plot_vm.viewport.bounds
    print("web-smoke-ok", len(dataset or ()), bounds.as_tuple() if bounds else None)


def main() -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args()
    overrides: Dict[str, Any] = {}
    if args.debug:
        overrides["debug"] = True
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    if args.source_url:
        overrides["source_base_url"] = args.source_url
    elif "ROCKETVIZ_SOURCE_BASE_URL" not in os.environ:
        host = "127.0.0.1" if args.host in ("0.0.0.0", "") else args.host
        overrides["source_base_url"] = f"http://{host}:{args.port}"
    try:
        settings_vm = SettingsVM.from_env()
        settings_vm.apply_dict(overrides)
    except ValueError as exc:
        raise SystemExit(f"Invalid rocketviz settings: {exc}") from exc
    configure_root(settings_vm.logging_level())
    LOGGER.debug("Effective settings: %s", settings_vm.to_dict())

    if args.smoke_test:
        _smoke_test(settings_vm)
        return

    if os.path.isdir(settings_vm.data_dir):
        app.add_static_files("/data", settings_vm.data_dir)
    else:
        LOGGER.warning("Data directory %s not found; /data is not served", settings_vm.data_dir)

    _install_theme()
    _build_ui(settings_vm)
    ui.run(
        host=args.host,
        port=args.port,
        title="Rocket Design Explorer",
        reload=args.reload,
        show=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
