from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

from rich.console import Console

from polymask._config import RenderSettings, get_render_settings
from polymask.layers import PolygonView
from polymask.modeling._color import get_mesh_color, set_mesh_color


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


class LayerPreviewer:
    """Render polygon views with PyVista, flat in the XY plane."""

    def __init__(self, console: Console | None, settings: RenderSettings | None = None):
        self.console = console
        self._pv = None
        self._settings = settings or get_render_settings()

    def _ensure_backend(self):
        if self._pv is None:
            try:
                import pyvista as pv
            except ImportError as exc:  # pragma: no cover - runtime dep
                raise PreviewBackendError(
                    "PyVista is required for previewing. Install polymask with `pip install -e .`."
                ) from exc
            pv.set_plot_theme("document")
            self._pv = pv
        return self._pv

    def collect_datasets(self, views: Sequence[PolygonView]) -> List[object]:
        """Return a filled mask dataset and a border polyline per view."""

        self._ensure_backend()
        if not views:
            raise PreviewBackendError("Nothing to preview: no views were provided.")
        spc = self._settings.segments_per_circle
        datasets: List[object] = []
        for view in views:
            content = view.mask.fill_polydata(segments_per_circle=spc, flip_y=True)
            datasets.append(set_mesh_color(content, view.content_color))
            if view.border is not None:
                border = view.border.stroke_polydata(segments_per_circle=spc, flip_y=True)
                border.field_data["line_width"] = [view.border.line_width]
                datasets.append(border)
        return datasets

    def show(
        self,
        views: Sequence[PolygonView],
        screenshot_path: Path | None = None,
        off_screen: bool = False,
    ) -> None:
        pv = self._ensure_backend()
        datasets = self.collect_datasets(views)
        plotter = pv.Plotter(window_size=(1024, 768), off_screen=off_screen or screenshot_path is not None)
        plotter.set_background("#090c10", top="#1b2333")
        self._apply_scene(plotter, datasets)
        plotter.view_xy()

        if screenshot_path is not None:
            screenshot_path.parent.mkdir(parents=True, exist_ok=True)
            plotter.show(title="polymask preview", auto_close=True, screenshot=str(screenshot_path))
            plotter.close()
            if self.console is not None:
                self.console.print(f"[green]Saved screenshot to {screenshot_path}[/green]")
            return

        plotter.show(title="polymask preview")
        plotter.close()

    def _apply_scene(self, plotter, datasets: Iterable[object]) -> None:
        for index, mesh in enumerate(datasets):
            color = get_mesh_color(mesh) or (1.0, 1.0, 1.0, 1.0)
            if "line_width" in mesh.field_data:
                plotter.add_mesh(
                    mesh,
                    name=f"border-{index}",
                    color=color[:3],
                    opacity=color[3],
                    line_width=float(mesh.field_data["line_width"][0]),
                    render_lines_as_tubes=False,
                )
                continue
            plotter.add_mesh(
                mesh,
                name=f"mask-{index}",
                color=color[:3],
                opacity=color[3],
                show_edges=False,
            )
