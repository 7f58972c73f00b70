from __future__ import annotations

import math
import pathlib

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from polymask._config import RenderSettings, get_render_settings
from polymask.layers import PolygonView, demo_views, setup_polygon_view
from polymask.modeling.drawing2d import Line2D, Rect2D, _fmt
from polymask.modeling.polygon import PolygonSpecError, Shape, build_polygon_path
from polymask.preview import LayerPreviewer, PreviewBackendError
from polymask.svg import write_svg

console = Console()
app = typer.Typer(help="Build regular-polygon mask paths and render masked views.")


def _parse_shape(value: str) -> Shape:
    try:
        return Shape.parse(value)
    except PolygonSpecError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix
    n = 1
    while True:
        candidate = parent / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


def _resolve_output(output: pathlib.Path, overwrite: bool) -> pathlib.Path:
    if output.exists() and not overwrite:
        final_output = _next_available_path(output)
        console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")
        return final_output
    return output


def _view(
    shape: Shape,
    size: float,
    stroke: float,
    radius: float,
    rotation_deg: float,
    color: str,
) -> PolygonView:
    bounds = Rect2D.from_bounds(0.0, 0.0, size, size)
    try:
        return setup_polygon_view(
            bounds,
            shape=shape,
            radius=radius,
            rotation=math.radians(rotation_deg),
            line_width=stroke,
            color=color,
        )
    except (PolygonSpecError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc


def _defaults(stroke: float | None, radius: float | None, color: str | None) -> tuple[float, float, str]:
    settings: RenderSettings = get_render_settings()
    return (
        settings.stroke_width if stroke is None else stroke,
        settings.corner_radius if radius is None else radius,
        settings.color if color is None else color,
    )


@app.command()
def path(
    shape: str = typer.Argument(..., help="Side count or shape name (triangle, hexagon, octagon, ...)."),
    width: float = typer.Option(100.0, help="Bounding rectangle width."),
    height: float = typer.Option(100.0, help="Bounding rectangle height."),
    stroke: float | None = typer.Option(None, help="Stroke width the outline is inset for."),
    radius: float | None = typer.Option(None, help="Corner radius."),
) -> None:
    """
    Print the line and arc segments of a polygon path.
    """

    stroke, radius, _ = _defaults(stroke, radius, None)
    parsed = _parse_shape(shape)
    try:
        outline = build_polygon_path(
            Rect2D.from_bounds(0.0, 0.0, width, height),
            parsed.sides,
            stroke_width=stroke,
            corner_radius=radius,
        )
    except PolygonSpecError as exc:
        raise typer.BadParameter(str(exc)) from exc

    table = Table(title=f"{parsed.name} in {_fmt(width)} x {_fmt(height)}")
    table.add_column("#", justify="right")
    table.add_column("Segment")
    table.add_column("Geometry")
    for index, segment in enumerate(outline.segments):
        if isinstance(segment, Line2D):
            geometry = f"to ({_fmt(segment.end[0])}, {_fmt(segment.end[1])})"
            table.add_row(str(index), "line", geometry)
        else:
            geometry = (
                f"center ({_fmt(segment.center[0])}, {_fmt(segment.center[1])}) r={_fmt(segment.radius)} "
                f"{_fmt(math.degrees(segment.start_angle))}° → {_fmt(math.degrees(segment.end_angle))}°"
            )
            table.add_row(str(index), "arc", geometry)
    console.print(table)
    console.print(f"[cyan]SVG path:[/cyan] {outline.to_svg_d()}")


@app.command()
def render(
    shape: str = typer.Argument(..., help="Side count or shape name."),
    output: pathlib.Path = typer.Option(
        pathlib.Path("polygon.svg"),
        "--output",
        "-o",
        help="Path to the SVG file that will be produced.",
    ),
    size: float = typer.Option(200.0, min=1.0, help="Side of the square view."),
    stroke: float | None = typer.Option(None, help="Border stroke width."),
    radius: float | None = typer.Option(None, help="Corner radius."),
    rotation_deg: float = typer.Option(0.0, "--rotation-deg", help="View rotation in degrees, clockwise."),
    color: str | None = typer.Option(None, help="Mask and border color."),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing SVG."),
) -> None:
    """
    Write an SVG of a single view masked to a polygon, with its border.
    """

    stroke, radius, color = _defaults(stroke, radius, color)
    view = _view(_parse_shape(shape), size, stroke, radius, rotation_deg, color)
    final_output = _resolve_output(output, overwrite)
    write_svg(final_output, [view], size=(size, size), background=None)
    console.print(
        Panel(
            f"Wrote [green]{final_output}[/green].",
            title="Render complete",
            border_style="green",
        )
    )


@app.command()
def demo(
    output: pathlib.Path = typer.Option(pathlib.Path("demo.svg"), "--output", "-o", help="SVG destination."),
    size: float = typer.Option(120.0, min=10.0, help="Side of each view."),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing SVG."),
) -> None:
    """
    Write the sample screen: a rotated hexagon image and five bordered polygons.
    """

    final_output = _resolve_output(output, overwrite)
    views = demo_views(size=size)
    write_svg(final_output, views)
    console.print(
        Panel(
            f"Wrote {len(views)} views to [green]{final_output}[/green].",
            title="Demo complete",
            border_style="green",
        )
    )


@app.command()
def preview(
    shape: str = typer.Argument("hexagon", help="Side count or shape name; 'demo' shows the sample screen."),
    size: float = typer.Option(200.0, min=1.0, help="Side of the square view."),
    stroke: float | None = typer.Option(None, help="Border stroke width."),
    radius: float | None = typer.Option(None, help="Corner radius."),
    rotation_deg: float = typer.Option(0.0, "--rotation-deg", help="View rotation in degrees, clockwise."),
    screenshot: pathlib.Path | None = typer.Option(
        None, "--screenshot", help="Optional path to save a screenshot of the preview."
    ),
) -> None:
    """
    Open a PyVista window showing the masked view and its border.
    """

    if shape.strip().lower() == "demo":
        if stroke is not None or radius is not None or rotation_deg != 0.0:
            raise typer.BadParameter("--stroke, --radius and --rotation-deg do not apply to the demo screen.")
        views = demo_views(size=size)
    else:
        stroke, radius, color = _defaults(stroke, radius, None)
        views = [_view(_parse_shape(shape), size, stroke, radius, rotation_deg, color)]

    console.rule("polymask preview")
    previewer = LayerPreviewer(console=console)
    try:
        previewer.show(views, screenshot_path=screenshot)
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc


if __name__ == "__main__":
    app()
