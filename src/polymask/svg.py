from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Sequence

from polymask.layers import PolygonView, ShapeLayer, canvas_size
from polymask.modeling._color import ColorLike, normalize_color, to_svg_color
from polymask.modeling.drawing2d import _fmt

SVG_NS = "http://www.w3.org/2000/svg"


def _paint_attrs(layer: ShapeLayer) -> dict[str, str]:
    fill, fill_opacity = to_svg_color(layer.fill_color)
    stroke, stroke_opacity = to_svg_color(layer.stroke_color)
    attrs = {"d": layer.path.to_svg_d(), "fill": fill, "stroke": stroke}
    if fill != "none":
        attrs["fill-rule"] = layer.fill_rule
        if fill_opacity < 1.0:
            attrs["fill-opacity"] = _fmt(fill_opacity)
    if stroke != "none":
        attrs["stroke-width"] = _fmt(layer.line_width)
        attrs["stroke-linejoin"] = layer.path.line_join
        if stroke_opacity < 1.0:
            attrs["stroke-opacity"] = _fmt(stroke_opacity)
    return attrs


def _rect_attrs(view: PolygonView) -> dict[str, str]:
    x, y, _, _ = view.bounds.bounds
    return {
        "x": _fmt(x),
        "y": _fmt(y),
        "width": _fmt(view.bounds.width),
        "height": _fmt(view.bounds.height),
    }


def _view_element(parent: ET.Element, view: PolygonView, index: int) -> ET.Element:
    group = ET.SubElement(parent, "g", {"id": f"view-{index}"})
    if not view.transform.is_identity:
        cx, cy = view.transform.anchor
        group.set("transform", f"rotate({_fmt(view.transform.rotation_deg)} {_fmt(cx)} {_fmt(cy)})")

    mask_id = f"mask-{index}"
    defs = ET.SubElement(group, "defs")
    mask = ET.SubElement(defs, "mask", {"id": mask_id, "maskUnits": "userSpaceOnUse", **_rect_attrs(view)})
    ET.SubElement(mask, "path", _paint_attrs(view.mask))

    fill, opacity = to_svg_color(view.content_color)
    content = {**_rect_attrs(view), "fill": fill, "mask": f"url(#{mask_id})"}
    if fill != "none" and opacity < 1.0:
        content["fill-opacity"] = _fmt(opacity)
    ET.SubElement(group, "rect", content)

    if view.border is not None:
        ET.SubElement(group, "path", _paint_attrs(view.border))
    return group


def render_svg(
    views: Sequence[PolygonView],
    size: tuple[float, float] | None = None,
    background: ColorLike | None = "#1b2333",
) -> str:
    """Return an SVG document drawing each view's masked content and border.

    Rotation stays on the view's ``<g>`` element so the path data is the
    unrotated outline.
    """
    width, height = size if size is not None else canvas_size(views)
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": _fmt(width),
            "height": _fmt(height),
            "viewBox": f"0 0 {_fmt(width)} {_fmt(height)}",
        },
    )
    bg, _ = to_svg_color(normalize_color(background))
    if bg != "none":
        ET.SubElement(root, "rect", {"width": "100%", "height": "100%", "fill": bg})
    for index, view in enumerate(views):
        _view_element(root, view, index)
    ET.indent(root)
    return ET.tostring(root, encoding="unicode") + "\n"


def write_svg(
    path: Path,
    views: Sequence[PolygonView],
    size: tuple[float, float] | None = None,
    background: ColorLike | None = "#1b2333",
) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_svg(views, size=size, background=background))
    return path
