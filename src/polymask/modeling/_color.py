from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import pyvista as pv

COLOR_FIELD = "__polymask_color__"
CLEAR = (0.0, 0.0, 0.0, 0.0)
_CLEAR_NAMES = {"clear", "none", "transparent"}

RGBA = Tuple[float, float, float, float]
ColorLike = Sequence[float] | str


def normalize_color(color: ColorLike | None) -> RGBA:
    """Return ``color`` as an RGBA tuple of floats in ``[0, 1]``; ``None`` means clear."""
    if color is None:
        return CLEAR
    if isinstance(color, str):
        if color.strip().lower() in _CLEAR_NAMES:
            return CLEAR
        try:
            col = pv.Color(color)
        except ValueError as exc:
            raise ValueError(f"Unknown color {color!r}.") from exc
        r, g, b = (float(c) for c in col.float_rgb)
        return (r, g, b, 1.0)

    arr = np.asarray(color, dtype=float).flatten()
    if arr.size not in (3, 4):
        raise ValueError("Color must be RGB or RGBA.")
    if arr.max() > 1.0:
        arr = arr / 255.0
    r, g, b = (float(c) for c in arr[:3])
    alpha = float(arr[3]) if arr.size == 4 else 1.0
    return (r, g, b, alpha)


def is_clear(color: RGBA) -> bool:
    return color[3] <= 0.0


def to_svg_color(color: RGBA) -> tuple[str, float]:
    """Return a ``#rrggbb`` string and opacity for SVG attributes."""
    if is_clear(color):
        return "none", 0.0
    r, g, b = (int(round(c * 255)) for c in color[:3])
    return f"#{r:02x}{g:02x}{b:02x}", float(color[3])


def set_mesh_color(mesh: pv.PolyData, color: RGBA) -> pv.PolyData:
    data = np.array(color, dtype=float)[np.newaxis, :]
    mesh.field_data[COLOR_FIELD] = data
    return mesh


def get_mesh_color(mesh: pv.DataObject) -> Optional[RGBA]:
    if COLOR_FIELD not in mesh.field_data:
        return None
    arr = np.array(mesh.field_data[COLOR_FIELD])
    if arr.size == 0:
        return None
    rgba = arr[0]
    if rgba.size < 4:
        return None
    return (float(rgba[0]), float(rgba[1]), float(rgba[2]), float(rgba[3]))
