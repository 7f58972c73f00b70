"""Write the sample screen of masked polygon views to demo.svg.

Run with:
  python examples/demo_screen.py
"""

from __future__ import annotations

import math
from pathlib import Path

from polymask.layers import demo_views, setup_polygon_view
from polymask.modeling import Rect2D, Shape
from polymask.svg import write_svg


def build():
    views = demo_views(size=120.0)
    octagon = setup_polygon_view(
        Rect2D.from_bounds(440.0, 20.0, 120.0, 120.0),
        shape=Shape.polygon(8),
        radius=10.0,
        rotation=math.pi / 8,
        color="#fadb5f",
    )
    return [*views, octagon]


if __name__ == "__main__":
    print(write_svg(Path("demo.svg"), build()))
