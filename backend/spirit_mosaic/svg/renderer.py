"""Render a scene Frame to an SVG document.

World-space elements are wrapped in a single group carrying the viewport
transform (translate by pan, then scale by zoom); overlay elements are
already in screen space and are drawn after it, untransformed.
"""

from __future__ import annotations

from typing import Any

from spirit_mosaic.engine.scene import Frame
from spirit_mosaic.svg.serializer import serialize_svg

BACKGROUND = "#f0f0f0"


def viewport_transform(frame: Frame) -> str:
    v = frame.view
    return f"translate({v.pan_x:.2f} {v.pan_y:.2f}) scale({v.zoom:.4f})"


def frame_to_elements(frame: Frame) -> list[dict[str, Any]]:
    world = {
        "tag": "g",
        "id": "world",
        "transform": viewport_transform(frame),
        "children": frame.elements,
    }
    return [world, *frame.overlay]


def render_svg(frame: Frame, title: str = "Spirit Mosaic") -> str:
    return serialize_svg(
        frame_to_elements(frame),
        canvas_w=frame.width,
        canvas_h=frame.height,
        title=title,
        description=f"{frame.display_mode} view, coloured by {frame.color_mode}",
        background=BACKGROUND,
    )
