"""Viewport: pan/zoom state mediating world and screen coordinates.

    screen = world * zoom + pan
    world  = (screen - pan) / zoom

Zoom is always clamped to [min_zoom, max_zoom]; pan is unbounded.
"""

from __future__ import annotations

from dataclasses import dataclass

from spirit_mosaic.engine.config import MosaicConfig
from spirit_mosaic.utils.geometry import Point
from spirit_mosaic.utils.math_helpers import clamp


@dataclass
class ViewportState:
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0


class Viewport:
    def __init__(self, config: MosaicConfig | None = None) -> None:
        self.config = config or MosaicConfig()
        self.min_zoom = min(self.config.min_zoom, self.config.max_zoom)
        self.max_zoom = max(self.config.min_zoom, self.config.max_zoom)
        self.state = ViewportState()
        self.reset()

    @property
    def zoom(self) -> float:
        return self.state.zoom

    @property
    def pan_offset(self) -> Point:
        return (self.state.pan_x, self.state.pan_y)

    def world_to_screen(self, pt: Point) -> Point:
        s = self.state
        return (pt[0] * s.zoom + s.pan_x, pt[1] * s.zoom + s.pan_y)

    def screen_to_world(self, pt: Point) -> Point:
        s = self.state
        return ((pt[0] - s.pan_x) / s.zoom, (pt[1] - s.pan_y) / s.zoom)

    def pan(self, dx: float, dy: float) -> None:
        """Translate by a screen-space delta."""
        self.state.pan_x += dx
        self.state.pan_y += dy

    def zoom_by(self, factor: float, focal_x: float, focal_y: float) -> None:
        """Multiply zoom by factor, keeping the world point under (focal_x, focal_y) fixed.

        Non-positive factors are ignored.
        """
        if factor <= 0:
            return
        self.zoom_to(self.state.zoom * factor, focal_x, focal_y)

    def zoom_to(self, zoom: float, focal_x: float, focal_y: float) -> None:
        world_x, world_y = self.screen_to_world((focal_x, focal_y))
        new_zoom = clamp(zoom, self.min_zoom, self.max_zoom)
        self.state.zoom = new_zoom
        self.state.pan_x = focal_x - world_x * new_zoom
        self.state.pan_y = focal_y - world_y * new_zoom

    def zoom_in(self, focal_x: float, focal_y: float) -> None:
        self.zoom_by(self.config.zoom_step, focal_x, focal_y)

    def zoom_out(self, focal_x: float, focal_y: float) -> None:
        self.zoom_by(1 / self.config.zoom_step, focal_x, focal_y)

    def wheel(self, delta_y: float, focal_x: float, focal_y: float) -> None:
        """Scroll up (negative delta) zooms in, scroll down zooms out."""
        if delta_y == 0:
            return
        step = self.config.wheel_step
        factor = 1 + step if delta_y < 0 else 1 - step
        self.zoom_by(factor, focal_x, focal_y)

    def reset(self) -> None:
        self.state.zoom = clamp(self.config.default_zoom, self.min_zoom, self.max_zoom)
        self.state.pan_x = 0.0
        self.state.pan_y = 0.0

    def snapshot(self) -> ViewportState:
        s = self.state
        return ViewportState(s.pan_x, s.pan_y, s.zoom)
