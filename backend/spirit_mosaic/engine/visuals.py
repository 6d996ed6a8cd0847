"""Entity visual properties: colour, thickness, texture and thread paths.

Colour modes are registered in the mode registry; every mode is total over
its input (unmapped values fall back to a documented default colour).
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from spirit_mosaic.data.entities import Category, EngagementStyle, Entity, Event
from spirit_mosaic.engine.config import MosaicConfig
from spirit_mosaic.engine.layout import Position
from spirit_mosaic.engine.registry import ModeKind, color_mode, get_registry
from spirit_mosaic.utils.geometry import Point, bbox, pad_bbox
from spirit_mosaic.utils.math_helpers import clamp, lerp, remap

RGB = tuple[int, int, int]

SMU_BLUE: RGB = (53, 76, 161)
SMU_YELLOW: RGB = (249, 200, 14)
SMU_TEAL: RGB = (89, 195, 195)
PURPLE: RGB = (180, 100, 180)
SMU_RED: RGB = (204, 0, 53)

CATEGORY_COLORS: dict[Category, RGB] = {
    Category.ACADEMIC: SMU_BLUE,
    Category.SOCIAL: SMU_YELLOW,
    Category.PROFESSIONAL: SMU_TEAL,
    Category.CULTURAL: PURPLE,
    Category.ATHLETIC: SMU_RED,
}
DEFAULT_CATEGORY_COLOR: RGB = (169, 169, 169)

STYLE_COLORS: dict[EngagementStyle, RGB] = {
    EngagementStyle.SAMPLER: SMU_BLUE,
    EngagementStyle.SPECIALIST: SMU_RED,
    EngagementStyle.SUPER_CONNECTOR: SMU_TEAL,
    EngagementStyle.SELECTIVE: SMU_YELLOW,
}
DEFAULT_STYLE_COLOR: RGB = (100, 100, 100)

# (upper bound on intensity, colour); the last bucket catches everything up to 1.0
INTENSITY_BUCKETS: tuple[tuple[float, RGB], ...] = (
    (0.33, SMU_BLUE),
    (0.66, SMU_TEAL),
    (float("inf"), SMU_RED),
)


@dataclass(frozen=True)
class Texture:
    pattern: str  # solid, dotted, dashed, cross
    scale: float

    @property
    def dash_array(self) -> tuple[float, float] | None:
        """Dash/gap lengths for stroked threads; None draws a solid line."""
        if self.pattern == "solid" or self.scale <= 0.1:
            return None
        return (5 * self.scale, 3 * self.scale)


TEXTURES: dict[str, Texture] = {
    EngagementStyle.SAMPLER.value: Texture("dotted", 0.8),
    EngagementStyle.SPECIALIST.value: Texture("solid", 0.2),
    EngagementStyle.SUPER_CONNECTOR.value: Texture("cross", 0.5),
    EngagementStyle.SELECTIVE.value: Texture("dashed", 0.4),
}
DEFAULT_TEXTURE = Texture("solid", 0.3)


@color_mode("category", description="Primary category palette")
def color_by_category(entity: Entity, config: MosaicConfig) -> RGB:
    return CATEGORY_COLORS.get(entity.primary_category, DEFAULT_CATEGORY_COLOR)


@color_mode("style", description="Engagement style palette")
def color_by_style(entity: Entity, config: MosaicConfig) -> RGB:
    return STYLE_COLORS.get(entity.style, DEFAULT_STYLE_COLOR)


@color_mode("intensity", description="Event count, bucketed")
def color_by_intensity(entity: Entity, config: MosaicConfig) -> RGB:
    return intensity_color(intensity(entity.event_count, config))


def intensity(event_count: int, config: MosaicConfig) -> float:
    cap = max(1, config.intensity_cap)
    return clamp(event_count / cap, 0.0, 1.0)


def intensity_color(value: float) -> RGB:
    for upper, color in INTENSITY_BUCKETS:
        if value < upper:
            return color
    return INTENSITY_BUCKETS[-1][1]


def texture_for(style: EngagementStyle | str) -> Texture:
    key = style.value if isinstance(style, EngagementStyle) else str(style)
    return TEXTURES.get(key, DEFAULT_TEXTURE)


def thickness_for(event_count: int, config: MosaicConfig) -> float:
    """Linear in event count between 1 and the reference count, clamped."""
    lo, hi = config.min_thickness, config.max_thickness
    span = config.reference_event_count - 1
    t = (event_count - 1) / span if span > 0 else 0.0
    return clamp(lerp(lo, hi, t), min(lo, hi), max(lo, hi))


def tile_size_for(
    entity: Entity,
    config: MosaicConfig,
    *,
    selected: bool = False,
    hovered: bool = False,
) -> float:
    size = config.tile_size * (0.8 + entity.event_count / 20)
    if selected:
        size *= config.selected_scale
    elif hovered:
        size *= config.hovered_scale
    return size


@dataclass(frozen=True)
class PathAnchor:
    x: float
    y: float
    month: int
    events: tuple[Event, ...] = ()

    @property
    def point(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class BezierSegment:
    start: PathAnchor
    c1: Point
    c2: Point
    end: PathAnchor


@dataclass
class ThreadPath:
    anchors: list[PathAnchor] = field(default_factory=list)
    segments: list[BezierSegment] = field(default_factory=list)
    vertical: bool = False
    # (xmin, ymin, xmax, ymax) over anchors and control points, unpadded
    bbox: tuple[float, float, float, float] = (0.0, 0.0, 0.0, 0.0)

    def padded_bbox(self, padding: float) -> tuple[float, float, float, float]:
        return pad_bbox(self.bbox, padding)


@dataclass
class VisualProperties:
    color: RGB
    thickness: float
    texture: Texture
    path: ThreadPath | None = None


def build_thread_path(
    entity: Entity,
    position: Position,
    index: int,
    config: MosaicConfig,
    rng: np.random.Generator | None = None,
) -> ThreadPath:
    """Anchor per active month on a month axis, Bezier controls between anchors.

    Every third entity (index % 3 == 0) runs vertically, the rest horizontally.
    The cross-axis coordinate comes from the entity's layout position; busier
    months deviate further from it.
    """
    rng = rng or np.random.default_rng()
    w, h = config.canvas_width, config.canvas_height
    months = max(1, config.months)
    spread = config.thread_spacing / 2
    vertical = index % 3 == 0

    if vertical:
        base = position.x * w
        axis = (0.1 * h, 0.2 * h, 0.8 * h, 0.9 * h)
    else:
        base = position.y * h
        axis = (0.1 * w, 0.15 * w, 0.85 * w, 0.9 * w)
    start_at, first, last, end_at = axis

    def make(along: float, cross: float, month: int, events: tuple[Event, ...] = ()) -> PathAnchor:
        if vertical:
            return PathAnchor(cross, along, month, events)
        return PathAnchor(along, cross, month, events)

    anchors = [make(start_at, base, 0)]
    for month, events in entity.events_by_month().items():
        along = remap(month, 0, months, first, last)
        deviation = float(rng.uniform(-spread, spread)) * (len(events) / 5)
        anchors.append(make(along, base + deviation, month, tuple(events)))
    anchors.append(make(end_at, base, months))

    segments: list[BezierSegment] = []
    for a, b in zip(anchors, anchors[1:]):
        dx = b.x - a.x
        dy = b.y - a.y
        if vertical:
            c1 = (a.x + dx * 0.3, a.y + dy * 0.5)
            c2 = (a.x + dx * 0.7, a.y + dy * 0.5)
        else:
            c1 = (a.x + dx * 0.5, a.y + dy * 0.3)
            c2 = (a.x + dx * 0.5, a.y + dy * 0.7)
        segments.append(BezierSegment(a, c1, c2, b))

    pts = [a.point for a in anchors]
    for seg in segments:
        pts.extend([seg.c1, seg.c2])
    return ThreadPath(
        anchors=anchors,
        segments=segments,
        vertical=vertical,
        bbox=bbox(np.array(pts, dtype=np.float64)),
    )


def compute_properties(
    entity: Entity,
    color_mode: str = "category",
    config: MosaicConfig | None = None,
    *,
    position: Position | None = None,
    index: int = 0,
    rng: np.random.Generator | None = None,
) -> VisualProperties:
    """Visual properties for one entity; a path is built only when a position is given.

    Raises UnknownModeError for an unregistered colour mode.
    """
    config = config or MosaicConfig()
    color_fn = get_registry().get(ModeKind.COLOR, color_mode).fn
    path = None
    if position is not None:
        path = build_thread_path(entity, position, index, config, rng)
    return VisualProperties(
        color=color_fn(entity, config),
        thickness=thickness_for(entity.event_count, config),
        texture=texture_for(entity.style),
        path=path,
    )
