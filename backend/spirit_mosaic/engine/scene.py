"""Frame builder: full redraw of the visible scene for one display mode.

Each display mode is a registered function that appends world-space draw
primitives (SVG-ready element dicts) and hit targets, in draw order, to a
FrameContext. Nothing is diffed between frames.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Callable

from spirit_mosaic.data.connections import connection_pairs
from spirit_mosaic.data.entities import MONTH_NAMES, Entity
from spirit_mosaic.engine.config import MosaicConfig
from spirit_mosaic.engine.hit_test import HitTarget, ThreadTarget, TileTarget
from spirit_mosaic.engine.layout import Position
from spirit_mosaic.engine.registry import ModeKind, display_mode, get_registry
from spirit_mosaic.engine.viewport import ViewportState
from spirit_mosaic.engine.visuals import (
    CATEGORY_COLORS,
    DEFAULT_CATEGORY_COLOR,
    RGB,
    ThreadPath,
    texture_for,
    thickness_for,
    tile_size_for,
)
from spirit_mosaic.utils.math_helpers import rgb_to_hex

_CENTER = Position(0.5, 0.5, fixed=False)


@dataclass
class FrameContext:
    """Everything a display mode may read, plus the lists it appends to."""

    entities: Sequence[Entity]
    positions: dict[str, Position]
    config: MosaicConfig
    view: ViewportState
    color_fn: Callable[[Entity, MosaicConfig], RGB]
    phase: float = 0.0
    selected_id: str | None = None
    hovered_id: str | None = None
    thread_paths: dict[str, ThreadPath] = field(default_factory=dict)
    ensure_connections: Callable[[], None] | None = None

    elements: list[dict[str, Any]] = field(default_factory=list)
    overlay: list[dict[str, Any]] = field(default_factory=list)
    targets: list[HitTarget] = field(default_factory=list)
    month: int | None = None

    def position_of(self, entity: Entity) -> Position:
        return self.positions.get(entity.id, _CENTER)

    def world_of(self, entity: Entity) -> tuple[float, float]:
        pos = self.position_of(entity)
        return (pos.x * self.config.canvas_width, pos.y * self.config.canvas_height)


@dataclass
class Frame:
    display_mode: str
    color_mode: str
    view: ViewportState
    width: float
    height: float
    phase: float = 0.0
    month: int | None = None
    elements: list[dict[str, Any]] = field(default_factory=list)
    overlay: list[dict[str, Any]] = field(default_factory=list)
    targets: list[HitTarget] = field(default_factory=list)


def build_frame(
    display: str,
    color: str,
    *,
    entities: Sequence[Entity],
    positions: dict[str, Position],
    config: MosaicConfig,
    view: ViewportState,
    phase: float = 0.0,
    selected_id: str | None = None,
    hovered_id: str | None = None,
    thread_paths: dict[str, ThreadPath] | None = None,
    ensure_connections: Callable[[], None] | None = None,
) -> Frame:
    """Resolve both modes once, then let the display mode draw every entity.

    Raises UnknownModeError for unregistered mode names.
    """
    registry = get_registry()
    draw = registry.get(ModeKind.DISPLAY, display).fn
    color_fn = registry.get(ModeKind.COLOR, color).fn

    ctx = FrameContext(
        entities=entities,
        positions=positions,
        config=config,
        view=view,
        color_fn=color_fn,
        phase=phase,
        selected_id=selected_id,
        hovered_id=hovered_id,
        thread_paths=thread_paths or {},
        ensure_connections=ensure_connections,
    )
    draw(ctx)
    return Frame(
        display_mode=display,
        color_mode=color,
        view=view,
        width=config.canvas_width,
        height=config.canvas_height,
        phase=phase,
        month=ctx.month,
        elements=ctx.elements,
        overlay=ctx.overlay,
        targets=ctx.targets,
    )


def _rgba(color: RGB, alpha: float) -> tuple[str, str]:
    return rgb_to_hex(color), f"{max(0.0, min(1.0, alpha)):.2f}"


def _draw_tile(
    ctx: FrameContext,
    entity: Entity,
    scale: float = 1.0,
    rotation: float = 0.0,
) -> None:
    selected = entity.id == ctx.selected_id
    hovered = entity.id == ctx.hovered_id
    size = tile_size_for(entity, ctx.config, selected=selected, hovered=hovered) * scale
    x, y = ctx.world_of(entity)
    fill, opacity = _rgba(ctx.color_fn(entity, ctx.config), 1.0 if ctx.position_of(entity).fixed else 0.7)

    elem: dict[str, Any] = {
        "tag": "rect",
        "id": entity.id,
        "x": f"{x - size / 2:.2f}",
        "y": f"{y - size / 2:.2f}",
        "width": f"{size:.2f}",
        "height": f"{size:.2f}",
        "fill": fill,
        "fill-opacity": opacity,
    }
    if selected:
        elem.update({"stroke": "#ffffff", "stroke-width": "2"})
    elif hovered:
        elem.update({"stroke": "#ffffff", "stroke-opacity": "0.5", "stroke-width": "1"})
    if rotation:
        elem["transform"] = f"rotate({math.degrees(rotation):.2f} {x:.2f} {y:.2f})"
    ctx.elements.append(elem)
    ctx.targets.append(TileTarget(entity.id, x, y, size, rotation))

    if (selected or hovered) and ctx.view.zoom > ctx.config.connection_zoom_cutoff:
        ctx.elements.append({
            "tag": "text",
            "x": f"{x:.2f}",
            "y": f"{y + size / 2 + 5:.2f}",
            "font-size": "10",
            "text-anchor": "middle",
            "fill": "#ffffff",
            "stroke": "#000000",
            "stroke-width": "0.5",
            "text": entity.id,
        })


def _draw_connections(ctx: FrameContext, opacity: float) -> None:
    by_id = {e.id: e for e in ctx.entities}
    for a_id, b_id, conn in connection_pairs(ctx.entities):
        alpha = opacity
        width = 0.5
        if ctx.selected_id in (a_id, b_id):
            alpha = 1.0
            width = 2.0
        x1, y1 = ctx.world_of(by_id[a_id])
        x2, y2 = ctx.world_of(by_id[b_id])
        stroke, stroke_opacity = _rgba(CATEGORY_COLORS.get(conn.category, DEFAULT_CATEGORY_COLOR), alpha)
        ctx.elements.append({
            "tag": "line",
            "x1": f"{x1:.2f}",
            "y1": f"{y1:.2f}",
            "x2": f"{x2:.2f}",
            "y2": f"{y2:.2f}",
            "stroke": stroke,
            "stroke-opacity": stroke_opacity,
            "stroke-width": f"{width}",
        })


@display_mode("mosaic", description="Tiles; pattern tiles drawn on top")
def draw_mosaic(ctx: FrameContext) -> None:
    if ctx.view.zoom < ctx.config.connection_zoom_cutoff:
        _draw_connections(ctx, 0.15)
    free = [e for e in ctx.entities if not ctx.position_of(e).fixed]
    pinned = [e for e in ctx.entities if ctx.position_of(e).fixed]
    for entity in free + pinned:
        _draw_tile(ctx, entity)


@display_mode("network", description="Shared-event links between tiles")
def draw_network(ctx: FrameContext) -> None:
    if ctx.ensure_connections is not None:
        ctx.ensure_connections()
    _draw_connections(ctx, 0.8)
    for entity in ctx.entities:
        _draw_tile(ctx, entity)


def evolution_month(phase: float, months: int) -> int:
    """Month 1..months oscillating with the animation phase."""
    months = max(1, months)
    t = (math.sin(phase) + 1) / 2
    return min(months, int(math.floor(t * months)) + 1)


@display_mode("evolution", description="Tiles grow with events up to the animated month")
def draw_evolution(ctx: FrameContext) -> None:
    month = evolution_month(ctx.phase, ctx.config.months)
    ctx.month = month
    for entity in ctx.entities:
        scale = entity.events_up_to(month) / max(1, entity.event_count)
        _draw_tile(ctx, entity, scale=scale, rotation=ctx.phase * 0.1)

    label = MONTH_NAMES[(month - 1) % len(MONTH_NAMES)]
    ctx.overlay.append({
        "tag": "text",
        "x": f"{ctx.config.canvas_width - 20:.2f}",
        "y": f"{ctx.config.canvas_height - 20:.2f}",
        "font-size": "16",
        "text-anchor": "end",
        "fill": "#000000",
        "fill-opacity": "0.70",
        "text": f"Month: {label}",
    })


def thread_d(path: ThreadPath, offset: float = 0.0) -> str:
    """SVG path data for a thread; offset shifts across the thread axis."""
    if not path.segments:
        return ""

    def p(x: float, y: float) -> str:
        if path.vertical:
            return f"{x + offset:.2f},{y:.2f}"
        return f"{x:.2f},{y + offset:.2f}"

    first = path.segments[0].start
    parts = [f"M {p(first.x, first.y)}"]
    for seg in path.segments:
        parts.append(f"C {p(*seg.c1)} {p(*seg.c2)} {p(seg.end.x, seg.end.y)}")
    return " ".join(parts)


@display_mode("tapestry", description="One woven thread per entity")
def draw_tapestry(ctx: FrameContext) -> None:
    for entity in ctx.entities:
        path = ctx.thread_paths.get(entity.id)
        if path is None:
            continue
        highlighted = entity.id == ctx.selected_id
        dimmed = ctx.selected_id is not None and not highlighted
        base = thickness_for(entity.event_count, ctx.config)
        width = base * 1.5 if highlighted else base
        offset = math.sin(ctx.phase * 2 + path.bbox[0] * 0.01) * 3 if highlighted else 0.0

        alpha = 1.0 if highlighted else (80 / 255 if dimmed else 220 / 255)
        stroke, stroke_opacity = _rgba(ctx.color_fn(entity, ctx.config), alpha)
        elem: dict[str, Any] = {
            "tag": "path",
            "id": entity.id,
            "d": thread_d(path, offset),
            "fill": "none",
            "stroke": stroke,
            "stroke-opacity": stroke_opacity,
            "stroke-width": f"{width:.2f}",
        }
        dash = texture_for(entity.style).dash_array
        if dash is not None:
            elem["stroke-dasharray"] = f"{dash[0]:.1f} {dash[1]:.1f}"
        ctx.elements.append(elem)

        knot = 8 if highlighted else 6
        shown = 5 if highlighted else 3
        for anchor in path.anchors:
            if not anchor.events:
                continue
            count = min(shown, len(anchor.events))
            for i in range(count):
                angle = 2 * math.pi * i / count
                r = knot if len(anchor.events) > 1 else 0
                ax, ay = anchor.x + math.cos(angle) * r, anchor.y + math.sin(angle) * r
                if path.vertical:
                    ax += offset
                else:
                    ay += offset
                ctx.elements.append({
                    "tag": "circle",
                    "cx": f"{ax:.2f}",
                    "cy": f"{ay:.2f}",
                    "r": f"{knot / 2:.1f}",
                    "fill": rgb_to_hex(CATEGORY_COLORS.get(anchor.events[i].category, DEFAULT_CATEGORY_COLOR)),
                    "fill-opacity": "0.90" if highlighted else "0.70",
                })

        ctx.targets.append(ThreadTarget.from_config(entity.id, path, base, ctx.config))
