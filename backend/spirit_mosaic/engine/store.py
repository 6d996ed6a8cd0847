"""Scene store: the single owner of mosaic state.

Built once by the application factory and passed to whoever needs it (API
dependencies, tests). Loading runs as a one-shot async task; until it
completes the store is "initializing" and render/hit-test do nothing.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import numpy as np

from spirit_mosaic.data.connections import rebuild_connections
from spirit_mosaic.data.entities import MONTH_NAMES, Category, Entity
from spirit_mosaic.data.filters import FilterCriteria, apply_filters
from spirit_mosaic.data.generator import StudentGenerator
from spirit_mosaic.data.ingest import load_csv
from spirit_mosaic.engine.config import MosaicConfig
from spirit_mosaic.engine.errors import DataLoadError
from spirit_mosaic.engine.hit_test import HitTarget
from spirit_mosaic.engine.input import InputController, PointerEvent
from spirit_mosaic.engine.layout import LayoutAssigner, Position
from spirit_mosaic.engine.pattern import PatternGenerator
from spirit_mosaic.engine.registry import ModeKind, get_registry
from spirit_mosaic.engine.render_loop import RenderLoop, Selection
from spirit_mosaic.engine.scene import Frame, build_frame
from spirit_mosaic.engine.viewport import Viewport
from spirit_mosaic.engine.visuals import ThreadPath, build_thread_path

logger = logging.getLogger(__name__)


class SceneStatus(str, enum.Enum):
    INITIALIZING = "initializing"
    READY = "ready"


@dataclass
class EntityDetail:
    id: str
    style: str
    primary_category: str
    event_count: int
    categories_touched: int
    category_percentages: dict[str, float] = field(default_factory=dict)
    events: list[dict[str, object]] = field(default_factory=list)
    connection_count: int = 0
    fixed: bool = False


class SceneStore:
    def __init__(
        self,
        config: MosaicConfig | None = None,
        *,
        total: int = 400,
        pattern_count: int = 100,
        csv_path: str | Path | None = None,
        seed: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or MosaicConfig()
        self.total = total
        self.pattern_count = pattern_count
        self.csv_path = csv_path
        self.rng = np.random.default_rng(seed)

        self.status = SceneStatus.INITIALIZING
        self.source: str | None = None
        self.load_error: str | None = None

        self.entities: list[Entity] = []
        self.positions: dict[str, Position] = {}
        self.thread_paths: dict[str, ThreadPath] = {}
        self.filters = FilterCriteria()
        self.visible: list[Entity] = []
        self._by_id: dict[str, Entity] = {}

        self.display_mode = "mosaic"
        self.color_mode = "category"

        self.viewport = Viewport(self.config)
        self.selection = Selection(exists=self.has_entity)
        self.loop: RenderLoop[Frame] = RenderLoop(self.render, self.config.phase_step, clock)
        self.input = InputController(self.viewport, self.selection, self.targets)
        self.last_frame: Frame | None = None

    @property
    def ready(self) -> bool:
        return self.status is SceneStatus.READY

    # -- loading --------------------------------------------------------

    async def load(self) -> None:
        """Acquire entities (CSV if configured, else synthetic) and lay them out.

        Any load failure falls back to synthetic generation; this never raises
        for data problems.
        """
        entities: list[Entity] | None = None
        source = "synthetic"
        if self.csv_path:
            try:
                report = await asyncio.get_running_loop().run_in_executor(None, load_csv, self.csv_path)
                entities = report.entities
                source = "csv"
            except DataLoadError as e:
                self.load_error = str(e)
                logger.warning("CSV load failed, using synthetic data: %s", e)

        if entities is None:
            generator = StudentGenerator(self.rng, months=self.config.months)
            entities = generator.generate(self.total, self.pattern_count)

        self.populate(entities, source=source)

    def populate(self, entities: Sequence[Entity], source: str = "synthetic") -> None:
        """Pattern -> layout -> connections -> thread paths, then mark ready."""
        t0 = time.perf_counter()
        self.entities = list(entities)
        self._by_id = {e.id: e for e in self.entities}

        pattern_count = min(self.pattern_count, len(self.entities))
        points = PatternGenerator(config=self.config, rng=self.rng).generate(pattern_count)
        self.positions = LayoutAssigner(self.config, self.rng).assign(self.entities, points, pattern_count)
        rebuild_connections(self.entities)
        self.thread_paths = {
            e.id: build_thread_path(e, self.positions[e.id], i, self.config, self.rng)
            for i, e in enumerate(self.entities)
        }

        self.source = source
        self.visible = apply_filters(self.entities, self.filters)
        self.selection.clear()
        self.status = SceneStatus.READY
        self.loop.start()
        logger.info(
            "Scene ready: %d entities from %s (%.1fms)",
            len(self.entities),
            source,
            (time.perf_counter() - t0) * 1000,
        )

    # -- queries --------------------------------------------------------

    def has_entity(self, entity_id: str) -> bool:
        return entity_id in self._by_id

    def get_entity(self, entity_id: str) -> Entity | None:
        return self._by_id.get(entity_id)

    def search(self, text: str) -> list[str]:
        """Ids of entities whose id contains text (case-insensitive), in order."""
        needle = text.strip().lower()
        if not needle:
            return []
        return [e.id for e in self.entities if needle in e.id.lower()]

    def detail(self, entity_id: str) -> EntityDetail | None:
        entity = self._by_id.get(entity_id)
        if entity is None:
            return None
        total = entity.event_count
        percentages = {
            category.value: round(100 * count / total, 1)
            for category, count in entity.category_distribution.items()
            if count > 0
        } if total else {}
        position = self.positions.get(entity_id)
        return EntityDetail(
            id=entity.id,
            style=entity.style.value,
            primary_category=entity.primary_category.value,
            event_count=total,
            categories_touched=entity.categories_touched,
            category_percentages=percentages,
            events=[
                {
                    "month": e.month,
                    "month_name": MONTH_NAMES[(e.month - 1) % len(MONTH_NAMES)],
                    "category": e.category.value,
                    "name": e.name,
                }
                for e in entity.events
            ],
            connection_count=len(entity.connections),
            fixed=bool(position and position.fixed),
        )

    def category_counts(self) -> dict[str, int]:
        counts = {c.value: 0 for c in Category}
        for entity in self.entities:
            counts[entity.primary_category.value] += 1
        return counts

    # -- mutations ------------------------------------------------------

    def set_modes(self, display: str | None = None, color: str | None = None) -> None:
        """Switch display and/or colour mode; raises UnknownModeError for bad names."""
        registry = get_registry()
        if display is not None:
            registry.get(ModeKind.DISPLAY, display)
        if color is not None:
            registry.get(ModeKind.COLOR, color)
        if display is not None:
            self.display_mode = display
        if color is not None:
            self.color_mode = color

    def set_filters(self, criteria: FilterCriteria) -> list[Entity]:
        self.filters = criteria
        self.visible = apply_filters(self.entities, criteria)
        logger.debug("Filters %s -> %d visible", criteria, len(self.visible))
        return self.visible

    def select(self, entity_id: str | None) -> bool:
        return self.selection.select(entity_id)

    def handle_input(self, event: PointerEvent) -> None:
        if not self.ready:
            return
        self.input.handle(event)

    def ensure_connections(self) -> None:
        if not any(e.connections for e in self.entities):
            rebuild_connections(self.entities)

    # -- rendering ------------------------------------------------------

    def render(self, phase: float) -> Frame:
        """Full redraw of the visible entities; an empty frame while initializing."""
        if not self.ready:
            frame = Frame(
                display_mode=self.display_mode,
                color_mode=self.color_mode,
                view=self.viewport.snapshot(),
                width=self.config.canvas_width,
                height=self.config.canvas_height,
                phase=phase,
            )
        else:
            frame = build_frame(
                self.display_mode,
                self.color_mode,
                entities=self.visible,
                positions=self.positions,
                config=self.config,
                view=self.viewport.snapshot(),
                phase=phase,
                selected_id=self.selection.selected_id,
                hovered_id=self.selection.hovered_id,
                thread_paths=self.thread_paths,
                ensure_connections=self.ensure_connections,
            )
        self.last_frame = frame
        return frame

    def redraw(self) -> Frame:
        return self.loop.redraw()

    def tick(self, delta_time: float | None = None) -> Frame | None:
        return self.loop.tick(delta_time)

    def targets(self) -> list[HitTarget]:
        """Hit targets of the current state, in draw order."""
        if not self.ready:
            return []
        return self.redraw().targets
