"""Layout assigner: one normalized position per entity.

Pattern entities take silhouette anchor points in order (fixed). Everyone else
is placed in the vertical band of their primary category, with a spread rule
per engagement style and a bounded retry loop against near neighbours.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import cKDTree

from spirit_mosaic.data.entities import BANDED_CATEGORIES, Category, EngagementStyle, Entity
from spirit_mosaic.engine.config import MosaicConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    x: float
    y: float
    fixed: bool = False


class LayoutAssigner:
    def __init__(
        self,
        config: MosaicConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config or MosaicConfig()
        self.rng = rng or np.random.default_rng()
        self._shares: dict[Category, float] = {}

    def assign(
        self,
        entities: Sequence[Entity],
        pattern_points: NDArray[np.float64] | Sequence[tuple[float, float]],
        pattern_count: int | None = None,
    ) -> dict[str, Position]:
        """Map entity id -> Position.

        The first min(pattern_count, len(pattern_points)) entities are pinned to
        pattern points in order; pattern_count defaults to len(pattern_points).
        """
        positions: dict[str, Position] = {}
        if not entities:
            return positions

        points = np.asarray(pattern_points, dtype=np.float64).reshape(-1, 2)
        if pattern_count is None:
            pattern_count = len(points)
        n_fixed = max(0, min(pattern_count, len(points), len(entities)))

        for entity, (x, y) in zip(entities[:n_fixed], points[:n_fixed]):
            positions[entity.id] = Position(float(x), float(y), fixed=True)

        free = list(entities[n_fixed:])
        self._shares = self._population_shares(free)
        placed: list[tuple[float, float]] = []
        soft_overlaps = 0
        for entity in free:
            pos, clean = self._place(entity, placed)
            positions[entity.id] = pos
            placed.append((pos.x, pos.y))
            if not clean:
                soft_overlaps += 1

        logger.info(
            "Layout: %d fixed, %d free (%d accepted with overlap)",
            n_fixed,
            len(free),
            soft_overlaps,
        )
        return positions

    def reposition(
        self,
        entity: Entity,
        positions: dict[str, Position],
    ) -> Position:
        """Re-sample one free entity away from the other free entities.

        Fixed (pattern) positions are returned unchanged.
        """
        current = positions.get(entity.id)
        if current is not None and current.fixed:
            return current
        if not self._shares:
            self._shares = {entity.primary_category: 1.0}
        others = [
            (p.x, p.y) for eid, p in positions.items() if eid != entity.id and not p.fixed
        ]
        pos, _ = self._place(entity, others)
        positions[entity.id] = pos
        return pos

    def band_for(self, category: Category) -> tuple[float, float]:
        """Nominal vertical band; categories without one use the default centred band."""
        if category in BANDED_CATEGORIES:
            i = BANDED_CATEGORIES.index(category)
            h = 1.0 / len(BANDED_CATEGORIES)
            return (i * h, (i + 1) * h)
        return self.config.default_band

    def _population_shares(self, entities: Sequence[Entity]) -> dict[Category, float]:
        if not entities:
            return {}
        counts = Counter(e.primary_category for e in entities)
        total = len(entities)
        return {category: count / total for category, count in counts.items()}

    def _place(
        self,
        entity: Entity,
        placed: Sequence[tuple[float, float]],
    ) -> tuple[Position, bool]:
        """Returns (position, True if it respects min_distance)."""
        others = np.asarray(placed, dtype=np.float64).reshape(-1, 2)
        min_d = self.config.min_distance
        x = y = 0.5
        for _ in range(max(1, self.config.max_placement_attempts)):
            x, y = self._sample(entity)
            if len(others) == 0:
                return Position(x, y), True
            d = np.sqrt(np.sum((others - (x, y)) ** 2, axis=1))
            if float(d.min()) >= min_d:
                return Position(x, y), True
        return Position(x, y), False

    def _sample(self, entity: Entity) -> tuple[float, float]:
        cfg = self.config
        lo, hi = self.band_for(entity.primary_category)
        h = hi - lo

        share = self._shares.get(entity.primary_category, 0.0)
        half = cfg.base_spread + cfg.share_spread * share
        x_lo = max(0.0, 0.5 - half)
        x_hi = min(1.0, 0.5 + half)

        style = entity.style
        if style is EngagementStyle.SPECIALIST:
            mid = (lo + hi) / 2
            sub = h * cfg.specialist_band_fraction / 2
            x = self.rng.uniform(x_lo, x_hi)
            y = self.rng.uniform(mid - sub, mid + sub)
        elif style is EngagementStyle.SUPER_CONNECTOR:
            over = h * cfg.super_connector_overflow
            x = self.rng.uniform(x_lo, x_hi)
            y = self.rng.uniform(lo - over, hi + over)
        elif style is EngagementStyle.SAMPLER:
            j = cfg.sampler_jitter
            x = self.rng.uniform(x_lo, x_hi) + self.rng.uniform(-j, j)
            y = self.rng.uniform(lo, hi) + self.rng.uniform(-j, j)
        elif style is EngagementStyle.SELECTIVE:
            columns = np.linspace(x_lo, x_hi, max(1, cfg.selective_columns))
            x = float(columns[int(self.rng.integers(len(columns)))])
            y = self.rng.uniform(lo, hi)
        else:
            x = self.rng.uniform(x_lo, x_hi)
            y = self.rng.uniform(lo, hi)

        return float(np.clip(x, 0.0, 1.0)), float(np.clip(y, 0.0, 1.0))


def count_overlaps(positions: Sequence[Position], min_distance: float) -> int:
    """Number of position pairs closer than min_distance."""
    if len(positions) < 2 or min_distance <= 0:
        return 0
    tree = cKDTree(np.array([(p.x, p.y) for p in positions]))
    # query_pairs is inclusive of r; shave an epsilon for a strict comparison.
    return len(tree.query_pairs(r=min_distance * (1 - 1e-9)))


def overlap_fraction(positions: Sequence[Position], min_distance: float) -> float:
    n = len(positions)
    if n < 2:
        return 0.0
    return count_overlaps(positions, min_distance) / (n * (n - 1) / 2)
