"""Pattern generator: anchor points approximating a silhouette.

Pipeline:
  1. Densify the polygon outline (fixed subdivisions per edge)
  2. Overlay a regular grid on the bounding box, keep ray-cast interior points,
     jitter each by a small bounded amount
  3. Concatenate outline + interior
  4. Stride down-sample to the target count (deterministic indices)

All coordinates are normalized to [0, 1]².
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import Polygon

from spirit_mosaic.engine.config import MosaicConfig
from spirit_mosaic.utils.geometry import densify_outline, point_in_polygon

logger = logging.getLogger(__name__)

# Side-on mustang, nose to the right, y grows downward.
MUSTANG_OUTLINE: tuple[tuple[float, float], ...] = (
    (0.14, 0.46), (0.18, 0.36), (0.26, 0.32), (0.40, 0.35),
    (0.56, 0.33), (0.64, 0.22), (0.70, 0.13), (0.73, 0.17),
    (0.84, 0.25), (0.85, 0.31), (0.78, 0.31), (0.70, 0.37),
    (0.68, 0.48), (0.69, 0.74), (0.64, 0.74), (0.62, 0.54),
    (0.58, 0.54), (0.58, 0.74), (0.53, 0.74), (0.52, 0.53),
    (0.40, 0.53), (0.38, 0.74), (0.33, 0.74), (0.32, 0.55),
    (0.29, 0.55), (0.28, 0.73), (0.23, 0.73), (0.24, 0.48),
    (0.20, 0.42), (0.17, 0.50),
)


class PatternGenerator:
    """Samples outline and interior points of a fixed polygon."""

    def __init__(
        self,
        outline: tuple[tuple[float, float], ...] | NDArray[np.float64] = MUSTANG_OUTLINE,
        config: MosaicConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config or MosaicConfig()
        self.rng = rng or np.random.default_rng()
        self.outline = np.asarray(outline, dtype=np.float64).reshape(-1, 2)

    def generate(self, target_count: int) -> NDArray[np.float64]:
        """Up to target_count points (Nx2), outline points first."""
        if target_count <= 0 or len(self.outline) == 0:
            return np.empty((0, 2))

        outline_pts = densify_outline(self.outline, self.config.outline_subdivisions)
        interior_pts = self._interior_points()
        combined = np.vstack([outline_pts, interior_pts]) if len(interior_pts) else outline_pts

        if len(combined) > target_count:
            step = len(combined) / target_count
            indices = np.floor(np.arange(target_count) * step).astype(int)
            combined = combined[indices]

        logger.debug(
            "Pattern: %d outline + %d interior -> %d points (target %d)",
            len(outline_pts),
            len(interior_pts),
            len(combined),
            target_count,
        )
        return np.clip(combined, 0.0, 1.0)

    def _interior_points(self) -> NDArray[np.float64]:
        if len(self.outline) < 3:
            return np.empty((0, 2))
        polygon = Polygon(self.outline)
        if polygon.is_empty or polygon.area <= 0:
            return np.empty((0, 2))

        spacing = self.config.grid_spacing
        if spacing <= 0:
            return np.empty((0, 2))
        xmin, ymin, xmax, ymax = polygon.bounds
        xs = np.arange(xmin, xmax + spacing / 2, spacing)
        ys = np.arange(ymin, ymax + spacing / 2, spacing)

        inside = [
            (x, y)
            for y in ys
            for x in xs
            if point_in_polygon((x, y), self.outline)
        ]
        if not inside:
            return np.empty((0, 2))

        pts = np.array(inside, dtype=np.float64)
        j = self.config.grid_jitter
        return pts + self.rng.uniform(-j, j, size=pts.shape)
