"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

Point = tuple[float, float]


def point_to_segment_distance(p: Point, a: Point, b: Point) -> float:
    """Distance from p to the closed segment a-b.

    A zero-length segment degrades to point-to-point distance.
    """
    px, py = p
    x1, y1 = a
    x2, y2 = b
    dx = x2 - x1
    dy = y2 - y1
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return math.hypot(px - x1, py - y1)

    t = ((px - x1) * dx + (py - y1) * dy) / len_sq
    t = max(0.0, min(1.0, t))
    proj_x = x1 + t * dx
    proj_y = y1 + t * dy
    return math.hypot(px - proj_x, py - proj_y)


def bezier_point(p0: Point, c1: Point, c2: Point, p3: Point, t: float) -> Point:
    """Evaluate a cubic Bezier at parameter t."""
    mt = 1.0 - t
    a = mt * mt * mt
    b = 3 * mt * mt * t
    c = 3 * mt * t * t
    d = t * t * t
    return (
        a * p0[0] + b * c1[0] + c * c2[0] + d * p3[0],
        a * p0[1] + b * c1[1] + c * c2[1] + d * p3[1],
    )


def sample_bezier(
    p0: Point, c1: Point, c2: Point, p3: Point, steps: int = 10,
) -> NDArray[np.float64]:
    """Sample steps+1 points (t = 0..1 inclusive) along a cubic Bezier."""
    steps = max(1, steps)
    t = np.linspace(0.0, 1.0, steps + 1)[:, None]
    mt = 1.0 - t
    ctrl = np.array([p0, c1, c2, p3], dtype=np.float64)
    return (
        mt**3 * ctrl[0]
        + 3 * mt**2 * t * ctrl[1]
        + 3 * mt * t**2 * ctrl[2]
        + t**3 * ctrl[3]
    )


def point_in_polygon(point: Point, polygon_points: NDArray[np.float64]) -> bool:
    """Ray-casting containment test (even-odd rule).

    The polygon may be open or closed; fewer than 3 vertices is never inside.
    """
    n = len(polygon_points)
    if n < 3:
        return False

    px, py = point
    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = polygon_points[i]
        xj, yj = polygon_points[j]
        if (yi > py) != (yj > py):
            x_cross = (xj - xi) * (py - yi) / (yj - yi) + xi
            if px < x_cross:
                inside = not inside
        j = i
    return inside


def densify_outline(
    polygon_points: NDArray[np.float64], subdivisions: int,
) -> NDArray[np.float64]:
    """Linearly interpolate `subdivisions` points per closed-polygon edge.

    Each edge contributes its start vertex plus subdivisions-1 interior points,
    so the output has len(polygon) * subdivisions rows.
    """
    n = len(polygon_points)
    if n == 0:
        return np.empty((0, 2))
    subdivisions = max(1, subdivisions)

    start = polygon_points
    end = np.roll(polygon_points, -1, axis=0)
    t = (np.arange(subdivisions) / subdivisions)[None, :, None]
    pts = start[:, None, :] + (end - start)[:, None, :] * t
    return pts.reshape(-1, 2)


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def pad_bbox(
    box: tuple[float, float, float, float], padding: float,
) -> tuple[float, float, float, float]:
    return (box[0] - padding, box[1] - padding, box[2] + padding, box[3] + padding)


def bbox_contains(box: tuple[float, float, float, float], point: Point) -> bool:
    x, y = point
    return box[0] <= x <= box[2] and box[1] <= y <= box[3]
