"""Tests for geometry and math helpers."""

from __future__ import annotations

import numpy as np
import pytest

from spirit_mosaic.utils.geometry import (
    bbox,
    bbox_contains,
    bezier_point,
    densify_outline,
    pad_bbox,
    point_in_polygon,
    point_to_segment_distance,
    sample_bezier,
)
from spirit_mosaic.utils.math_helpers import clamp, lerp, remap, rgb_to_hex

SQUARE = np.array([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])


class TestPointToSegment:
    def test_perpendicular(self):
        assert point_to_segment_distance((0.5, 1.0), (0.0, 0.0), (1.0, 0.0)) == pytest.approx(1.0)

    def test_beyond_endpoint(self):
        assert point_to_segment_distance((2.0, 0.0), (0.0, 0.0), (1.0, 0.0)) == pytest.approx(1.0)

    def test_zero_length_segment(self):
        d = point_to_segment_distance((3.0, 4.0), (0.0, 0.0), (0.0, 0.0))
        assert d == pytest.approx(5.0)


class TestBezier:
    def test_endpoints(self):
        p0, c1, c2, p3 = (0.0, 0.0), (1.0, 2.0), (3.0, 2.0), (4.0, 0.0)
        assert bezier_point(p0, c1, c2, p3, 0.0) == pytest.approx(p0)
        assert bezier_point(p0, c1, c2, p3, 1.0) == pytest.approx(p3)

    def test_sample_count_and_match(self):
        p0, c1, c2, p3 = (0.0, 0.0), (1.0, 2.0), (3.0, 2.0), (4.0, 0.0)
        samples = sample_bezier(p0, c1, c2, p3, steps=10)
        assert samples.shape == (11, 2)
        mid = bezier_point(p0, c1, c2, p3, 0.5)
        assert samples[5] == pytest.approx(mid)


class TestPolygon:
    def test_inside_and_outside(self):
        assert point_in_polygon((0.5, 0.5), SQUARE)
        assert not point_in_polygon((1.5, 0.5), SQUARE)

    def test_degenerate_polygon(self):
        assert not point_in_polygon((0.0, 0.0), np.array([(0.0, 0.0), (1.0, 1.0)]))

    def test_densify(self):
        pts = densify_outline(SQUARE, 4)
        assert pts.shape == (16, 2)
        assert pts[0] == pytest.approx((0.0, 0.0))
        assert pts[2] == pytest.approx((0.5, 0.0))

    def test_densify_empty(self):
        assert densify_outline(np.empty((0, 2)), 5).shape == (0, 2)


def test_bbox_helpers():
    box = bbox(np.array([(1.0, 2.0), (3.0, -1.0)]))
    assert box == (1.0, -1.0, 3.0, 2.0)
    padded = pad_bbox(box, 1.0)
    assert padded == (0.0, -2.0, 4.0, 3.0)
    assert bbox_contains(padded, (0.0, 0.0))
    assert not bbox_contains(box, (0.0, 0.0))
    assert bbox(np.empty((0, 2))) == (0.0, 0.0, 0.0, 0.0)


def test_math_helpers():
    assert clamp(5, 0, 3) == 3
    assert lerp(1, 4, 0.5) == pytest.approx(2.5)
    assert remap(5, 0, 10, 100, 200) == pytest.approx(150)
    assert remap(5, 2, 2, 7, 9) == 7
    assert rgb_to_hex((53, 76, 161)) == "#354ca1"
