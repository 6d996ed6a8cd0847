"""Tests for the pattern generator and layout assigner."""

from __future__ import annotations

import numpy as np
import pytest

from spirit_mosaic.data.entities import Category, EngagementStyle
from spirit_mosaic.data.generator import StudentGenerator
from spirit_mosaic.engine.config import MosaicConfig
from spirit_mosaic.engine.layout import LayoutAssigner, Position, count_overlaps, overlap_fraction
from spirit_mosaic.engine.pattern import PatternGenerator
from tests.conftest import make_entity


class TestPattern:
    @pytest.mark.parametrize("target", [0, 1, 37, 100, 250])
    def test_never_exceeds_target(self, rng, target):
        pts = PatternGenerator(rng=rng).generate(target)
        assert len(pts) <= target
        assert len(pts) == target  # the silhouette has plenty of points

    def test_negative_target(self, rng):
        assert PatternGenerator(rng=rng).generate(-3).shape == (0, 2)

    def test_points_in_unit_square(self, rng):
        pts = PatternGenerator(rng=rng).generate(5000)
        assert pts.min() >= 0.0
        assert pts.max() <= 1.0

    def test_interior_fill(self, rng):
        gen = PatternGenerator(rng=rng)
        outline_only = len(gen.outline) * gen.config.outline_subdivisions
        assert len(gen.generate(100_000)) > outline_only

    def test_count_independent_of_jitter(self):
        a = PatternGenerator(rng=np.random.default_rng(1)).generate(250)
        b = PatternGenerator(rng=np.random.default_rng(2)).generate(250)
        assert len(a) == len(b)
        assert not np.allclose(a, b)

    def test_degenerate_outline_returns_outline_points(self, rng):
        gen = PatternGenerator(outline=((0.1, 0.1), (0.9, 0.9)), rng=rng)
        pts = gen.generate(100)
        assert len(pts) == 2 * gen.config.outline_subdivisions

    def test_empty_outline(self, rng):
        assert len(PatternGenerator(outline=np.empty((0, 2)), rng=rng).generate(10)) == 0


class TestLayout:
    def test_pattern_entities_fixed_in_order(self, rng):
        entities = StudentGenerator(rng).generate(400, pattern_count=100)
        points = PatternGenerator(rng=rng).generate(100)
        positions = LayoutAssigner(rng=rng).assign(entities, points, pattern_count=100)

        fixed = [e for e in entities if positions[e.id].fixed]
        assert len(fixed) == 100
        assert fixed == entities[:100]
        for entity, (x, y) in zip(entities[:100], points):
            assert positions[entity.id].x == pytest.approx(x)
            assert positions[entity.id].y == pytest.approx(y)
        assert sum(1 for p in positions.values() if not p.fixed) == 300

    def test_empty(self, rng):
        assert LayoutAssigner(rng=rng).assign([], np.empty((0, 2))) == {}

    def test_more_pattern_slots_than_points(self, rng):
        entities = StudentGenerator(rng).generate(10)
        positions = LayoutAssigner(rng=rng).assign(entities, [(0.5, 0.5), (0.6, 0.6)], pattern_count=5)
        assert sum(p.fixed for p in positions.values()) == 2

    def test_overlap_is_rare(self, rng):
        entities = StudentGenerator(rng).generate(300)
        assigner = LayoutAssigner(rng=rng)
        positions = assigner.assign(entities, np.empty((0, 2)))
        free = list(positions.values())
        assert overlap_fraction(free, assigner.config.min_distance) < 0.01

    def test_positions_in_unit_square(self, rng):
        entities = StudentGenerator(rng).generate(200)
        for pos in LayoutAssigner(rng=rng).assign(entities, []).values():
            assert 0.0 <= pos.x <= 1.0
            assert 0.0 <= pos.y <= 1.0

    def test_band_fallback(self):
        assigner = LayoutAssigner()
        assert assigner.band_for(Category.OTHER) == assigner.config.default_band
        assert assigner.band_for(Category.ACADEMIC) == pytest.approx((0.0, 0.2))
        assert assigner.band_for(Category.ATHLETIC) == pytest.approx((0.8, 1.0))

    def test_specialist_stays_in_sub_band(self, rng):
        events = [(1, Category.ACADEMIC, f"e{i}") for i in range(3)]
        entities = [make_entity(f"S{i}", EngagementStyle.SPECIALIST, events) for i in range(50)]
        for pos in LayoutAssigner(rng=rng).assign(entities, []).values():
            assert 0.06 - 1e-9 <= pos.y <= 0.14 + 1e-9

    def test_selective_snaps_to_columns(self, rng):
        events = [(1, Category.SOCIAL, "e")]
        entities = [make_entity(f"S{i}", EngagementStyle.SELECTIVE, events) for i in range(40)]
        positions = LayoutAssigner(rng=rng).assign(entities, [])
        xs = {round(p.x, 9) for p in positions.values()}
        assert len(xs) <= MosaicConfig().selective_columns

    def test_reposition_keeps_fixed(self, rng, sample_entities):
        assigner = LayoutAssigner(rng=rng)
        positions = assigner.assign(sample_entities, [(0.5, 0.5)], pattern_count=1)
        first = sample_entities[0]
        assert assigner.reposition(first, positions) == Position(0.5, 0.5, fixed=True)
        moved = assigner.reposition(sample_entities[1], positions)
        assert not moved.fixed
        assert positions[sample_entities[1].id] == moved


def test_count_overlaps():
    pts = [Position(0.0, 0.0), Position(0.01, 0.0), Position(0.5, 0.5)]
    assert count_overlaps(pts, 0.02) == 1
    assert count_overlaps(pts, 0.01) == 0
    assert overlap_fraction(pts, 0.02) == pytest.approx(1 / 3)
    assert overlap_fraction(pts[:1], 0.02) == 0.0
