"""Tests for the synthetic generator and filters."""

from __future__ import annotations

import numpy as np

from spirit_mosaic.data.entities import BANDED_CATEGORIES, Category, EngagementStyle
from spirit_mosaic.data.filters import ALL, FilterCriteria, apply_filters
from spirit_mosaic.data.generator import StudentGenerator

COUNT_RANGES = {
    EngagementStyle.SAMPLER: (4, 6),
    EngagementStyle.SPECIALIST: (5, 8),
    EngagementStyle.SUPER_CONNECTOR: (7, 11),
    EngagementStyle.SELECTIVE: (3, 5),
}


def test_ids_and_count(rng):
    entities = StudentGenerator(rng).generate(12)
    assert len(entities) == 12
    assert entities[0].id == "SMU2025001"
    assert entities[-1].id == "SMU2025012"


def test_event_counts_by_style(rng):
    for entity in StudentGenerator(rng).generate(200):
        lo, hi = COUNT_RANGES[entity.style]
        assert lo <= entity.event_count <= hi
        assert all(1 <= e.month <= 8 for e in entity.events)


def test_distribution_invariant(rng):
    for entity in StudentGenerator(rng).generate(100, pattern_count=30):
        assert sum(entity.category_distribution.values()) == entity.event_count
        assert entity.primary_category in BANDED_CATEGORIES


def test_super_connector_touches_every_category(rng):
    gen = StudentGenerator(rng)
    entity = gen.create_student("X", EngagementStyle.SUPER_CONNECTOR)
    assert entity.categories_touched == len(BANDED_CATEGORIES)


def test_selective_stays_focused(rng):
    gen = StudentGenerator(rng)
    for i in range(50):
        entity = gen.create_student(f"X{i}", EngagementStyle.SELECTIVE, Category.CULTURAL)
        assert entity.categories_touched <= 2
        assert entity.category_distribution[Category.CULTURAL] >= 1


def test_event_names_carry_month(rng):
    entity = StudentGenerator(rng).create_student("X", EngagementStyle.SAMPLER)
    for event in entity.events:
        assert event.name.endswith(")")
        assert "(" in event.name


def test_seeded_generation_is_reproducible():
    a = StudentGenerator(np.random.default_rng(7)).generate(20)
    b = StudentGenerator(np.random.default_rng(7)).generate(20)
    assert [e.events for e in a] == [e.events for e in b]


class TestFilters:
    def test_empty_criteria(self, sample_entities):
        assert FilterCriteria().is_empty
        assert apply_filters(sample_entities, FilterCriteria()) == sample_entities

    def test_category(self, sample_entities):
        result = apply_filters(sample_entities, FilterCriteria(category="academic"))
        assert [e.id for e in result] == ["SMU2025001", "SMU2025002"]

    def test_style_and_search(self, sample_entities):
        result = apply_filters(sample_entities, FilterCriteria(style="selective", search="2025003"))
        assert [e.id for e in result] == ["SMU2025003"]
        assert apply_filters(sample_entities, FilterCriteria(search="smu2025004"))[0].id == "SMU2025004"

    def test_unknown_values_match_nothing(self, sample_entities):
        assert apply_filters(sample_entities, FilterCriteria(category="astronomy")) == []
        assert apply_filters(sample_entities, FilterCriteria(style=ALL, search="zzz")) == []
