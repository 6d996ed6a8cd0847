"""Tests for the entity model and connection index."""

from __future__ import annotations

from spirit_mosaic.data.connections import connection_pairs, rebuild_connections
from spirit_mosaic.data.entities import (
    Category,
    Connection,
    EngagementStyle,
    Entity,
    Event,
    compute_primary_category,
)
from tests.conftest import make_entity


class TestEntity:
    def test_distribution_matches_events(self, sample_entities):
        for entity in sample_entities:
            assert sum(entity.category_distribution.values()) == len(entity.events)

    def test_primary_is_argmax(self, sample_entities):
        assert sample_entities[0].primary_category == Category.ACADEMIC
        assert sample_entities[2].primary_category == Category.ATHLETIC

    def test_tie_goes_to_declared_order(self):
        entity = make_entity("S1", events=[
            (1, Category.CULTURAL, "a"),
            (2, Category.SOCIAL, "b"),
        ])
        assert entity.primary_category == Category.SOCIAL

    def test_no_events_is_other(self):
        assert Entity(id="S1", style=EngagementStyle.SELECTIVE).primary_category == Category.OTHER
        assert compute_primary_category({}) == Category.OTHER

    def test_add_event_keeps_month_order(self):
        entity = make_entity("S1", events=[(5, Category.SOCIAL, "late"), (2, Category.ACADEMIC, "early")])
        entity.add_event(Event(month=2, category=Category.SOCIAL, name="also early"))
        assert [e.month for e in entity.events] == [2, 2, 5]
        assert entity.events[1].name == "also early"
        assert entity.primary_category == Category.SOCIAL

    def test_month_grouping(self, sample_entities):
        grouped = sample_entities[0].events_by_month()
        assert list(grouped) == [1, 2, 3]
        assert sample_entities[0].events_up_to(2) == 2
        assert sample_entities[0].categories_touched == 2


class TestConnections:
    def test_shared_event_links_both_ways_once(self):
        a = make_entity("A", events=[(3, Category.SOCIAL, "Spring Festival")])
        b = make_entity("B", events=[(3, Category.SOCIAL, "Spring Festival")])
        c = make_entity("C", events=[(4, Category.SOCIAL, "Spring Festival")])

        assert rebuild_connections([a, b, c]) == 1
        assert [conn.entity_id for conn in a.connections] == ["B"]
        assert [conn.entity_id for conn in b.connections] == ["A"]
        assert c.connections == []

        # Rebuilding without changes must not duplicate anything
        rebuild_connections([a, b, c])
        assert [conn.entity_id for conn in a.connections] == ["B"]
        assert [conn.entity_id for conn in b.connections] == ["A"]

    def test_multiple_shared_events_single_peer(self):
        events = [(1, Category.ACADEMIC, "Study Group"), (2, Category.CULTURAL, "Film Screening")]
        a = make_entity("A", events=events)
        b = make_entity("B", events=events)
        rebuild_connections([a, b])
        assert len(a.connections) == 1
        assert len(a.connections[0].event_keys) == 2
        assert a.connections[0].category == Category.ACADEMIC

    def test_repeated_attendance_counts_once(self):
        a = make_entity("A", events=[(1, Category.SOCIAL, "Mixer"), (1, Category.SOCIAL, "Mixer")])
        b = make_entity("B", events=[(1, Category.SOCIAL, "Mixer")])
        rebuild_connections([a, b])
        assert len(a.connections) == 1
        assert a.connections[0].event_keys == (("social", 1, "Mixer"),)

    def test_pairs_restricted_to_visible(self, sample_entities):
        rebuild_connections(sample_entities)
        pairs = connection_pairs(sample_entities)
        assert [(a, b) for a, b, _ in pairs] == [("SMU2025001", "SMU2025002")]
        assert connection_pairs(sample_entities[1:]) == []

    def test_connection_without_keys(self):
        assert Connection(entity_id="X").category == Category.OTHER
