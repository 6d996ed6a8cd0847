"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from spirit_mosaic.data.entities import Category, EngagementStyle, Entity, Event
from spirit_mosaic.engine.config import MosaicConfig


# Attendance CSV with one row missing its date (row 3)
ATTENDANCE_CSV = """student_id,event_name,event_type,event_tags,event_date
S001,Career Fair,career,,2024-01-15
S001,Varsity Game,,sports;spirit,2024-02-03
S002,Career Fair,career,,
S002,Career Fair,career,,2024-01-15
S003,Poetry Night,,open mic,03/10/2024
"""

ALL_MALFORMED_CSV = """student_id,event_name,event_type,event_tags,event_date
,Career Fair,career,,2024-01-15
S002,,career,,2024-01-15
S003,Poetry Night,,,not a date
"""


def make_entity(
    entity_id: str,
    style: EngagementStyle = EngagementStyle.SAMPLER,
    events: list[tuple[int, Category, str]] | None = None,
) -> Entity:
    entity = Entity(id=entity_id, style=style)
    for month, category, name in events or []:
        entity.add_event(Event(month=month, category=category, name=name))
    return entity


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def config() -> MosaicConfig:
    return MosaicConfig()


@pytest.fixture
def sample_entities() -> list[Entity]:
    return [
        make_entity("SMU2025001", EngagementStyle.SPECIALIST, [
            (1, Category.ACADEMIC, "Study Group (January)"),
            (2, Category.ACADEMIC, "Department Lecture (February)"),
            (3, Category.SOCIAL, "Spring Festival (March)"),
        ]),
        make_entity("SMU2025002", EngagementStyle.SAMPLER, [
            (1, Category.ACADEMIC, "Study Group (January)"),
            (4, Category.CULTURAL, "Film Screening (April)"),
        ]),
        make_entity("SMU2025003", EngagementStyle.SELECTIVE, [
            (5, Category.ATHLETIC, "Varsity Game (May)"),
        ]),
        make_entity("SMU2025004", EngagementStyle.SUPER_CONNECTOR, []),
    ]
