"""Synthetic student generator: style-biased random engagement records."""

from __future__ import annotations

import logging

import numpy as np

from spirit_mosaic.data.entities import (
    BANDED_CATEGORIES,
    MONTH_NAMES,
    Category,
    EngagementStyle,
    Entity,
    Event,
)

logger = logging.getLogger(__name__)

ID_PREFIX = "SMU2025"

# (minimum, span) → count in [minimum, minimum + span)
_EVENT_COUNT_RANGES: dict[EngagementStyle, tuple[int, int]] = {
    EngagementStyle.SAMPLER: (4, 3),
    EngagementStyle.SPECIALIST: (5, 4),
    EngagementStyle.SUPER_CONNECTOR: (7, 5),
    EngagementStyle.SELECTIVE: (3, 3),
}

EVENT_CATALOGUE: dict[Category, tuple[str, ...]] = {
    Category.ACADEMIC: (
        "Research Symposium", "Study Group", "Department Lecture",
        "Academic Conference", "Thesis Workshop", "Library Workshop",
        "Exam Prep Session", "Faculty Mixer", "Honors Presentation",
    ),
    Category.SOCIAL: (
        "Campus Club Fair", "Residence Hall Social", "Student Government",
        "Campus Event Planning", "Spring Festival", "Community Service",
        "Student Mixer", "Campus Tour Guide", "Social Club Meeting",
    ),
    Category.PROFESSIONAL: (
        "Career Workshop", "Leadership Summit", "Industry Panel",
        "Networking Event", "Mock Interviews", "Career Fair",
        "Business Case Competition", "Alumni Networking", "Internship Seminar",
    ),
    Category.CULTURAL: (
        "International Festival", "Arts Exhibition", "Theater Production",
        "Music Ensemble", "Concert Performance", "Cultural Celebration",
        "Diversity Workshop", "Film Screening", "Museum Visit",
    ),
    Category.ATHLETIC: (
        "Intramural Sports", "Varsity Game", "Team Training",
        "Championship Game", "Rally Event", "Sports Club",
        "Fitness Class", "Athletic Fundraiser", "Spirit Day",
    ),
}


class StudentGenerator:
    """Generates a deterministic-given-seed population of entities."""

    def __init__(self, rng: np.random.Generator | None = None, months: int = 8) -> None:
        self.rng = rng or np.random.default_rng()
        self.months = months

    def generate(self, total: int, pattern_count: int = 0) -> list[Entity]:
        """First `pattern_count` entities get athletic/academic primaries (school colours)."""
        styles = list(EngagementStyle)
        entities: list[Entity] = []
        for i in range(max(0, total)):
            entity_id = f"{ID_PREFIX}{i + 1:03d}"
            style = styles[int(self.rng.integers(len(styles)))]
            forced: Category | None = None
            if i < pattern_count:
                forced = Category.ATHLETIC if i % 3 == 0 else Category.ACADEMIC
            entities.append(self.create_student(entity_id, style, forced))

        logger.info("Generated %d synthetic students (%d pattern)", len(entities), min(pattern_count, total))
        return entities

    def create_student(
        self,
        entity_id: str,
        style: EngagementStyle,
        primary: Category | None = None,
    ) -> Entity:
        lo, span = _EVENT_COUNT_RANGES.get(style, (5, 3))
        event_count = lo + int(self.rng.integers(span))
        if primary is None:
            primary = self._random_category()

        entity = Entity(id=entity_id, style=style)
        history: list[Category] = []
        for i in range(event_count):
            category = self._pick_category(style, primary, i, history, entity)
            history.append(category)
            month = 1 + int(self.rng.integers(self.months))
            entity.add_event(Event(month=month, category=category, name=self._event_name(category, month)))
        return entity

    def _pick_category(
        self,
        style: EngagementStyle,
        primary: Category,
        index: int,
        history: list[Category],
        entity: Entity,
    ) -> Category:
        if style is EngagementStyle.SPECIALIST:
            return primary if self.rng.random() < 0.8 else self._random_category()

        if style is EngagementStyle.SAMPLER:
            previous = history[-1] if history else None
            choices = [c for c in BANDED_CATEGORIES if c != previous]
            return choices[int(self.rng.integers(len(choices)))]

        if style is EngagementStyle.SUPER_CONNECTOR:
            missing = [c for c in BANDED_CATEGORIES if entity.category_distribution.get(c, 0) == 0]
            if missing and index < len(BANDED_CATEGORIES):
                return missing[0]
            return self._random_category()

        if style is EngagementStyle.SELECTIVE:
            if index == 0:
                return primary
            if index == 1 and self.rng.random() < 0.5:
                others = [c for c in BANDED_CATEGORIES if c != primary]
                return others[int(self.rng.integers(len(others)))]
            focus = [c for c in BANDED_CATEGORIES if entity.category_distribution.get(c, 0) > 0]
            return focus[int(self.rng.integers(len(focus)))]

        return self._random_category()

    def _random_category(self) -> Category:
        return BANDED_CATEGORIES[int(self.rng.integers(len(BANDED_CATEGORIES)))]

    def _event_name(self, category: Category, month: int) -> str:
        names = EVENT_CATALOGUE[category]
        base = names[int(self.rng.integers(len(names)))]
        month_name = MONTH_NAMES[(month - 1) % len(MONTH_NAMES)]
        return f"{base} ({month_name})"
