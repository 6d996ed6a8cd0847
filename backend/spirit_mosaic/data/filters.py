"""Filter/search over the entity list."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from spirit_mosaic.data.entities import Category, EngagementStyle, Entity

ALL = "all"


@dataclass(frozen=True)
class FilterCriteria:
    """Any field left as "all" (or an empty search) does not filter."""

    category: str = ALL
    style: str = ALL
    search: str = ""

    @property
    def is_empty(self) -> bool:
        return self.category == ALL and self.style == ALL and not self.search


def apply_filters(entities: Sequence[Entity], criteria: FilterCriteria) -> list[Entity]:
    """Entities matching every active criterion, in their original order.

    Unknown category or style names match nothing.
    """
    category: Category | None = None
    if criteria.category != ALL:
        try:
            category = Category(criteria.category)
        except ValueError:
            return []

    style: EngagementStyle | None = None
    if criteria.style != ALL:
        try:
            style = EngagementStyle(criteria.style)
        except ValueError:
            return []

    needle = criteria.search.strip().lower()
    result: list[Entity] = []
    for entity in entities:
        if category is not None and entity.primary_category != category:
            continue
        if style is not None and entity.style != style:
            continue
        if needle and needle not in entity.id.lower():
            continue
        result.append(entity)
    return result
