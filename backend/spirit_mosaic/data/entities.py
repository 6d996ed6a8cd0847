"""Entity model: one engagement record per student.

Per-entity derived state (category distribution, primary category) is kept
in lock-step with the event list: every mutation goes through add_event().
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Category(str, enum.Enum):
    ACADEMIC = "academic"
    SOCIAL = "social"
    PROFESSIONAL = "professional"
    CULTURAL = "cultural"
    ATHLETIC = "athletic"
    OTHER = "other"


# Categories that own a layout band, in declared (tie-break) order.
BANDED_CATEGORIES: tuple[Category, ...] = (
    Category.ACADEMIC,
    Category.SOCIAL,
    Category.PROFESSIONAL,
    Category.CULTURAL,
    Category.ATHLETIC,
)


class EngagementStyle(str, enum.Enum):
    SAMPLER = "sampler"
    SPECIALIST = "specialist"
    SUPER_CONNECTOR = "super-connector"
    SELECTIVE = "selective"


MONTH_NAMES = (
    "January", "February", "March", "April",
    "May", "June", "July", "August",
)


@dataclass(frozen=True)
class Event:
    month: int
    category: Category
    name: str

    @property
    def key(self) -> tuple[str, int, str]:
        """Identity used to link entities that attended the same event."""
        return (self.category.value, self.month, self.name)


@dataclass(frozen=True)
class Connection:
    entity_id: str
    event_keys: tuple[tuple[str, int, str], ...] = ()

    @property
    def category(self) -> Category:
        """Category of the first shared event (used to colour the link)."""
        if not self.event_keys:
            return Category.OTHER
        return Category(self.event_keys[0][0])


def compute_primary_category(distribution: dict[Category, int]) -> Category:
    """Category with the highest count; ties go to the earliest declared category.

    An empty distribution (no events) yields Category.OTHER.
    """
    best = Category.OTHER
    best_count = 0
    for category in Category:
        count = distribution.get(category, 0)
        if count > best_count:
            best = category
            best_count = count
    return best


@dataclass
class Entity:
    """A student: identity, engagement style and month-ordered events."""

    id: str
    style: EngagementStyle
    events: list[Event] = field(default_factory=list)
    category_distribution: dict[Category, int] = field(default_factory=dict)
    primary_category: Category = Category.OTHER
    connections: list[Connection] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._recompute()

    def add_event(self, event: Event) -> None:
        self.events.append(event)
        # Stable sort keeps insertion order within a month.
        self.events.sort(key=lambda e: e.month)
        self._recompute()

    def _recompute(self) -> None:
        distribution = {category: 0 for category in Category}
        for event in self.events:
            distribution[event.category] += 1
        self.category_distribution = distribution
        self.primary_category = compute_primary_category(distribution)

    @property
    def event_count(self) -> int:
        return len(self.events)

    @property
    def categories_touched(self) -> int:
        return sum(1 for count in self.category_distribution.values() if count > 0)

    def events_by_month(self) -> dict[int, list[Event]]:
        grouped: dict[int, list[Event]] = {}
        for event in self.events:
            grouped.setdefault(event.month, []).append(event)
        return dict(sorted(grouped.items()))

    def events_up_to(self, month: int) -> int:
        return sum(1 for e in self.events if e.month <= month)
