"""Attendance CSV ingestion: rows to entities, best effort.

Each row is validated on its own; malformed rows are skipped and counted.
Only a file with no usable row at all is an error.
"""

from __future__ import annotations

import csv
import io
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from spirit_mosaic.data.entities import Category, EngagementStyle, Entity, Event
from spirit_mosaic.engine.errors import DataLoadError, NoUsableRecordsError

logger = logging.getLogger(__name__)

MAX_MONTHS = 8

# Event type (checked first) and tag lookup, lower-cased.
TYPE_CATEGORIES: dict[str, Category] = {
    "academic": Category.ACADEMIC,
    "lecture": Category.ACADEMIC,
    "seminar": Category.ACADEMIC,
    "workshop": Category.ACADEMIC,
    "research": Category.ACADEMIC,
    "social": Category.SOCIAL,
    "club": Category.SOCIAL,
    "service": Category.SOCIAL,
    "professional": Category.PROFESSIONAL,
    "career": Category.PROFESSIONAL,
    "networking": Category.PROFESSIONAL,
    "cultural": Category.CULTURAL,
    "arts": Category.CULTURAL,
    "music": Category.CULTURAL,
    "theater": Category.CULTURAL,
    "athletic": Category.ATHLETIC,
    "athletics": Category.ATHLETIC,
    "sports": Category.ATHLETIC,
    "fitness": Category.ATHLETIC,
}

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d")


class AttendanceRecord(BaseModel):
    """One CSV row: a student attending one event."""

    student_id: str = Field(..., min_length=1)
    event_name: str = Field(..., min_length=1)
    event_type: str = ""
    event_tags: str = ""
    event_date: date

    @field_validator("student_id", "event_name", "event_type", "event_tags", mode="before")
    @classmethod
    def _strip(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("event_type", "event_tags", mode="before")
    @classmethod
    def _optional_text(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("event_date", mode="before")
    @classmethod
    def _parse_date(cls, value: object) -> object:
        if not isinstance(value, str):
            return value
        text = value.strip()
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        # Let pydantic produce the error for empty / unrecognised text.
        return text

    @property
    def tags(self) -> list[str]:
        raw = self.event_tags.replace(",", ";")
        return [t.strip().lower() for t in raw.split(";") if t.strip()]


@dataclass
class IngestReport:
    entities: list[Entity] = field(default_factory=list)
    rows_total: int = 0
    rows_skipped: int = 0
    errors: list[str] = field(default_factory=list)


def categorize(record: AttendanceRecord) -> Category:
    """Event type first, then tags, else OTHER."""
    category = TYPE_CATEGORIES.get(record.event_type.lower())
    if category is not None:
        return category
    for tag in record.tags:
        category = TYPE_CATEGORIES.get(tag)
        if category is not None:
            return category
    return Category.OTHER


def derive_style(entity: Entity) -> EngagementStyle:
    touched = entity.categories_touched
    total = entity.event_count
    if touched >= 4 and total >= 7:
        return EngagementStyle.SUPER_CONNECTOR
    if total > 0:
        share = entity.category_distribution[entity.primary_category] / total
        if share >= 0.7:
            return EngagementStyle.SPECIALIST
    if touched >= 3:
        return EngagementStyle.SAMPLER
    return EngagementStyle.SELECTIVE


def _month_index(day: date, origin: date) -> int:
    elapsed = (day.year - origin.year) * 12 + (day.month - origin.month)
    return max(1, min(MAX_MONTHS, elapsed + 1))


def records_to_entities(rows: Iterable[Mapping[str, object]]) -> IngestReport:
    """Validate rows and group them into entities (first-seen id order).

    Raises NoUsableRecordsError when no row survives validation.
    """
    report = IngestReport()
    records: list[AttendanceRecord] = []
    for line_no, row in enumerate(rows, start=1):
        report.rows_total += 1
        try:
            fields = {k: v for k, v in row.items() if isinstance(k, str)}
            records.append(AttendanceRecord.model_validate(fields))
        except ValidationError as e:
            report.rows_skipped += 1
            invalid = ",".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
            report.errors.append(f"row {line_no}: invalid {invalid}")
            logger.warning("Skipping malformed row %d (%s)", line_no, invalid)

    if not records:
        raise NoUsableRecordsError(f"No usable rows out of {report.rows_total}")

    origin = min(r.event_date for r in records)
    by_id: dict[str, list[Event]] = {}
    for record in records:
        by_id.setdefault(record.student_id, []).append(
            Event(
                month=_month_index(record.event_date, origin),
                category=categorize(record),
                name=record.event_name,
            )
        )

    for entity_id, events in by_id.items():
        entity = Entity(id=entity_id, style=EngagementStyle.SELECTIVE)
        for event in events:
            entity.add_event(event)
        entity.style = derive_style(entity)
        report.entities.append(entity)

    logger.info(
        "Ingested %d entities from %d rows (%d skipped)",
        len(report.entities),
        report.rows_total,
        report.rows_skipped,
    )
    return report


def parse_csv_text(text: str) -> IngestReport:
    """Parse attendance CSV text; csv-level parse failures become DataLoadError."""
    reader = csv.DictReader(io.StringIO(text))
    try:
        if reader.fieldnames is None:
            raise NoUsableRecordsError("CSV has no header row")
        return records_to_entities(reader)
    except csv.Error as e:
        raise DataLoadError(f"Malformed CSV: {e}") from e


def load_csv(path: str | Path) -> IngestReport:
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise DataLoadError(f"Cannot read {path}: {e}") from e
    return parse_csv_text(text)
