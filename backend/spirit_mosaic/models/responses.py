"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    scene_status: str = "initializing"
    source: str | None = None
    load_error: str | None = None
    entity_count: int = 0
    display_modes: list[str] = Field(default_factory=list)
    color_modes: list[str] = Field(default_factory=list)


class ViewResponse(BaseModel):
    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0


class SceneStateResponse(BaseModel):
    scene_status: str
    display_mode: str
    color_mode: str
    selected_id: str | None = None
    hovered_id: str | None = None
    visible_count: int = 0
    view: ViewResponse = Field(default_factory=ViewResponse)


class FilterResponse(BaseModel):
    visible_count: int = 0
    visible_ids: list[str] = Field(default_factory=list)


class SelectionResponse(BaseModel):
    selected_id: str | None = None
    changed: bool = False
    matches: list[str] = Field(default_factory=list)


class EventResponse(BaseModel):
    month: int
    month_name: str
    category: str
    name: str


class EntityDetailResponse(BaseModel):
    id: str
    style: str
    primary_category: str
    event_count: int = 0
    categories_touched: int = 0
    category_percentages: dict[str, float] = Field(default_factory=dict)
    events: list[EventResponse] = Field(default_factory=list)
    connection_count: int = 0
    fixed: bool = False


class TickResponse(BaseModel):
    running: bool = False
    frames: int = 0
    phase: float = 0.0
    month: int | None = None
    element_count: int = 0
