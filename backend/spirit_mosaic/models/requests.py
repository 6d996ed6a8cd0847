"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class PointerRequest(BaseModel):
    type: Literal["pointer-down", "pointer-move", "pointer-up", "wheel"]
    x: float = Field(..., description="Screen x")
    y: float = Field(..., description="Screen y")
    delta_y: float = Field(default=0.0, description="Wheel delta; negative zooms in")


class ZoomRequest(BaseModel):
    focal_x: float | None = Field(default=None, description="Screen x to zoom about (default: canvas centre)")
    focal_y: float | None = Field(default=None, description="Screen y to zoom about (default: canvas centre)")


class ModeRequest(BaseModel):
    display_mode: str | None = Field(default=None, description="mosaic, network, evolution or tapestry")
    color_mode: str | None = Field(default=None, description="category, style or intensity")


class FilterRequest(BaseModel):
    category: str = Field(default="all")
    style: str = Field(default="all")
    search: str = Field(default="", description="Case-insensitive substring of the entity id")


class SelectionRequest(BaseModel):
    entity_id: str | None = Field(default=None, description="Entity to select; null deselects")
    search: str | None = Field(default=None, description="Select the first id matching this text")


class TickRequest(BaseModel):
    delta_time: float | None = Field(default=None, description="Seconds since the last tick (default: clock)")
