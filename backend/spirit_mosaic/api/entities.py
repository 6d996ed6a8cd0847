"""Filters, selection and entity detail."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from spirit_mosaic.data.filters import FilterCriteria
from spirit_mosaic.dependencies import get_store
from spirit_mosaic.engine.store import SceneStore
from spirit_mosaic.models.requests import FilterRequest, SelectionRequest
from spirit_mosaic.models.responses import (
    EntityDetailResponse,
    EventResponse,
    FilterResponse,
    SelectionResponse,
)

router = APIRouter()


@router.post("/filters", response_model=FilterResponse)
async def set_filters(
    request: FilterRequest,
    store: SceneStore = Depends(get_store),
) -> FilterResponse:
    visible = store.set_filters(
        FilterCriteria(category=request.category, style=request.style, search=request.search)
    )
    return FilterResponse(visible_count=len(visible), visible_ids=[e.id for e in visible])


@router.post("/selection", response_model=SelectionResponse)
async def select(
    request: SelectionRequest,
    store: SceneStore = Depends(get_store),
) -> SelectionResponse:
    matches: list[str] = []
    target = request.entity_id
    if request.search:
        matches = store.search(request.search)
        target = matches[0] if matches else None
        if not matches:
            # Nothing found: leave the current selection alone
            return SelectionResponse(selected_id=store.selection.selected_id)
    changed = store.select(target)
    return SelectionResponse(
        selected_id=store.selection.selected_id,
        changed=changed,
        matches=matches,
    )


@router.get("/entities/{entity_id}", response_model=EntityDetailResponse)
async def entity_detail(
    entity_id: str,
    store: SceneStore = Depends(get_store),
) -> EntityDetailResponse:
    detail = store.detail(entity_id)
    if detail is None:
        raise HTTPException(status_code=404, detail=f"Unknown entity: {entity_id}")
    return EntityDetailResponse(
        id=detail.id,
        style=detail.style,
        primary_category=detail.primary_category,
        event_count=detail.event_count,
        categories_touched=detail.categories_touched,
        category_percentages=detail.category_percentages,
        events=[EventResponse(**e) for e in detail.events],
        connection_count=detail.connection_count,
        fixed=detail.fixed,
    )
