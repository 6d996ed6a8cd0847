"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from spirit_mosaic.dependencies import get_store
from spirit_mosaic.engine.registry import ModeKind, get_registry
from spirit_mosaic.engine.store import SceneStore
from spirit_mosaic.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(store: SceneStore = Depends(get_store)) -> HealthResponse:
    registry = get_registry()
    return HealthResponse(
        status="ok",
        version="0.1.0",
        scene_status=store.status.value,
        source=store.source,
        load_error=store.load_error,
        entity_count=len(store.entities),
        display_modes=registry.names(ModeKind.DISPLAY),
        color_modes=registry.names(ModeKind.COLOR),
    )
