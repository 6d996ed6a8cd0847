"""View commands: zoom buttons, reset and mode switching."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from spirit_mosaic.api.scene import scene_state
from spirit_mosaic.dependencies import get_store
from spirit_mosaic.engine.errors import UnknownModeError
from spirit_mosaic.engine.store import SceneStore
from spirit_mosaic.models.requests import ModeRequest, ZoomRequest
from spirit_mosaic.models.responses import SceneStateResponse

router = APIRouter(prefix="/view")


def _focal(store: SceneStore, request: ZoomRequest | None) -> tuple[float, float]:
    fx = store.config.canvas_width / 2
    fy = store.config.canvas_height / 2
    if request is not None:
        if request.focal_x is not None:
            fx = request.focal_x
        if request.focal_y is not None:
            fy = request.focal_y
    return fx, fy


@router.post("/zoom-in", response_model=SceneStateResponse)
async def zoom_in(
    request: ZoomRequest | None = None,
    store: SceneStore = Depends(get_store),
) -> SceneStateResponse:
    store.viewport.zoom_in(*_focal(store, request))
    return scene_state(store)


@router.post("/zoom-out", response_model=SceneStateResponse)
async def zoom_out(
    request: ZoomRequest | None = None,
    store: SceneStore = Depends(get_store),
) -> SceneStateResponse:
    store.viewport.zoom_out(*_focal(store, request))
    return scene_state(store)


@router.post("/reset", response_model=SceneStateResponse)
async def reset(store: SceneStore = Depends(get_store)) -> SceneStateResponse:
    store.viewport.reset()
    return scene_state(store)


@router.post("/mode", response_model=SceneStateResponse)
async def set_mode(
    request: ModeRequest,
    store: SceneStore = Depends(get_store),
) -> SceneStateResponse:
    try:
        store.set_modes(request.display_mode, request.color_mode)
    except UnknownModeError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return scene_state(store)
