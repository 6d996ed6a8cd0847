"""GET /api/scene: current frame as SVG; POST /api/tick advances the loop."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from spirit_mosaic.dependencies import get_store
from spirit_mosaic.engine.store import SceneStore
from spirit_mosaic.models.requests import TickRequest
from spirit_mosaic.models.responses import SceneStateResponse, TickResponse, ViewResponse
from spirit_mosaic.svg.renderer import render_svg

router = APIRouter()


def scene_state(store: SceneStore) -> SceneStateResponse:
    view = store.viewport.snapshot()
    return SceneStateResponse(
        scene_status=store.status.value,
        display_mode=store.display_mode,
        color_mode=store.color_mode,
        selected_id=store.selection.selected_id,
        hovered_id=store.selection.hovered_id,
        visible_count=len(store.visible),
        view=ViewResponse(pan_x=view.pan_x, pan_y=view.pan_y, zoom=view.zoom),
    )


@router.get("/scene")
async def scene(store: SceneStore = Depends(get_store)) -> Response:
    frame = store.redraw()
    return Response(content=render_svg(frame), media_type="image/svg+xml")


@router.get("/scene/state", response_model=SceneStateResponse)
async def state(store: SceneStore = Depends(get_store)) -> SceneStateResponse:
    return scene_state(store)


@router.post("/tick", response_model=TickResponse)
async def tick(
    request: TickRequest | None = None,
    store: SceneStore = Depends(get_store),
) -> TickResponse:
    frame = store.tick(request.delta_time if request else None)
    return TickResponse(
        running=store.loop.running,
        frames=store.loop.frames,
        phase=store.loop.animation_phase,
        month=frame.month if frame else None,
        element_count=len(frame.elements) if frame else 0,
    )
