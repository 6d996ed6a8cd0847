"""POST /api/input: pointer events from the host shell."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from spirit_mosaic.api.scene import scene_state
from spirit_mosaic.dependencies import get_store
from spirit_mosaic.engine.input import PointerEvent, PointerKind
from spirit_mosaic.engine.store import SceneStore
from spirit_mosaic.models.requests import PointerRequest
from spirit_mosaic.models.responses import SceneStateResponse

router = APIRouter()


@router.post("/input", response_model=SceneStateResponse)
async def pointer_input(
    request: PointerRequest,
    store: SceneStore = Depends(get_store),
) -> SceneStateResponse:
    store.handle_input(PointerEvent(PointerKind(request.type), request.x, request.y, request.delta_y))
    return scene_state(store)
