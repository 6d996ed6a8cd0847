"""Master API router: mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from spirit_mosaic.api import entities, health, pointer, scene, view

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(scene.router)
api_router.include_router(pointer.router)
api_router.include_router(view.router)
api_router.include_router(entities.router)
