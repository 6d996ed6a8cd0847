"""FastAPI dependency injection."""

from __future__ import annotations

from fastapi import Request

from spirit_mosaic.config import settings
from spirit_mosaic.engine.store import SceneStore


def get_settings():
    return settings


def get_store(request: Request) -> SceneStore:
    return request.app.state.store
