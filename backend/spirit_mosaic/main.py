"""FastAPI app factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spirit_mosaic.config import Settings, settings

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.DEBUG),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def build_store(cfg: Settings):
    """The composition root: one scene per process."""
    from spirit_mosaic.engine.store import SceneStore

    return SceneStore(
        cfg.mosaic_config(),
        total=cfg.total_students,
        pattern_count=cfg.pattern_students,
        csv_path=cfg.csv_path,
        seed=cfg.seed,
    )


def create_app(cfg: Settings | None = None) -> FastAPI:
    cfg = cfg or settings
    store = build_store(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await store.load()
        yield
        store.loop.stop()

    app = FastAPI(
        title="Spirit Mosaic",
        description="Student engagement mosaic: layout, viewport and hit testing over SVG frames",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from spirit_mosaic.api.router import api_router

    app.include_router(api_router)

    return app


app = create_app()
