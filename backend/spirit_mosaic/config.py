"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from spirit_mosaic.engine.config import MosaicConfig


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Scene
    canvas_width: float = 1000.0
    canvas_height: float = 800.0
    total_students: int = 400
    pattern_students: int = 100
    seed: int | None = None
    csv_path: str | None = None

    model_config = SettingsConfigDict(
        env_prefix="SPIRIT_MOSAIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def mosaic_config(self) -> MosaicConfig:
        return MosaicConfig(canvas_width=self.canvas_width, canvas_height=self.canvas_height)


settings = Settings()
