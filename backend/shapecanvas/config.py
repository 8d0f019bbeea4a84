"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Drawing
    snap_distance: float = 20.0
    min_points_for_snap: int = 3
    duplicate_offset: float = 12.0
    polygon_default_size: float = 100.0
    default_shape_name: str = "Opportunity name"
    point_epsilon: float = 1e-9

    # Mock outline detector
    detection_delay_min: float = 1.0
    detection_delay_max: float = 2.0
    detection_outline_size: float = 150.0

    model_config = SettingsConfigDict(
        env_prefix="SHAPECANVAS_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
