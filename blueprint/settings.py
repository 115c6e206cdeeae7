"""Process-level settings read from the environment."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from blueprint.models import FloorplanParams, PlannerParams

# Load .env file from project root
_env_path = Path(__file__).parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


class AppSettings(BaseModel):
    log_level: str = "INFO"
    json_logging: bool = False
    log_file: Path | None = None
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    floorplan: FloorplanParams = Field(default_factory=FloorplanParams)
    planner: PlannerParams = Field(default_factory=PlannerParams)


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"true", "1", "yes"}


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    log_file = os.getenv("BLUEPRINT_LOG_FILE")
    origins = os.getenv("BLUEPRINT_CORS_ORIGINS")
    floorplan = FloorplanParams()
    thickness = os.getenv("BLUEPRINT_WALL_THICKNESS")
    height = os.getenv("BLUEPRINT_WALL_HEIGHT")
    if thickness is not None or height is not None:
        floorplan = FloorplanParams(
            wall_thickness=float(thickness) if thickness is not None else floorplan.wall_thickness,
            wall_height=float(height) if height is not None else floorplan.wall_height,
        )
    return AppSettings(
        log_level=os.getenv("BLUEPRINT_LOG_LEVEL", "INFO"),
        json_logging=_env_bool("BLUEPRINT_JSON_LOGGING"),
        log_file=Path(log_file) if log_file else None,
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else ["*"],
        floorplan=floorplan,
    )
