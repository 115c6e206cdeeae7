"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from blueprint.api.exception_handlers import floorplan_exception_handler
from blueprint.api.routes import router
from blueprint.core.exceptions import FloorplanError
from blueprint.logging_config import setup_logging
from blueprint.settings import get_settings


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(
        level=settings.log_level,
        json_format=settings.json_logging,
        log_file=settings.log_file,
    )

    app = FastAPI(
        title="Blueprint Floorplan",
        description="Floorplan editing core: corners, walls and the rooms they enclose",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(FloorplanError, floorplan_exception_handler)
    app.include_router(router, prefix="/api")

    logger.info("Floorplan API ready (CORS origins: {})", settings.cors_origins)
    return app


app = create_app()
