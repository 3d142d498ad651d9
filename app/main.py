from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from cli.menu import InteractiveMenu
from logging_config import configure_logging
from services.scheduler import build_default_updater
from services.station import build_default_station
from settings import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    station = build_default_station()
    updater = build_default_updater()
    updater.start()
    if get_settings().interactive_console:
        InteractiveMenu(station, updater=updater).start_in_thread()
    current = station.current_strategy()
    logger.info(
        "Weather station ready",
        extra={"strategy": current.name if current else None},
    )
    try:
        yield
    finally:
        updater.stop()
        build_default_updater.cache_clear()
        build_default_station.cache_clear()
        logger.info("Shutdown complete")


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="Weather Station",
        description="Distributes the current weather reading to subscribed displays.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    return app

app = create_app()
