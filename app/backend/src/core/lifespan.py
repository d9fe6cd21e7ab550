import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.core.config import get_settings
from src.core.logging_config.setup import configure_logging
from src.db.session import get_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup and release database connections on shutdown."""
    configure_logging()
    logger.info("Starting %s (environment=%s)", app.title, get_settings().ENVIRONMENT)

    yield

    await get_engine().dispose()
    logger.info("Shutdown complete")
