# app/main.py (async version)

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from app.adapters.configuration.config import get_settings
from app.adapters.outbound.persistence.database import create_tables, get_engine
from app.adapters.inbound.api.v1.router import api_router as api_v1_router
from app.shared.middleware import AsyncExceptionMiddleware, AsyncRequestLoggingMiddleware
from app.shared.utils.log_formatter import ContextFormatter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    settings = get_settings()
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter(LOG_FORMAT))
    logging.basicConfig(level=level, handlers=[handler])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Async context manager to handle startup and shutdown events.
    """
    logger.info("Application starting up...")

    if get_settings().DATABASE_URL:
        # Create database tables if they don't exist
        await create_tables()
    else:
        logger.warning("Database is not configured; skipping table creation")

    yield

    logger.info("Application shutting down...")
    if get_settings().DATABASE_URL:
        await get_engine().dispose()


def create_app() -> FastAPI:
    configure_logging()
    settings = get_settings()

    app = FastAPI(
        title=settings.API_TITLE,
        description="Registry of business clients identified by CNPJ",
        version=settings.API_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Middlewares
    app.add_middleware(AsyncExceptionMiddleware)
    app.add_middleware(AsyncRequestLoggingMiddleware)

    # Routers
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/", include_in_schema=False)
    async def redirect_to_docs():
        return RedirectResponse(url="/docs")

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
