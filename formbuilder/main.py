"""
Form Builder API - FastAPI Application

Main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from formbuilder import __version__
from formbuilder.config import get_settings
from formbuilder.core.database import close_db, init_db
from formbuilder.routers import (
    designer_router,
    elements_router,
    forms_router,
    submit_router,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Suppress noisy third-party loggers
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Form Builder API...")
    settings = get_settings()

    if settings.debug:
        logging.getLogger("formbuilder").setLevel(logging.DEBUG)

    logger.info("Initializing database connection...")
    await init_db()
    logger.info("Database connection established")

    logger.info(f"Form Builder API started in {settings.environment} mode")

    yield

    # Shutdown
    logger.info("Shutting down Form Builder API...")
    await close_db()
    logger.info("Form Builder API shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Form Builder API",
        description="Drag-and-drop form designer and public form submission API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Register routers
    app.include_router(elements_router)
    app.include_router(forms_router)
    app.include_router(designer_router)
    app.include_router(submit_router)

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "name": "Form Builder API",
            "version": __version__,
            "docs": "/docs",
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "formbuilder.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
