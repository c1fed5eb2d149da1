"""
Project Health - Main Application Entry Point

Health and duration tracking for milestone-driven projects.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from project_health import __version__
from project_health.core.config import get_settings
from project_health.core.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Project Health in {settings.ENVIRONMENT} mode...")

    # Initialize database if needed
    if settings.is_local:
        from project_health.infrastructure.local.database import init_db

        await init_db()

    # Start background scheduler for daily recalculation
    from project_health.services.background_scheduler import (
        start_background_scheduler,
        stop_background_scheduler,
    )

    await start_background_scheduler()

    yield

    # Shutdown
    logger.info("Shutting down Project Health...")
    await stop_background_scheduler()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Project Health",
        description="Milestone-driven project health and duration engine",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from project_health.api import milestones, projects

    app.include_router(projects.router, prefix="/api/projects", tags=["projects"])
    app.include_router(milestones.router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": __version__,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "project_health.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
