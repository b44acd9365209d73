"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from carbon_tracker import __version__
from carbon_tracker.api import (
    activities_router,
    health_router,
    streaks_router,
    summaries_router,
    targets_router,
    users_router,
)
from carbon_tracker.database import dispose_engine
from carbon_tracker.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def run_migrations() -> None:
    """Run alembic migrations on startup."""
    # Skip migrations during testing
    if os.environ.get("TESTING") == "1":
        logger.info("Skipping migrations in test mode")
        return

    try:
        alembic_cfg = Config("alembic.ini")
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations completed successfully")
    except Exception as e:
        logger.error(f"Failed to run migrations: {e}")
        raise


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup - run migrations
    run_migrations()
    yield
    # Shutdown
    dispose_engine()


app = FastAPI(
    title="Carbon Tracker API",
    description="Personal carbon footprint tracking with weekly summaries and reduction targets",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


# Include routers
app.include_router(health_router)
app.include_router(users_router)
app.include_router(activities_router)
app.include_router(targets_router)
app.include_router(summaries_router)
app.include_router(streaks_router)


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "name": "Carbon Tracker API",
        "version": __version__,
        "docs": "/docs",
    }
