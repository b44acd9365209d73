"""Service and database status endpoints."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from carbon_tracker import __version__
from carbon_tracker.database import get_db
from carbon_tracker.models.weekly_summary import WeeklySummary
from carbon_tracker.services.week_window import ensure_utc

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> dict[str, str]:
    """Liveness check; does not touch the database."""
    return {"status": "healthy", "version": __version__}


@router.get("/health/db")
def db_health_check(db: Session = Depends(get_db)) -> JSONResponse:
    """Check that the weekly summary table the analysis writes is readable.

    Reports how many summaries exist and when the newest one was generated,
    which shows whether the weekly job has been writing.
    """
    try:
        count, latest = db.execute(
            select(func.count(WeeklySummary.id), func.max(WeeklySummary.generated_at))
        ).one()
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "unavailable", "error": str(e)},
        )

    return JSONResponse(
        content={
            "status": "healthy",
            "database": "connected",
            "weekly_summaries": count,
            "last_summary_generated_at": ensure_utc(latest).isoformat() if latest else None,
        }
    )
