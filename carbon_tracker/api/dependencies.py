"""Shared FastAPI dependencies."""

from carbon_tracker.services.weekly_analysis import (
    WeeklyAnalysisService,
    get_weekly_analysis_service,
)


def get_analysis_service() -> WeeklyAnalysisService:
    """Weekly analysis service over the application database."""
    return get_weekly_analysis_service()
