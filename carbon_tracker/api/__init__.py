"""API routers."""

from carbon_tracker.api.activities import router as activities_router
from carbon_tracker.api.health import router as health_router
from carbon_tracker.api.streaks import router as streaks_router
from carbon_tracker.api.summaries import router as summaries_router
from carbon_tracker.api.targets import router as targets_router
from carbon_tracker.api.users import router as users_router

__all__ = [
    "activities_router",
    "health_router",
    "streaks_router",
    "summaries_router",
    "targets_router",
    "users_router",
]
