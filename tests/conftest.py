"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from datetime import datetime
from typing import Any
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

# Set test environment before importing app modules
os.environ["ENVIRONMENT"] = "test"
os.environ["TESTING"] = "1"
os.environ["DATABASE_URL"] = "sqlite://"

import carbon_tracker.models  # noqa: E402,F401
from carbon_tracker.api.dependencies import get_analysis_service  # noqa: E402
from carbon_tracker.database import build_engine, get_db, init_db  # noqa: E402
from carbon_tracker.main import app  # noqa: E402
from carbon_tracker.services.store import (  # noqa: E402
    ActivityRecord,
    SqlAnalysisStore,
    TargetRecord,
    UserAggregate,
    group_aggregate_rows,
)
from carbon_tracker.services.week_window import WeekWindow, ensure_utc  # noqa: E402
from carbon_tracker.services.weekly_analysis import WeeklyAnalysisService  # noqa: E402


class InMemoryStore:
    """Dict-backed AnalysisStore for exercising the analysis without a database."""

    def __init__(self) -> None:
        self.activities: list[ActivityRecord] = []
        self.targets: dict[tuple[int, str], TargetRecord] = {}
        self.summaries: dict[tuple[int, datetime], dict[str, Any]] = {}
        self.fail_aggregation = False
        self.fail_upsert_for: set[int] = set()
        self.upsert_calls = 0

    def add_activity(
        self, user_id: int, category: str, activity: str, value: float, occurred_at: datetime
    ) -> None:
        self.activities.append(
            ActivityRecord(
                id=len(self.activities) + 1,
                user_id=user_id,
                category=category,
                activity=activity,
                value=value,
                occurred_at=ensure_utc(occurred_at),
            )
        )

    def set_target(self, user_id: int, target_type: str, value: float, period: str = "weekly") -> None:
        self.targets[(user_id, period)] = TargetRecord(
            user_id=user_id, target_period=period, target_type=target_type, target_value=value
        )

    def put_summary(self, user_id: int, week_start: datetime, total_value: float) -> None:
        self.summaries[(user_id, week_start)] = {
            "user_id": user_id,
            "week_start": week_start,
            "total_value": total_value,
        }

    def _in_window(self, window: WeekWindow) -> list[ActivityRecord]:
        return [a for a in self.activities if window.start <= a.occurred_at < window.end]

    async def query_activity_aggregates(
        self, window: WeekWindow, user_id: int | None = None
    ) -> list[UserAggregate]:
        if self.fail_aggregation:
            raise RuntimeError("activity store unavailable")

        grouped: dict[tuple[int, str], list[float]] = {}
        for activity in self._in_window(window):
            if user_id is not None and activity.user_id != user_id:
                continue
            grouped.setdefault((activity.user_id, activity.category), []).append(activity.value)

        rows = [(uid, cat, sum(vals), len(vals)) for (uid, cat), vals in sorted(grouped.items())]
        return group_aggregate_rows(rows)

    async def find_top_activity(
        self, user_id: int, category: str, window: WeekWindow
    ) -> ActivityRecord | None:
        matches = [
            a
            for a in self._in_window(window)
            if a.user_id == user_id and a.category == category
        ]
        return max(matches, key=lambda a: a.value, default=None)

    async def get_active_target(self, user_id: int, period: str) -> TargetRecord | None:
        return self.targets.get((user_id, period))

    async def get_summary(self, user_id: int, week_start: datetime) -> dict[str, Any] | None:
        return self.summaries.get((user_id, week_start))

    async def upsert_summary(
        self, user_id: int, week_start: datetime, fields: dict[str, Any]
    ) -> None:
        self.upsert_calls += 1
        if user_id in self.fail_upsert_for:
            raise RuntimeError(f"write failed for user {user_id}")
        self.summaries[(user_id, week_start)] = {
            "user_id": user_id,
            "week_start": week_start,
            **fields,
        }


@pytest.fixture
def memory_store() -> InMemoryStore:
    """Fresh in-memory analysis store."""
    return InMemoryStore()


@pytest.fixture
def engine(tmp_path):
    """Create a throwaway SQLite database with all tables."""
    engine = build_engine(f"sqlite:///{tmp_path / 'carbon_tracker_test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Create a new database session for a test."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def sql_store(session_factory) -> SqlAnalysisStore:
    return SqlAnalysisStore(session_factory)


@pytest.fixture(autouse=True)
def tip_task():
    """Keep activity logging from reaching the Celery broker."""
    with patch("carbon_tracker.api.activities.send_tip_for_activity") as mock_task:
        yield mock_task


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    """Create a test client bound to the test database."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_analysis_service] = lambda: WeeklyAnalysisService(
        SqlAnalysisStore(session_factory)
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
