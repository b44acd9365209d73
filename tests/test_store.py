"""Tests for the SQLAlchemy analysis store."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from carbon_tracker.models.activity import Activity
from carbon_tracker.models.reduction_target import ReductionTarget
from carbon_tracker.models.user import User
from carbon_tracker.models.weekly_summary import WeeklySummary
from carbon_tracker.services.week_window import WeekWindow
from carbon_tracker.services.weekly_analysis import WeeklyAnalysisService

UTC = timezone.utc
WINDOW = WeekWindow(start=datetime(2024, 1, 1, tzinfo=UTC), end=datetime(2024, 1, 8, tzinfo=UTC))
REFERENCE = datetime(2024, 1, 10, 12, 0, tzinfo=UTC)


def create_user(db: Session, name: str = "Store Test User") -> User:
    user = User(name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def log(db: Session, user: User, category: str, activity: str, value: float, occurred_at: datetime) -> None:
    db.add(
        Activity(
            user_id=user.id,
            category=category,
            activity=activity,
            value=value,
            occurred_at=occurred_at,
        )
    )
    db.commit()


def _fields(total: float) -> dict:
    return {
        "week_end": WINDOW.end,
        "total_value": total,
        "activities_count": 1,
        "by_category_totals": {"Food": total},
        "by_category_counts": {"Food": 1},
        "highest_emission_category": {"category": "Food", "emissions": total, "activity_count": 1},
        "lowest_emission_category": {"category": "Food", "emissions": total, "activity_count": 1},
        "personalized_tip": None,
        "reduction_target": None,
        "generated_at": REFERENCE,
    }


class TestActivityAggregates:
    """Tests for query_activity_aggregates."""

    @pytest.mark.asyncio
    async def test_groups_by_user_and_category(self, db_session, sql_store):
        alice = create_user(db_session, "Alice")
        bob = create_user(db_session, "Bob")
        log(db_session, alice, "Food", "Beef (200g)", 5.4, datetime(2024, 1, 2, tzinfo=UTC))
        log(db_session, alice, "Food", "Chicken (200g)", 1.4, datetime(2024, 1, 3, tzinfo=UTC))
        log(db_session, alice, "Transport", "Car (10km)", 2.3, datetime(2024, 1, 4, tzinfo=UTC))
        log(db_session, bob, "Water", "Bath", 1.5, datetime(2024, 1, 5, tzinfo=UTC))

        aggregates = await sql_store.query_activity_aggregates(WINDOW)

        by_user = {aggregate.user_id: aggregate for aggregate in aggregates}
        assert set(by_user) == {alice.id, bob.id}

        alice_aggregate = by_user[alice.id]
        assert alice_aggregate.activities_count == 3
        assert alice_aggregate.total_value == pytest.approx(9.1)
        categories = {entry.category: entry for entry in alice_aggregate.by_category}
        assert categories["Food"].total == pytest.approx(6.8)
        assert categories["Food"].count == 2
        assert categories["Transport"].count == 1

    @pytest.mark.asyncio
    async def test_window_is_half_open(self, db_session, sql_store):
        user = create_user(db_session)
        log(db_session, user, "Food", "Vegan Meal", 0.6, WINDOW.start)
        log(db_session, user, "Food", "Beef (200g)", 5.4, WINDOW.end)
        log(db_session, user, "Food", "Pork (200g)", 1.5, datetime(2023, 12, 31, 23, 59, tzinfo=UTC))

        aggregates = await sql_store.query_activity_aggregates(WINDOW)

        assert len(aggregates) == 1
        assert aggregates[0].activities_count == 1
        assert aggregates[0].total_value == pytest.approx(0.6)

    @pytest.mark.asyncio
    async def test_filter_by_user(self, db_session, sql_store):
        alice = create_user(db_session, "Alice")
        bob = create_user(db_session, "Bob")
        log(db_session, alice, "Food", "Beef (200g)", 5.4, datetime(2024, 1, 2, tzinfo=UTC))
        log(db_session, bob, "Water", "Bath", 1.5, datetime(2024, 1, 5, tzinfo=UTC))

        aggregates = await sql_store.query_activity_aggregates(WINDOW, user_id=bob.id)

        assert [aggregate.user_id for aggregate in aggregates] == [bob.id]


class TestPointLookups:
    """Tests for top activity, target and summary lookups."""

    @pytest.mark.asyncio
    async def test_find_top_activity(self, db_session, sql_store):
        user = create_user(db_session)
        log(db_session, user, "Transport", "Car (10km)", 2.3, datetime(2024, 1, 2, tzinfo=UTC))
        log(db_session, user, "Transport", "Flight (1hr domestic)", 90.0, datetime(2024, 1, 3, tzinfo=UTC))
        log(db_session, user, "Food", "Laptop dinner", 300.0, datetime(2024, 1, 3, tzinfo=UTC))

        top = await sql_store.find_top_activity(user.id, "Transport", WINDOW)

        assert top.activity == "Flight (1hr domestic)"
        assert top.value == 90.0
        assert top.occurred_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_find_top_activity_none(self, db_session, sql_store):
        user = create_user(db_session)

        assert await sql_store.find_top_activity(user.id, "Food", WINDOW) is None

    @pytest.mark.asyncio
    async def test_get_active_target_ignores_inactive(self, db_session, sql_store):
        user = create_user(db_session)
        db_session.add(
            ReductionTarget(user_id=user.id, target_type="absolute", target_value=5, is_active=False)
        )
        db_session.commit()

        assert await sql_store.get_active_target(user.id, "weekly") is None

        db_session.add(
            ReductionTarget(user_id=user.id, target_type="percentage", target_value=15, is_active=True)
        )
        db_session.commit()

        target = await sql_store.get_active_target(user.id, "weekly")
        assert target.target_type == "percentage"
        assert target.target_value == 15
        assert await sql_store.get_active_target(user.id, "monthly") is None


class TestUpsertSummary:
    """Tests for upsert_summary."""

    @pytest.mark.asyncio
    async def test_insert_then_replace(self, db_session, sql_store):
        user = create_user(db_session)

        await sql_store.upsert_summary(user.id, WINDOW.start, _fields(10.0))
        await sql_store.upsert_summary(user.id, WINDOW.start, _fields(12.5))

        count = db_session.execute(
            select(func.count()).select_from(WeeklySummary).where(WeeklySummary.user_id == user.id)
        ).scalar_one()
        assert count == 1

        summary = await sql_store.get_summary(user.id, WINDOW.start)
        assert summary["total_value"] == 12.5
        assert summary["week_start"] == WINDOW.start
        assert summary["week_end"] == WINDOW.end
        assert summary["by_category_totals"] == {"Food": 12.5}

    @pytest.mark.asyncio
    async def test_get_missing_summary(self, db_session, sql_store):
        user = create_user(db_session)

        assert await sql_store.get_summary(user.id, WINDOW.start) is None


class TestAnalysisOverSql:
    """End-to-end runs of the analysis against the database."""

    @pytest.mark.asyncio
    async def test_last_week_run(self, db_session, sql_store):
        alice = create_user(db_session, "Alice")
        bob = create_user(db_session, "Bob")
        idle = create_user(db_session, "Idle")
        log(db_session, alice, "Transport", "Car (10km)", 5.0, datetime(2024, 1, 1, 0, 10, tzinfo=UTC))
        log(db_session, alice, "Food", "Beef (200g)", 12.0, datetime(2024, 1, 2, 9, 0, tzinfo=UTC))
        log(db_session, bob, "Water", "Bath", 1.5, datetime(2024, 1, 3, tzinfo=UTC))

        service = WeeklyAnalysisService(sql_store)
        result = await service.run_last_week_analysis(REFERENCE)

        assert result.processed_users == 2

        summary = await sql_store.get_summary(alice.id, WINDOW.start)
        assert summary["total_value"] == 17
        assert summary["activities_count"] == 2
        assert summary["highest_emission_category"]["category"] == "Food"
        assert summary["lowest_emission_category"]["category"] == "Transport"
        assert summary["personalized_tip"]["category"] == "Food"

        assert await sql_store.get_summary(bob.id, WINDOW.start) is not None
        assert await sql_store.get_summary(idle.id, WINDOW.start) is None

    @pytest.mark.asyncio
    async def test_rerun_changes_only_generated_at(self, db_session, sql_store):
        user = create_user(db_session)
        log(db_session, user, "Transport", "Bus (10km)", 1.0, datetime(2024, 1, 2, tzinfo=UTC))
        log(db_session, user, "Energy", "LED Lights (1 hr)", 0.01, datetime(2024, 1, 3, tzinfo=UTC))

        await WeeklyAnalysisService(
            sql_store, clock=lambda: datetime(2024, 1, 10, tzinfo=UTC)
        ).run_last_week_analysis(REFERENCE)
        first = await sql_store.get_summary(user.id, WINDOW.start)
        await WeeklyAnalysisService(
            sql_store, clock=lambda: datetime(2024, 1, 11, tzinfo=UTC)
        ).run_last_week_analysis(REFERENCE)
        second = await sql_store.get_summary(user.id, WINDOW.start)

        assert first.pop("generated_at") != second.pop("generated_at")
        assert first == second

        count = db_session.execute(select(func.count()).select_from(WeeklySummary)).scalar_one()
        assert count == 1
