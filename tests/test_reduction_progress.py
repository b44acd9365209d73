"""Tests for reduction target progress."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from carbon_tracker.services.reduction_progress import ReductionProgressCalculator
from carbon_tracker.services.week_window import WEEK

WEEK_START = datetime(2024, 1, 8, tzinfo=timezone.utc)
PREVIOUS_WEEK = WEEK_START - WEEK


@pytest.mark.asyncio
async def test_no_active_target_returns_none(memory_store):
    calculator = ReductionProgressCalculator(memory_store)

    assert await calculator.calculate(1, 50.0, WEEK_START) is None


@pytest.mark.asyncio
async def test_monthly_target_is_ignored(memory_store):
    memory_store.set_target(1, "percentage", 20, period="monthly")
    calculator = ReductionProgressCalculator(memory_store)

    assert await calculator.calculate(1, 50.0, WEEK_START) is None


@pytest.mark.asyncio
async def test_first_week_with_target(memory_store):
    memory_store.set_target(1, "percentage", 20)
    calculator = ReductionProgressCalculator(memory_store)

    progress = await calculator.calculate(1, 50.0, WEEK_START)

    assert progress.target_value == 20
    assert progress.target_type == "percentage"
    assert progress.previous_week_emissions is None
    assert progress.reduction_achieved is None
    assert progress.progress_percentage is None
    assert progress.target_met is False


@pytest.mark.asyncio
async def test_percentage_target_met(memory_store):
    memory_store.set_target(1, "percentage", 20)
    memory_store.put_summary(1, PREVIOUS_WEEK, 100.0)
    calculator = ReductionProgressCalculator(memory_store)

    progress = await calculator.calculate(1, 70.0, WEEK_START)

    assert progress.previous_week_emissions == 100.0
    assert progress.reduction_achieved == 30.0
    assert progress.progress_percentage == 150.0
    assert progress.target_met is True


@pytest.mark.asyncio
async def test_absolute_target_partial_progress(memory_store):
    memory_store.set_target(1, "absolute", 10)
    memory_store.put_summary(1, PREVIOUS_WEEK, 50.0)
    calculator = ReductionProgressCalculator(memory_store)

    progress = await calculator.calculate(1, 45.0, WEEK_START)

    assert progress.reduction_achieved == 5.0
    assert progress.progress_percentage == 50.0
    assert progress.target_met is False


@pytest.mark.asyncio
async def test_regression_clamps_progress_but_keeps_negative_reduction(memory_store):
    memory_store.set_target(1, "percentage", 20)
    memory_store.put_summary(1, PREVIOUS_WEEK, 50.0)
    calculator = ReductionProgressCalculator(memory_store)

    progress = await calculator.calculate(1, 60.0, WEEK_START)

    assert progress.reduction_achieved == -20.0
    assert progress.progress_percentage == 0.0
    assert progress.target_met is False


@pytest.mark.asyncio
async def test_rounding(memory_store):
    memory_store.set_target(1, "absolute", 3)
    memory_store.put_summary(1, PREVIOUS_WEEK, 10.0)
    calculator = ReductionProgressCalculator(memory_store)

    progress = await calculator.calculate(1, 8.0 - 1 / 3, WEEK_START)

    assert progress.reduction_achieved == 2.33
    assert progress.progress_percentage == 77.8


@pytest.mark.asyncio
async def test_zero_previous_week_with_percentage_target_returns_none(memory_store):
    memory_store.set_target(1, "percentage", 20)
    memory_store.put_summary(1, PREVIOUS_WEEK, 0.0)
    calculator = ReductionProgressCalculator(memory_store)

    assert await calculator.calculate(1, 5.0, WEEK_START) is None


@pytest.mark.asyncio
async def test_store_failure_returns_none(memory_store):
    memory_store.get_active_target = AsyncMock(side_effect=RuntimeError("lookup failed"))
    calculator = ReductionProgressCalculator(memory_store)

    assert await calculator.calculate(1, 5.0, WEEK_START) is None


@pytest.mark.asyncio
async def test_to_dict(memory_store):
    memory_store.set_target(1, "absolute", 10)
    memory_store.put_summary(1, PREVIOUS_WEEK, 50.0)
    calculator = ReductionProgressCalculator(memory_store)

    progress = await calculator.calculate(1, 30.0, WEEK_START)

    assert progress.to_dict() == {
        "target_value": 10,
        "target_type": "absolute",
        "previous_week_emissions": 50.0,
        "reduction_achieved": 20.0,
        "progress_percentage": 200.0,
        "target_met": True,
    }
