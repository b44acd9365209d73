"""Weekly summary schemas."""

from datetime import datetime

from pydantic import BaseModel


class CategoryStat(BaseModel):
    category: str
    emissions: float
    activity_count: int


class PersonalizedTip(BaseModel):
    category: str
    message: str
    tip_type: str


class ReductionProgress(BaseModel):
    target_value: float
    target_type: str
    previous_week_emissions: float | None
    reduction_achieved: float | None
    progress_percentage: float | None
    target_met: bool


class WeeklySummary(BaseModel):
    """Schema for weekly summary response."""

    user_id: int
    week_start: datetime
    week_end: datetime
    total_value: float
    activities_count: int
    by_category_totals: dict[str, float]
    by_category_counts: dict[str, int]
    highest_emission_category: CategoryStat | None
    lowest_emission_category: CategoryStat | None
    personalized_tip: PersonalizedTip | None
    reduction_target: ReductionProgress | None
    generated_at: datetime


class AnalysisRun(BaseModel):
    """Result of an analysis run."""

    start: datetime
    end: datetime
    processed_users: int


class StreakDay(BaseModel):
    date: str
    active: bool


class Streak(BaseModel):
    streak: list[StreakDay]
    current_streak: int
