"""Weekly summary model for storing derived per-user weekly rollups."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from carbon_tracker.database import Base
from carbon_tracker.models.mixins import TimestampMixin, utcnow


class WeeklySummary(Base, TimestampMixin):
    """Derived summary of one user's emissions for one week window.

    Written only by the weekly analysis job. A recomputation replaces the
    whole row for its (user_id, week_start) key.
    """

    __tablename__ = "weekly_summaries"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    week_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    week_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    total_value: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    activities_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    by_category_totals: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    by_category_counts: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    highest_emission_category: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    lowest_emission_category: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    personalized_tip: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    reduction_target: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    generated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    __table_args__ = (
        UniqueConstraint("user_id", "week_start", name="uq_weekly_summaries_user_week"),
    )

    def __repr__(self) -> str:
        return (
            f"<WeeklySummary(user_id={self.user_id}, week_start={self.week_start}, "
            f"total={self.total_value})>"
        )
