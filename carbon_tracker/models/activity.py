"""Activity model."""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carbon_tracker.database import Base
from carbon_tracker.models.mixins import TimestampMixin, utcnow


class Activity(Base, TimestampMixin):
    """A single logged activity with its fixed emission value (kg CO2e)."""

    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    activity: Mapped[str] = mapped_column(String(100), nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    user: Mapped["User"] = relationship(back_populates="activities")  # noqa: F821

    __table_args__ = (
        Index("idx_activities_occurred_at", "occurred_at"),
        Index("idx_activities_user_category", "user_id", "category"),
    )

    def __repr__(self) -> str:
        return f"<Activity(id={self.id}, category='{self.category}', activity='{self.activity}')>"
