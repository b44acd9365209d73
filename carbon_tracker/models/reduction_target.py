"""Reduction target model."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Float, ForeignKey, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carbon_tracker.database import Base
from carbon_tracker.models.mixins import TimestampMixin


class TargetType(str, Enum):
    """How a reduction target is measured."""

    PERCENTAGE = "percentage"
    ABSOLUTE = "absolute"


class TargetPeriod(str, Enum):
    """Period a reduction target applies to."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ReductionTarget(Base, TimestampMixin):
    """A user-declared goal to cut emissions over a period."""

    __tablename__ = "reduction_targets"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    target_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TargetType.PERCENTAGE.value
    )
    target_value: Mapped[float] = mapped_column(Float, nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    target_period: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TargetPeriod.WEEKLY.value
    )
    categories: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    user: Mapped["User"] = relationship(back_populates="reduction_targets")  # noqa: F821

    __table_args__ = (
        # One active target per user and period
        Index(
            "uq_reduction_targets_active",
            "user_id",
            "target_period",
            unique=True,
            postgresql_where=text("is_active"),
            sqlite_where=text("is_active = 1"),
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<ReductionTarget(id={self.id}, type='{self.target_type}', "
            f"value={self.target_value}, active={self.is_active})>"
        )
