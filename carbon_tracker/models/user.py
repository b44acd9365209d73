"""User model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from carbon_tracker.database import Base
from carbon_tracker.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for storing user profiles."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)

    # Relationships
    activities: Mapped[list["Activity"]] = relationship(  # noqa: F821
        back_populates="user", cascade="all, delete-orphan"
    )
    reduction_targets: Mapped[list["ReductionTarget"]] = relationship(  # noqa: F821
        back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}')>"
