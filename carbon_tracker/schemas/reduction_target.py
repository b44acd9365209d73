"""Reduction target schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from carbon_tracker.data.catalog import Category
from carbon_tracker.models.reduction_target import TargetPeriod, TargetType


class ReductionTargetCreate(BaseModel):
    """Schema for creating a reduction target."""

    user_id: int
    target_type: TargetType = TargetType.PERCENTAGE
    target_value: float = Field(gt=0)
    description: str | None = Field(default=None, max_length=200)
    target_period: TargetPeriod = TargetPeriod.WEEKLY
    categories: list[Category] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_percentage(self) -> "ReductionTargetCreate":
        if self.target_type == TargetType.PERCENTAGE and self.target_value > 100:
            raise ValueError("Percentage target cannot exceed 100%")
        return self


class ReductionTargetUpdate(BaseModel):
    """Schema for updating a reduction target."""

    target_type: TargetType | None = None
    target_value: float | None = Field(default=None, gt=0)
    description: str | None = Field(default=None, max_length=200)
    target_period: TargetPeriod | None = None
    categories: list[Category] | None = None
    is_active: bool | None = None


class ReductionTarget(BaseModel):
    """Schema for reduction target response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    target_type: str
    target_value: float
    description: str | None
    is_active: bool
    target_period: str
    categories: list[str]
    created_at: datetime
    updated_at: datetime
