"""Activity schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ActivityCreate(BaseModel):
    """Schema for logging an activity.

    The emission value is never supplied by the client; it comes from the
    activity catalog.
    """

    user_id: int
    category: str
    activity: str
    occurred_at: datetime | None = None


class Activity(BaseModel):
    """Schema for activity response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    category: str
    activity: str
    value: float
    occurred_at: datetime
