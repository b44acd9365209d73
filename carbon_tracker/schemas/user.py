"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class UserBase(BaseModel):
    """Base user schema."""

    name: str
    email: str | None = None


class UserCreate(UserBase):
    """Schema for creating a user."""

    pass


class User(UserBase):
    """Schema for user response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime


class LoginResult(BaseModel):
    """Result of a user login."""

    user: User
    summary_refreshed: bool
