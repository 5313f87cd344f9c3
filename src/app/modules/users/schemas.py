"""Pydantic schemas for user operations."""

from datetime import date

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.constants import MAX_NAME_LENGTH
from app.modules.logs.schemas import LogListResponse


class UserBase(BaseModel):
    """Base schema for user data."""

    forename: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    surname: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    email: EmailStr
    date_of_birth: date
    is_active: bool


class UserCreate(UserBase):
    """Schema for creating a new user."""

    is_active: bool = True


class UserUpdate(UserBase):
    """Schema for replacing a user's data.

    Every field is required: an update overwrites the whole record.
    """


class UserResponse(UserBase):
    """Schema for user response data."""

    id: int

    model_config = ConfigDict(from_attributes=True)


class UserListResponse(BaseModel):
    """Schema for listing users."""

    items: list[UserResponse]


class UserDetailsResponse(BaseModel):
    """Schema for a user together with a page of their change log."""

    user: UserResponse
    logs: LogListResponse
