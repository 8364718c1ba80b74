"""
Pydantic schemas for user requests and responses.
Email format and normalization are checked by the User model, not here.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime
import uuid


class UserCreate(BaseModel):
    """Fields accepted when registering a user."""

    model_config = ConfigDict(extra="ignore")

    username: str = Field(..., min_length=1, max_length=80, examples=["maria"])
    email: str = Field(..., min_length=3, max_length=254, examples=["maria@example.com"])
    password: str = Field(..., min_length=1, max_length=72, examples=["s3cret-pass"])

    @field_validator("username", "email")
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip()


class UserUpdate(BaseModel):
    """Partial update; unset and null fields are left untouched."""

    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = Field(None, min_length=1, max_length=80)
    email: Optional[str] = Field(None, min_length=3, max_length=254)
    password: Optional[str] = Field(None, min_length=1, max_length=72)

    @field_validator("username", "email")
    @classmethod
    def strip_whitespace(cls, v):
        if v is not None:
            return v.strip()
        return v


class UserResponse(BaseModel):
    """User as returned to callers; the password hash is never exposed."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    email: str
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    """Confirmation returned by delete operations."""

    message: str
