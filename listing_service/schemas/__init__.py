"""
Pydantic schemas for request/response validation.
"""

# User schemas
from .user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    MessageResponse
)

# Property schemas
from .property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    NearbyQuery
)

# Image schemas
from .image import PropertyImageResponse

__all__ = [
    # User
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "MessageResponse",

    # Property
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "NearbyQuery",

    # Image
    "PropertyImageResponse"
]
