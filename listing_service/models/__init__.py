"""
Database models for the listing service.
Includes User, Property, and PropertyImage models with relationships and validation.
"""

from listing_service.models.user import User
from listing_service.models.property import Property
from listing_service.models.image import PropertyImage

# Export all models for easy importing
__all__ = [
    "User",
    "Property",
    "PropertyImage",
]
