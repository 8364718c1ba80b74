"""
Service layer for business logic.
"""

from listing_service.services.property import PropertyService
from listing_service.services.user import UserService

__all__ = [
    "PropertyService",
    "UserService",
]
