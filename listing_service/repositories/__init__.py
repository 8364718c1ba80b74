"""
Repository layer for data access operations.
"""

from listing_service.repositories.base import BaseRepository
from listing_service.repositories.property import PropertyRepository
from listing_service.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "UserRepository"
]
