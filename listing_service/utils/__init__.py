"""
Utility modules for the listing service.
"""

from .exceptions import (
    ErrorKind,
    APIException,
    NotFoundError,
    UnauthorizedError,
    DuplicateEmailError,
    ValidationError,
    QueryError,
    PersistenceError
)

from .geo import GeoSearch, BoundingBox, bounding_box, haversine_km
from .messages import get_message

__all__ = [
    # Exceptions
    "ErrorKind",
    "APIException",
    "NotFoundError",
    "UnauthorizedError",
    "DuplicateEmailError",
    "ValidationError",
    "QueryError",
    "PersistenceError",

    # Geo
    "GeoSearch",
    "BoundingBox",
    "bounding_box",
    "haversine_km",

    # Messages
    "get_message",
]
