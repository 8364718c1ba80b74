"""
Validation helpers shared by the services.
"""

import uuid
from typing import Any, Optional
from pydantic import ValidationError as PydanticValidationError

from listing_service.utils.exceptions import ValidationError


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    """
    Coerce an identifier to a UUID.

    Returns:
        The UUID, or None when the value cannot be one
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def handle_pydantic_validation_error(operation: str, exc: PydanticValidationError) -> ValidationError:
    """
    Convert Pydantic validation error to custom ValidationError.

    Args:
        operation: Message catalogue key of the failing operation
        exc: Pydantic validation error

    Returns:
        Custom ValidationError instance
    """
    field_errors = []

    for error in exc.errors():
        field_path = " -> ".join(str(loc) for loc in error["loc"])
        field_errors.append({
            "field": field_path,
            "message": error["msg"],
            "type": error["type"],
        })

    return ValidationError(operation, field_errors=field_errors)
