"""
Custom exception classes for the listing service.
Every error is tagged with an ErrorKind and carries the localized message of the
operation that raised it, plus the HTTP status a host framework should answer with.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status
from listing_service.utils.messages import get_message
import enum


class ErrorKind(str, enum.Enum):
    """Error taxonomy shared by every service operation."""
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    DUPLICATE_EMAIL = "DUPLICATE_EMAIL"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    QUERY_ERROR = "QUERY_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"


class APIException(HTTPException):
    """Base API exception class."""

    kind: ErrorKind

    def __init__(
        self,
        status_code: int,
        operation: str,
        detail: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            status_code=status_code,
            detail=detail or get_message(operation),
            headers=headers
        )
        self.operation = operation

    @property
    def error_code(self) -> str:
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        """Render the error body returned to callers."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.detail,
                "operation": self.operation,
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code}: {self.detail}"


class NotFoundError(APIException):
    """Resource not found exception."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, operation: str, resource_id: Optional[Any] = None):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, operation=operation)
        self.resource_id = resource_id


class UnauthorizedError(APIException):
    """Actor is not allowed to perform the operation."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, operation: str):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, operation=operation)


class DuplicateEmailError(APIException):
    """Another user already holds the email address."""

    kind = ErrorKind.DUPLICATE_EMAIL

    def __init__(self, operation: str, email: Optional[str] = None):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, operation=operation)
        self.email = email


class ValidationError(APIException):
    """Validation error exception."""

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(
        self,
        operation: str,
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            operation=operation
        )
        self.field_errors = field_errors or []

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.field_errors:
            body["error"]["details"] = self.field_errors
        return body


class QueryError(APIException):
    """Read query failed in the store."""

    kind = ErrorKind.QUERY_ERROR

    def __init__(self, operation: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, operation=operation)


class PersistenceError(APIException):
    """Write failed in the store."""

    kind = ErrorKind.PERSISTENCE_ERROR

    def __init__(self, operation: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, operation=operation)
