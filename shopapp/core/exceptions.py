# shopapp/core/exceptions.py

from enum import Enum
from typing import Optional, Dict, Any
import logging
from fastapi import status

logger = logging.getLogger(__name__)

class ErrorCode(Enum):
    """Standardized error codes for the application."""

    # Request validation errors
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # Identity errors
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # Resource errors
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INVALID_STATE = "INVALID_STATE"

    # System errors
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


STATUS_CODE_MAP = {
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_REQUIRED_FIELD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.INSUFFICIENT_STOCK: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorCode.RATE_LIMIT_EXCEEDED: status.HTTP_429_TOO_MANY_REQUESTS,
    ErrorCode.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ShopError(Exception):
    """Base exception for all domain errors raised by the services."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.code = code
        self.user_message = user_message
        self.context = context or {}
        super().__init__(self.user_message)

    @property
    def status_code(self) -> int:
        return STATUS_CODE_MAP.get(self.code, status.HTTP_400_BAD_REQUEST)

    def to_response(self) -> Dict[str, Any]:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.user_message,
                "context": self.context,
            }
        }


class ValidationFailedError(ShopError):
    """A field-level business rule rejected the request."""

    def __init__(self, message: str, field: Optional[str] = None):
        context = {"field": field} if field else None
        super().__init__(ErrorCode.INVALID_INPUT, message, context)


class MissingFieldError(ShopError):
    def __init__(self, label: str, field: str):
        super().__init__(
            ErrorCode.MISSING_REQUIRED_FIELD,
            f"{label} is required",
            {"field": field},
        )


class AuthenticationError(ShopError):
    """Exception raised for authentication-related errors."""

    def __init__(self, message: str = "Could not validate credentials"):
        self.message = message
        super().__init__(ErrorCode.AUTHENTICATION_FAILED, message)


class PermissionDeniedError(ShopError):
    def __init__(self, message: str = "You don't have permission to perform this action"):
        super().__init__(ErrorCode.PERMISSION_DENIED, message)


class NotFoundError(ShopError):
    """Raised when an entity lookup by id or field comes back empty."""

    def __init__(self, entity: str, identifier: Any = None, field: str = "id", message: Optional[str] = None):
        if message is None:
            if identifier is None:
                message = f"{entity} not found"
            else:
                message = f"{entity} not found with {field}: {identifier}"
        context = {"entity": entity}
        if identifier is not None:
            context[field] = str(identifier)
        super().__init__(ErrorCode.NOT_FOUND, message, context)


class ConflictError(ShopError):
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(ErrorCode.CONFLICT, message, context)


class InsufficientStockError(ShopError):
    def __init__(self, message: str, product_id: int, available: int, requested: int):
        super().__init__(
            ErrorCode.INSUFFICIENT_STOCK,
            message,
            {
                "product_id": product_id,
                "available": available,
                "requested": requested,
            },
        )


class InvalidStateError(ShopError):
    """The entity's current status does not allow the operation."""

    def __init__(self, message: str, current_status: Optional[str] = None):
        context = {"current_status": current_status} if current_status else None
        super().__init__(ErrorCode.INVALID_STATE, message, context)


# Convenience functions for common errors
def require_text(value: Optional[str], label: str, field: str) -> str:
    """Raise a missing-field error when the value is None or blank."""
    if value is None or not value.strip():
        raise MissingFieldError(label, field)
    return value


def require_value(value: Any, label: str, field: str) -> Any:
    if value is None:
        raise MissingFieldError(label, field)
    return value
