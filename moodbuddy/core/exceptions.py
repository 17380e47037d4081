"""
API exceptions mapped onto the response envelope.

Every exception here is a FastAPI HTTPException, so it can be raised from
services and routes alike; the handlers in ``moodbuddy.main`` render them as
``{"success": false, "message": ..., "errors": [...]}``.

Example:
    from moodbuddy.core.exceptions import NotFoundException

    entry = get_owned_entry(entry_id, user.id, db)
    if not entry:
        raise NotFoundException("Mood entry not found")
"""
from typing import Any, Dict, List, Optional
from fastapi import HTTPException


class APIException(HTTPException):
    """
    Base API exception with error code and field error support.

    ``detail`` is kept as the plain message so the exception still reads well
    when it is logged or rendered by FastAPI's default handler.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.code = code
        self.errors = errors
        super().__init__(status_code=status_code, detail=message, headers=headers)


class ValidationException(APIException):
    """400 Bad Request - Input failed validation."""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[List[Dict[str, Any]]] = None,
        code: str = "VALIDATION_ERROR",
    ):
        super().__init__(400, message, code, errors)


class UnauthorizedException(APIException):
    """401 Unauthorized - Missing or invalid authentication."""

    def __init__(self, message: str = "Not authorized", code: str = "UNAUTHORIZED"):
        super().__init__(401, message, code, headers={"WWW-Authenticate": "Bearer"})


class ForbiddenException(APIException):
    """403 Forbidden - Valid auth but insufficient permissions."""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(403, message, code)


class NotFoundException(APIException):
    """404 Not Found - Resource doesn't exist or belongs to someone else."""

    def __init__(self, message: str = "Resource not found", code: str = "NOT_FOUND"):
        super().__init__(404, message, code)


class ConflictException(APIException):
    """409 Conflict - Resource already exists."""

    def __init__(self, message: str = "Conflict", code: str = "CONFLICT"):
        super().__init__(409, message, code)


def field_error(field: str, message: str) -> Dict[str, str]:
    """Build one entry of a validation error list."""
    return {"field": field, "message": message}
