"""
Custom HTTP exceptions with error codes.

Extends FastAPI's HTTPException with standardized error codes
for consistent API error responses.

Example:
    from common.utils import NotFoundException

    @router.get("/todos/{id}")
    async def get_todo(id: str):
        todo = await collection.find_one({"_id": id})
        if not todo:
            raise NotFoundException("To-do could not be found!", code="TODO_NOT_FOUND")
        return todo
"""

from typing import Optional, Any, Dict
from fastapi import HTTPException


class APIException(HTTPException):
    """
    Base API exception with error code support.

    The detail is always a dict with at least a "message" key, which
    the application's exception handler renders as the JSON body.
    """

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Create an API exception.

        Args:
            status_code: HTTP status code
            message: Human-readable error message
            code: Machine-readable error code
            details: Additional error details
            headers: Optional response headers
        """
        detail: Dict[str, Any] = {"message": message}

        if code:
            detail["code"] = code

        if details is not None:
            detail["details"] = details

        super().__init__(
            status_code=status_code,
            detail=detail,
            headers=headers,
        )

    @property
    def message(self) -> str:
        return self.detail["message"]


class BadRequestException(APIException):
    """400 Bad Request - Invalid input or malformed request."""

    def __init__(
        self,
        message: str = "Bad request",
        code: str = "BAD_REQUEST",
        details: Optional[Any] = None,
    ):
        super().__init__(400, message, code, details)


class UnauthorizedException(APIException):
    """401 Unauthorized - Missing or invalid authentication."""

    def __init__(
        self,
        message: str = "Unauthorized",
        code: str = "UNAUTHORIZED",
        details: Optional[Any] = None,
    ):
        super().__init__(
            401,
            message,
            code,
            details,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundException(APIException):
    """
    404 Not Found - Resource doesn't exist.

    Also raised when a resource exists but belongs to another user,
    so callers cannot probe for other users' ids.
    """

    def __init__(
        self,
        message: str = "Not found",
        code: str = "NOT_FOUND",
        details: Optional[Any] = None,
    ):
        super().__init__(404, message, code, details)


class ConflictException(APIException):
    """409 Conflict - Resource already exists or state conflict."""

    def __init__(
        self,
        message: str = "Conflict",
        code: str = "CONFLICT",
        details: Optional[Any] = None,
    ):
        super().__init__(409, message, code, details)


class InternalServerException(APIException):
    """500 Internal Server Error - Unexpected server error. Never carries internals."""

    def __init__(
        self,
        message: str = "Internal server error",
        code: str = "INTERNAL_ERROR",
    ):
        super().__init__(500, message, code)


def duplicate_value_message(field: str) -> str:
    """Message used for every unique-constraint violation."""
    return f"Value for '{field}' already exists, try again"
