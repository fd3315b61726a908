"""
Utilities module - Common helpers for API responses, exceptions, and validation.
"""

from common.utils.responses import success_response, error_response
from common.utils.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    ConflictException,
    InternalServerException,
    duplicate_value_message,
)
from common.utils.password import validate_password

__all__ = [
    "success_response",
    "error_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
    "InternalServerException",
    "duplicate_value_message",
    "validate_password",
]
