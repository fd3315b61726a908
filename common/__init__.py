"""
Common library for reusable infrastructure components.

This package provides generic modules that can be used across projects:

- database: Async MongoDB connection with Motor
- auth: Pluggable authentication (JWT + bcrypt)
- utils: Standard responses, exceptions, handlers, password validation
- config: Base settings class
"""

from common.database import MongoDB
from common.auth import AuthProvider, JWTAuth
from common.utils import (
    success_response,
    error_response,
    APIException,
    BadRequestException,
    UnauthorizedException,
    NotFoundException,
    ConflictException,
    validate_password,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "MongoDB",
    # Auth
    "AuthProvider",
    "JWTAuth",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "NotFoundException",
    "ConflictException",
    "validate_password",
    # Config
    "BaseAppSettings",
]
