"""
Pydantic models for User request/response validation.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, EmailStr, field_validator

from common.utils.password import validate_password
from app.schemas.todo import TodoResponse

__all__ = ["CreateUserRequest", "UserResponse"]


class CreateUserRequest(BaseModel):
    """Request body for account creation."""
    email: EmailStr = Field(..., description="The user's email address")
    password: str = Field(
        ...,
        description="At least 8 characters with upper and lower case letters, a digit and a symbol",
    )

    @field_validator("password")
    @classmethod
    def password_must_be_strong(cls, value: str) -> str:
        is_valid, errors = validate_password(value)
        if not is_valid:
            raise ValueError("; ".join(errors))
        return value


class UserResponse(BaseModel):
    """Public user data. The password hash is never included."""
    id: str
    email: str
    todos: Optional[List[TodoResponse]] = None
