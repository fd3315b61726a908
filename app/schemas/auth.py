"""
Pydantic models for login request/response validation.
"""

from pydantic import BaseModel, Field, EmailStr

__all__ = ["LoginRequest", "TokenResponse"]


class LoginRequest(BaseModel):
    """Request body for user login."""
    email: EmailStr = Field(..., description="The user's email address")
    password: str = Field(..., min_length=1, description="The user's password")


class TokenResponse(BaseModel):
    """Access token returned by a successful login."""
    access_token: str = Field(
        ...,
        description="Send as 'Authorization: Bearer <access_token>' on later requests",
    )
