"""
Authentication Router.

Handles login. The endpoint is public: it carries no auth dependency.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.dependencies import get_auth_service
from app.schemas.auth import LoginRequest, TokenResponse
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def login(
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """
    Authenticate user and return an access token.

    Wrong passwords and unknown emails get the same 401 response.
    """
    logger.info("Login attempt")
    return await auth_service.login(body.email, body.password)
