"""
FastAPI router for User endpoints.

POST /users is public (account creation). GET /users/{id} requires a
token and only ever returns the caller's own record.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from app.dependencies import CurrentUserId, get_user_service
from app.schemas.user import CreateUserRequest, UserResponse
from app.services.user_service import UserService, format_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    body: CreateUserRequest,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """
    Create a new user account.

    The password is hashed before storage and never returned.
    """
    user = await user_service.register_user(body.email, body.password)
    return UserResponse(**format_user(user), todos=[])


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    response_model_exclude_none=True,
)
async def get_user(
    user_id: str,
    current_user_id: CurrentUserId,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    """
    Get a user by ID.

    Any id other than the caller's own is answered with 404.
    """
    user = await user_service.get_own_user(current_user_id, user_id)
    return UserResponse(**format_user(user))
