"""
Login service.

Checks credentials against the user store and mints access tokens.
"""

import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from common.auth import AuthProvider
from common.utils.exceptions import UnauthorizedException
from app.services.user_service import UserService, format_user

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Email or password is invalid"


class AuthService:
    """
    Validates credentials and issues bearer tokens.
    """

    def __init__(self, user_service: UserService, auth: AuthProvider):
        """
        Initialize AuthService.

        Args:
            user_service: Credential store
            auth: Password hasher and token issuer
        """
        self._user_service = user_service
        self._auth = auth

    async def validate_user(self, email: str, password: str) -> Optional[dict]:
        """
        Check an email/password pair.

        Returns:
            Public user data, or None for an unknown email or wrong password
        """
        user = await self._user_service.get_user_by_email(email)
        if not user:
            logger.debug("Authentication failed: unknown email")
            return None

        is_valid = await run_in_threadpool(
            self._auth.verify_password,
            password,
            user.get("passwordHash", ""),
        )
        if not is_valid:
            logger.debug(f"Authentication failed: invalid password for user {user['_id']}")
            return None

        return format_user(user)

    async def generate_access_token(self, user: dict) -> dict:
        """Sign a token carrying the user's id (sub) and email."""
        token = await self._auth.create_token(user["id"], email=user["email"])
        return {"access_token": token}

    async def login(self, email: str, password: str) -> dict:
        """
        Authenticate and return a token response.

        Unknown emails and wrong passwords fail identically.

        Raises:
            UnauthorizedException: credentials invalid
        """
        user = await self.validate_user(email, password)
        if not user:
            logger.warning("Login failed")
            raise UnauthorizedException(
                message=LOGIN_FAILED_MESSAGE,
                code="LOGIN_FAILED",
            )

        logger.info(f"Login successful for user: {user['id']}")
        return await self.generate_access_token(user)
