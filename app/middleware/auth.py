"""
Authentication gate for protected routes.

Validates bearer tokens and attaches the caller's identity to requests.
Protected routers declare the gate as a dependency; public routes
simply do not, so nothing runs for them.
"""

import logging
from typing import Optional

from fastapi import Request

from common.auth import AuthProvider
from common.utils.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)


class AuthMiddleware:
    """
    Verifies the Authorization header and attaches the user id to the request.
    """

    def __init__(self, auth: AuthProvider):
        """
        Initialize AuthMiddleware.

        Args:
            auth: Provider used to verify tokens
        """
        self._auth = auth

    async def require_auth(self, request: Request) -> str:
        """
        Validate request is authenticated.

        Args:
            request: HTTP request object

        Returns:
            The caller's user id (the token's "sub" claim)

        Raises:
            UnauthorizedException: No header, malformed header, bad
                signature, or expired token

        Side Effects:
            - Attaches user id to request.state.user_id
            - Attaches decoded claims to request.state.token_claims
        """
        token = self._extract_token(request)

        if not token:
            raise UnauthorizedException(
                message="Authentication required",
                code="AUTH_REQUIRED",
            )

        claims = await self._auth.verify_token(token)

        if not claims:
            logger.debug(f"Rejected token on {request.method} {request.url.path}")
            raise UnauthorizedException(
                message="Invalid or expired token",
                code="INVALID_TOKEN",
            )

        user_id = claims["sub"]
        request.state.user_id = user_id
        request.state.token_claims = claims

        return user_id

    def _extract_token(self, request: Request) -> Optional[str]:
        """
        Extract bearer token from Authorization header.

        Args:
            request: HTTP request object

        Returns:
            Token string if present and valid format, None otherwise

        Expected format: "Authorization: Bearer <token>"
        """
        auth_header = request.headers.get("Authorization")

        if not auth_header:
            return None

        parts = auth_header.split()

        if len(parts) != 2:
            return None

        scheme, token = parts

        if scheme.lower() != "bearer":
            return None

        return token
