"""
Abstract authentication provider interface.

Defines the contract that all auth providers must implement: password
hashing for stored credentials and issuing/verifying bearer tokens.
User storage stays with the application, so providers never touch
the database.

Example:
    from common.auth import AuthProvider, JWTAuth

    def get_auth_provider(settings) -> AuthProvider:
        return JWTAuth(secret=settings.JWT_SECRET)
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any


class AuthProvider(ABC):
    """
    Abstract authentication provider.

    Password methods are synchronous (CPU bound); callers on the event
    loop should run them in a thread pool.
    """

    @abstractmethod
    def hash_password(self, password: str) -> str:
        """
        One-way hash of a plaintext password.

        Args:
            password: Plaintext password

        Returns:
            Encoded hash suitable for storage
        """
        pass

    @abstractmethod
    def verify_password(self, password: str, hashed: str) -> bool:
        """
        Compare a plaintext password against a stored hash.

        Never raises: a malformed hash is reported as a mismatch.
        """
        pass

    @abstractmethod
    async def create_token(
        self,
        user_id: str,
        **claims: Any,
    ) -> str:
        """
        Create an authentication token for a user.

        Args:
            user_id: The user's ID, stored as the "sub" claim
            **claims: Additional claims to include in the token

        Returns:
            The authentication token string
        """
        pass

    @abstractmethod
    async def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify an authentication token.

        Args:
            token: The token to verify

        Returns:
            Decoded claims (at minimum "sub"), or None when the token is
            malformed, badly signed, or expired
        """
        pass
