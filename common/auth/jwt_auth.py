"""
JWT + bcrypt authentication provider.

A stateless authentication implementation using:
- JWT tokens signed with a server-held secret
- bcrypt for password hashing

Tokens are never stored server-side. A token stays valid until its
"exp" claim passes; there is no revocation list.

Example:
    auth = JWTAuth(
        secret="your-secret-key",
        access_token_expire_seconds=600,
    )

    password_hash = auth.hash_password("Passw0rd!")
    token = await auth.create_token(user_id, email="user@example.com")

    claims = await auth.verify_token(token)
    print(claims["sub"])  # user_id
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

import bcrypt as bcrypt_lib
from jose import jwt, JWTError

from common.auth.base import AuthProvider

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


class JWTAuth(AuthProvider):
    """
    JWT + bcrypt authentication provider.

    This provider handles token creation/verification and password hashing.
    User storage is handled by the application's user service.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        access_token_expire_seconds: int = 600,
        bcrypt_rounds: int = 10,
    ):
        """
        Initialize JWT auth provider.

        Args:
            secret: Secret key for JWT signing (keep this secure!)
            algorithm: JWT algorithm (default: HS256)
            access_token_expire_seconds: Access token lifetime
            bcrypt_rounds: bcrypt cost factor for new hashes
        """
        if not secret:
            raise ValueError("JWT secret must not be empty")

        self.secret = secret
        self.algorithm = algorithm
        self.access_token_expire = timedelta(seconds=access_token_expire_seconds)
        self.bcrypt_rounds = bcrypt_rounds

    def _encode_password(self, password: str) -> bytes:
        """UTF-8 encode and cut to bcrypt's 72 byte input limit."""
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt with the configured cost factor."""
        salt = bcrypt_lib.gensalt(rounds=self.bcrypt_rounds)
        return bcrypt_lib.hashpw(self._encode_password(password), salt).decode("utf-8")

    def verify_password(self, password: str, hashed: str) -> bool:
        """
        Verify a password against its hash.

        Returns False for a wrong password and for anything that is not a
        valid bcrypt hash, so callers cannot tell the two apart.
        """
        if not hashed:
            return False

        try:
            return bcrypt_lib.checkpw(
                self._encode_password(password),
                hashed.encode("utf-8"),
            )
        except ValueError:
            return False

    async def create_token(
        self,
        user_id: str,
        **claims: Any,
    ) -> str:
        """Create a JWT access token for the user."""
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "sub": user_id,
            "iat": now,
            "exp": now + self.access_token_expire,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> Optional[Dict[str, Any]]:
        """
        Verify and decode a JWT access token.

        Signature and expiry are both checked; an expired token is
        rejected even when its signature is valid.
        """
        if not token:
            return None

        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except JWTError as e:
            logger.debug(f"Token rejected: {e}")
            return None

        if not payload.get("sub"):
            logger.debug("Token rejected: empty subject")
            return None

        return payload
