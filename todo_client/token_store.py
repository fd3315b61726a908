"""
Persistent access token cache.

The token is kept in a small JSON file under TOKEN_STORAGE_KEY so a
session survives process restarts. Claims are decoded without
verification; only the server can verify a signature.
"""

import json
import logging
import os
import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

from jose import jwt
from jose.exceptions import JWTError

logger = logging.getLogger(__name__)

TOKEN_STORAGE_KEY = "fst-token-storage"
DEFAULT_TOKEN_PATH = Path.home() / ".todo-client" / "tokens.json"
EXPIRY_GRACE_SECONDS = 5


def decode_token(token: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Read a token's claims without checking the signature.

    Returns:
        Claims dict, or None for a missing or malformed token
    """
    if not token:
        return None
    try:
        return jwt.get_unverified_claims(token)
    except JWTError as e:
        logger.error(f"Error decoding token: {e}")
        return None


def is_token_expired(token: Optional[str], grace_seconds: int = EXPIRY_GRACE_SECONDS) -> bool:
    """
    Check whether a token is expired or about to be.

    A token expiring within grace_seconds counts as expired. Tokens
    without an exp claim, or that cannot be decoded, are expired.
    """
    claims = decode_token(token)
    if not claims or not claims.get("exp"):
        return True
    return float(claims["exp"]) - time.time() < grace_seconds


class TokenStore:
    """
    File-backed storage for the current access token.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self._path = Path(path) if path else DEFAULT_TOKEN_PATH
        self._token: Optional[str] = None
        self._user_data: Optional[Dict[str, Any]] = None
        self.load_token()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def user_data(self) -> Optional[Dict[str, Any]]:
        """Decoded claims of the current token (sub, email, iat, exp)."""
        return self._user_data

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        """Cache the token in memory and on disk."""
        self._token = token
        self._user_data = decode_token(token)
        self._write({TOKEN_STORAGE_KEY: token})

    def clear_token(self) -> None:
        """Forget the token (logout)."""
        self._token = None
        self._user_data = None
        data = self._read()
        if data.pop(TOKEN_STORAGE_KEY, None) is not None:
            self._write(data)

    def load_token(self) -> Optional[str]:
        """Reload the token from disk, if one was saved."""
        token = self._read().get(TOKEN_STORAGE_KEY)
        if token:
            self._token = token
            self._user_data = decode_token(token)
        return token

    def is_expired(self) -> bool:
        return is_token_expired(self._token)

    def _read(self) -> Dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token file {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.chmod(self._path, 0o600)
