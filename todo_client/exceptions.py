"""
Client-side errors.
"""

from typing import Any, Optional


class ApiError(Exception):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, code: Optional[str] = None, details: Any = None):
        self.status_code = status_code
        self.message = message
        self.code = code
        self.details = details
        super().__init__(f"{status_code}: {message}")


class SessionExpiredError(Exception):
    """No usable access token; the user has to log in again."""
