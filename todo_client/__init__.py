"""
Todo API client.

Async httpx client for the Todo REST API with a file-backed token cache.
"""

from todo_client.client import TodoApiClient
from todo_client.exceptions import ApiError, SessionExpiredError
from todo_client.token_store import TOKEN_STORAGE_KEY, TokenStore, decode_token, is_token_expired

__all__ = [
    "TodoApiClient",
    "ApiError",
    "SessionExpiredError",
    "TOKEN_STORAGE_KEY",
    "TokenStore",
    "decode_token",
    "is_token_expired",
]
