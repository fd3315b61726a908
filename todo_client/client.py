"""
Async HTTP client for the Todo REST API.

Example:
    async with TodoApiClient("http://localhost:3000") as client:
        await client.login("a@example.com", "Passw0rd!")
        todo = await client.create_todo("Buy milk", "2 litres")
        await client.update_todo(todo["id"], completed=True)
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from todo_client.exceptions import ApiError, SessionExpiredError
from todo_client.token_store import TokenStore

logger = logging.getLogger(__name__)

DEFAULT_API_PREFIX = "/api/v1"


class TodoApiClient:
    """
    Thin wrapper over httpx.AsyncClient.

    Authenticated calls attach the cached bearer token and refuse to
    send at all when that token is missing or expired.
    """

    def __init__(
        self,
        base_url: str,
        token_store: Optional[TokenStore] = None,
        api_prefix: str = DEFAULT_API_PREFIX,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize TodoApiClient.

        Args:
            base_url: Server root, e.g. http://localhost:3000
            token_store: Token cache; defaults to the per-user token file
            api_prefix: Versioned path prefix of the API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.token_store = token_store if token_store is not None else TokenStore()
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + api_prefix,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TodoApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ─────────────────────────────────────────────────────────────────
    # Auth
    # ─────────────────────────────────────────────────────────────────

    async def register(self, email: str, password: str) -> Dict[str, Any]:
        """Create an account. Does not log in."""
        return await self._request("POST", "/users", json={"email": email, "password": password})

    async def login(self, email: str, password: str) -> str:
        """Log in and cache the returned access token."""
        data = await self._request(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
        )
        token = data["access_token"]
        self.token_store.set_token(token)
        logger.info("Logged in")
        return token

    def logout(self) -> None:
        self.token_store.clear_token()

    @property
    def user_data(self) -> Optional[Dict[str, Any]]:
        return self.token_store.user_data

    # ─────────────────────────────────────────────────────────────────
    # Users
    # ─────────────────────────────────────────────────────────────────

    async def get_user(self, user_id: Optional[str] = None) -> Dict[str, Any]:
        """Fetch a user record; defaults to the logged-in user."""
        if user_id is None:
            user_id = (self.user_data or {}).get("sub")
            if not user_id:
                raise SessionExpiredError("Not logged in")
        return await self._request("GET", f"/users/{user_id}", auth=True)

    # ─────────────────────────────────────────────────────────────────
    # Todos
    # ─────────────────────────────────────────────────────────────────

    async def list_todos(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/todos", auth=True)

    async def get_todo(self, todo_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/todos/{todo_id}", auth=True)

    async def create_todo(self, title: str, description: Optional[str] = None) -> Dict[str, Any]:
        return await self._request(
            "POST",
            "/todos",
            json={"title": title, "description": description},
            auth=True,
        )

    async def update_todo(self, todo_id: str, **changes: Any) -> Dict[str, Any]:
        """Partial update; pass only the fields to change."""
        return await self._request("PATCH", f"/todos/{todo_id}", json=changes, auth=True)

    async def upsert_todo(
        self,
        todo_id: str,
        title: str,
        description: Optional[str],
        completed: bool,
    ) -> Dict[str, Any]:
        """Create or replace the todo at todo_id."""
        return await self._request(
            "PUT",
            f"/todos/{todo_id}",
            json={
                "id": todo_id,
                "title": title,
                "description": description,
                "completed": completed,
            },
            auth=True,
        )

    async def delete_todo(self, todo_id: str) -> None:
        await self._request("DELETE", f"/todos/{todo_id}", auth=True)

    # ─────────────────────────────────────────────────────────────────
    # Internals
    # ─────────────────────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        auth: bool = False,
    ) -> Any:
        headers = {}
        if auth:
            token = self.token_store.get_token()
            if not token or self.token_store.is_expired():
                raise SessionExpiredError("Session expired, please log in again")
            headers["Authorization"] = f"Bearer {token}"

        response = await self._client.request(method, path, json=json, headers=headers)

        if response.is_error:
            raise self._to_api_error(response)

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _to_api_error(response: httpx.Response) -> ApiError:
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or response.reason_phrase or "Request failed"
        logger.debug(f"{response.request.method} {response.request.url} -> {response.status_code}")
        return ApiError(
            status_code=response.status_code,
            message=message,
            code=body.get("code"),
            details=body.get("details"),
        )
