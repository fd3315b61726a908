"""Unit tests for the bearer-token gate."""

import pytest
from starlette.requests import Request

from common.auth import JWTAuth
from common.utils.exceptions import UnauthorizedException
from app.middleware.auth import AuthMiddleware


def make_request(authorization=None):
    headers = []
    if authorization is not None:
        headers.append((b"authorization", authorization.encode("latin-1")))
    return Request({
        "type": "http",
        "method": "GET",
        "path": "/api/v1/todos",
        "query_string": b"",
        "headers": headers,
    })


@pytest.fixture
def middleware(jwt_auth):
    return AuthMiddleware(auth=jwt_auth)


class TestRequireAuth:
    @pytest.mark.asyncio
    async def test_valid_token_sets_request_state(self, middleware, jwt_auth, sample_user_id):
        token = await jwt_auth.create_token(sample_user_id, email="a@example.com")
        request = make_request(f"Bearer {token}")

        user_id = await middleware.require_auth(request)

        assert user_id == sample_user_id
        assert request.state.user_id == sample_user_id
        assert request.state.token_claims["email"] == "a@example.com"

    @pytest.mark.asyncio
    async def test_scheme_is_case_insensitive(self, middleware, jwt_auth, sample_user_id):
        token = await jwt_auth.create_token(sample_user_id)
        assert await middleware.require_auth(make_request(f"bearer {token}")) == sample_user_id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", [None, "", "Bearer", "Basic abc", "Bearer a b"])
    async def test_missing_or_malformed_header(self, middleware, header):
        with pytest.raises(UnauthorizedException) as exc_info:
            await middleware.require_auth(make_request(header))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["code"] == "AUTH_REQUIRED"
        assert exc_info.value.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_expired_token(self, middleware, sample_user_id):
        issuer = JWTAuth(secret="test-secret", access_token_expire_seconds=-10)
        token = await issuer.create_token(sample_user_id)

        with pytest.raises(UnauthorizedException) as exc_info:
            await middleware.require_auth(make_request(f"Bearer {token}"))

        assert exc_info.value.detail["code"] == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_foreign_signature(self, middleware, sample_user_id):
        token = await JWTAuth(secret="someone-else").create_token(sample_user_id)

        with pytest.raises(UnauthorizedException) as exc_info:
            await middleware.require_auth(make_request(f"Bearer {token}"))

        assert exc_info.value.detail["code"] == "INVALID_TOKEN"
