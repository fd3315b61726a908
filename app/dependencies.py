"""
FastAPI dependencies for the Todo API.

Provides dependency injection for services and the auth gate.
Services are created once at startup by init_all_services().
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.auth import JWTAuth
from app.middleware.auth import AuthMiddleware
from app.services.auth_service import AuthService
from app.services.todo_service import TodoService
from app.services.user_service import UserService


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

_auth_middleware: Optional[AuthMiddleware] = None
_user_service: Optional[UserService] = None
_auth_service: Optional[AuthService] = None
_todo_service: Optional[TodoService] = None


# ─────────────────────────────────────────────────────────────────
# Initialization
# ─────────────────────────────────────────────────────────────────

def init_all_services(
    db: AsyncIOMotorDatabase,
    jwt_secret: str,
    jwt_algorithm: str = "HS256",
    access_token_expire_seconds: int = 600,
    bcrypt_rounds: int = 10,
) -> None:
    """
    Initialize all services with database and auth settings.

    Called once at application startup.

    Args:
        db: MongoDB database connection
        jwt_secret: Secret used to sign and verify access tokens
        jwt_algorithm: JWT signing algorithm
        access_token_expire_seconds: Access token lifetime
        bcrypt_rounds: bcrypt cost factor for new password hashes
    """
    global _auth_middleware, _user_service, _auth_service, _todo_service

    auth_provider = JWTAuth(
        secret=jwt_secret,
        algorithm=jwt_algorithm,
        access_token_expire_seconds=access_token_expire_seconds,
        bcrypt_rounds=bcrypt_rounds,
    )
    _auth_middleware = AuthMiddleware(auth=auth_provider)
    _user_service = UserService(db=db, auth=auth_provider)
    _auth_service = AuthService(user_service=_user_service, auth=auth_provider)
    _todo_service = TodoService(db=db)


# ─────────────────────────────────────────────────────────────────
# Getters
# ─────────────────────────────────────────────────────────────────

def get_auth_middleware() -> AuthMiddleware:
    """Get auth middleware instance."""
    if _auth_middleware is None:
        raise RuntimeError("Services not initialized. Call init_all_services first.")
    return _auth_middleware


def get_user_service() -> UserService:
    """Get user service instance."""
    if _user_service is None:
        raise RuntimeError("Services not initialized. Call init_all_services first.")
    return _user_service


def get_auth_service() -> AuthService:
    """Get auth service instance."""
    if _auth_service is None:
        raise RuntimeError("Services not initialized. Call init_all_services first.")
    return _auth_service


def get_todo_service() -> TodoService:
    """Get todo service instance."""
    if _todo_service is None:
        raise RuntimeError("Services not initialized. Call init_all_services first.")
    return _todo_service


# ─────────────────────────────────────────────────────────────────
# Auth dependency
# ─────────────────────────────────────────────────────────────────

async def require_auth(
    request: Request,
    auth_middleware: Annotated[AuthMiddleware, Depends(get_auth_middleware)],
) -> str:
    """
    Dependency that requires authentication.

    FastAPI caches dependencies per request, so a router-level gate and a
    handler parameter share one verification.

    Usage:
        @router.get("/protected")
        async def protected_route(user_id: Annotated[str, Depends(require_auth)]):
            return {"user_id": user_id}
    """
    return await auth_middleware.require_auth(request)


CurrentUserId = Annotated[str, Depends(require_auth)]
