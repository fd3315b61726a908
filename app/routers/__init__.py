"""
Todo API Routers.

All routers are imported here for easy access.
"""

from app.routers.auth import router as auth_router
from app.routers.user import router as user_router
from app.routers.todo import router as todo_router

__all__ = [
    "auth_router",
    "user_router",
    "todo_router",
]
