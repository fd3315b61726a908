"""Todo API services."""

from app.services.user_service import UserService
from app.services.auth_service import AuthService
from app.services.todo_service import TodoService

__all__ = [
    "UserService",
    "AuthService",
    "TodoService",
]
