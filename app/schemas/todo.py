"""
Pydantic models for Todo request/response validation.
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

__all__ = [
    "CreateTodoRequest",
    "UpdateTodoRequest",
    "UpsertTodoRequest",
    "TodoResponse",
]


class CreateTodoRequest(BaseModel):
    """Request body for creating a todo."""
    title: str = Field(..., min_length=1, description="Unique among the caller's todos")
    description: Optional[str] = Field(..., description="Additional details")


class UpdateTodoRequest(BaseModel):
    """Request body for a partial update. Only the fields sent are changed."""
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    completed: Optional[bool] = None

    @field_validator("title", "completed")
    @classmethod
    def must_not_be_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class UpsertTodoRequest(BaseModel):
    """Request body for create-or-replace. The id comes from the path."""
    id: Optional[str] = Field(None, description="Must match the path id when given")
    title: str = Field(..., min_length=1)
    description: Optional[str] = Field(...)
    completed: bool


class TodoResponse(BaseModel):
    """Todo item as returned by the API."""
    id: str
    title: str
    description: Optional[str] = None
    completed: bool
    user_id: str
