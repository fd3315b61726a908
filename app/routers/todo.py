"""
FastAPI router for Todo endpoints.

Every route requires a bearer token. The owner of each todo is the
authenticated caller; request bodies cannot name an owner.
"""

import logging
import uuid
from typing import Annotated, List

from fastapi import APIRouter, Depends, Response, status

from common.utils.exceptions import BadRequestException
from app.dependencies import CurrentUserId, get_todo_service, require_auth
from app.schemas.todo import (
    CreateTodoRequest,
    TodoResponse,
    UpdateTodoRequest,
    UpsertTodoRequest,
)
from app.services.todo_service import TodoService, format_todo

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    dependencies=[Depends(require_auth)],
)

TodoServiceDep = Annotated[TodoService, Depends(get_todo_service)]


@router.get("", response_model=List[TodoResponse])
async def list_todos(user_id: CurrentUserId, todo_service: TodoServiceDep):
    """Get all of the caller's todos."""
    todos = await todo_service.list_todos(user_id)
    return [format_todo(todo) for todo in todos]


@router.get("/{todo_id}", response_model=TodoResponse)
async def get_todo(todo_id: str, user_id: CurrentUserId, todo_service: TodoServiceDep):
    """Get one of the caller's todos."""
    todo = await todo_service.get_todo(user_id, todo_id)
    return format_todo(todo)


@router.post("", response_model=TodoResponse, status_code=status.HTTP_201_CREATED)
async def create_todo(
    body: CreateTodoRequest,
    user_id: CurrentUserId,
    todo_service: TodoServiceDep,
):
    """
    Create a todo.

    New todos start incomplete and get a server-generated UUID.
    """
    todo = await todo_service.create_todo(user_id, body.title, body.description)
    return format_todo(todo)


@router.put("/{todo_id}", response_model=TodoResponse)
async def upsert_todo(
    todo_id: str,
    body: UpsertTodoRequest,
    user_id: CurrentUserId,
    todo_service: TodoServiceDep,
):
    """
    Create or replace a todo at a client-chosen UUID.
    """
    try:
        uuid.UUID(todo_id)
    except ValueError:
        raise BadRequestException(message="Todo id must be a UUID", code="INVALID_ID")

    if body.id is not None and body.id != todo_id:
        raise BadRequestException(
            message="Body id does not match the path id",
            code="ID_MISMATCH",
        )

    todo = await todo_service.upsert_todo(
        user_id,
        todo_id,
        body.model_dump(exclude={"id"}),
    )
    return format_todo(todo)


@router.patch("/{todo_id}", response_model=TodoResponse)
async def update_todo(
    todo_id: str,
    body: UpdateTodoRequest,
    user_id: CurrentUserId,
    todo_service: TodoServiceDep,
):
    """
    Partially update a todo.

    Only the fields present in the body are changed.
    """
    todo = await todo_service.update_todo(
        user_id,
        todo_id,
        body.model_dump(exclude_unset=True),
    )
    return format_todo(todo)


@router.delete("/{todo_id}")
async def delete_todo(todo_id: str, user_id: CurrentUserId, todo_service: TodoServiceDep):
    """Delete one of the caller's todos."""
    await todo_service.delete_todo(user_id, todo_id)
    return Response(status_code=status.HTTP_200_OK)
