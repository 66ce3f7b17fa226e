from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, status

from ..dependencies import get_store
from ..errors import MalformedBody, TodoNotFound
from ..query import TodoQuery, run_query
from ..schemas import (
    ErrorOut,
    FiltersOut,
    TodoCreate,
    TodoEnvelope,
    TodoListEnvelope,
    TodoMessageEnvelope,
    TodoOut,
    TodoUpdate,
)
from ..store import InMemoryTodoStore
from ..validation import parse_create, parse_update

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)


def _json_body(model: Any) -> Dict[str, Any]:
    """OpenAPI request body for routes that read the raw JSON themselves."""
    return {
        "requestBody": {
            "content": {
                "application/json": {
                    "schema": model.model_json_schema(by_alias=True, ref_template="#/components/schemas/{model}")
                }
            },
            "required": True,
        }
    }


async def _read_json_object(request: Request) -> Dict[str, Any]:
    """
    Decode the request body as a JSON object.

    Raises:
        MalformedBody: if the body is not valid JSON or not an object.
    """
    try:
        body = await request.json()
    except ValueError as exc:
        raise MalformedBody() from exc
    if not isinstance(body, dict):
        raise MalformedBody()
    return body


def _out(todo) -> TodoOut:
    return TodoOut.model_validate(todo)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=TodoListEnvelope,
    summary="List Todos",
    description=(
        "List todos with optional filters.\n\n"
        "Query parameters:\n"
        "- completed: 'true' or 'false'\n"
        "- priority: low, medium or high (other values are ignored)\n"
        "- search: case-insensitive text matched against title and description\n"
        "- sortBy: title, priority, dueDate or createdAt (default createdAt)\n"
        "- order: asc or desc (default desc)"
    ),
)
async def list_todos(
    completed: Optional[str] = Query(None, description="Filter by completion status"),
    priority: Optional[str] = Query(None, description="Filter by priority"),
    search: Optional[str] = Query(None, description="Search text for title/description"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Sort field"),
    order: Optional[str] = Query(None, description="Sort direction: 'asc' or 'desc'"),
    store: InMemoryTodoStore = Depends(get_store),
) -> TodoListEnvelope:
    query = TodoQuery.from_params(
        completed=completed,
        priority=priority,
        search=search,
        sort_by=sort_by,
        order=order,
    )
    result = run_query(store.all(), query)
    return TodoListEnvelope(
        todos=[_out(t) for t in result.todos],
        total=result.total,
        filters=FiltersOut.model_validate(result.filters),
    )


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TodoMessageEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={400: {"model": ErrorOut, "description": "Validation error or malformed body"}},
    openapi_extra=_json_body(TodoCreate),
)
async def create_todo(request: Request, store: InMemoryTodoStore = Depends(get_store)) -> TodoMessageEnvelope:
    body = await _read_json_object(request)
    payload = parse_create(body)
    created = store.insert(payload)
    logger.info("Todo %s created", created["id"])
    return TodoMessageEnvelope(message="Todo created successfully", todo=_out(created))


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=TodoEnvelope,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={404: {"model": ErrorOut, "description": "Todo not found"}},
)
async def get_todo(todo_id: str, store: InMemoryTodoStore = Depends(get_store)) -> TodoEnvelope:
    item = store.find_by_id(todo_id)
    if item is None:
        raise TodoNotFound(todo_id)
    return TodoEnvelope(todo=_out(item))


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TodoMessageEnvelope,
    summary="Update Todo",
    description="Update the supplied fields of a Todo item. Omitted fields are left unchanged.",
    responses={
        400: {"model": ErrorOut, "description": "Validation error or malformed body"},
        404: {"model": ErrorOut, "description": "Todo not found"},
    },
    openapi_extra=_json_body(TodoUpdate),
)
async def update_todo(
    todo_id: str, request: Request, store: InMemoryTodoStore = Depends(get_store)
) -> TodoMessageEnvelope:
    body = await _read_json_object(request)
    if store.find_by_id(todo_id) is None:
        raise TodoNotFound(todo_id)
    payload = parse_update(body)
    updated = store.update(todo_id, payload)
    if updated is None:
        raise TodoNotFound(todo_id)
    logger.info("Todo %s updated", todo_id)
    return TodoMessageEnvelope(message="Todo updated successfully", todo=_out(updated))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=TodoMessageEnvelope,
    summary="Delete Todo",
    description="Delete a Todo item by ID and return the removed item.",
    responses={404: {"model": ErrorOut, "description": "Todo not found"}},
)
async def delete_todo(todo_id: str, store: InMemoryTodoStore = Depends(get_store)) -> TodoMessageEnvelope:
    removed = store.delete(todo_id)
    if removed is None:
        raise TodoNotFound(todo_id)
    logger.info("Todo %s deleted", todo_id)
    return TodoMessageEnvelope(message="Todo deleted successfully", todo=_out(removed))
