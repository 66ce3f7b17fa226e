from __future__ import annotations

from datetime import date, datetime, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

from .models import Priority

# Shared type for incoming dueDate which can be a date, datetime, or ISO8601 string
DueDateInput = Union[date, datetime, str]


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError("dueDate is out of the supported date range.") from e


# PUBLIC_INTERFACE
def parse_due_date(value: Optional[DueDateInput]) -> Optional[datetime]:
    """
    Normalize dueDate input into an aware UTC datetime.
    - None or an empty string means "no due date".
    - Strings are parsed as ISO8601 datetimes; date-only strings become midnight.
    - Values without an offset are taken as UTC.

    Raises:
        ValueError: if the value is not a parseable date.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return _as_utc(value)

    if isinstance(value, date):
        # Promote a date to a datetime at midnight
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            return _as_utc(datetime.fromisoformat(s))
        except ValueError:
            try:
                d = date.fromisoformat(s)
            except ValueError as e:
                raise ValueError(
                    "Invalid dueDate format. Use ISO8601 date or datetime string "
                    "(e.g., '2025-01-31' or '2025-01-31T13:45:00Z')."
                ) from e
            return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)

    raise ValueError("Invalid type for dueDate; expected an ISO8601 string.")


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Validated payload for creating a new Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "priority": "high",
                "dueDate": "2030-02-01",
            }
        },
    )

    title: str = Field(..., description="Short title for the todo item", min_length=1)
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    priority: Priority = Field(default=Priority.MEDIUM, description="Priority: low, medium or high")
    due_date: Optional[datetime] = Field(
        default=None,
        alias="dueDate",
        description="Due date/time. Accepts ISO8601 date or datetime; dates are set to 00:00 UTC",
    )

    @field_validator("priority", mode="before")
    @classmethod
    def default_priority(cls, v: Optional[str]) -> str:
        """A null priority on create falls back to medium."""
        return Priority.MEDIUM if v is None else v

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, v: Optional[DueDateInput]) -> Optional[datetime]:
        return parse_due_date(v)


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Validated payload for updating an existing Todo item.
    All fields are optional; only provided fields will be updated
    (see ``model_fields_set``).
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "title": "Buy groceries and supplies",
                "completed": True,
                "priority": "low",
                "dueDate": "2030-02-02T09:30:00Z",
            }
        },
    )

    title: Optional[str] = Field(default=None, description="Short title for the todo item", min_length=1)
    description: Optional[str] = Field(default=None, description="Detailed description; null clears it")
    completed: Optional[StrictBool] = Field(default=None, description="Completion status flag")
    priority: Optional[Priority] = Field(default=None, description="Priority: low, medium or high")
    due_date: Optional[datetime] = Field(
        default=None,
        alias="dueDate",
        description="Due date/time; null or an empty string clears it",
    )

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, v: Optional[DueDateInput]) -> Optional[datetime]:
        return parse_due_date(v)


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "1",
                "title": "Buy groceries",
                "description": "Milk, eggs, bread",
                "completed": False,
                "priority": "medium",
                "createdAt": "2030-01-25T10:15:30.123456Z",
                "updatedAt": "2030-01-26T09:00:00.000001Z",
                "dueDate": "2030-02-01T00:00:00Z",
            }
        },
    )

    id: str = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    description: Optional[str] = Field(default=None, description="Optional detailed description")
    completed: bool = Field(..., description="Completion status flag")
    priority: Priority = Field(..., description="Priority: low, medium or high")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")
    updated_at: datetime = Field(..., alias="updatedAt", description="Last update timestamp")
    due_date: Optional[datetime] = Field(
        default=None, alias="dueDate", description="Due date/time as an ISO8601 datetime"
    )


class TodoEnvelope(BaseModel):
    todo: TodoOut


class TodoMessageEnvelope(BaseModel):
    """Response for mutating endpoints: a human-readable message plus the affected todo."""

    message: str
    todo: TodoOut


class FiltersOut(BaseModel):
    """Echo of the resolved list filters."""

    model_config = ConfigDict(populate_by_name=True)

    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    search: Optional[str] = None
    sort_by: str = Field(..., alias="sortBy")
    order: str


class TodoListEnvelope(BaseModel):
    """
    Envelope for list responses.
    """

    todos: List[TodoOut] = Field(..., description="Todos matching the filters, sorted")
    total: int = Field(..., description="Number of todos returned")
    filters: FiltersOut = Field(..., description="Resolved filter and sort parameters")


class PriorityCounts(BaseModel):
    high: int
    medium: int
    low: int


class StatsOut(BaseModel):
    """Summary counts over the whole collection."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    completed: int
    pending: int
    overdue: int
    by_priority: PriorityCounts = Field(..., alias="byPriority")


class ErrorOut(BaseModel):
    """Error body shared by all failure responses."""

    error: str
    details: Optional[List[str]] = None
